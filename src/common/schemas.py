"""
Response bodies shared by every router.
"""

from ninja import Schema


class ErrorSchema(Schema):
    detail: str


class MessageSchema(Schema):
    message: str
