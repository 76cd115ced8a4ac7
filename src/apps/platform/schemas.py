"""
Platform settings schemas.
"""

from ninja import Schema


class SettingsSchema(Schema):
    status: str
    registration: str
    announcement: str = ""


class SettingsUpdateSchema(Schema):
    status: str | None = None
    registration: str | None = None
    announcement: str | None = None
