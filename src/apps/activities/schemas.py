"""
Activity schemas.
"""

from ninja import Schema


class ActivityCreateSchema(Schema):
    title: str
    date: str
    description: str
    image: str | None = None


class ActivityUpdateSchema(Schema):
    title: str | None = None
    date: str | None = None
    description: str | None = None
    image: str | None = None


class ActivitySchema(Schema):
    id: str
    org_id: str
    title: str
    date: str
    description: str
    image: str | None = None
    created_at: str
    updated_at: str
