"""
Join request schemas.
"""

from ninja import Schema

from src.apps.users.schemas import UserSummarySchema


class JoinRequestCreateSchema(Schema):
    message: str = ""


class JoinRequestResolveSchema(Schema):
    status: str  # approved | rejected


class OrgRefSchema(Schema):
    id: str
    name: str


class JoinRequestSchema(Schema):
    id: str
    user_id: str
    org_id: str
    status: str
    message: str = ""
    created_at: str
    updated_at: str


class JoinRequestDetailSchema(JoinRequestSchema):
    user: UserSummarySchema | None = None
    org: OrgRefSchema | None = None
