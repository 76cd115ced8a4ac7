"""
User schemas.
"""

from ninja import Schema

from src.apps.authentication.schemas import UserResponseSchema


# ── Request ─────────────────────────────────────────────────────────────


class ProfileUpdateSchema(Schema):
    name: str | None = None
    bio: str | None = None
    phone: str | None = None
    major: str | None = None
    avatar: str | None = None
    current_password: str | None = None
    new_password: str | None = None


class SetRoleSchema(Schema):
    role: str
    org_id: str | None = None


# ── Response ────────────────────────────────────────────────────────────


class UserSummarySchema(Schema):
    id: str
    name: str
    email: str = ""
    avatar: str | None = None


class UserMembershipSchema(Schema):
    id: str
    name: str
    role: str


class UserListItemSchema(UserResponseSchema):
    memberships: list[UserMembershipSchema] = []

