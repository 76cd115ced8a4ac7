"""
Authentication schemas.

Public user representations never declare the password field, so the hash
is dropped on serialization.
"""

from ninja import Schema


# ── Request schemas ─────────────────────────────────────────────────────


class RegisterRequestSchema(Schema):
    name: str
    email: str
    password: str
    avatar: str | None = None


class LoginRequestSchema(Schema):
    email: str
    password: str


class RefreshRequestSchema(Schema):
    refresh: str


class LogoutRequestSchema(Schema):
    refresh: str


# ── Response schemas ────────────────────────────────────────────────────


class UserResponseSchema(Schema):
    id: str
    name: str
    email: str
    role: str
    managed_orgs: list[str] = []
    avatar: str | None = None
    bio: str = ""
    phone: str = ""
    major: str = ""
    created_at: str


class RegisterResponseSchema(Schema):
    message: str
    user: UserResponseSchema


class LoginResponseSchema(Schema):
    access: str
    refresh: str
    user: UserResponseSchema


class TokenRefreshResponseSchema(Schema):
    access: str
    refresh: str

