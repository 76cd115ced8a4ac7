"""
Feedback schemas.
"""

from ninja import Schema

from src.apps.users.schemas import UserSummarySchema


class FeedbackCreateSchema(Schema):
    message: str
    is_anonymous: bool = False


class FeedbackReplyCreateSchema(Schema):
    message: str


class FeedbackStatusSchema(Schema):
    status: str


class FeedbackReplySchema(Schema):
    id: str
    user_id: str
    message: str
    created_at: str
    user: UserSummarySchema | None = None


class FeedbackSchema(Schema):
    id: str
    org_id: str
    user_id: str | None = None
    message: str
    is_anonymous: bool
    status: str
    replies: list[FeedbackReplySchema] = []
    user: UserSummarySchema | None = None
    created_at: str
    updated_at: str
