"""
Post, comment and reaction schemas.
"""

from ninja import Schema

from src.apps.users.schemas import UserSummarySchema
from src.common.pagination import PaginatedResponse


# ── Request ─────────────────────────────────────────────────────────────


class PostCreateSchema(Schema):
    content: str
    image_url: str | None = None


class PostUpdateSchema(Schema):
    content: str | None = None
    image_url: str | None = None


class CommentCreateSchema(Schema):
    content: str


# ── Response ────────────────────────────────────────────────────────────


class CommentSchema(Schema):
    id: str
    post_id: str
    author_id: str
    content: str
    author: UserSummarySchema | None = None
    created_at: str


class PostSchema(Schema):
    id: str
    org_id: str
    author_id: str
    content: str
    image_url: str | None = None
    author: UserSummarySchema | None = None
    created_at: str
    updated_at: str


class PostFeedItemSchema(PostSchema):
    comments: list[CommentSchema] = []
    comment_count: int = 0
    like_count: int = 0
    liked: bool = False


class PostPageSchema(PaginatedResponse):
    results: list[PostFeedItemSchema]


class CommentPageSchema(PaginatedResponse):
    results: list[CommentSchema]


class ReactionSchema(Schema):
    id: str
    post_id: str
    author_id: str
    type: str
    created_at: str
