"""
Post feed API endpoints: posts, comments and likes.

Reading and writing an organization's feed requires membership.
"""

from django.conf import settings
from django.http import HttpRequest
from ninja import Router

from src.apps.posts import services as post_services
from src.apps.posts.schemas import (
    CommentCreateSchema,
    CommentPageSchema,
    CommentSchema,
    PostCreateSchema,
    PostPageSchema,
    PostSchema,
    PostUpdateSchema,
    ReactionSchema,
)
from src.apps.posts.selectors import get_post, list_comments, list_posts
from src.common.auth import TokenAuth
from src.common.exceptions import NotFoundError
from src.common.pagination import page_meta
from src.common.permissions import require_org_member
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Posts"], auth=TokenAuth())

MAX_PAGE_SIZE = 100


def _limit(limit: int | None) -> int:
    return max(min(limit or settings.PAGE_SIZE, MAX_PAGE_SIZE), 1)


# ── Posts ───────────────────────────────────────────────────────────────


@router.get(
    "/organizations/{org_id}/posts",
    response={200: PostPageSchema, 403: ErrorSchema},
    summary="Organization feed, newest first",
)
def get_posts(request: HttpRequest, org_id: str, page: int = 1, limit: int | None = None):
    require_org_member(request.auth, org_id)
    limit = _limit(limit)
    posts, total = list_posts(org_id=org_id, page=page, limit=limit, viewer_id=request.auth["id"])
    return {**page_meta(total=total, page=page, limit=limit), "results": posts}


@router.post(
    "/organizations/{org_id}/posts",
    response={201: PostSchema, 400: ErrorSchema, 403: ErrorSchema},
    summary="Publish a post",
)
def create_post(request: HttpRequest, org_id: str, payload: PostCreateSchema):
    require_org_member(request.auth, org_id)
    post = post_services.create_post(
        org_id=org_id,
        author_id=request.auth["id"],
        content=payload.content,
        image_url=payload.image_url,
    )
    return 201, post


@router.put(
    "/posts/{post_id}",
    response={200: PostSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Edit a post (author or organization Admin)",
)
def update_post(request: HttpRequest, post_id: str, payload: PostUpdateSchema):
    return post_services.update_post(post_id=post_id, user=request.auth, **payload.dict())


@router.delete(
    "/posts/{post_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Delete a post (author or organization Admin)",
)
def delete_post(request: HttpRequest, post_id: str):
    post_services.delete_post(post_id=post_id, user=request.auth)
    return 200, {"message": "Post deleted."}


# ── Comments ────────────────────────────────────────────────────────────


@router.get(
    "/posts/{post_id}/comments",
    response={200: CommentPageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Comments on a post, newest first",
)
def get_comments(request: HttpRequest, post_id: str, page: int = 1, limit: int | None = None):
    post = get_post(post_id=post_id)
    if post is None:
        raise NotFoundError("Post not found.")
    require_org_member(request.auth, post["org_id"])

    limit = _limit(limit)
    comments, total = list_comments(post_id=post_id, page=page, limit=limit)
    return {**page_meta(total=total, page=page, limit=limit), "results": comments}


@router.post(
    "/posts/{post_id}/comments",
    response={201: CommentSchema, 400: ErrorSchema, 404: ErrorSchema},
    summary="Comment on a post",
)
def create_comment(request: HttpRequest, post_id: str, payload: CommentCreateSchema):
    comment = post_services.add_comment(
        post_id=post_id, author_id=request.auth["id"], content=payload.content
    )
    return 201, comment


@router.delete(
    "/comments/{comment_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Delete a comment (author or organization manager)",
)
def delete_comment(request: HttpRequest, comment_id: str):
    post_services.delete_comment(comment_id=comment_id, user=request.auth)
    return 200, {"message": "Comment deleted."}


# ── Likes ───────────────────────────────────────────────────────────────


@router.post(
    "/posts/{post_id}/like",
    response={201: ReactionSchema, 404: ErrorSchema, 409: ErrorSchema},
    summary="Like a post",
)
def like_post(request: HttpRequest, post_id: str):
    return 201, post_services.like_post(post_id=post_id, user_id=request.auth["id"])


@router.delete(
    "/posts/{post_id}/like",
    response=MessageSchema,
    summary="Remove my like (no-op when absent)",
)
def unlike_post(request: HttpRequest, post_id: str):
    post_services.unlike_post(post_id=post_id, user_id=request.auth["id"])
    return {"message": "Like removed."}
