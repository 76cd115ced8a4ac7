"""
Post, comment and reaction services (write operations).

Posts may be edited or removed by their author or by an organization Admin.
Comments may be removed by their author or by whoever administers the
post's organization.
"""

import structlog
from django.db import transaction

from src.apps.store.selectors import Where
from src.apps.store.services import (
    create_document,
    delete_document,
    delete_documents,
    update_document,
)
from src.common.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from src.common.permissions import can_administer, require_owner_or_org_admin_seat
from src.common.types import Collection, ReactionType

from .selectors import get_comment, get_like, get_post

logger = structlog.get_logger(__name__)


def _get_post_or_404(post_id: str) -> dict:
    post = get_post(post_id=post_id)
    if post is None:
        raise NotFoundError("Post not found.")
    return post


# ── Posts ───────────────────────────────────────────────────────────────

@transaction.atomic
def create_post(*, org_id: str, author_id: str, content: str, image_url: str | None = None) -> dict:
    if not content.strip():
        raise ValidationError("Content is required.")

    post = create_document(
        collection=Collection.POSTS,
        fields={
            "org_id": org_id,
            "author_id": author_id,
            "content": content,
            "image_url": image_url or None,
        },
    )

    logger.info("post_created", post_id=post["id"], org_id=org_id, author_id=author_id)
    return post


@transaction.atomic
def update_post(
    *, post_id: str, user: dict, content: str | None = None, image_url: str | None = None
) -> dict:
    post = _get_post_or_404(post_id)
    require_owner_or_org_admin_seat(user, post["org_id"], post["author_id"])

    fields = {}
    if content:
        fields["content"] = content
    if image_url:
        fields["image_url"] = image_url

    post = update_document(collection=Collection.POSTS, key=post_id, fields=fields)

    logger.info("post_updated", post_id=post_id, by=user["id"])
    return post


@transaction.atomic
def delete_post(*, post_id: str, user: dict) -> None:
    post = _get_post_or_404(post_id)
    require_owner_or_org_admin_seat(user, post["org_id"], post["author_id"])

    by_post = [Where("post_id", "==", post_id)]
    delete_documents(collection=Collection.COMMENTS, where=by_post)
    delete_documents(collection=Collection.REACTIONS, where=by_post)
    delete_document(collection=Collection.POSTS, key=post_id)

    logger.info("post_deleted", post_id=post_id, by=user["id"])


# ── Comments ────────────────────────────────────────────────────────────

@transaction.atomic
def add_comment(*, post_id: str, author_id: str, content: str) -> dict:
    if not content.strip():
        raise ValidationError("Content is required.")
    post = _get_post_or_404(post_id)

    comment = create_document(
        collection=Collection.COMMENTS,
        fields={
            "post_id": post_id,
            "org_id": post["org_id"],
            "author_id": author_id,
            "content": content,
        },
    )

    logger.info("comment_created", comment_id=comment["id"], post_id=post_id, author_id=author_id)
    return comment


@transaction.atomic
def delete_comment(*, comment_id: str, user: dict) -> None:
    from src.apps.organizations.selectors import get_user_memberships

    comment = get_comment(comment_id=comment_id)
    if comment is None:
        raise NotFoundError("Comment not found.")

    if comment["author_id"] != user["id"]:
        post = get_post(post_id=comment["post_id"])
        org_id = post["org_id"] if post else comment.get("org_id")
        memberships = get_user_memberships(user_id=user["id"])
        if not org_id or not can_administer(user, org_id, memberships):
            raise PermissionDeniedError("You do not have permission to delete this comment.")

    delete_document(collection=Collection.COMMENTS, key=comment_id)
    logger.info("comment_deleted", comment_id=comment_id, by=user["id"])


# ── Reactions ───────────────────────────────────────────────────────────

@transaction.atomic
def like_post(*, post_id: str, user_id: str) -> dict:
    _get_post_or_404(post_id)

    if get_like(post_id=post_id, user_id=user_id) is not None:
        raise ConflictError("Already liked.")

    reaction = create_document(
        collection=Collection.REACTIONS,
        fields={"post_id": post_id, "author_id": user_id, "type": ReactionType.LIKE},
    )

    logger.info("post_liked", post_id=post_id, user_id=user_id)
    return reaction


@transaction.atomic
def unlike_post(*, post_id: str, user_id: str) -> bool:
    like = get_like(post_id=post_id, user_id=user_id)
    if like is None:
        return False

    delete_document(collection=Collection.REACTIONS, key=like["id"])
    logger.info("post_unliked", post_id=post_id, user_id=user_id)
    return True
