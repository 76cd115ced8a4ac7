"""
Post, comment and reaction selectors (read operations).
"""

from src.apps.store.selectors import (
    OrderBy,
    Where,
    count_documents,
    get_document,
    query_documents,
    query_documents_page,
)
from src.apps.users.selectors import get_users_by_ids, user_summary
from src.common.types import Collection, ReactionType

RECENT_COMMENTS = 3


def get_post(*, post_id: str) -> dict | None:
    return get_document(collection=Collection.POSTS, key=post_id)


def get_comment(*, comment_id: str) -> dict | None:
    return get_document(collection=Collection.COMMENTS, key=comment_id)


def get_like(*, post_id: str, user_id: str) -> dict | None:
    likes = query_documents(
        collection=Collection.REACTIONS,
        where=[
            Where("post_id", "==", post_id),
            Where("author_id", "==", user_id),
            Where("type", "==", ReactionType.LIKE),
        ],
    )
    return likes[0] if likes else None


def count_likes(*, post_id: str) -> int:
    return count_documents(
        collection=Collection.REACTIONS,
        where=[Where("post_id", "==", post_id), Where("type", "==", ReactionType.LIKE)],
    )


def _with_authors(items: list[dict]) -> list[dict]:
    users = get_users_by_ids(user_ids=[i["author_id"] for i in items])
    return [{**i, "author": user_summary(users.get(i["author_id"]))} for i in items]


def list_comments(*, post_id: str, page: int = 1, limit: int = 20) -> tuple[list[dict], int]:
    comments, total = query_documents_page(
        collection=Collection.COMMENTS,
        where=[Where("post_id", "==", post_id)],
        order_by=OrderBy("created_at", descending=True),
        page=page,
        page_size=limit,
    )
    return _with_authors(comments), total


def list_posts(
    *, org_id: str, page: int = 1, limit: int = 20, viewer_id: str | None = None
) -> tuple[list[dict], int]:
    """
    One page of an organization's posts, newest first. Each post carries its
    author, its newest comments, its like count and whether the viewer liked it.
    """
    posts, total = query_documents_page(
        collection=Collection.POSTS,
        where=[Where("org_id", "==", org_id)],
        order_by=OrderBy("created_at", descending=True),
        page=page,
        page_size=limit,
    )

    result = []
    for post in _with_authors(posts):
        comments, comment_count = list_comments(post_id=post["id"], limit=RECENT_COMMENTS)
        result.append({
            **post,
            "comments": comments,
            "comment_count": comment_count,
            "like_count": count_likes(post_id=post["id"]),
            "liked": bool(viewer_id) and get_like(post_id=post["id"], user_id=viewer_id) is not None,
        })
    return result, total
