"""
Feedback selectors (read operations).
"""

from src.apps.store.selectors import OrderBy, Where, get_document, query_documents
from src.apps.users.selectors import get_users_by_ids, user_summary
from src.common.types import Collection


def get_feedback(*, feedback_id: str) -> dict | None:
    return get_document(collection=Collection.FEEDBACK, key=feedback_id)


def list_feedback(*, org_id: str) -> list[dict]:
    """
    Feedback newest first with author summaries. Anonymous feedback never
    exposes its author; reply authors are always resolved.
    """
    items = query_documents(
        collection=Collection.FEEDBACK,
        where=[Where("org_id", "==", org_id)],
        order_by=OrderBy("created_at", descending=True),
    )

    user_ids = [f["user_id"] for f in items]
    user_ids += [r["user_id"] for f in items for r in f.get("replies", [])]
    users = get_users_by_ids(user_ids=user_ids)

    result = []
    for item in items:
        if item.get("is_anonymous"):
            item = {**item, "user_id": None, "user": None}
        else:
            item = {**item, "user": user_summary(users.get(item["user_id"]))}
        item["replies"] = [
            {**reply, "user": user_summary(users.get(reply["user_id"]))}
            for reply in item.get("replies", [])
        ]
        result.append(item)
    return result
