"""
User selectors (read-only queries).

Following Hacksoft styleguide: selectors are for reads, services are for writes.
"""

from src.apps.store.selectors import (
    OrderBy,
    Where,
    get_all_documents,
    get_document,
    query_documents,
)
from src.common.types import Collection


def get_user(*, user_id: str) -> dict | None:
    return get_document(collection=Collection.USERS, key=user_id)


def get_user_by_email(*, email: str) -> dict | None:
    users = query_documents(
        collection=Collection.USERS,
        where=[Where("email", "==", email.lower().strip())],
    )
    return users[0] if users else None


def public_user(user: dict) -> dict:
    """The user document without its password hash."""
    return {k: v for k, v in user.items() if k != "password"}


def user_summary(user: dict | None) -> dict | None:
    if user is None:
        return None
    return {
        "id": user["id"],
        "name": user.get("name", ""),
        "email": user.get("email", ""),
        "avatar": user.get("avatar"),
    }


def get_users_by_ids(*, user_ids) -> dict[str, dict]:
    """Batch lookup keyed by user id. Unknown ids are simply absent."""
    user_ids = list(set(user_ids))
    if not user_ids:
        return {}
    users = query_documents(collection=Collection.USERS, where=[Where("id", "in", user_ids)])
    return {u["id"]: u for u in users}


def list_users_with_memberships() -> list[dict]:
    """Every user, newest first, with memberships resolved to org names."""
    users = query_documents(
        collection=Collection.USERS,
        order_by=OrderBy("created_at", descending=True),
    )
    members = get_all_documents(collection=Collection.MEMBERS)
    org_names = {
        org["id"]: org.get("name", "")
        for org in get_all_documents(collection=Collection.ORGANIZATIONS)
    }

    result = []
    for user in users:
        memberships = [
            {
                "id": m["org_id"],
                "name": org_names.get(m["org_id"], ""),
                "role": m.get("role", ""),
            }
            for m in members
            if m.get("user_id") == user["id"]
        ]
        result.append({**public_user(user), "memberships": memberships})
    return result
