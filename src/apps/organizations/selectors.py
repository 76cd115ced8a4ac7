"""
Organization selectors (read operations).

Covers organizations and their Member records.
"""

from src.apps.store.selectors import (
    OrderBy,
    Where,
    count_documents,
    get_document,
    query_documents,
)
from src.apps.users.selectors import get_users_by_ids, user_summary
from src.common.types import Collection, JoinRequestStatus


def membership_key(*, org_id: str, user_id: str) -> str:
    """Members are keyed by the (org, user) pair, one record per pair."""
    return f"{org_id}:{user_id}"


def get_organization(*, org_id: str) -> dict | None:
    return get_document(collection=Collection.ORGANIZATIONS, key=org_id)


def list_organizations() -> list[dict]:
    """All organizations sorted by name, with member and activity counts."""
    orgs = query_documents(
        collection=Collection.ORGANIZATIONS,
        order_by=OrderBy("name"),
    )
    return [
        {
            **org,
            "member_count": count_documents(
                collection=Collection.MEMBERS, where=[Where("org_id", "==", org["id"])]
            ),
            "activity_count": count_documents(
                collection=Collection.ACTIVITIES, where=[Where("org_id", "==", org["id"])]
            ),
        }
        for org in orgs
    ]


def list_user_organizations(*, user: dict) -> list[dict]:
    """
    Organizations the user belongs to or manages, each with the number of
    pending join requests.
    """
    org_ids = {m["org_id"] for m in get_user_memberships(user_id=user["id"])}
    org_ids.update(user.get("managed_orgs", []))
    if not org_ids:
        return []

    orgs = query_documents(
        collection=Collection.ORGANIZATIONS,
        where=[Where("id", "in", sorted(org_ids))],
        order_by=OrderBy("name"),
    )
    return [
        {
            **org,
            "pending_requests": count_documents(
                collection=Collection.JOIN_REQUESTS,
                where=[
                    Where("org_id", "==", org["id"]),
                    Where("status", "==", JoinRequestStatus.PENDING),
                ],
            ),
        }
        for org in orgs
    ]


# ── Members ─────────────────────────────────────────────────────────────


def get_membership(*, org_id: str, user_id: str) -> dict | None:
    return get_document(
        collection=Collection.MEMBERS,
        key=membership_key(org_id=org_id, user_id=user_id),
    )


def get_user_memberships(*, user_id: str) -> list[dict]:
    return query_documents(
        collection=Collection.MEMBERS,
        where=[Where("user_id", "==", user_id)],
    )


def get_organization_members(*, org_id: str) -> list[dict]:
    return query_documents(
        collection=Collection.MEMBERS,
        where=[Where("org_id", "==", org_id)],
        order_by=OrderBy("joined_date", descending=True),
    )


def list_members(*, org_id: str) -> list[dict]:
    """Members newest first, each with a user summary."""
    members = get_organization_members(org_id=org_id)
    users = get_users_by_ids(user_ids=[m["user_id"] for m in members])
    return [{**m, "user": user_summary(users.get(m["user_id"]))} for m in members]


def get_organization_detail(*, org_id: str, include_admin_data: bool = True) -> dict | None:
    """
    The organization with members, activities, budgets, feedback and the
    join requests of users who are not members yet.

    Feedback and requests are empty unless ``include_admin_data`` is set.
    """
    from src.apps.activities.selectors import list_activities
    from src.apps.budgets.selectors import list_budgets
    from src.apps.feedback.selectors import list_feedback
    from src.apps.join_requests.selectors import list_organization_requests

    org = get_organization(org_id=org_id)
    if org is None:
        return None

    return {
        **org,
        "members": list_members(org_id=org_id),
        "activities": list_activities(org_id=org_id),
        "budgets": list_budgets(org_id=org_id),
        "feedback": list_feedback(org_id=org_id) if include_admin_data else [],
        "requests": list_organization_requests(org_id=org_id) if include_admin_data else [],
    }
