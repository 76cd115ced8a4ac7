"""
Join request selectors (read operations).
"""

from src.apps.store.selectors import OrderBy, Where, get_document, query_documents
from src.apps.users.selectors import get_user, get_users_by_ids, user_summary
from src.common.types import Collection, JoinRequestStatus


def get_join_request(*, request_id: str) -> dict | None:
    return get_document(collection=Collection.JOIN_REQUESTS, key=request_id)


def get_join_request_detail(*, request_id: str) -> dict | None:
    """The request with user and organization summaries."""
    from src.apps.organizations.selectors import get_organization

    join_request = get_join_request(request_id=request_id)
    if join_request is None:
        return None

    org = get_organization(org_id=join_request["org_id"])
    return {
        **join_request,
        "user": user_summary(get_user(user_id=join_request["user_id"])),
        "org": {"id": org["id"], "name": org.get("name", "")} if org else None,
    }


def find_open_request(*, user_id: str, org_id: str) -> dict | None:
    """A pending or approved request for the pair, pending first."""
    requests = query_documents(
        collection=Collection.JOIN_REQUESTS,
        where=[
            Where("user_id", "==", user_id),
            Where("org_id", "==", org_id),
            Where("status", "in", [JoinRequestStatus.PENDING, JoinRequestStatus.APPROVED]),
        ],
    )
    requests.sort(key=lambda r: r["status"] != JoinRequestStatus.PENDING)
    return requests[0] if requests else None


def list_organization_requests(*, org_id: str, status: str | None = None) -> list[dict]:
    """
    Requests for an organization, newest first, with user summaries.

    Requests from users who already hold a Member record are left out
    whatever their status.
    """
    from src.apps.organizations.selectors import get_organization_members

    where = [Where("org_id", "==", org_id)]
    if status:
        where.append(Where("status", "==", status))

    member_ids = {m["user_id"] for m in get_organization_members(org_id=org_id)}
    requests = [
        r
        for r in query_documents(
            collection=Collection.JOIN_REQUESTS,
            where=where,
            order_by=OrderBy("created_at", descending=True),
        )
        if r["user_id"] not in member_ids
    ]

    users = get_users_by_ids(user_ids=[r["user_id"] for r in requests])
    return [{**r, "user": user_summary(users.get(r["user_id"]))} for r in requests]


def list_user_requests(*, user_id: str) -> list[dict]:
    """All of the user's requests, newest first, with the organization's name."""
    requests = query_documents(
        collection=Collection.JOIN_REQUESTS,
        where=[Where("user_id", "==", user_id)],
        order_by=OrderBy("created_at", descending=True),
    )

    org_ids = sorted({r["org_id"] for r in requests})
    orgs = {}
    if org_ids:
        orgs = {
            org["id"]: org
            for org in query_documents(
                collection=Collection.ORGANIZATIONS, where=[Where("id", "in", org_ids)]
            )
        }

    return [
        {
            **r,
            "org": (
                {"id": r["org_id"], "name": orgs[r["org_id"]].get("name", "")}
                if r["org_id"] in orgs
                else None
            ),
        }
        for r in requests
    ]
