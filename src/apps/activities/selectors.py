"""
Activity selectors (read operations).
"""

from src.apps.store.selectors import OrderBy, Where, get_document, query_documents
from src.common.types import Collection


def get_activity(*, activity_id: str) -> dict | None:
    return get_document(collection=Collection.ACTIVITIES, key=activity_id)


def list_activities(*, org_id: str) -> list[dict]:
    """Activities of an organization, latest date first."""
    return query_documents(
        collection=Collection.ACTIVITIES,
        where=[Where("org_id", "==", org_id)],
        order_by=OrderBy("date", descending=True),
    )
