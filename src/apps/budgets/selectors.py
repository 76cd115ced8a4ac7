"""
Budget selectors (read operations).
"""

from src.apps.store.selectors import OrderBy, Where, get_document, query_documents
from src.common.types import Collection


def get_budget(*, budget_id: str) -> dict | None:
    return get_document(collection=Collection.BUDGETS, key=budget_id)


def list_budgets(*, org_id: str) -> list[dict]:
    return query_documents(
        collection=Collection.BUDGETS,
        where=[Where("org_id", "==", org_id)],
        order_by=OrderBy("category"),
    )
