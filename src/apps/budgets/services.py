"""
Budget services (write operations).

Amounts are stored as floats.
"""

import structlog
from django.db import transaction

from src.apps.store.services import create_document, delete_document, update_document
from src.common.exceptions import NotFoundError, ValidationError
from src.common.types import Collection

from .selectors import get_budget

logger = structlog.get_logger(__name__)


def _to_float(value, *, field: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{field}' must be a number.")


@transaction.atomic
def create_budget(*, org_id: str, category: str, limit, allocated=0) -> dict:
    from src.apps.organizations.selectors import get_organization

    if not category.strip():
        raise ValidationError("Category is required.")
    if get_organization(org_id=org_id) is None:
        raise NotFoundError("Organization not found.")

    budget = create_document(
        collection=Collection.BUDGETS,
        fields={
            "org_id": org_id,
            "category": category.strip(),
            "allocated": _to_float(allocated or 0, field="allocated"),
            "limit": _to_float(limit, field="limit"),
        },
    )

    logger.info("budget_created", budget_id=budget["id"], org_id=org_id, category=budget["category"])
    return budget


@transaction.atomic
def update_budget(*, budget_id: str, category: str | None = None, allocated=None, limit=None) -> dict:
    if get_budget(budget_id=budget_id) is None:
        raise NotFoundError("Budget not found.")

    fields = {}
    if category is not None:
        fields["category"] = category.strip()
    if allocated is not None:
        fields["allocated"] = _to_float(allocated, field="allocated")
    if limit is not None:
        fields["limit"] = _to_float(limit, field="limit")

    budget = update_document(collection=Collection.BUDGETS, key=budget_id, fields=fields)

    logger.info("budget_updated", budget_id=budget_id, fields=sorted(fields))
    return budget


@transaction.atomic
def delete_budget(*, budget_id: str) -> None:
    if get_budget(budget_id=budget_id) is None:
        raise NotFoundError("Budget not found.")

    delete_document(collection=Collection.BUDGETS, key=budget_id)
    logger.info("budget_deleted", budget_id=budget_id)
