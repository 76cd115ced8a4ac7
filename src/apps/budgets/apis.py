"""
Budget API endpoints. All of them need an organization admin.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.budgets import services as budget_services
from src.apps.budgets.schemas import BudgetCreateSchema, BudgetSchema, BudgetUpdateSchema
from src.apps.budgets.selectors import get_budget, list_budgets
from src.common.auth import TokenAuth
from src.common.exceptions import NotFoundError
from src.common.permissions import require_org_admin
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Budgets"], auth=TokenAuth())


def _get_budget_or_404(budget_id: str) -> dict:
    budget = get_budget(budget_id=budget_id)
    if budget is None:
        raise NotFoundError("Budget not found.")
    return budget


@router.get(
    "/organizations/{org_id}/budgets",
    response={200: list[BudgetSchema], 403: ErrorSchema},
    summary="List budget lines by category",
)
def get_budgets(request: HttpRequest, org_id: str):
    require_org_admin(request.auth, org_id)
    return list_budgets(org_id=org_id)


@router.post(
    "/organizations/{org_id}/budgets",
    response={201: BudgetSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Create a budget line",
)
def create_budget(request: HttpRequest, org_id: str, payload: BudgetCreateSchema):
    require_org_admin(request.auth, org_id)
    return 201, budget_services.create_budget(org_id=org_id, **payload.dict())


@router.put(
    "/budgets/{budget_id}",
    response={200: BudgetSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Update a budget line",
)
def update_budget(request: HttpRequest, budget_id: str, payload: BudgetUpdateSchema):
    budget = _get_budget_or_404(budget_id)
    require_org_admin(request.auth, budget["org_id"])
    return budget_services.update_budget(budget_id=budget_id, **payload.dict())


@router.delete(
    "/budgets/{budget_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Delete a budget line",
)
def delete_budget(request: HttpRequest, budget_id: str):
    budget = _get_budget_or_404(budget_id)
    require_org_admin(request.auth, budget["org_id"])
    budget_services.delete_budget(budget_id=budget_id)
    return 200, {"message": "Budget deleted."}
