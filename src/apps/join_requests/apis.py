"""
Join request API endpoints.

Any authenticated user may ask to join an organization; the organization's
admins (or a system Admin) approve or reject.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.join_requests import services as request_services
from src.apps.join_requests.schemas import (
    JoinRequestCreateSchema,
    JoinRequestDetailSchema,
    JoinRequestResolveSchema,
    JoinRequestSchema,
)
from src.apps.join_requests.selectors import (
    get_join_request_detail,
    list_organization_requests,
    list_user_requests,
)
from src.common.auth import TokenAuth
from src.common.exceptions import NotFoundError
from src.common.permissions import require_org_admin
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Join requests"], auth=TokenAuth())


@router.post(
    "/organizations/{org_id}/requests",
    response={201: JoinRequestSchema, 404: ErrorSchema, 409: ErrorSchema},
    summary="Ask to join an organization",
)
def create_join_request(request: HttpRequest, org_id: str, payload: JoinRequestCreateSchema):
    join_request = request_services.request_join(
        user_id=request.auth["id"], org_id=org_id, message=payload.message
    )
    return 201, join_request


@router.get(
    "/organizations/{org_id}/requests",
    response={200: list[JoinRequestDetailSchema], 403: ErrorSchema},
    summary="Requests from users who are not members yet",
)
def get_organization_requests(request: HttpRequest, org_id: str, status: str | None = None):
    require_org_admin(request.auth, org_id)
    return list_organization_requests(org_id=org_id, status=status)


@router.get(
    "/requests/mine",
    response=list[JoinRequestDetailSchema],
    summary="My requests across organizations",
)
def get_my_requests(request: HttpRequest):
    return list_user_requests(user_id=request.auth["id"])


@router.get(
    "/requests/{request_id}",
    response={200: JoinRequestDetailSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Get a join request",
)
def get_join_request(request: HttpRequest, request_id: str):
    join_request = get_join_request_detail(request_id=request_id)
    if join_request is None:
        raise NotFoundError("Request not found.")
    if join_request["user_id"] != request.auth["id"]:
        require_org_admin(request.auth, join_request["org_id"])
    return join_request


@router.put(
    "/requests/{request_id}",
    response={200: JoinRequestSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Approve or reject a join request",
)
def resolve_join_request(request: HttpRequest, request_id: str, payload: JoinRequestResolveSchema):
    join_request = get_join_request_detail(request_id=request_id)
    if join_request is None:
        raise NotFoundError("Request not found.")
    require_org_admin(request.auth, join_request["org_id"])

    return request_services.resolve_join_request(request_id=request_id, status=payload.status)


@router.delete(
    "/requests/{request_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Withdraw or discard a join request",
)
def delete_join_request(request: HttpRequest, request_id: str):
    request_services.delete_join_request(request_id=request_id, user=request.auth)
    return 200, {"message": "Request deleted."}
