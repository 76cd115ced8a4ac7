"""
Organization API endpoints.

Reads are open to any authenticated user (the plain listing is public).
Updates and member management need an organization admin; creation and
deletion are reserved to system Admins.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.organizations import services as org_services
from src.apps.organizations.schemas import (
    MemberSchema,
    MemberUpdateSchema,
    MemberUpsertSchema,
    OrganizationCreateSchema,
    OrganizationDetailSchema,
    OrganizationSchema,
    OrganizationSummarySchema,
    OrganizationUpdateSchema,
    UserOrganizationSchema,
)
from src.apps.organizations.selectors import (
    get_organization,
    get_organization_detail,
    get_user_memberships,
    list_members,
    list_organizations,
    list_user_organizations,
)
from src.common.auth import TokenAuth
from src.common.exceptions import NotFoundError
from src.common.permissions import can_administer, require_admin, require_org_admin
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Organizations"], auth=TokenAuth())


# ── Organizations ───────────────────────────────────────────────────────


@router.get(
    "",
    response=list[OrganizationSummarySchema],
    auth=None,
    summary="List organizations with member and activity counts",
)
def list_all_organizations(request: HttpRequest):
    return list_organizations()


@router.get(
    "/mine",
    response=list[UserOrganizationSchema],
    summary="Organizations I belong to or manage",
)
def list_my_organizations(request: HttpRequest):
    return list_user_organizations(user=request.auth)


@router.post(
    "",
    response={201: OrganizationSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Create an organization, optionally seating its creator as Admin",
)
def create_organization(request: HttpRequest, payload: OrganizationCreateSchema):
    require_admin(request.auth)
    org = org_services.create_organization(**payload.dict())
    return 201, org


@router.get(
    "/{org_id}",
    response={200: OrganizationDetailSchema, 404: ErrorSchema},
    summary="Organization detail; feedback and requests only for its administrators",
)
def get_organization_by_id(request: HttpRequest, org_id: str):
    memberships = get_user_memberships(user_id=request.auth["id"])
    org = get_organization_detail(
        org_id=org_id,
        include_admin_data=can_administer(request.auth, org_id, memberships),
    )
    if org is None:
        raise NotFoundError("Organization not found.")
    return org


@router.put(
    "/{org_id}",
    response={200: OrganizationSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Update an organization",
)
def update_organization(request: HttpRequest, org_id: str, payload: OrganizationUpdateSchema):
    require_org_admin(request.auth, org_id)
    return org_services.update_organization(org_id=org_id, **payload.dict())


@router.delete(
    "/{org_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Delete an organization and everything attached to it",
)
def delete_organization(request: HttpRequest, org_id: str):
    require_admin(request.auth)
    org_services.delete_organization(org_id=org_id)
    return 200, {"message": "Organization deleted."}


# ── Members ─────────────────────────────────────────────────────────────


@router.get(
    "/{org_id}/members",
    response={200: list[MemberSchema], 404: ErrorSchema},
    summary="List members, newest first",
)
def get_members(request: HttpRequest, org_id: str):
    if get_organization(org_id=org_id) is None:
        raise NotFoundError("Organization not found.")
    return list_members(org_id=org_id)


@router.post(
    "/{org_id}/members",
    response={200: MemberSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Add a member, or change the role of an existing one",
)
def upsert_member(request: HttpRequest, org_id: str, payload: MemberUpsertSchema):
    require_org_admin(request.auth, org_id)
    return org_services.add_or_update_member(
        org_id=org_id, user_id=payload.user_id, role=payload.role
    )


@router.put(
    "/{org_id}/members/{user_id}",
    response={200: MemberSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Update a member's role, leader flag or quote",
)
def update_member(request: HttpRequest, org_id: str, user_id: str, payload: MemberUpdateSchema):
    require_org_admin(request.auth, org_id)
    return org_services.update_member(org_id=org_id, user_id=user_id, **payload.dict())


@router.delete(
    "/{org_id}/members/{user_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Remove a member (members may also leave on their own)",
)
def remove_member(request: HttpRequest, org_id: str, user_id: str):
    if user_id != request.auth["id"]:
        require_org_admin(request.auth, org_id)
    org_services.remove_member(org_id=org_id, user_id=user_id)
    return 200, {"message": "Member removed."}
