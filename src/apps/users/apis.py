"""
User API endpoints.

Listing, role changes and deletion are reserved to system Admins.
/users/me is the authenticated user's own profile.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.authentication.schemas import UserResponseSchema
from src.apps.users import services as user_services
from src.apps.users.schemas import (
    ProfileUpdateSchema,
    SetRoleSchema,
    UserListItemSchema,
)
from src.apps.users.selectors import get_user, list_users_with_memberships
from src.common.auth import TokenAuth
from src.common.exceptions import NotFoundError, PermissionDeniedError
from src.common.permissions import is_system_admin, require_admin
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Users"], auth=TokenAuth())


@router.get(
    "",
    response={200: list[UserListItemSchema], 403: ErrorSchema},
    summary="List users with their memberships",
)
def list_users(request: HttpRequest):
    require_admin(request.auth)
    return list_users_with_memberships()


# ── Own profile ─────────────────────────────────────────────────────────


@router.get("/me", response=UserResponseSchema, summary="Get my profile")
def get_my_profile(request: HttpRequest):
    return request.auth


@router.put(
    "/me",
    response={200: UserResponseSchema, 400: ErrorSchema, 401: ErrorSchema},
    summary="Update my profile (password change needs the current password)",
)
def update_my_profile(request: HttpRequest, payload: ProfileUpdateSchema):
    return user_services.update_profile(user_id=request.auth["id"], **payload.dict())


# ── Administration ──────────────────────────────────────────────────────


@router.get(
    "/{user_id}",
    response={200: UserResponseSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Get a user profile",
)
def get_user_profile(request: HttpRequest, user_id: str):
    if user_id != request.auth["id"] and not is_system_admin(request.auth):
        raise PermissionDeniedError("You can only view your own profile.")

    user = get_user(user_id=user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


@router.put(
    "/{user_id}/role",
    response={200: UserResponseSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Set a user's platform role",
)
def set_user_role(request: HttpRequest, user_id: str, payload: SetRoleSchema):
    require_admin(request.auth)
    return user_services.set_user_role(user_id=user_id, role=payload.role, org_id=payload.org_id)


@router.delete(
    "/{user_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Delete a user and their memberships",
)
def delete_user(request: HttpRequest, user_id: str):
    require_admin(request.auth)
    user_services.delete_user(user_id=user_id)
    return 200, {"message": "User deleted."}
