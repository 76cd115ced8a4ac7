"""
Authorization guards.

Platform roles: Admin (system-wide), OrgAdmin (manages the orgs listed in
managed_orgs), Student. Per-organization authority comes from a Member
record whose role is "Admin".

System Admins pass every organization guard.
"""

from src.common.exceptions import PermissionDeniedError
from src.common.types import MemberRole, UserRole


def is_system_admin(user: dict) -> bool:
    return user.get("role") == UserRole.ADMIN


def can_administer(user: dict, org_id: str, memberships: list[dict]) -> bool:
    """
    Pure predicate: may ``user`` administer ``org_id``?

    True for system Admins, and for OrgAdmins who either hold an "Admin"
    Member record for the org or list it in managed_orgs.
    """
    if is_system_admin(user):
        return True

    if user.get("role") != UserRole.ORG_ADMIN:
        return False

    holds_admin_seat = any(
        m.get("user_id") == user["id"]
        and m.get("org_id") == org_id
        and m.get("role") == MemberRole.ADMIN
        for m in memberships
    )
    # managed_orgs covers orgs whose Member record went missing
    return holds_admin_seat or org_id in user.get("managed_orgs", [])


# ── Guards ───────────────────────────────────────────────────────────────


def require_admin(user: dict) -> None:
    """Raise PermissionDeniedError if user is not a system Admin."""
    if not is_system_admin(user):
        raise PermissionDeniedError("Administrator access required.")


def require_org_admin(user: dict, org_id: str) -> None:
    """Verify the user can administer the organization."""
    from src.apps.organizations.selectors import get_user_memberships

    if is_system_admin(user):
        return

    memberships = get_user_memberships(user_id=user["id"])
    if not can_administer(user, org_id, memberships):
        raise PermissionDeniedError("You do not manage this organization.")


def require_org_member(user: dict, org_id: str) -> dict | None:
    """
    Verify the user belongs to the organization.

    Returns the user's Member record, or None when access comes from
    administering the org without holding a seat.
    """
    from src.apps.organizations.selectors import get_user_memberships

    memberships = get_user_memberships(user_id=user["id"])
    membership = next((m for m in memberships if m.get("org_id") == org_id), None)
    if membership is not None:
        return membership

    if not can_administer(user, org_id, memberships):
        raise PermissionDeniedError("You must be a member of this organization.")
    return None


def require_owner_or_org_admin_seat(user: dict, org_id: str, owner_id: str) -> None:
    """
    Verify the user is ``owner_id`` or holds an "Admin" Member record
    in the organization. System Admins always pass.
    """
    from src.apps.organizations.selectors import get_membership

    if user["id"] == owner_id or is_system_admin(user):
        return

    membership = get_membership(org_id=org_id, user_id=user["id"])
    if membership is None or membership.get("role") != MemberRole.ADMIN:
        raise PermissionDeniedError("You do not have permission to modify this content.")
