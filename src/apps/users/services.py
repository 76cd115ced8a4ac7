"""
User services (write operations).

Includes the platform-role state machine: promotion to OrgAdmin,
managed_orgs bookkeeping and demotion cleanup.
"""

import structlog
from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from src.apps.store.selectors import Where, document_exists, get_document_for_update
from src.apps.store.services import create_document, delete_document, delete_documents, update_document
from src.common.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from src.common.types import Collection, JoinRequestStatus, MemberRole, UserRole

from .selectors import get_user, get_user_by_email

logger = structlog.get_logger(__name__)


def _hash_password(password: str) -> str:
    try:
        validate_password(password)
    except DjangoValidationError as e:
        raise ValidationError("Password is too weak.", extra={"errors": e.messages})
    return make_password(password)


def _lock_user(user_id: str) -> dict:
    user = get_document_for_update(collection=Collection.USERS, key=user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


# ── Accounts ────────────────────────────────────────────────────────────

@transaction.atomic
def create_user(
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.STUDENT,
    avatar: str | None = None,
) -> dict:
    email = email.lower().strip()

    if not name.strip() or not email or not password:
        raise ValidationError("Name, email, and password are required.")

    if get_user_by_email(email=email) is not None:
        raise ConflictError(f"A user with email '{email}' already exists.")

    user = create_document(
        collection=Collection.USERS,
        fields={
            "name": name.strip(),
            "email": email,
            "password": _hash_password(password),
            "role": role,
            "managed_orgs": [],
            # only inline images are kept
            "avatar": avatar if avatar and avatar.startswith("data:") else None,
            "bio": "",
            "phone": "",
            "major": "",
        },
    )

    logger.info("user_created", user_id=user["id"], email=email, role=role)
    return user


@transaction.atomic
def update_profile(
    *,
    user_id: str,
    name: str | None = None,
    bio: str | None = None,
    phone: str | None = None,
    major: str | None = None,
    avatar: str | None = None,
    current_password: str | None = None,
    new_password: str | None = None,
) -> dict:
    user = _lock_user(user_id)

    fields = {
        key: value
        for key, value in {
            "name": name, "bio": bio, "phone": phone, "major": major, "avatar": avatar,
        }.items()
        if value is not None
    }

    if new_password:
        if not current_password or not check_password(current_password, user.get("password", "")):
            raise AuthenticationError("Incorrect password.")
        fields["password"] = _hash_password(new_password)

    user = update_document(collection=Collection.USERS, key=user_id, fields=fields)

    logger.info("user_profile_updated", user_id=user_id, fields=sorted(fields))
    return user


def authenticate_user(*, email: str, password: str) -> dict:
    user = get_user_by_email(email=email)
    if user is None or not check_password(password, user.get("password", "")):
        logger.info("login_failed", email=email.lower().strip())
        raise AuthenticationError("Invalid email or password.")
    return user


# ── Platform roles ──────────────────────────────────────────────────────

@transaction.atomic
def grant_org_management(*, user_id: str, org_id: str) -> dict:
    """
    Record that the user administers ``org_id``: platform role becomes
    OrgAdmin (system Admins keep their role) and the org joins managed_orgs.
    """
    user = _lock_user(user_id)

    managed = list(user.get("managed_orgs", []))
    if org_id not in managed:
        managed.append(org_id)

    role = user.get("role")
    if role != UserRole.ADMIN:
        role = UserRole.ORG_ADMIN

    user = update_document(
        collection=Collection.USERS,
        key=user_id,
        fields={"role": role, "managed_orgs": managed},
    )

    logger.info("org_management_granted", user_id=user_id, org_id=org_id, role=role)
    return user


@transaction.atomic
def set_user_role(*, user_id: str, role: str, org_id: str | None = None) -> dict:
    """
    System-administrator role change.

    OrgAdmin: optionally adds ``org_id`` to managed_orgs, then guarantees an
    "Admin" Member record in every managed org and drops the user's pending
    join requests there. Any other role: clears managed_orgs and removes the
    user's "Admin" Member records outside the (now empty) managed set.
    """
    from src.apps.organizations import services as org_services
    from src.apps.organizations.selectors import get_user_memberships

    if role not in set(UserRole):
        raise ValidationError(f"Invalid role '{role}'. Must be one of: Admin, OrgAdmin, Student.")

    user = _lock_user(user_id)

    if org_id and not document_exists(collection=Collection.ORGANIZATIONS, key=org_id):
        raise NotFoundError("Organization not found.")

    if role == UserRole.ORG_ADMIN:
        managed = list(user.get("managed_orgs", []))
        if org_id and org_id not in managed:
            managed.append(org_id)
    else:
        managed = []

    user = update_document(
        collection=Collection.USERS,
        key=user_id,
        fields={"role": role, "managed_orgs": managed},
    )

    if role == UserRole.ORG_ADMIN:
        for managed_org in managed:
            if not document_exists(collection=Collection.ORGANIZATIONS, key=managed_org):
                logger.warning("managed_org_missing", user_id=user_id, org_id=managed_org)
                continue
            org_services.ensure_admin_membership(org_id=managed_org, user_id=user_id)
            delete_documents(
                collection=Collection.JOIN_REQUESTS,
                where=[
                    Where("user_id", "==", user_id),
                    Where("org_id", "==", managed_org),
                    Where("status", "==", JoinRequestStatus.PENDING),
                ],
            )
    else:
        for membership in get_user_memberships(user_id=user_id):
            if membership["org_id"] not in managed and membership.get("role") == MemberRole.ADMIN:
                delete_document(collection=Collection.MEMBERS, key=membership["id"])
                logger.info("admin_membership_revoked", user_id=user_id, org_id=membership["org_id"])

    logger.info("user_role_changed", user_id=user_id, role=role, managed_orgs=managed)
    return user


@transaction.atomic
def delete_user(*, user_id: str) -> None:
    if get_user(user_id=user_id) is None:
        raise NotFoundError("User not found.")

    members = delete_documents(collection=Collection.MEMBERS, where=[Where("user_id", "==", user_id)])
    requests = delete_documents(
        collection=Collection.JOIN_REQUESTS, where=[Where("user_id", "==", user_id)]
    )
    delete_document(collection=Collection.USERS, key=user_id)

    logger.info("user_deleted", user_id=user_id, memberships=members, join_requests=requests)
