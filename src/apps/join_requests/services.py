"""
Join request services (write operations).

A request moves pending -> approved | rejected. Approval is the only
transition with side effects: it seats the user in the organization, as
"Admin" when the organization has no Admin yet, otherwise as "Member".
"""

import structlog
from django.db import transaction

from src.apps.organizations import services as org_services
from src.apps.organizations.selectors import get_membership, get_organization_members
from src.apps.store.selectors import get_document_for_update
from src.apps.store.services import create_document, delete_document, update_document
from src.apps.users.services import grant_org_management
from src.common.exceptions import ConflictError, NotFoundError, ValidationError
from src.common.permissions import require_org_admin
from src.common.types import Collection, JoinRequestStatus, MemberRole

from .selectors import find_open_request, get_join_request

logger = structlog.get_logger(__name__)


@transaction.atomic
def request_join(*, user_id: str, org_id: str, message: str = "") -> dict:
    if get_document_for_update(collection=Collection.ORGANIZATIONS, key=org_id) is None:
        raise NotFoundError("Organization not found.")

    existing = find_open_request(user_id=user_id, org_id=org_id)
    if existing is not None:
        if existing["status"] == JoinRequestStatus.PENDING:
            raise ConflictError("Request already pending.", extra={"request_id": existing["id"]})
        raise ConflictError("Already a member.")

    if get_membership(org_id=org_id, user_id=user_id) is not None:
        raise ConflictError("Already a member.")

    join_request = create_document(
        collection=Collection.JOIN_REQUESTS,
        fields={
            "user_id": user_id,
            "org_id": org_id,
            "status": JoinRequestStatus.PENDING,
            "message": message,
        },
    )

    logger.info("join_request_created", request_id=join_request["id"], user_id=user_id, org_id=org_id)
    return join_request


@transaction.atomic
def resolve_join_request(*, request_id: str, status: str) -> dict:
    if status not in (JoinRequestStatus.APPROVED, JoinRequestStatus.REJECTED):
        raise ValidationError("Status must be 'approved' or 'rejected'.")

    join_request = get_join_request(request_id=request_id)
    if join_request is None:
        raise NotFoundError("Request not found.")

    if status == JoinRequestStatus.REJECTED:
        join_request = update_document(
            collection=Collection.JOIN_REQUESTS, key=request_id, fields={"status": status}
        )
        logger.info("join_request_rejected", request_id=request_id)
        return join_request

    org_id, user_id = join_request["org_id"], join_request["user_id"]

    # Serializes approvals per organization for the first-admin check.
    if get_document_for_update(collection=Collection.ORGANIZATIONS, key=org_id) is None:
        raise NotFoundError("Organization not found.")

    join_request = update_document(
        collection=Collection.JOIN_REQUESTS, key=request_id, fields={"status": status}
    )

    if get_membership(org_id=org_id, user_id=user_id) is not None:
        logger.info("join_request_approved_existing_member", request_id=request_id, user_id=user_id)
        return join_request

    has_admin = any(
        m.get("role") == MemberRole.ADMIN for m in get_organization_members(org_id=org_id)
    )
    role = MemberRole.MEMBER if has_admin else MemberRole.ADMIN

    org_services.create_membership(org_id=org_id, user_id=user_id, role=role)
    if role == MemberRole.ADMIN:
        grant_org_management(user_id=user_id, org_id=org_id)

    logger.info("join_request_approved", request_id=request_id, user_id=user_id, org_id=org_id, role=role)
    return join_request


@transaction.atomic
def delete_join_request(*, request_id: str, user: dict) -> None:
    """Withdraw a request. Allowed for the requester or an organization admin."""
    join_request = get_join_request(request_id=request_id)
    if join_request is None:
        raise NotFoundError("Request not found.")

    if join_request["user_id"] != user["id"]:
        require_org_admin(user, join_request["org_id"])

    delete_document(collection=Collection.JOIN_REQUESTS, key=request_id)
    logger.info("join_request_deleted", request_id=request_id, by=user["id"])
