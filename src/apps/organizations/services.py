"""
Organization services (write operations).

Organization lifecycle plus Member records. Creating an organization with a
creator bootstraps that user as the organization's first Admin.
"""

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from src.apps.store.selectors import Where, get_document_for_update, query_documents
from src.apps.store.services import (
    create_document,
    delete_document,
    delete_documents,
    update_document,
)
from src.apps.users.selectors import get_user
from src.apps.users.services import grant_org_management
from src.common.exceptions import NotFoundError, ValidationError
from src.common.types import Collection, MemberRole

from .selectors import get_membership, get_organization, membership_key

logger = structlog.get_logger(__name__)

CBL_MIME_PREFIX = "data:application/pdf"
DEFAULT_CBL_FILE_NAME = "constitution_bylaws.pdf"


def _to_int(value, default: int = 0) -> int:
    try:
        return int(value) or default
    except (TypeError, ValueError):
        return default


def _lock_organization(org_id: str) -> dict:
    org = get_document_for_update(collection=Collection.ORGANIZATIONS, key=org_id)
    if org is None:
        raise NotFoundError("Organization not found.")
    return org


# ── Organization lifecycle ──────────────────────────────────────────────

@transaction.atomic
def create_organization(
    *,
    name: str,
    description: str,
    mission: str,
    logo: str | None = None,
    cover: str | None = None,
    creator_id: str | None = None,
) -> dict:
    if not name.strip() or not description.strip() or not mission.strip():
        raise ValidationError("Name, description, and mission are required.")

    if creator_id and get_user(user_id=creator_id) is None:
        raise NotFoundError("Creator user not found.")

    org = create_document(
        collection=Collection.ORGANIZATIONS,
        fields={
            "name": name.strip(),
            "description": description,
            "mission": mission,
            "logo": logo or None,
            "cover": cover or None,
            "collection_data": None,
            "cbl": None,
        },
    )
    logger.info("org_created", org_id=org["id"], name=org["name"], creator_id=creator_id)

    if creator_id:
        _lock_organization(org["id"])
        create_membership(org_id=org["id"], user_id=creator_id, role=MemberRole.ADMIN)
        grant_org_management(user_id=creator_id, org_id=org["id"])
        dropped = delete_documents(
            collection=Collection.JOIN_REQUESTS,
            where=[Where("user_id", "==", creator_id), Where("org_id", "==", org["id"])],
        )
        logger.info("org_creator_bootstrapped", org_id=org["id"], user_id=creator_id, dropped_requests=dropped)

    return org


@transaction.atomic
def update_organization(
    *,
    org_id: str,
    name: str | None = None,
    description: str | None = None,
    mission: str | None = None,
    logo: str | None = None,
    cover: str | None = None,
    collection_data: dict | None = None,
    cbl_data: str | None = None,
    cbl_file_name: str | None = None,
) -> dict:
    _lock_organization(org_id)

    fields = {
        key: value
        for key, value in {
            "name": name, "description": description, "mission": mission,
            "logo": logo, "cover": cover,
        }.items()
        if value is not None
    }

    if collection_data:
        fields["collection_data"] = {
            "total_students": _to_int(collection_data.get("total_students")),
            "paid_students": _to_int(collection_data.get("paid_students")),
            "student_fee": _to_int(
                collection_data.get("student_fee"), default=settings.DEFAULT_STUDENT_FEE
            ),
        }

    if cbl_data is not None:
        if not cbl_data:
            fields["cbl"] = None
        elif not cbl_data.startswith(CBL_MIME_PREFIX):
            raise ValidationError("Constitution and by-laws must be a PDF document.")
        else:
            fields["cbl"] = {
                "data": cbl_data,
                "file_name": cbl_file_name or DEFAULT_CBL_FILE_NAME,
                "uploaded_at": timezone.now().isoformat(),
            }

    org = update_document(collection=Collection.ORGANIZATIONS, key=org_id, fields=fields)

    logger.info("org_updated", org_id=org_id, fields=sorted(fields))
    return org


@transaction.atomic
def delete_organization(*, org_id: str) -> None:
    _lock_organization(org_id)

    by_org = [Where("org_id", "==", org_id)]
    post_ids = [post["id"] for post in query_documents(collection=Collection.POSTS, where=by_org)]
    if post_ids:
        by_post = [Where("post_id", "in", post_ids)]
        delete_documents(collection=Collection.COMMENTS, where=by_post)
        delete_documents(collection=Collection.REACTIONS, where=by_post)

    counts = {
        collection: delete_documents(collection=collection, where=by_org)
        for collection in (
            Collection.MEMBERS,
            Collection.JOIN_REQUESTS,
            Collection.ACTIVITIES,
            Collection.BUDGETS,
            Collection.FEEDBACK,
            Collection.POSTS,
        )
    }
    delete_document(collection=Collection.ORGANIZATIONS, key=org_id)

    logger.info("org_deleted", org_id=org_id, deleted={str(k): v for k, v in counts.items()})


# ── Membership management ───────────────────────────────────────────────

@transaction.atomic
def create_membership(*, org_id: str, user_id: str, role: str) -> dict:
    membership = create_document(
        collection=Collection.MEMBERS,
        key=membership_key(org_id=org_id, user_id=user_id),
        fields={
            "org_id": org_id,
            "user_id": user_id,
            "role": role,
            "joined_date": timezone.now().isoformat(),
            "show_in_leaders": False,
            "quote": "",
        },
    )

    logger.info("membership_created", org_id=org_id, user_id=user_id, role=role)
    return membership


@transaction.atomic
def ensure_admin_membership(*, org_id: str, user_id: str) -> dict:
    """Create an "Admin" Member record, or upgrade an existing non-Admin one."""
    membership = get_membership(org_id=org_id, user_id=user_id)
    if membership is None:
        return create_membership(org_id=org_id, user_id=user_id, role=MemberRole.ADMIN)

    if membership.get("role") == MemberRole.ADMIN:
        return membership

    membership = update_document(
        collection=Collection.MEMBERS,
        key=membership["id"],
        fields={"role": MemberRole.ADMIN},
    )
    logger.info("member_promoted_to_admin", org_id=org_id, user_id=user_id)
    return membership


@transaction.atomic
def add_or_update_member(*, org_id: str, user_id: str, role: str = MemberRole.MEMBER) -> dict:
    if get_organization(org_id=org_id) is None:
        raise NotFoundError("Organization not found.")
    if get_user(user_id=user_id) is None:
        raise NotFoundError("User not found.")
    if not role.strip():
        raise ValidationError("Role is required.")

    membership = get_membership(org_id=org_id, user_id=user_id)
    if membership is None:
        return create_membership(org_id=org_id, user_id=user_id, role=role.strip())

    return change_member_role(org_id=org_id, user_id=user_id, role=role)


@transaction.atomic
def update_member(
    *,
    org_id: str,
    user_id: str,
    role: str | None = None,
    show_in_leaders: bool | None = None,
    quote: str | None = None,
) -> dict:
    membership = get_membership(org_id=org_id, user_id=user_id)
    if membership is None:
        raise NotFoundError("Member not found.")

    fields = {}
    if role is not None:
        if not role.strip():
            raise ValidationError("Role cannot be empty.")
        fields["role"] = role.strip()
    if show_in_leaders is not None:
        fields["show_in_leaders"] = show_in_leaders
    if quote is not None:
        fields["quote"] = quote

    membership = update_document(collection=Collection.MEMBERS, key=membership["id"], fields=fields)

    logger.info("member_updated", org_id=org_id, user_id=user_id, fields=sorted(fields))
    return membership


def change_member_role(*, org_id: str, user_id: str, role: str) -> dict:
    """Role-only edit. Any non-empty title is accepted; no platform-role side effects."""
    return update_member(org_id=org_id, user_id=user_id, role=role)


@transaction.atomic
def remove_member(*, org_id: str, user_id: str) -> None:
    """Delete the Member record. The user's platform role and managed_orgs are untouched."""
    if not delete_document(
        collection=Collection.MEMBERS,
        key=membership_key(org_id=org_id, user_id=user_id),
    ):
        raise NotFoundError("Member not found.")

    logger.info("member_removed", org_id=org_id, user_id=user_id)
