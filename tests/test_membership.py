"""
Join requests, first-admin policy, organization bootstrap and role changes.
"""

import pytest

from src.apps.join_requests.selectors import list_organization_requests, list_user_requests
from src.apps.join_requests.services import request_join, resolve_join_request
from src.apps.organizations.selectors import get_membership, get_organization_members
from src.apps.organizations.services import (
    add_or_update_member,
    change_member_role,
    create_membership,
    remove_member,
)
from src.apps.store.selectors import Where, query_documents
from src.apps.users.selectors import get_user
from src.apps.users.services import set_user_role
from src.common.exceptions import ConflictError, NotFoundError, ValidationError
from src.common.types import Collection, JoinRequestStatus, MemberRole, UserRole

pytestmark = pytest.mark.django_db


def _requests_for(user_id, org_id):
    return query_documents(
        collection=Collection.JOIN_REQUESTS,
        where=[Where("user_id", "==", user_id), Where("org_id", "==", org_id)],
    )


# ── requestJoin ─────────────────────────────────────────────────────────


def test_second_pending_request_is_rejected(student, org):
    request_join(user_id=student["id"], org_id=org["id"])

    with pytest.raises(ConflictError, match="already pending"):
        request_join(user_id=student["id"], org_id=org["id"])

    assert len(_requests_for(student["id"], org["id"])) == 1


def test_request_after_approval_is_rejected(student, org):
    join_request = request_join(user_id=student["id"], org_id=org["id"])
    resolve_join_request(request_id=join_request["id"], status=JoinRequestStatus.APPROVED)

    with pytest.raises(ConflictError, match="Already a member"):
        request_join(user_id=student["id"], org_id=org["id"])


def test_request_allowed_again_after_rejection(student, org):
    join_request = request_join(user_id=student["id"], org_id=org["id"])
    resolve_join_request(request_id=join_request["id"], status=JoinRequestStatus.REJECTED)

    request_join(user_id=student["id"], org_id=org["id"])

    assert len(_requests_for(student["id"], org["id"])) == 2


def test_request_for_existing_member_is_rejected(student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.MEMBER)

    with pytest.raises(ConflictError):
        request_join(user_id=student["id"], org_id=org["id"])


def test_request_for_unknown_org(student):
    with pytest.raises(NotFoundError):
        request_join(user_id=student["id"], org_id="missing")


# ── resolveJoinRequest ──────────────────────────────────────────────────


def test_rejection_only_changes_status(student, org):
    join_request = request_join(user_id=student["id"], org_id=org["id"])

    resolved = resolve_join_request(request_id=join_request["id"], status=JoinRequestStatus.REJECTED)

    assert resolved["status"] == JoinRequestStatus.REJECTED
    assert get_membership(org_id=org["id"], user_id=student["id"]) is None
    assert get_user(user_id=student["id"])["role"] == UserRole.STUDENT


def test_resolve_unknown_request():
    with pytest.raises(NotFoundError):
        resolve_join_request(request_id="missing", status=JoinRequestStatus.APPROVED)


def test_resolve_with_invalid_status(student, org):
    join_request = request_join(user_id=student["id"], org_id=org["id"])

    with pytest.raises(ValidationError):
        resolve_join_request(request_id=join_request["id"], status="maybe")


def test_first_approved_member_becomes_admin(student, org):
    join_request = request_join(user_id=student["id"], org_id=org["id"])

    resolve_join_request(request_id=join_request["id"], status=JoinRequestStatus.APPROVED)

    assert get_membership(org_id=org["id"], user_id=student["id"])["role"] == MemberRole.ADMIN
    user = get_user(user_id=student["id"])
    assert user["role"] == UserRole.ORG_ADMIN
    assert user["managed_orgs"] == [org["id"]]


def test_later_approvals_become_members(student, other_student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.ADMIN)
    join_request = request_join(user_id=other_student["id"], org_id=org["id"])

    resolve_join_request(request_id=join_request["id"], status=JoinRequestStatus.APPROVED)

    assert get_membership(org_id=org["id"], user_id=other_student["id"])["role"] == MemberRole.MEMBER
    user = get_user(user_id=other_student["id"])
    assert user["role"] == UserRole.STUDENT
    assert user["managed_orgs"] == []


def test_approval_is_idempotent_for_existing_members(student, org):
    join_request = request_join(user_id=student["id"], org_id=org["id"])
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.MEMBER)

    resolve_join_request(request_id=join_request["id"], status=JoinRequestStatus.APPROVED)

    members = get_organization_members(org_id=org["id"])
    assert len(members) == 1
    assert members[0]["role"] == MemberRole.MEMBER


def test_system_admin_keeps_role_when_seated_first(admin, org):
    join_request = request_join(user_id=admin["id"], org_id=org["id"])

    resolve_join_request(request_id=join_request["id"], status=JoinRequestStatus.APPROVED)

    user = get_user(user_id=admin["id"])
    assert user["role"] == UserRole.ADMIN
    assert org["id"] in user["managed_orgs"]


def test_chess_club_walkthrough(make_user, make_org):
    chess = make_org(name="Chess Club")
    u1 = make_user(name="u1")
    u2 = make_user(name="u2")

    req1 = request_join(user_id=u1["id"], org_id=chess["id"])
    assert req1["status"] == JoinRequestStatus.PENDING
    resolve_join_request(request_id=req1["id"], status=JoinRequestStatus.APPROVED)

    assert get_membership(org_id=chess["id"], user_id=u1["id"])["role"] == MemberRole.ADMIN
    u1_now = get_user(user_id=u1["id"])
    assert u1_now["role"] == UserRole.ORG_ADMIN
    assert u1_now["managed_orgs"] == [chess["id"]]

    req2 = request_join(user_id=u2["id"], org_id=chess["id"])
    resolve_join_request(request_id=req2["id"], status=JoinRequestStatus.APPROVED)

    assert get_membership(org_id=chess["id"], user_id=u2["id"])["role"] == MemberRole.MEMBER
    assert get_user(user_id=u2["id"])["role"] == UserRole.STUDENT


# ── Listings ────────────────────────────────────────────────────────────


def test_org_listing_hides_requests_from_members(student, other_student, org):
    stale = request_join(user_id=student["id"], org_id=org["id"])
    request_join(user_id=other_student["id"], org_id=org["id"])
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.MEMBER)

    listed = list_organization_requests(org_id=org["id"])

    assert [r["user_id"] for r in listed] == [other_student["id"]]
    assert stale["id"] not in {r["id"] for r in listed}
    assert listed[0]["user"]["name"] == "Bob"


def test_user_listing_resolves_org_names(student, make_org):
    chess = make_org(name="Chess Club")
    drama = make_org(name="Drama Society")
    request_join(user_id=student["id"], org_id=chess["id"])
    request_join(user_id=student["id"], org_id=drama["id"])

    listed = list_user_requests(user_id=student["id"])

    assert {r["org"]["name"] for r in listed} == {"Chess Club", "Drama Society"}


# ── createOrganization ──────────────────────────────────────────────────


def test_creator_is_bootstrapped_as_admin(student, make_org):
    org = make_org(name="Robotics", creator_id=student["id"])

    members = get_organization_members(org_id=org["id"])
    assert len(members) == 1
    assert members[0]["user_id"] == student["id"]
    assert members[0]["role"] == MemberRole.ADMIN

    user = get_user(user_id=student["id"])
    assert user["role"] == UserRole.ORG_ADMIN
    assert org["id"] in user["managed_orgs"]
    assert _requests_for(student["id"], org["id"]) == []


def test_create_with_unknown_creator_writes_nothing(make_org):
    with pytest.raises(NotFoundError):
        make_org(name="Ghost Club", creator_id="missing")

    assert query_documents(collection=Collection.ORGANIZATIONS) == []


def test_create_requires_fields(db):
    from src.apps.organizations.services import create_organization

    with pytest.raises(ValidationError):
        create_organization(name="Club", description="", mission="m")


# ── setUserRole ─────────────────────────────────────────────────────────


def test_invalid_role_is_rejected(student):
    with pytest.raises(ValidationError):
        set_user_role(user_id=student["id"], role="Superuser")


def test_promotion_seats_user_and_drops_pending_requests(student, org):
    request_join(user_id=student["id"], org_id=org["id"])

    user = set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=org["id"])

    assert user["role"] == UserRole.ORG_ADMIN
    assert user["managed_orgs"] == [org["id"]]
    assert get_membership(org_id=org["id"], user_id=student["id"])["role"] == MemberRole.ADMIN
    assert _requests_for(student["id"], org["id"]) == []


def test_promotion_upgrades_existing_seat(student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.TREASURER)

    set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=org["id"])
    set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=org["id"])

    assert get_membership(org_id=org["id"], user_id=student["id"])["role"] == MemberRole.ADMIN
    assert get_user(user_id=student["id"])["managed_orgs"] == [org["id"]]


def test_promotion_without_org_keeps_managed_set(student, make_org):
    a = make_org(name="A")
    set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=a["id"])

    user = set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN)

    assert user["managed_orgs"] == [a["id"]]


def test_promotion_keeps_resolved_requests(student, make_org):
    chess = make_org(name="Chess Club")
    drama = make_org(name="Drama Society")
    rejected = request_join(user_id=student["id"], org_id=chess["id"])
    resolve_join_request(request_id=rejected["id"], status=JoinRequestStatus.REJECTED)
    approved = request_join(user_id=student["id"], org_id=drama["id"])
    resolve_join_request(request_id=approved["id"], status=JoinRequestStatus.APPROVED)

    set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=chess["id"])

    assert [r["status"] for r in _requests_for(student["id"], chess["id"])] == ["rejected"]
    assert [r["status"] for r in _requests_for(student["id"], drama["id"])] == ["approved"]


def test_promotion_to_unknown_org(student):
    with pytest.raises(NotFoundError):
        set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id="missing")


def test_demotion_clears_management(student, make_org):
    a = make_org(name="A")
    b = make_org(name="B")
    c = make_org(name="C")
    set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=a["id"])
    set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=b["id"])
    create_membership(org_id=c["id"], user_id=student["id"], role=MemberRole.MEMBER)

    user = set_user_role(user_id=student["id"], role=UserRole.STUDENT)

    assert user["managed_orgs"] == []
    assert get_membership(org_id=a["id"], user_id=student["id"]) is None
    assert get_membership(org_id=b["id"], user_id=student["id"]) is None
    # plain memberships survive
    assert get_membership(org_id=c["id"], user_id=student["id"])["role"] == MemberRole.MEMBER


# ── Member records ──────────────────────────────────────────────────────


def test_change_member_role_accepts_custom_titles(student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.MEMBER)

    member = change_member_role(org_id=org["id"], user_id=student["id"], role="Event Coordinator")

    assert member["role"] == "Event Coordinator"
    assert get_user(user_id=student["id"])["role"] == UserRole.STUDENT


def test_change_member_role_rejects_empty(student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.MEMBER)

    with pytest.raises(ValidationError):
        change_member_role(org_id=org["id"], user_id=student["id"], role="  ")


def test_upsert_member_keeps_single_record(student, org):
    add_or_update_member(org_id=org["id"], user_id=student["id"], role=MemberRole.MEMBER)
    add_or_update_member(org_id=org["id"], user_id=student["id"], role=MemberRole.SECRETARY)

    members = get_organization_members(org_id=org["id"])
    assert len(members) == 1
    assert members[0]["role"] == MemberRole.SECRETARY


def test_remove_member_leaves_platform_role(student, org):
    set_user_role(user_id=student["id"], role=UserRole.ORG_ADMIN, org_id=org["id"])

    remove_member(org_id=org["id"], user_id=student["id"])

    user = get_user(user_id=student["id"])
    assert get_membership(org_id=org["id"], user_id=student["id"]) is None
    assert user["role"] == UserRole.ORG_ADMIN
    assert user["managed_orgs"] == [org["id"]]


def test_remove_missing_member(student, org):
    with pytest.raises(NotFoundError):
        remove_member(org_id=org["id"], user_id=student["id"])
