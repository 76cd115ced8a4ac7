import pytest

from src.apps.activities.selectors import list_activities
from src.apps.activities.services import create_activity, delete_activity, update_activity
from src.apps.budgets.selectors import list_budgets
from src.apps.budgets.services import create_budget, update_budget
from src.apps.feedback.selectors import list_feedback
from src.apps.feedback.services import reply_to_feedback, set_feedback_status, submit_feedback
from src.apps.join_requests.services import request_join
from src.apps.organizations.selectors import (
    get_organization,
    get_organization_detail,
    list_organizations,
    list_user_organizations,
)
from src.apps.organizations.services import (
    create_membership,
    delete_organization,
    update_organization,
)
from src.apps.posts.services import add_comment, create_post, like_post
from src.apps.store.selectors import count_documents
from src.common.exceptions import NotFoundError, ValidationError
from src.common.types import Collection, FeedbackStatus, MemberRole

pytestmark = pytest.mark.django_db

PDF = "data:application/pdf;base64,JVBERi0xLjQK"


# ── Organization documents ──────────────────────────────────────────────


def test_new_org_shape(org):
    assert org["name"] == "Chess Club"
    assert org["logo"] is None
    assert org["collection_data"] is None
    assert org["cbl"] is None


def test_collection_data_is_coerced(org, settings):
    settings.DEFAULT_STUDENT_FEE = 150

    updated = update_organization(
        org_id=org["id"],
        collection_data={"total_students": "40", "paid_students": "abc"},
    )

    assert updated["collection_data"] == {
        "total_students": 40,
        "paid_students": 0,
        "student_fee": 150,
    }


def test_cbl_upload_and_clear(org):
    updated = update_organization(org_id=org["id"], cbl_data=PDF)

    assert updated["cbl"]["data"] == PDF
    assert updated["cbl"]["file_name"] == "constitution_bylaws.pdf"
    assert updated["cbl"]["uploaded_at"]

    cleared = update_organization(org_id=org["id"], cbl_data="")
    assert cleared["cbl"] is None


def test_cbl_must_be_pdf(org):
    with pytest.raises(ValidationError):
        update_organization(org_id=org["id"], cbl_data="data:image/png;base64,AAAA")

    assert get_organization(org_id=org["id"])["cbl"] is None


def test_update_unknown_org():
    with pytest.raises(NotFoundError):
        update_organization(org_id="missing", name="Nope")


def test_listing_counts(student, other_student, make_org):
    chess = make_org(name="Chess Club")
    make_org(name="Art Club")
    create_membership(org_id=chess["id"], user_id=student["id"], role=MemberRole.MEMBER)
    create_membership(org_id=chess["id"], user_id=other_student["id"], role=MemberRole.MEMBER)
    create_activity(org_id=chess["id"], title="Open day", date="2026-03-01", description="Come play")

    listed = list_organizations()

    assert [o["name"] for o in listed] == ["Art Club", "Chess Club"]
    assert listed[1]["member_count"] == 2
    assert listed[1]["activity_count"] == 1
    assert listed[0]["member_count"] == 0


def test_user_organizations_include_pending_count(student, other_student, make_user, make_org):
    chess = make_org(name="Chess Club", creator_id=student["id"])
    make_org(name="Art Club")
    request_join(user_id=other_student["id"], org_id=chess["id"])
    request_join(user_id=make_user(name="Carol")["id"], org_id=chess["id"])

    from src.apps.users.selectors import get_user

    mine = list_user_organizations(user=get_user(user_id=student["id"]))

    assert [o["name"] for o in mine] == ["Chess Club"]
    assert mine[0]["pending_requests"] == 2
    assert list_user_organizations(user=other_student) == []


def test_detail_aggregates_everything(student, other_student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.PRESIDENT)
    create_activity(org_id=org["id"], title="Tournament", date="2026-04-01", description="Finals")
    create_budget(org_id=org["id"], category="Events", limit=500)
    submit_feedback(org_id=org["id"], user_id=student["id"], message="More boards please")
    request_join(user_id=other_student["id"], org_id=org["id"])

    detail = get_organization_detail(org_id=org["id"])

    assert detail["members"][0]["user"]["name"] == "Alice"
    assert [a["title"] for a in detail["activities"]] == ["Tournament"]
    assert [b["category"] for b in detail["budgets"]] == ["Events"]
    assert len(detail["feedback"]) == 1
    assert [r["user_id"] for r in detail["requests"]] == [other_student["id"]]


def test_detail_of_unknown_org():
    assert get_organization_detail(org_id="missing") is None


def test_delete_cascades_everything(student, other_student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.ADMIN)
    request_join(user_id=other_student["id"], org_id=org["id"])
    create_activity(org_id=org["id"], title="Open day", date="2026-03-01", description="Come play")
    create_budget(org_id=org["id"], category="Events", limit=100)
    submit_feedback(org_id=org["id"], user_id=student["id"], message="Great club")
    post = create_post(org_id=org["id"], author_id=student["id"], content="Welcome!")
    add_comment(post_id=post["id"], author_id=student["id"], content="First")
    like_post(post_id=post["id"], user_id=student["id"])

    delete_organization(org_id=org["id"])

    assert get_organization(org_id=org["id"]) is None
    for collection in (
        Collection.MEMBERS,
        Collection.JOIN_REQUESTS,
        Collection.ACTIVITIES,
        Collection.BUDGETS,
        Collection.FEEDBACK,
        Collection.POSTS,
        Collection.COMMENTS,
        Collection.REACTIONS,
    ):
        assert count_documents(collection=collection) == 0, collection


# ── Activities ──────────────────────────────────────────────────────────


def test_activities_latest_first(org):
    create_activity(org_id=org["id"], title="Old", date="2025-01-10", description="x")
    create_activity(org_id=org["id"], title="New", date="2026-01-10", description="x")

    assert [a["title"] for a in list_activities(org_id=org["id"])] == ["New", "Old"]


def test_activity_validation_and_lifecycle(org):
    with pytest.raises(ValidationError):
        create_activity(org_id=org["id"], title="", date="2026-01-01", description="x")
    with pytest.raises(NotFoundError):
        create_activity(org_id="missing", title="T", date="2026-01-01", description="x")

    activity = create_activity(org_id=org["id"], title="T", date="2026-01-01", description="x")
    assert update_activity(activity_id=activity["id"], title="Renamed")["title"] == "Renamed"

    delete_activity(activity_id=activity["id"])
    with pytest.raises(NotFoundError):
        delete_activity(activity_id=activity["id"])


# ── Budgets ─────────────────────────────────────────────────────────────


def test_budget_amounts_are_numbers(org):
    budget = create_budget(org_id=org["id"], category="Travel", limit="250.5")

    assert budget["limit"] == 250.5
    assert budget["allocated"] == 0.0

    with pytest.raises(ValidationError):
        update_budget(budget_id=budget["id"], allocated="lots")

    assert update_budget(budget_id=budget["id"], allocated=75)["allocated"] == 75.0


def test_budgets_sorted_by_category(org):
    create_budget(org_id=org["id"], category="Travel", limit=1)
    create_budget(org_id=org["id"], category="Events", limit=1)

    assert [b["category"] for b in list_budgets(org_id=org["id"])] == ["Events", "Travel"]


# ── Feedback ────────────────────────────────────────────────────────────


def test_anonymous_feedback_hides_author(student, org):
    submit_feedback(org_id=org["id"], user_id=student["id"], message="Secret", is_anonymous=True)

    [item] = list_feedback(org_id=org["id"])

    assert item["user_id"] is None
    assert item["user"] is None


def test_reply_marks_feedback_reviewed(student, admin, org):
    feedback = submit_feedback(org_id=org["id"], user_id=student["id"], message="Needs snacks")
    assert feedback["status"] == FeedbackStatus.PENDING

    replied = reply_to_feedback(feedback_id=feedback["id"], user_id=admin["id"], message="On it")

    assert replied["status"] == FeedbackStatus.REVIEWED
    [item] = list_feedback(org_id=org["id"])
    assert item["replies"][0]["message"] == "On it"
    assert item["replies"][0]["user"]["name"] == "Admin"


def test_feedback_status_validation(student, org):
    feedback = submit_feedback(org_id=org["id"], user_id=student["id"], message="Hi")

    with pytest.raises(ValidationError):
        set_feedback_status(feedback_id=feedback["id"], status="archived")

    assert set_feedback_status(feedback_id=feedback["id"], status="reviewed")["status"] == "reviewed"
