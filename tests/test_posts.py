import pytest

from src.apps.organizations.services import create_membership
from src.apps.posts.selectors import count_likes, list_comments, list_posts
from src.apps.posts.services import (
    add_comment,
    create_post,
    delete_comment,
    delete_post,
    like_post,
    unlike_post,
    update_post,
)
from src.apps.store.selectors import count_documents
from src.apps.users.services import set_user_role
from src.common.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from src.common.types import Collection, MemberRole, UserRole

from tests.conftest import auth_headers

pytestmark = pytest.mark.django_db

BASE = "/api/v1"


@pytest.fixture
def post(student, org):
    create_membership(org_id=org["id"], user_id=student["id"], role=MemberRole.MEMBER)
    return create_post(org_id=org["id"], author_id=student["id"], content="Welcome to the club!")


# ── Services ────────────────────────────────────────────────────────────


def test_post_requires_content(student, org):
    with pytest.raises(ValidationError):
        create_post(org_id=org["id"], author_id=student["id"], content="   ")


def test_author_edits_and_strangers_cannot(post, student, other_student):
    assert update_post(post_id=post["id"], user=student, content="Edited")["content"] == "Edited"

    with pytest.raises(PermissionDeniedError):
        update_post(post_id=post["id"], user=other_student, content="Hijack")


def test_org_admin_seat_can_delete_post(post, other_student, org):
    create_membership(org_id=org["id"], user_id=other_student["id"], role=MemberRole.ADMIN)
    add_comment(post_id=post["id"], author_id=other_student["id"], content="Nice")
    like_post(post_id=post["id"], user_id=other_student["id"])

    delete_post(post_id=post["id"], user=other_student)

    assert count_documents(collection=Collection.POSTS) == 0
    assert count_documents(collection=Collection.COMMENTS) == 0
    assert count_documents(collection=Collection.REACTIONS) == 0


def test_delete_missing_post(student):
    with pytest.raises(NotFoundError):
        delete_post(post_id="missing", user=student)


def test_comment_on_missing_post(student):
    with pytest.raises(NotFoundError):
        add_comment(post_id="missing", author_id=student["id"], content="Hello?")


def test_comment_deletion_rights(post, student, other_student, make_user, org):
    comment = add_comment(post_id=post["id"], author_id=other_student["id"], content="Hi")
    manager = make_user(name="Manager")
    manager = set_user_role(user_id=manager["id"], role=UserRole.ORG_ADMIN, org_id=org["id"])

    with pytest.raises(PermissionDeniedError):
        delete_comment(comment_id=comment["id"], user=student)

    delete_comment(comment_id=comment["id"], user=manager)

    own = add_comment(post_id=post["id"], author_id=student["id"], content="Mine")
    delete_comment(comment_id=own["id"], user=student)
    assert count_documents(collection=Collection.COMMENTS) == 0


def test_like_once_and_unlike_idempotently(post, student):
    like_post(post_id=post["id"], user_id=student["id"])

    with pytest.raises(ConflictError):
        like_post(post_id=post["id"], user_id=student["id"])
    assert count_likes(post_id=post["id"]) == 1

    assert unlike_post(post_id=post["id"], user_id=student["id"]) is True
    assert unlike_post(post_id=post["id"], user_id=student["id"]) is False
    assert count_likes(post_id=post["id"]) == 0


def test_feed_enrichment(post, student, other_student):
    for i in range(5):
        add_comment(post_id=post["id"], author_id=other_student["id"], content=f"c{i}")
    like_post(post_id=post["id"], user_id=other_student["id"])

    [item], total = list_posts(org_id=post["org_id"], viewer_id=student["id"])

    assert total == 1
    assert item["author"]["name"] == "Alice"
    assert item["comment_count"] == 5
    assert len(item["comments"]) == 3
    assert item["like_count"] == 1
    assert item["liked"] is False

    [seen], _ = list_posts(org_id=post["org_id"], viewer_id=other_student["id"])
    assert seen["liked"] is True


def test_feed_pagination(student, org):
    for i in range(5):
        create_post(org_id=org["id"], author_id=student["id"], content=f"post {i}")

    first, total = list_posts(org_id=org["id"], page=1, limit=2)
    last, _ = list_posts(org_id=org["id"], page=3, limit=2)

    assert total == 5
    assert len(first) == 2
    assert len(last) == 1


def test_comment_pagination(post, student):
    for i in range(4):
        add_comment(post_id=post["id"], author_id=student["id"], content=f"c{i}")

    comments, total = list_comments(post_id=post["id"], page=2, limit=3)

    assert total == 4
    assert len(comments) == 1


# ── API ─────────────────────────────────────────────────────────────────


def test_feed_requires_membership(client, post, other_student, org):
    url = f"{BASE}/organizations/{org['id']}/posts"

    assert client.get(url, **auth_headers(other_student)).status_code == 403
    denied = client.post(
        url, {"content": "Let me in"}, content_type="application/json", **auth_headers(other_student)
    )
    assert denied.status_code == 403
    assert client.get(
        f"{BASE}/posts/{post['id']}/comments", **auth_headers(other_student)
    ).status_code == 403


def test_feed_api(client, post, student, org):
    headers = auth_headers(student)

    created = client.post(
        f"{BASE}/organizations/{org['id']}/posts",
        {"content": "Second post"},
        content_type="application/json",
        **headers,
    )
    assert created.status_code == 201

    page = client.get(f"{BASE}/organizations/{org['id']}/posts?limit=1", **headers).json()
    assert page["count"] == 2
    assert page["limit"] == 1
    assert page["has_more"] is True
    assert len(page["results"]) == 1


def test_like_api(client, post, student):
    url = f"{BASE}/posts/{post['id']}/like"
    headers = auth_headers(student)

    assert client.post(url, **headers).status_code == 201
    assert client.post(url, **headers).status_code == 409
    assert client.delete(url, **headers).status_code == 200
    assert client.delete(url, **headers).status_code == 200


def test_admin_reads_any_feed(client, admin, post, org):
    response = client.get(f"{BASE}/organizations/{org['id']}/posts", **auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["results"][0]["id"] == post["id"]
