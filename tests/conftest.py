import itertools

import pytest

from src.apps.organizations.services import create_organization
from src.apps.users.services import create_user
from src.common.auth import generate_tokens_for_user
from src.common.types import UserRole

PASSWORD = "Corr3ct-Horse-Battery"

_emails = itertools.count(1)


def auth_headers(user: dict) -> dict:
    token = generate_tokens_for_user(user=user)["access"]
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


@pytest.fixture
def make_user(db):
    def _make(name: str = "Student", role: str = UserRole.STUDENT, email: str | None = None) -> dict:
        return create_user(
            name=name,
            email=email or f"user{next(_emails)}@uni.edu",
            password=PASSWORD,
            role=role,
        )

    return _make


@pytest.fixture
def make_org(db):
    def _make(name: str = "Chess Club", creator_id: str | None = None) -> dict:
        return create_organization(
            name=name,
            description=f"{name} description",
            mission=f"{name} mission",
            creator_id=creator_id,
        )

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(name="Admin", role=UserRole.ADMIN)


@pytest.fixture
def student(make_user):
    return make_user(name="Alice")


@pytest.fixture
def other_student(make_user):
    return make_user(name="Bob")


@pytest.fixture
def org(make_org):
    return make_org()
