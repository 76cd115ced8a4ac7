import pytest
from django.core.management import CommandError, call_command

from src.apps.users.selectors import get_user, get_user_by_email
from src.common.types import UserRole

from tests.conftest import PASSWORD

pytestmark = pytest.mark.django_db


def test_createadmin_creates_admin():
    call_command("createadmin", no_input=True, email="root@uni.edu", password=PASSWORD, name="Root")

    user = get_user_by_email(email="root@uni.edu")
    assert user["role"] == UserRole.ADMIN
    assert user["name"] == "Root"


def test_createadmin_promotes_existing_user(student):
    call_command("createadmin", no_input=True, email=student["email"], password=PASSWORD)

    assert get_user(user_id=student["id"])["role"] == UserRole.ADMIN


def test_createadmin_requires_credentials_without_prompt(monkeypatch):
    from src.config.env import env

    monkeypatch.setattr(env, "ADMIN_EMAIL", "")
    monkeypatch.setattr(env, "ADMIN_PASSWORD", "")

    with pytest.raises(CommandError):
        call_command("createadmin", no_input=True)


def test_createadmin_reports_weak_password():
    with pytest.raises(CommandError):
        call_command("createadmin", no_input=True, email="root@uni.edu", password="123")
