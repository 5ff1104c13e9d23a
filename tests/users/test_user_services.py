from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.travel_desk.travel_desk.core.enums import Role
from src.travel_desk.travel_desk.core.exceptions import AuthenticationError, ValidationError
from src.travel_desk.travel_desk.users.service import AuthService, UserService


def test_authenticate_returns_session_user(users_repo):
    users_repo.create_user(
        user_id="e1", name="Emp", role=Role.EMPLOYEE, department="Ops", password_hash=generate_password_hash("p")
    )

    s_user = AuthService(users_repo).authenticate("e1", "p")

    assert s_user.user_id == "e1"
    assert s_user.role == Role.EMPLOYEE
    assert s_user.id == 1


@pytest.mark.parametrize("user_id,password", [("e1", "wrong"), ("nobody", "p"), ("", "")])
def test_authenticate_rejects_bad_credentials(users_repo, user_id, password):
    users_repo.create_user(
        user_id="e1", name="Emp", role=Role.EMPLOYEE, department=None, password_hash=generate_password_hash("p")
    )
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate(user_id, password)


def test_authenticate_tolerates_placeholder_hash(users_repo):
    users_repo.create_user(user_id="x", name="X", role=Role.DRIVER, department=None, password_hash="CHANGE_ME")
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("x", "CHANGE_ME")


def test_bootstrap_admin_is_idempotent(users_repo):
    svc = UserService(users_repo)

    assert svc.ensure_bootstrap_admin(user_id="admin", password="123", name="Admin", department="Administration")
    assert not svc.ensure_bootstrap_admin(user_id="admin", password="other", name="Admin", department="Administration")

    admins = users_repo.list_by_role(Role.ADMIN)
    assert len(admins) == 1
    assert AuthService(users_repo).authenticate("admin", "123").role == Role.ADMIN


def test_create_account_rejects_duplicate_user_id(users_repo):
    svc = UserService(users_repo)
    svc.create_account(user_id="d1", name="Driver", password="p", role=Role.DRIVER)
    with pytest.raises(ValidationError):
        svc.create_account(user_id="d1", name="Driver Two", password="p", role=Role.DRIVER)


def test_create_account_requires_fields(users_repo):
    with pytest.raises(ValidationError):
        UserService(users_repo).create_account(user_id=" ", name="N", password="p", role=Role.HOD)
