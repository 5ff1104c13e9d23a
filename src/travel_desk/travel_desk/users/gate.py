"""Session gate.

The gate is the only place that reads the role out of the Flask session.
Views decorated with `role_required` receive the checked identity as
`g.auth`, and services take that `AuthContext` instead of raw session data.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import g, redirect, session, url_for

from ..core.constants import LANDING_ENDPOINT
from ..core.enums import Role
from .service import SessionUser

_SESSION_KEY = "user"


@dataclass(frozen=True)
class AuthContext:
    id: int
    user_id: str
    role: Role


def login_user(s_user: SessionUser) -> None:
    session.clear()
    session[_SESSION_KEY] = {
        "id": s_user.id,
        "user_id": s_user.user_id,
        "name": s_user.name,
        "role": s_user.role.value,
    }


def logout_user() -> None:
    session.clear()


def current_context() -> Optional[AuthContext]:
    data = session.get(_SESSION_KEY)
    if not data:
        return None
    try:
        return AuthContext(id=int(data["id"]), user_id=str(data["user_id"]), role=Role(data["role"]))
    except (KeyError, TypeError, ValueError):
        return None


def role_required(*roles: Role):
    """Redirect to the landing page unless the session role is one of `roles`."""

    allowed = set(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = current_context()
            if ctx is None or ctx.role not in allowed:
                return redirect(url_for(LANDING_ENDPOINT))
            g.auth = ctx
            return view(*args, **kwargs)

        return wrapper

    return decorator


def dashboard_endpoint(role: Role) -> str:
    return {
        Role.ADMIN: "admin_dashboard",
        Role.DRIVER: "driver_dashboard",
        Role.HOD: "hod_dashboard",
        Role.EMPLOYEE: "employee_dashboard",
    }[role]
