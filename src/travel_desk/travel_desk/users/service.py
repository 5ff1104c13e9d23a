from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    id: int
    user_id: str
    name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, user_id: str, password: str) -> SessionUser:
        user = self._users.get_by_user_id((user_id or "").strip())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return SessionUser(id=user.id, user_id=user.user_id, name=user.name, role=user.role)


class UserService:
    """Use case: provision users (admin, bootstrap, seed script)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        user_id: str,
        name: str,
        password: str,
        role: Role,
        department: Optional[str] = None,
    ) -> int:
        user_id = require_non_empty(user_id, "User ID")
        name = require_non_empty(name, "Name")
        password = require_non_empty(password, "Password")

        if self._users.get_by_user_id(user_id):
            raise ValidationError("User ID already exists")

        new_id = self._users.create_user(
            user_id=user_id,
            name=name,
            role=role,
            department=optional_text(department),
            password_hash=generate_password_hash(password),
        )
        logger.info("User %s created with role %s", user_id, role.value)
        return new_id

    def ensure_bootstrap_admin(self, *, user_id: str, password: str, name: str, department: str) -> bool:
        """Create the bootstrap admin unless it exists. Returns True when created."""
        if self._users.get_by_user_id(user_id):
            logger.info("Admin user already exists")
            return False

        self.create_account(user_id=user_id, name=name, password=password, role=Role.ADMIN, department=department)
        logger.info("Admin user created")
        return True

    def list_users(self, role: Optional[Role] = None) -> Sequence[User]:
        return self._users.list_by_role(role)
