from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_user_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        role: Role,
        department: Optional[str],
        password_hash: str,
    ) -> int:
        raise NotImplementedError

    def list_by_role(self, role: Optional[Role] = None) -> Sequence[User]:
        raise NotImplementedError
