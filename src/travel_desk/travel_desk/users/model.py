from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code). `id` is the generated row id,
    `user_id` the login handle other records refer to.
    """

    id: int
    user_id: str
    name: str
    role: Role
    department: Optional[str]
    password_hash: str
