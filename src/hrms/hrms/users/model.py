from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role, UserStatus


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code).
    """

    user_id: int
    organization_id: int
    email: str
    first_name: str
    last_name: str
    password_hash: Optional[str]
    role: Role
    status: UserStatus = UserStatus.ACTIVE
    employee_id: Optional[str] = None
    remote: bool = False
    shift_id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
