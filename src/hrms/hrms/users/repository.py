from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role, UserStatus
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        organization_id: int,
        email: str,
        first_name: str,
        last_name: str,
        password_hash: Optional[str],
        role: Role,
        employee_id: Optional[str],
        remote: bool,
        shift_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def list_for_organization(self, organization_id: int) -> Sequence[User]:
        raise NotImplementedError

    def count_by_role(self, organization_id: int, role: Role, *, active_only: bool = True) -> int:
        raise NotImplementedError

    def count_with_shift(self, organization_id: int, shift_id: int) -> int:
        raise NotImplementedError

    def next_employee_number(self, organization_id: int) -> int:
        raise NotImplementedError

    def set_remote(self, user_id: int, *, remote: bool) -> bool:
        raise NotImplementedError

    def set_status(self, user_id: int, *, status: UserStatus) -> bool:
        raise NotImplementedError

    def set_shift(self, user_id: int, *, shift_id: Optional[int]) -> bool:
        raise NotImplementedError
