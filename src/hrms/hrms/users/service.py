from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import structlog
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import EMPLOYEE_ID_PREFIX
from ..core.enums import Role, UserStatus
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import User
from .repository import UserRepository

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    organization_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid email or password")

        user = self._users.get_by_email(email.strip().lower())
        if not user or not user.is_active or not user.password_hash:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        log.info("auth.login", user_id=user.user_id, organization_id=user.organization_id)
        return SessionUser(
            user_id=user.user_id,
            organization_id=user.organization_id,
            full_name=user.full_name,
            role=user.role,
        )


class UserService:
    """Use case: manage users of one organization (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_in_organization(self, user_id: int, organization_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.organization_id != organization_id:
            raise AuthorizationError("User does not belong to your organization")
        return user

    def list_users(self, organization_id: int) -> Sequence[User]:
        return self._users.list_for_organization(organization_id)

    def create_account(
        self,
        *,
        current_role: Role,
        organization_id: int,
        email: str,
        first_name: str,
        last_name: str,
        password: Optional[str] = None,
        role: Role = Role.EMPLOYEE,
        remote: bool = False,
    ) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        email = require_non_empty(email, "Email").lower()
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        if "@" not in email:
            raise ValidationError("Email is not valid")

        password_hash = None
        if password:
            require_min_length(password, "Password", 8)
            password_hash = generate_password_hash(password)

        if self._users.get_by_email(email):
            raise ConflictError("A user with this email already exists")

        # One admin per organization.
        if role == Role.ADMIN and self._users.count_by_role(organization_id, Role.ADMIN, active_only=False) > 0:
            raise ValidationError("This organization already has an admin")

        number = self._users.next_employee_number(organization_id)
        employee_id = f"{EMPLOYEE_ID_PREFIX}{number:03d}"

        user_id = self._users.create_user(
            organization_id=organization_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            role=role,
            employee_id=employee_id,
            remote=bool(remote),
            shift_id=None,
        )
        log.info("user.created", user_id=user_id, organization_id=organization_id, role=role.value)
        return self._users.get_by_id(user_id)

    def set_remote(self, *, current_role: Role, organization_id: int, user_id: int, remote: bool) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        self.get_in_organization(user_id, organization_id)
        self._users.set_remote(user_id, remote=bool(remote))
        log.info("user.remote_changed", user_id=user_id, remote=bool(remote))
        return self._users.get_by_id(user_id)

    def set_status(self, *, current_role: Role, organization_id: int, user_id: int, status: UserStatus) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        user = self.get_in_organization(user_id, organization_id)
        if user.role == Role.ADMIN and status == UserStatus.INACTIVE:
            raise ValidationError("Cannot deactivate the admin account")

        self._users.set_status(user_id, status=status)
        log.info("user.status_changed", user_id=user_id, status=status.value)
        return self._users.get_by_id(user_id)
