from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence, Union

import structlog

from ..common.datetime_utils import minutes_since_midnight, parse_hhmm
from ..common.validators import require_days_mask, require_hhmm, require_non_empty
from ..core.constants import DEFAULT_SHIFT_ID, MAX_SHIFTS_PER_ORGANIZATION
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import DEFAULT_SHIFT, Shift
from .repository import ShiftRepository

log = structlog.get_logger(__name__)


def _default_for(organization_id: Optional[int]) -> Shift:
    return replace(DEFAULT_SHIFT, organization_id=organization_id)


def _check_boundaries(start: str, late: str, end: str) -> None:
    start_m = minutes_since_midnight(parse_hhmm(start))
    late_m = minutes_since_midnight(parse_hhmm(late))
    end_m = minutes_since_midnight(parse_hhmm(end))
    if late_m < start_m or late_m > end_m:
        raise ValidationError("Late time must be between start time and end time")


class ShiftService:
    """Use case: manage organization shifts and resolve a user's effective shift."""

    def __init__(self, shifts: ShiftRepository, users: UserRepository):
        self._shifts = shifts
        self._users = users

    def resolve_for(self, user: User) -> Shift:
        """Effective shift for a loaded user; falls back to the Default Shift.

        Looked up on every call since assignments change between attendance events.
        """
        if user.shift_id:
            shift = self._shifts.get_by_id(user.shift_id)
            if shift and shift.organization_id == user.organization_id:
                return shift
            log.info("shift.dangling_assignment", user_id=user.user_id, shift_id=user.shift_id)
        return _default_for(user.organization_id)

    def resolve_for_user(self, user_id: int, organization_id: int) -> Shift:
        user = self._users.get_by_id(user_id)
        if not user or user.organization_id != organization_id:
            raise NotFoundError("User not found")
        return self.resolve_for(user)

    def list_shifts(self, organization_id: int) -> Sequence[Shift]:
        return [_default_for(organization_id), *self._shifts.list_for_organization(organization_id)]

    def get_shift(self, shift_id: Union[int, str], organization_id: int) -> Shift:
        if str(shift_id) == DEFAULT_SHIFT_ID:
            return _default_for(organization_id)

        shift = self._shifts.get_by_id(self._parse_id(shift_id))
        if not shift:
            raise NotFoundError("Shift not found")
        if shift.organization_id != organization_id:
            raise AuthorizationError("Shift does not belong to your organization")
        return shift

    def create_shift(
        self,
        *,
        current_role: Role,
        organization_id: int,
        name: str,
        start_time: str,
        end_time: str,
        late_time: str,
        days,
    ) -> Shift:
        self._require_admin(current_role)

        name = require_non_empty(name, "Shift name")
        require_hhmm(start_time, "Start time")
        require_hhmm(end_time, "End time")
        require_hhmm(late_time, "Late time")
        mask = require_days_mask(days)

        if self._shifts.count_for_organization(organization_id) >= MAX_SHIFTS_PER_ORGANIZATION:
            raise ValidationError(f"Maximum {MAX_SHIFTS_PER_ORGANIZATION} shifts allowed per organization")
        if name.lower() == DEFAULT_SHIFT.shift_name.lower() or self._shifts.get_by_name(organization_id, name):
            raise ConflictError("Shift with this name already exists for your organization")

        _check_boundaries(start_time, late_time, end_time)

        shift_id = self._shifts.create(
            organization_id=organization_id,
            shift_name=name,
            start_time=parse_hhmm(start_time),
            end_time=parse_hhmm(end_time),
            late_time=parse_hhmm(late_time),
            days=mask,
        )
        log.info("shift.created", shift_id=shift_id, organization_id=organization_id)
        return self._shifts.get_by_id(shift_id)

    def update_shift(
        self,
        *,
        current_role: Role,
        organization_id: int,
        shift_id: Union[int, str],
        name: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        late_time: Optional[str] = None,
        days=None,
    ) -> Shift:
        self._require_admin(current_role)
        if str(shift_id) == DEFAULT_SHIFT_ID:
            raise ValidationError("The default shift cannot be modified")

        shift = self.get_shift(shift_id, organization_id)

        if name is not None:
            name = require_non_empty(name, "Shift name")
            if name != shift.shift_name:
                clash = self._shifts.get_by_name(organization_id, name)
                if name.lower() == DEFAULT_SHIFT.shift_name.lower() or (clash and clash.shift_id != shift.shift_id):
                    raise ConflictError("Shift with this name already exists for your organization")

        start = require_hhmm(start_time, "Start time") if start_time is not None else None
        end = require_hhmm(end_time, "End time") if end_time is not None else None
        late = require_hhmm(late_time, "Late time") if late_time is not None else None

        updated = replace(
            shift,
            shift_name=name if name is not None else shift.shift_name,
            start_time=parse_hhmm(start) if start else shift.start_time,
            end_time=parse_hhmm(end) if end else shift.end_time,
            late_time=parse_hhmm(late) if late else shift.late_time,
            days=require_days_mask(days) if days is not None else shift.days,
        )
        if start or end or late:
            _check_boundaries(
                updated.start_time.strftime("%H:%M"),
                updated.late_time.strftime("%H:%M"),
                updated.end_time.strftime("%H:%M"),
            )

        self._shifts.update(updated)
        log.info("shift.updated", shift_id=shift.shift_id, organization_id=organization_id)
        return updated

    def delete_shift(self, *, current_role: Role, organization_id: int, shift_id: Union[int, str]) -> None:
        self._require_admin(current_role)
        if str(shift_id) == DEFAULT_SHIFT_ID:
            raise ValidationError("The default shift cannot be deleted")

        shift = self.get_shift(shift_id, organization_id)
        assigned = self._users.count_with_shift(organization_id, int(shift.shift_id))
        if assigned > 0:
            raise ValidationError(
                f"Cannot delete shift. {assigned} user(s) are currently assigned to this shift. "
                "Please reassign them first."
            )

        self._shifts.delete(int(shift.shift_id))
        log.info("shift.deleted", shift_id=shift.shift_id, organization_id=organization_id)

    def assign_to_user(
        self,
        *,
        current_role: Role,
        organization_id: int,
        user_id: int,
        shift_id: Union[int, str],
    ) -> None:
        self._require_admin(current_role)
        user = self._get_member(user_id, organization_id)

        if str(shift_id) == DEFAULT_SHIFT_ID:
            raise ValidationError(
                "Cannot assign default shift explicitly. Remove shift assignment to use default shift."
            )

        shift = self.get_shift(shift_id, organization_id)
        self._users.set_shift(user.user_id, shift_id=int(shift.shift_id))
        log.info("shift.assigned", user_id=user.user_id, shift_id=shift.shift_id)

    def remove_from_user(self, *, current_role: Role, organization_id: int, user_id: int) -> None:
        self._require_admin(current_role)
        user = self._get_member(user_id, organization_id)
        self._users.set_shift(user.user_id, shift_id=None)
        log.info("shift.unassigned", user_id=user.user_id)

    def _get_member(self, user_id: int, organization_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.organization_id != organization_id:
            raise AuthorizationError("User does not belong to your organization")
        return user

    @staticmethod
    def _parse_id(shift_id: Union[int, str]) -> int:
        try:
            return int(shift_id)
        except (TypeError, ValueError):
            raise NotFoundError("Shift not found")

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
