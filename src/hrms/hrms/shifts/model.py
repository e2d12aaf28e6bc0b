from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Union

from ..common.datetime_utils import format_hhmm, parse_hhmm, sunday_based_weekday
from ..core import constants


@dataclass(frozen=True)
class Shift:
    """Domain entity: work shift.

    ``days`` holds 7 flags indexed 0 (Sunday) .. 6 (Saturday); 0 is an off day.
    """

    shift_id: Union[int, str]
    shift_name: str
    start_time: time
    end_time: time
    late_time: time
    days: tuple[int, ...]
    organization_id: Optional[int] = None
    is_default: bool = False

    def is_working_day(self, day: date) -> bool:
        return bool(self.days[sunday_based_weekday(day)])

    def to_dict(self) -> dict:
        return {
            "id": str(self.shift_id),
            "name": self.shift_name,
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "lateTime": format_hhmm(self.late_time),
            "days": list(self.days),
            "organizationId": self.organization_id,
            "isDefault": self.is_default,
        }


DEFAULT_SHIFT = Shift(
    shift_id=constants.DEFAULT_SHIFT_ID,
    shift_name=constants.DEFAULT_SHIFT_NAME,
    start_time=parse_hhmm(constants.DEFAULT_SHIFT_START),
    end_time=parse_hhmm(constants.DEFAULT_SHIFT_END),
    late_time=parse_hhmm(constants.DEFAULT_SHIFT_LATE),
    days=constants.DEFAULT_SHIFT_DAYS,
    is_default=True,
)
