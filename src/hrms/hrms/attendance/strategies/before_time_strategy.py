from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_since_midnight
from ...core.enums import Punctuality
from ...shifts.model import Shift
from .base import PunctualityStrategy, StatusDecision


class BeforeTimeStrategy(PunctualityStrategy):
    """Check-in before the shift starts."""

    def decide_checkin(self, *, now: datetime, shift: Shift) -> StatusDecision:
        early = minutes_since_midnight(shift.start_time) - minutes_since_midnight(now)
        return StatusDecision(punctuality=Punctuality.BEFORE_TIME, note=f"{early} min before shift start")
