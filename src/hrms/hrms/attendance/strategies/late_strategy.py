from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_since_midnight
from ...core.enums import Punctuality
from ...shifts.model import Shift
from .base import PunctualityStrategy, StatusDecision


class LateStrategy(PunctualityStrategy):
    """Late check-in."""

    def decide_checkin(self, *, now: datetime, shift: Shift) -> StatusDecision:
        late = minutes_since_midnight(now) - minutes_since_midnight(shift.start_time)
        return StatusDecision(punctuality=Punctuality.LATE, note=f"late by {late} min")
