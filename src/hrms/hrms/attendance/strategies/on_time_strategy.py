from __future__ import annotations

from datetime import datetime

from ...core.enums import Punctuality
from ...shifts.model import Shift
from .base import PunctualityStrategy, StatusDecision


class OnTimeStrategy(PunctualityStrategy):
    """Check-in between shift start and the late cutoff."""

    def decide_checkin(self, *, now: datetime, shift: Shift) -> StatusDecision:
        return StatusDecision(punctuality=Punctuality.ON_TIME)
