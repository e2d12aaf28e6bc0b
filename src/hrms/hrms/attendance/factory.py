from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import minutes_since_midnight
from ..core.enums import Punctuality
from ..shifts.model import Shift
from .strategies.base import PunctualityStrategy
from .strategies.before_time_strategy import BeforeTimeStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class PunctualityStrategyFactory:
    """Factory Pattern: choose the strategy from the shift boundaries.

    Boundaries compare whole minutes since midnight:
    before start -> before-time, start..late inclusive -> on-time, after late -> late.
    """

    def for_checkin(self, *, now: datetime, shift: Shift) -> PunctualityStrategy:
        checkin = minutes_since_midnight(now)
        if checkin < minutes_since_midnight(shift.start_time):
            return BeforeTimeStrategy()
        if checkin <= minutes_since_midnight(shift.late_time):
            return OnTimeStrategy()
        return LateStrategy()


def classify_punctuality(now: datetime, shift: Shift) -> Punctuality:
    strategy = PunctualityStrategyFactory().for_checkin(now=now, shift=shift)
    return strategy.decide_checkin(now=now, shift=shift).punctuality
