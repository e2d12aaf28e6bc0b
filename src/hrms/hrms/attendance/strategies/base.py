from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import Punctuality
from ...shifts.model import Shift


@dataclass(frozen=True)
class StatusDecision:
    punctuality: Punctuality
    note: Optional[str] = None


class PunctualityStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in is classified."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, shift: Shift) -> StatusDecision:
        raise NotImplementedError
