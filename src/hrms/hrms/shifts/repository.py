from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def list_for_organization(self, organization_id: int) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def get_by_name(self, organization_id: int, shift_name: str) -> Optional[Shift]:
        raise NotImplementedError

    def count_for_organization(self, organization_id: int) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        organization_id: int,
        shift_name: str,
        start_time: time,
        end_time: time,
        late_time: time,
        days: tuple[int, ...],
    ) -> int:
        raise NotImplementedError

    def update(self, shift: Shift) -> bool:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError
