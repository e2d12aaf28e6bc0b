from __future__ import annotations

from datetime import date
from typing import Iterator, Optional, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert a new day record.

        Raises ConflictError when a record for (user, day) already exists.
        """

        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def iter_records(
        self,
        *,
        organization_id: int,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Iterator[AttendanceRecord]:
        """Yield matching records ordered by date desc, then check-in time desc."""

        raise NotImplementedError
