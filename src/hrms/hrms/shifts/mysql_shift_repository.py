from __future__ import annotations

from datetime import time
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, organization_id, shift_name, start_time, end_time, late_time, days"


def _to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        organization_id=int(r["organization_id"]),
        shift_name=r["shift_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        late_time=normalize_mysql_time(r["late_time"]),
        days=tuple(int(ch) for ch in str(r["days"])),
    )


def _days_column(days: tuple[int, ...]) -> str:
    return "".join(str(int(d)) for d in days)


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_organization(self, organization_id: int) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE organization_id=%s
                ORDER BY created_at DESC, shift_id DESC
                """,
                (int(organization_id),),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def get_by_name(self, organization_id: int, shift_name: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM shifts WHERE organization_id=%s AND shift_name=%s",
                (int(organization_id), shift_name),
            )
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def count_for_organization(self, organization_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM shifts WHERE organization_id=%s", (int(organization_id),))
            return int(fetchone(cur)["n"])

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(organization_id, shift_name, start_time, end_time, late_time, days)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(organization_id), shift_name, start_time, end_time, late_time, _days_column(days)),
            )
            return int(cur.lastrowid)

    def update(self, shift: Shift) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET shift_name=%s, start_time=%s, end_time=%s, late_time=%s, days=%s
                WHERE shift_id=%s
                """,
                (
                    shift.shift_name,
                    shift.start_time,
                    shift.end_time,
                    shift.late_time,
                    _days_column(shift.days),
                    int(shift.shift_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0
