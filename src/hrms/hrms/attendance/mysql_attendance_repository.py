from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Iterator, Optional

from ..core.enums import AttendanceStatus, Punctuality
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, GeoPoint
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, organization_id, user_id, work_date, check_in_time, check_out_time,
    check_in_latitude, check_in_longitude, check_in_address,
    check_out_latitude, check_out_longitude, check_out_address,
    check_in_selfie, check_out_selfie, status, attendance_status, total_hours
"""

PAGE_SIZE = 200


def _point(r: Dict[str, Any], prefix: str) -> Optional[GeoPoint]:
    lat = r.get(f"{prefix}_latitude")
    lon = r.get(f"{prefix}_longitude")
    if lat is None or lon is None:
        return None
    return GeoPoint(latitude=float(lat), longitude=float(lon), address=r.get(f"{prefix}_address"))


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        organization_id=int(r["organization_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        check_in_location=_point(r, "check_in"),
        check_out_location=_point(r, "check_out"),
        check_in_selfie=r.get("check_in_selfie"),
        check_out_selfie=r.get("check_out_selfie"),
        status=AttendanceStatus(r["status"]),
        attendance_status=Punctuality(r["attendance_status"]) if r.get("attendance_status") else None,
        total_hours=float(r["total_hours"]) if r.get("total_hours") is not None else None,
    )


def _values(record: AttendanceRecord) -> tuple:
    cin = record.check_in_location
    cout = record.check_out_location
    return (
        record.check_in_time,
        record.check_out_time,
        cin.latitude if cin else None,
        cin.longitude if cin else None,
        cin.address if cin else None,
        cout.latitude if cout else None,
        cout.longitude if cout else None,
        cout.address if cout else None,
        record.check_in_selfie,
        record.check_out_selfie,
        record.status.value,
        record.attendance_status.value if record.attendance_status else None,
        record.total_hours,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        # uq_attendance_user_day turns a concurrent duplicate into ConflictError (see db_cursor).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    organization_id, user_id, work_date, check_in_time, check_out_time,
                    check_in_latitude, check_in_longitude, check_in_address,
                    check_out_latitude, check_out_longitude, check_out_address,
                    check_in_selfie, check_out_selfie, status, attendance_status, total_hours
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(record.organization_id), int(record.user_id), record.work_date, *_values(record)),
            )
            return replace(record, attendance_id=int(cur.lastrowid))

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_out_time=%s,
                    check_in_latitude=%s, check_in_longitude=%s, check_in_address=%s,
                    check_out_latitude=%s, check_out_longitude=%s, check_out_address=%s,
                    check_in_selfie=%s, check_out_selfie=%s,
                    status=%s, attendance_status=%s, total_hours=%s
                WHERE attendance_id=%s
                """,
                (*_values(record), int(record.attendance_id)),
            )
            return record

    def iter_records(
        self,
        *,
        organization_id: int,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Iterator[AttendanceRecord]:
        clauses = ["organization_id=%s"]
        params: list[object] = [int(organization_id)]

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)
        offset = 0
        while True:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM attendance_records
                    WHERE {where}
                    ORDER BY work_date DESC, check_in_time DESC, attendance_id DESC
                    LIMIT %s OFFSET %s
                    """,
                    (*params, PAGE_SIZE, offset),
                )
                rows = fetchall(cur)

            for r in rows:
                yield _to_record(r)

            if len(rows) < PAGE_SIZE:
                return
            offset += PAGE_SIZE
