from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.service import AttendanceService
from ..users.model import User
from ..users.repository import UserRepository

CSV_FIELDS = [
    "date",
    "employee_id",
    "full_name",
    "email",
    "check_in",
    "check_out",
    "status",
    "attendance_status",
    "total_hours",
    "check_in_address",
    "check_out_address",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def _hhmm(hours: float) -> str:
    minutes = int(round(hours * 60))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class ReportService:
    def __init__(self, attendance: AttendanceService, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def build_attendance_report(
        self,
        *,
        organization_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> ReportData:
        people: dict[int, Optional[User]] = {}
        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in self._attendance.list_records(organization_id, user_id=user_id, start=start, end=end):
            if r.user_id not in people:
                people[r.user_id] = self._users.get_by_id(r.user_id)
            user = people[r.user_id]
            hours = r.total_hours or 0.0

            out_rows.append(
                {
                    "date": r.work_date.strftime("%Y-%m-%d"),
                    "employee_id": (user.employee_id if user else None) or "-",
                    "full_name": user.full_name if user else "-",
                    "email": user.email if user else "-",
                    "check_in": r.check_in_time.strftime("%H:%M") if r.check_in_time else "-",
                    "check_out": r.check_out_time.strftime("%H:%M") if r.check_out_time else "-",
                    "status": r.status.value,
                    "attendance_status": r.attendance_status.value if r.attendance_status else "-",
                    "total_hours": f"{hours:.2f}" if r.total_hours is not None else "",
                    "check_in_address": (r.check_in_location.address if r.check_in_location else None) or "",
                    "check_out_address": (r.check_out_location.address if r.check_out_location else None) or "",
                }
            )

            s = summary_map.get(r.user_id)
            if not s:
                s = {
                    "user_id": r.user_id,
                    "full_name": user.full_name if user else "-",
                    "days": 0,
                    "total_hours": 0.0,
                }
                summary_map[r.user_id] = s
            s["days"] += 1
            s["total_hours"] += hours

        summary = [
            {
                "user_id": s["user_id"],
                "full_name": s["full_name"],
                "days": s["days"],
                "total_hours": round(s["total_hours"], 2),
                "total_hhmm": _hhmm(s["total_hours"]),
            }
            for s in summary_map.values()
        ]
        summary.sort(key=lambda x: x["total_hours"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)

    def export_csv(
        self,
        *,
        organization_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> str:
        data = self.build_attendance_report(organization_id=organization_id, start=start, end=end, user_id=user_id)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)
        return out.getvalue()
