from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from itertools import islice
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local, sunday_based_weekday
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import Role
from ..users.repository import UserRepository


@dataclass(frozen=True)
class DashboardStats:
    users: dict
    attendance: dict
    recent: list[dict]


class DashboardService:
    """Organization-wide counters for the admin landing page."""

    def __init__(self, attendance: AttendanceService, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def get_stats(self, organization_id: int, *, now: Optional[datetime] = None) -> DashboardStats:
        today = (now or now_local()).date()
        week_start = today - timedelta(days=sunday_based_weekday(today))
        month_start = today.replace(day=1)

        admins = self._users.count_by_role(organization_id, Role.ADMIN)
        employees = self._users.count_by_role(organization_id, Role.EMPLOYEE)

        employee_ids = {
            u.user_id
            for u in self._users.list_for_organization(organization_id)
            if u.role == Role.EMPLOYEE and u.is_active
        }

        checked_in = checked_out = week = month = 0
        employees_in: set[int] = set()
        hours: list[float] = []
        for r in self._attendance.list_records(organization_id, start=min(week_start, month_start), end=today):
            if r.work_date == today:
                checked_in += r.check_in_time is not None
                if r.check_in_time is not None and r.user_id in employee_ids:
                    employees_in.add(r.user_id)
                checked_out += r.check_out_time is not None
            if r.work_date >= week_start:
                week += 1
            if r.work_date >= month_start:
                month += 1
                if r.total_hours is not None:
                    hours.append(r.total_hours)

        avg_hours = round(sum(hours) / len(hours), 2) if hours else 0

        recent = [r.to_dict() for r in islice(self._attendance.list_records(organization_id), DEFAULT_RECENT_LIMIT)]

        return DashboardStats(
            users={"total": admins + employees, "admins": admins, "employees": employees},
            attendance={
                "today": {
                    "checkedIn": checked_in,
                    "checkedOut": checked_out,
                    "pending": len(employee_ids - employees_in),
                },
                "week": week,
                "month": month,
                "averageHours": avg_hours,
            },
            recent=recent,
        )
