import csv
import io
from datetime import date, datetime

import pytest

from src.hrms.hrms.attendance.model import AttendanceRecord, GeoPoint
from src.hrms.hrms.core.enums import AttendanceStatus, Punctuality

AT_OFFICE = GeoPoint(12.9716, 77.5946, "MG Road")


@pytest.fixture
def worked_days(container, repos, fixed_now):
    svc = container.attendance_service
    svc.check_in(2, 1, AT_OFFICE, now=fixed_now)
    svc.check_out(2, 1, AT_OFFICE, now=fixed_now.replace(hour=18))
    svc.check_in(3, 1, GeoPoint(0.0, 0.0), now=fixed_now)

    repos.attendance.create(
        AttendanceRecord(
            attendance_id=None,
            organization_id=1,
            user_id=2,
            work_date=date(2025, 1, 2),
            check_in_time=datetime(2025, 1, 2, 9, 45),
            check_out_time=datetime(2025, 1, 2, 18, 0),
            status=AttendanceStatus.CHECKED_OUT,
            attendance_status=Punctuality.LATE,
            total_hours=8.25,
        )
    )
    return fixed_now


def test_report_summarises_hours_per_user(container, worked_days):
    data = container.report_service.build_attendance_report(organization_id=1)

    assert len(data.rows) == 3
    assert data.summary[0] == {
        "user_id": 2,
        "full_name": "Alice Nguyen",
        "days": 2,
        "total_hours": 17.0,
        "total_hhmm": "17:00",
    }
    assert data.summary[1]["user_id"] == 3
    assert data.summary[1]["total_hours"] == 0.0


def test_report_respects_user_filter(container, worked_days):
    data = container.report_service.build_attendance_report(organization_id=1, user_id=3)

    assert [r["employee_id"] for r in data.rows] == ["EMP003"]
    assert data.rows[0]["check_out"] == "-"


def test_csv_export(container, worked_days):
    content = container.report_service.export_csv(
        organization_id=1, start=date(2025, 1, 6), end=date(2025, 1, 6), user_id=2
    )

    rows = list(csv.DictReader(io.StringIO(content)))
    assert len(rows) == 1
    assert rows[0]["date"] == "2025-01-06"
    assert rows[0]["check_in"] == "09:15"
    assert rows[0]["check_out"] == "18:00"
    assert rows[0]["total_hours"] == "8.75"
    assert rows[0]["attendance_status"] == "on-time"
    assert rows[0]["check_in_address"] == "MG Road"


def test_dashboard_stats(container, worked_days):
    stats = container.dashboard_service.get_stats(1, now=worked_days.replace(hour=19))

    assert stats.users == {"total": 3, "admins": 1, "employees": 2}
    assert stats.attendance["today"] == {"checkedIn": 2, "checkedOut": 1, "pending": 0}
    assert stats.attendance["week"] == 2
    assert stats.attendance["month"] == 3
    assert stats.attendance["averageHours"] == 8.5
    assert len(stats.recent) == 3
    assert stats.recent[0]["date"] == "2025-01-06"


def test_dashboard_for_empty_organization(container):
    stats = container.dashboard_service.get_stats(2, now=datetime(2025, 1, 6, 12, 0))

    assert stats.users["employees"] == 1
    assert stats.attendance["today"]["pending"] == 1
    assert stats.attendance["averageHours"] == 0
    assert stats.recent == []


def test_admin_check_in_does_not_reduce_pending_employees(container, fixed_now):
    container.attendance_service.check_in(1, 1, AT_OFFICE, now=fixed_now)

    stats = container.dashboard_service.get_stats(1, now=fixed_now.replace(hour=12))

    assert stats.attendance["today"] == {"checkedIn": 1, "checkedOut": 0, "pending": 2}
