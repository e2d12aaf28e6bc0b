from datetime import date, datetime

import pytest

from src.hrms.hrms.attendance.model import AttendanceRecord, GeoPoint
from src.hrms.hrms.core.enums import AttendanceStatus, Punctuality
from src.hrms.hrms.core.exceptions import ValidationError


def _seed(repos):
    def add(user_id, day, hh, mm, lat=12.9716):
        return repos.attendance.create(
            AttendanceRecord(
                attendance_id=None,
                organization_id=1,
                user_id=user_id,
                work_date=day,
                check_in_time=datetime.combine(day, datetime.min.time()).replace(hour=hh, minute=mm),
                check_in_location=GeoPoint(lat, 77.5946),
                status=AttendanceStatus.CHECKED_IN,
                attendance_status=Punctuality.ON_TIME,
            )
        )

    add(2, date(2025, 1, 6), 9, 5)
    add(3, date(2025, 1, 6), 8, 50)
    add(2, date(2025, 1, 7), 9, 20)
    add(3, date(2025, 1, 8), 9, 0)
    repos.attendance.create(
        AttendanceRecord(attendance_id=None, organization_id=2, user_id=4, work_date=date(2025, 1, 6))
    )


def test_records_ordered_by_date_then_check_in_desc(container, repos):
    _seed(repos)

    rows = list(container.attendance_service.list_records(1))

    assert [(r.work_date.day, r.user_id) for r in rows] == [(8, 3), (7, 2), (6, 2), (6, 3)]


def test_query_is_restartable_and_requeries(container, repos):
    _seed(repos)
    query = container.attendance_service.list_records(1, user_id=2)

    first = list(query)
    repos.attendance.create(
        AttendanceRecord(attendance_id=None, organization_id=1, user_id=2, work_date=date(2025, 1, 9))
    )
    second = list(query)

    assert len(first) == 2
    assert len(second) == 3
    assert repos.attendance.queries == 2


def test_date_range_filter(container, repos):
    _seed(repos)

    rows = list(container.attendance_service.list_records(1, start=date(2025, 1, 7), end=date(2025, 1, 7)))
    assert [r.user_id for r in rows] == [2]


def test_inverted_range_is_rejected(container):
    with pytest.raises(ValidationError):
        container.attendance_service.list_records(1, start=date(2025, 1, 8), end=date(2025, 1, 1))


def test_map_locations_only_include_checked_in_positions(container, repos):
    _seed(repos)
    repos.attendance.create(
        AttendanceRecord(attendance_id=None, organization_id=1, user_id=1, work_date=date(2025, 1, 6))
    )

    points = container.attendance_service.map_locations(1)

    assert len(points) == 4
    assert all(p.latitude == 12.9716 for p in points)
