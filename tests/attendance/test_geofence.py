import pytest

from src.hrms.hrms.attendance.geofence import check_geofence, haversine_distance
from src.hrms.hrms.core.exceptions import OutOfRangeError

OFFICE = (12.9716, 77.5946)


def test_same_point_is_zero_distance():
    assert haversine_distance(*OFFICE, *OFFICE) == 0.0


def test_one_degree_of_latitude_matches_earth_radius():
    # 2 * pi * 6371000 / 360
    assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_194.93, abs=0.01)


def test_distance_is_symmetric():
    a = haversine_distance(12.9716, 77.5946, 12.98, 77.60)
    b = haversine_distance(12.98, 77.60, 12.9716, 77.5946)
    assert a == pytest.approx(b)


def test_inside_radius_is_valid():
    result = check_geofence(OFFICE[0] + 0.00089, OFFICE[1], *OFFICE, 100)
    assert result.is_valid
    assert result.distance_m == 99


def test_outside_radius_is_rejected():
    result = check_geofence(OFFICE[0] + 0.0009, OFFICE[1], *OFFICE, 100)
    assert not result.is_valid
    assert result.distance_m == 100


def test_boundary_is_inclusive():
    lat = OFFICE[0] + 0.0005
    exact = haversine_distance(lat, OFFICE[1], *OFFICE)
    assert check_geofence(lat, OFFICE[1], *OFFICE, exact).is_valid


def test_zero_radius_requires_coincidence():
    assert check_geofence(*OFFICE, *OFFICE, 0).is_valid
    assert not check_geofence(OFFICE[0] + 0.00001, OFFICE[1], *OFFICE, 0).is_valid


def test_out_of_range_error_reports_distance_and_radius():
    result = check_geofence(OFFICE[0] + 0.00128, OFFICE[1], *OFFICE, 100)
    err = OutOfRangeError(result.distance_m, result.radius_m)

    assert result.distance_m == 142
    assert err.distance_m == 142
    assert "your distance: 142m, allowed: 100m" in str(err)
