"""
Geofence validation.
Uses the Haversine formula to compute great-circle distance between points.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import EARTH_RADIUS_M


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in meters
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2 +
        math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


@dataclass(frozen=True)
class GeofenceCheck:
    is_valid: bool
    distance_m: int
    radius_m: float


def check_geofence(
    latitude: float,
    longitude: float,
    office_latitude: float,
    office_longitude: float,
    radius_m: float,
) -> GeofenceCheck:
    """
    Check whether a reported position lies within ``radius_m`` of the office.

    The boundary is inclusive; the reported distance is rounded to the nearest meter.
    """
    distance = haversine_distance(latitude, longitude, office_latitude, office_longitude)
    return GeofenceCheck(
        is_valid=distance <= radius_m,
        distance_m=int(round(distance)),
        radius_m=float(radius_m),
    )
