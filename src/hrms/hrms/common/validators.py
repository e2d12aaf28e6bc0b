from __future__ import annotations

from typing import Sequence

from ..core.exceptions import ValidationError
from .datetime_utils import is_hhmm


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_hhmm(value: str, field_name: str) -> str:
    if not is_hhmm(value or ""):
        raise ValidationError(f"{field_name} must be in HH:mm format (24-hour)")
    return value


def require_days_mask(days: Sequence[int]) -> tuple[int, ...]:
    if days is None or len(days) != 7:
        raise ValidationError("Days array must have exactly 7 elements (Sunday to Saturday)")
    try:
        mask = tuple(int(d) for d in days)
    except (TypeError, ValueError):
        raise ValidationError("Each day value must be 0 or 1")
    if any(d not in (0, 1) for d in mask):
        raise ValidationError("Each day value must be 0 or 1")
    return mask


def require_coordinates(latitude, longitude) -> tuple[float, float]:
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("Latitude and longitude must be numbers")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return lat, lon
