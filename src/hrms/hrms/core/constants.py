"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from __future__ import annotations

EARTH_RADIUS_M = 6_371_000
DEFAULT_OFFICE_RADIUS_M = 100.0

DEFAULT_SHIFT_ID = "default"
DEFAULT_SHIFT_NAME = "Default"
DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "17:00"
DEFAULT_SHIFT_LATE = "09:30"
# [Sunday, Monday, ..., Saturday]; 0 = off day, 1 = working day
DEFAULT_SHIFT_DAYS = (0, 1, 1, 1, 1, 1, 0)

MAX_SHIFTS_PER_ORGANIZATION = 10

SELFIE_MAX_BYTES = 5 * 1024 * 1024
SELFIE_CONTENT_TYPES = {"image/jpeg": ".jpg", "image/jpg": ".jpg", "image/png": ".png"}

EMPLOYEE_ID_PREFIX = "EMP"
DEFAULT_RECENT_LIMIT = 10
