from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Lifecycle state of a day's attendance record."""

    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    ABSENT = "absent"


class Punctuality(str, Enum):
    """Check-in classification against the shift boundaries."""

    BEFORE_TIME = "before-time"
    ON_TIME = "on-time"
    LATE = "late"
