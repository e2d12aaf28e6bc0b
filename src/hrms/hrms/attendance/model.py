from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, Punctuality


@dataclass(frozen=True)
class GeoPoint:
    """Reported position with optional free-text address."""

    latitude: float
    longitude: float
    address: Optional[str] = None

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude, "address": self.address}


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day."""

    attendance_id: Optional[int]
    organization_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    check_in_location: Optional[GeoPoint] = None
    check_out_location: Optional[GeoPoint] = None
    check_in_selfie: Optional[str] = None
    check_out_selfie: Optional[str] = None
    status: AttendanceStatus = AttendanceStatus.CHECKED_IN
    attendance_status: Optional[Punctuality] = None
    total_hours: Optional[float] = None

    def to_dict(self) -> dict:
        def _iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value else None

        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "organizationId": self.organization_id,
            "date": self.work_date.isoformat(),
            "checkInTime": _iso(self.check_in_time),
            "checkOutTime": _iso(self.check_out_time),
            "checkInLocation": self.check_in_location.to_dict() if self.check_in_location else None,
            "checkOutLocation": self.check_out_location.to_dict() if self.check_out_location else None,
            "checkInSelfie": self.check_in_selfie,
            "checkOutSelfie": self.check_out_selfie,
            "status": self.status.value,
            "attendanceStatus": self.attendance_status.value if self.attendance_status else None,
            "totalHours": self.total_hours,
        }


@dataclass(frozen=True)
class MapLocation:
    """Read-model for plotting check-in positions."""

    attendance_id: Optional[int]
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    latitude: float
    longitude: float
    address: Optional[str]
    attendance_status: Optional[Punctuality]
