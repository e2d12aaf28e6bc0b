from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterator, Optional

import structlog

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_OFFICE_RADIUS_M
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    ConflictError,
    NotCheckedInError,
    NotFoundError,
    OutOfRangeError,
    UploadError,
    ValidationError,
    WeeklyOffError,
)
from ..organizations.repository import OrganizationRepository
from ..shifts.service import ShiftService
from ..uploads.model import SelfieUpload
from ..uploads.service import SelfieStorage
from ..users.model import User
from ..users.repository import UserRepository
from .factory import PunctualityStrategyFactory
from .geofence import check_geofence
from .model import AttendanceRecord, GeoPoint, MapLocation
from .repository import AttendanceRepository

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RecordQuery:
    """Lazy, restartable selection of attendance records.

    Every iteration queries storage again, ordered by date desc then check-in desc.
    """

    attendance: AttendanceRepository
    organization_id: int
    user_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __iter__(self) -> Iterator[AttendanceRecord]:
        return iter(
            self.attendance.iter_records(
                organization_id=self.organization_id,
                user_id=self.user_id,
                start_date=self.start_date,
                end_date=self.end_date,
            )
        )


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        organizations: OrganizationRepository,
        shift_service: ShiftService,
        *,
        selfie_storage: Optional[SelfieStorage] = None,
        strategy_factory: Optional[PunctualityStrategyFactory] = None,
        default_radius_m: float = DEFAULT_OFFICE_RADIUS_M,
        selfie_required: bool = False,
    ):
        self._attendance = attendance
        self._users = users
        self._organizations = organizations
        self._shift_service = shift_service
        self._selfies = selfie_storage
        self._factory = strategy_factory or PunctualityStrategyFactory()
        self._default_radius_m = float(default_radius_m)
        self._selfie_required = bool(selfie_required)

    def _load_member(self, user_id: int, organization_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user or user.organization_id != organization_id:
            raise NotFoundError("User not found")
        if not user.is_active:
            raise ValidationError("Your account is inactive")
        return user

    def _enforce_geofence(self, user: User, position: GeoPoint) -> None:
        if user.remote:
            return

        org = self._organizations.get_by_id(user.organization_id)
        if not org:
            raise NotFoundError("Organization not found")
        office = org.office_location
        if office is None:
            raise ValidationError("Office location is not configured for your organization")

        radius = office.radius if office.radius is not None else self._default_radius_m
        result = check_geofence(position.latitude, position.longitude, office.latitude, office.longitude, radius)
        if not result.is_valid:
            log.info(
                "attendance.out_of_range",
                user_id=user.user_id,
                distance_m=result.distance_m,
                radius_m=result.radius_m,
            )
            raise OutOfRangeError(result.distance_m, result.radius_m)

    def _store_selfie(self, user_id: int, selfie: Optional[SelfieUpload]) -> Optional[str]:
        if selfie is None or not selfie.data:
            if self._selfie_required:
                raise UploadError("Selfie image is required")
            return None
        if self._selfies is None:
            raise UploadError("Selfie storage is not configured")
        return self._selfies.store(selfie, user_id=user_id)

    def check_in(
        self,
        user_id: int,
        organization_id: int,
        position: GeoPoint,
        *,
        now: Optional[datetime] = None,
        selfie: Optional[SelfieUpload] = None,
    ) -> AttendanceRecord:
        now = (now or now_local()).replace(microsecond=0)
        today = now.date()

        user = self._load_member(user_id, organization_id)

        # Off days are rejected before any location or record work.
        shift = self._shift_service.resolve_for(user)
        if not shift.is_working_day(today):
            raise WeeklyOffError()

        self._enforce_geofence(user, position)

        strategy = self._factory.for_checkin(now=now, shift=shift)
        decision = strategy.decide_checkin(now=now, shift=shift)

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.check_in_time is not None:
            raise AlreadyCheckedInError()

        selfie_ref = self._store_selfie(user_id, selfie)

        base = existing or AttendanceRecord(
            attendance_id=None,
            organization_id=organization_id,
            user_id=user_id,
            work_date=today,
        )
        record = replace(
            base,
            check_in_time=now,
            check_in_location=position,
            check_in_selfie=selfie_ref,
            status=AttendanceStatus.CHECKED_IN,
            attendance_status=decision.punctuality,
        )

        if existing:
            saved = self._attendance.save(record)
        else:
            try:
                saved = self._attendance.create(record)
            except ConflictError as e:
                # Lost the race for this day; the stored selfie belongs to no record.
                if selfie_ref:
                    self._selfies.discard(selfie_ref)
                raise AlreadyCheckedInError() from e

        log.info(
            "attendance.check_in",
            user_id=user_id,
            organization_id=organization_id,
            shift_id=str(shift.shift_id),
            attendance_status=decision.punctuality.value,
            note=decision.note,
            remote=user.remote,
        )
        return saved

    def check_out(
        self,
        user_id: int,
        organization_id: int,
        position: GeoPoint,
        *,
        now: Optional[datetime] = None,
        selfie: Optional[SelfieUpload] = None,
    ) -> AttendanceRecord:
        now = (now or now_local()).replace(microsecond=0)
        today = now.date()

        user = self._load_member(user_id, organization_id)
        self._enforce_geofence(user, position)

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            raise NotCheckedInError()
        if record.check_out_time is not None:
            raise AlreadyCheckedOutError()
        if now < record.check_in_time:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        selfie_ref = self._store_selfie(user_id, selfie)

        total_hours = (now - record.check_in_time).total_seconds() / 3600
        saved = self._attendance.save(
            replace(
                record,
                check_out_time=now,
                check_out_location=position,
                check_out_selfie=selfie_ref,
                status=AttendanceStatus.CHECKED_OUT,
                total_hours=total_hours,
            )
        )

        log.info(
            "attendance.check_out",
            user_id=user_id,
            organization_id=organization_id,
            total_hours=round(total_hours, 2),
        )
        return saved

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        """Get today's attendance record for a user"""
        return self._attendance.get_for_user_and_date(user_id, today)

    def list_records(
        self,
        organization_id: int,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> RecordQuery:
        if start and end and start > end:
            raise ValidationError("startDate must not be after endDate")
        return RecordQuery(self._attendance, organization_id, user_id, start, end)

    def map_locations(
        self,
        organization_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[MapLocation]:
        return [
            MapLocation(
                attendance_id=r.attendance_id,
                user_id=r.user_id,
                work_date=r.work_date,
                check_in_time=r.check_in_time,
                latitude=r.check_in_location.latitude,
                longitude=r.check_in_location.longitude,
                address=r.check_in_location.address,
                attendance_status=r.attendance_status,
            )
            for r in self.list_records(organization_id, start=start, end=end)
            if r.check_in_location is not None
        ]
