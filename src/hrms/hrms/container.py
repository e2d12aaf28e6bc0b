from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import PunctualityStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_OFFICE_RADIUS_M
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .organizations.mysql_organization_repository import MySQLOrganizationRepository
from .organizations.repository import OrganizationRepository
from .organizations.service import OrganizationService
from .reports.service import ReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .uploads.service import LocalSelfieStorage, SelfieStorage
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    organizations_repo: OrganizationRepository
    shifts_repo: ShiftRepository
    attendance_repo: AttendanceRepository
    selfie_storage: SelfieStorage

    auth_service: AuthService
    user_service: UserService
    organization_service: OrganizationService
    shift_service: ShiftService
    attendance_service: AttendanceService
    report_service: ReportService
    dashboard_service: DashboardService


def wire_container(
    *,
    users_repo: UserRepository,
    organizations_repo: OrganizationRepository,
    shifts_repo: ShiftRepository,
    attendance_repo: AttendanceRepository,
    selfie_storage: SelfieStorage,
    conn: Optional[DatabaseConnection] = None,
    default_radius_m: float = DEFAULT_OFFICE_RADIUS_M,
    selfie_required: bool = False,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""
    shift_service = ShiftService(shifts_repo, users_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        organizations_repo,
        shift_service,
        selfie_storage=selfie_storage,
        strategy_factory=PunctualityStrategyFactory(),
        default_radius_m=default_radius_m,
        selfie_required=selfie_required,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        organizations_repo=organizations_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        selfie_storage=selfie_storage,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        organization_service=OrganizationService(organizations_repo),
        shift_service=shift_service,
        attendance_service=attendance_service,
        report_service=ReportService(attendance_service, users_repo),
        dashboard_service=DashboardService(attendance_service, users_repo),
    )


def build_container(
    *,
    db_config: dict,
    upload_dir: str = "uploads",
    default_radius_m: float = DEFAULT_OFFICE_RADIUS_M,
    selfie_required: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        organizations_repo=MySQLOrganizationRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        selfie_storage=LocalSelfieStorage(upload_dir),
        default_radius_m=default_radius_m,
        selfie_required=selfie_required,
    )
