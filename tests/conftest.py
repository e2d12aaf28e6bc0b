from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hrms.hrms.attendance.model import AttendanceRecord
from src.hrms.hrms.container import wire_container
from src.hrms.hrms.core.enums import Role, UserStatus
from src.hrms.hrms.core.exceptions import ConflictError
from src.hrms.hrms.organizations.model import OfficeLocation, Organization
from src.hrms.hrms.shifts.model import Shift
from src.hrms.hrms.users.model import User

PASSWORD = "password123"


@dataclass
class InMemoryUsers:
    users_by_id: dict[int, User] = field(default_factory=dict)

    def add(self, user: User) -> User:
        self.users_by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.email == email), None)

    def create_user(self, **kwargs) -> int:
        user_id = max(self.users_by_id, default=0) + 1
        self.users_by_id[user_id] = User(user_id=user_id, **kwargs)
        return user_id

    def list_for_organization(self, organization_id: int):
        return [u for u in self.users_by_id.values() if u.organization_id == organization_id]

    def count_by_role(self, organization_id: int, role: Role, *, active_only: bool = True) -> int:
        return sum(
            1
            for u in self.list_for_organization(organization_id)
            if u.role == role and (u.is_active or not active_only)
        )

    def count_with_shift(self, organization_id: int, shift_id: int) -> int:
        return sum(1 for u in self.list_for_organization(organization_id) if u.shift_id == shift_id)

    def next_employee_number(self, organization_id: int) -> int:
        numbers = [int(u.employee_id[3:]) for u in self.list_for_organization(organization_id) if u.employee_id]
        return max(numbers, default=0) + 1

    def _update(self, user_id: int, **changes) -> bool:
        if user_id not in self.users_by_id:
            return False
        self.users_by_id[user_id] = replace(self.users_by_id[user_id], **changes)
        return True

    def set_remote(self, user_id: int, *, remote: bool) -> bool:
        return self._update(user_id, remote=remote)

    def set_status(self, user_id: int, *, status: UserStatus) -> bool:
        return self._update(user_id, status=status)

    def set_shift(self, user_id: int, *, shift_id: Optional[int]) -> bool:
        return self._update(user_id, shift_id=shift_id)


@dataclass
class InMemoryOrganizations:
    orgs: dict[int, Organization] = field(default_factory=dict)

    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        return self.orgs.get(organization_id)

    def update_office_location(self, organization_id: int, location: OfficeLocation) -> bool:
        self.orgs[organization_id] = replace(self.orgs[organization_id], office_location=location)
        return True


@dataclass
class InMemoryShifts:
    shifts: dict[int, Shift] = field(default_factory=dict)

    def add(self, shift: Shift) -> Shift:
        self.shifts[int(shift.shift_id)] = shift
        return shift

    def list_for_organization(self, organization_id: int):
        return [s for s in self.shifts.values() if s.organization_id == organization_id]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)

    def get_by_name(self, organization_id: int, shift_name: str) -> Optional[Shift]:
        return next(
            (s for s in self.list_for_organization(organization_id) if s.shift_name.lower() == shift_name.lower()),
            None,
        )

    def count_for_organization(self, organization_id: int) -> int:
        return len(self.list_for_organization(organization_id))

    def create(self, *, organization_id, shift_name, start_time, end_time, late_time, days) -> int:
        shift_id = max(self.shifts, default=0) + 1
        self.shifts[shift_id] = Shift(
            shift_id=shift_id,
            shift_name=shift_name,
            start_time=start_time,
            end_time=end_time,
            late_time=late_time,
            days=tuple(days),
            organization_id=organization_id,
        )
        return shift_id

    def update(self, shift: Shift) -> bool:
        self.shifts[int(shift.shift_id)] = shift
        return True

    def delete(self, shift_id: int) -> bool:
        return self.shifts.pop(shift_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self.queries = 0
        self._id = 0

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next((r for r in self.records.values() if r.user_id == user_id and r.work_date == work_date), None)

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        if self.get_for_user_and_date(record.user_id, record.work_date):
            raise ConflictError("Duplicate entry for (user_id, work_date)")
        self._id += 1
        saved = replace(record, attendance_id=self._id)
        self.records[self._id] = saved
        return saved

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        self.records[record.attendance_id] = record
        return record

    def iter_records(self, *, organization_id, user_id=None, start_date=None, end_date=None):
        self.queries += 1
        rows = [
            r
            for r in self.records.values()
            if r.organization_id == organization_id
            and (user_id is None or r.user_id == user_id)
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        rows.sort(key=lambda r: (r.work_date, r.check_in_time or datetime.min, r.attendance_id), reverse=True)
        yield from rows


class RecordingSelfieStorage:
    def __init__(self):
        self.calls = []
        self.discarded = []

    def store(self, upload, *, user_id: int) -> str:
        self.calls.append((user_id, upload))
        return f"/uploads/selfies/selfie_{user_id}_{len(self.calls)}.jpg"

    def discard(self, reference: str) -> None:
        self.discarded.append(reference)


def make_user(user_id: int, *, organization_id: int = 1, role: Role = Role.EMPLOYEE, **kwargs) -> User:
    defaults = dict(
        email=f"user{user_id}@example.com",
        first_name="User",
        last_name=str(user_id),
        password_hash=generate_password_hash(PASSWORD),
        employee_id=f"EMP{user_id:03d}",
    )
    defaults.update(kwargs)
    return User(user_id=user_id, organization_id=organization_id, role=role, **defaults)


@pytest.fixture
def repos():
    """Org 1 has an office in Bangalore (100 m); org 2 has no office set.

    Users: 1 admin, 2 on-site employee, 3 remote employee (org 1); 4 employee (org 2).
    """
    users = InMemoryUsers()
    users.add(make_user(1, role=Role.ADMIN, email="admin@example.com"))
    users.add(make_user(2, email="alice@example.com", first_name="Alice", last_name="Nguyen"))
    users.add(make_user(3, email="bob@example.com", first_name="Bob", last_name="Tran", remote=True))
    users.add(make_user(4, organization_id=2, email="carol@example.com"))

    organizations = InMemoryOrganizations(
        {
            1: Organization(1, "Acme", OfficeLocation(12.9716, 77.5946, "MG Road", 100.0)),
            2: Organization(2, "Globex"),
        }
    )

    return SimpleNamespace(
        users=users,
        organizations=organizations,
        shifts=InMemoryShifts(),
        attendance=InMemoryAttendance(),
        selfies=RecordingSelfieStorage(),
    )


@pytest.fixture
def container(repos):
    return wire_container(
        users_repo=repos.users,
        organizations_repo=repos.organizations,
        shifts_repo=repos.shifts,
        attendance_repo=repos.attendance,
        selfie_storage=repos.selfies,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2025, 1, 6, 9, 15, 0)
