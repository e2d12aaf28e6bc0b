from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.constants import EMPLOYEE_ID_PREFIX
from ..core.enums import Role, UserStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = (
    "user_id, organization_id, email, first_name, last_name, password_hash, "
    "role, status, employee_id, remote, shift_id"
)


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        organization_id=int(row["organization_id"]),
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        password_hash=row.get("password_hash"),
        role=Role(row["role"]),
        status=UserStatus(row.get("status") or UserStatus.ACTIVE.value),
        employee_id=row.get("employee_id"),
        remote=bool(row.get("remote")),
        shift_id=int(row["shift_id"]) if row.get("shift_id") is not None else None,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        organization_id: int,
        email: str,
        first_name: str,
        last_name: str,
        password_hash: Optional[str],
        role: Role,
        employee_id: Optional[str],
        remote: bool,
        shift_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(organization_id, email, first_name, last_name, password_hash,
                                  role, status, employee_id, remote, shift_id)
                VALUES(%s,%s,%s,%s,%s,%s,'active',%s,%s,%s)
                """,
                (
                    int(organization_id),
                    email.lower(),
                    first_name,
                    last_name,
                    password_hash,
                    role.value,
                    employee_id,
                    int(bool(remote)),
                    shift_id,
                ),
            )
            return int(cur.lastrowid)

    def list_for_organization(self, organization_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE organization_id=%s ORDER BY user_id DESC",
                (int(organization_id),),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def count_by_role(self, organization_id: int, role: Role, *, active_only: bool = True) -> int:
        sql = "SELECT COUNT(*) AS n FROM users WHERE organization_id=%s AND role=%s"
        if active_only:
            sql += " AND status='active'"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(organization_id), role.value))
            return int(fetchone(cur)["n"])

    def count_with_shift(self, organization_id: int, shift_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM users WHERE organization_id=%s AND shift_id=%s",
                (int(organization_id), int(shift_id)),
            )
            return int(fetchone(cur)["n"])

    def next_employee_number(self, organization_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT MAX(CAST(SUBSTRING(employee_id, %s) AS UNSIGNED)) AS n
                FROM users
                WHERE organization_id=%s AND employee_id LIKE %s
                """,
                (len(EMPLOYEE_ID_PREFIX) + 1, int(organization_id), f"{EMPLOYEE_ID_PREFIX}%"),
            )
            r = fetchone(cur)
            return int(r["n"] or 0) + 1 if r else 1

    def set_remote(self, user_id: int, *, remote: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET remote=%s WHERE user_id=%s", (int(bool(remote)), int(user_id)))
            return cur.rowcount > 0

    def set_status(self, user_id: int, *, status: UserStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET status=%s WHERE user_id=%s", (status.value, int(user_id)))
            return cur.rowcount > 0

    def set_shift(self, user_id: int, *, shift_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET shift_id=%s WHERE user_id=%s", (shift_id, int(user_id)))
            return cur.rowcount > 0
