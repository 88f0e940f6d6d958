from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import Employee
from .repository import UserRepository

_COLUMNS = "user_id, employee_id, name, email, department, position, role, password_hash, is_active"


def _to_employee(row: dict[str, Any]) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        employee_id=row["employee_id"],
        name=row["name"],
        email=row["email"],
        department=row.get("department") or "",
        position=row.get("position") or "",
        role=Role(row["role"]),
        password_hash=row.get("password_hash") or "",
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = cur.fetchone()
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = cur.fetchone()
            return _to_employee(row) if row else None

    def list_active(
        self,
        *,
        user_id: Optional[int] = None,
        department: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Employee]:
        clauses = ["is_active=1"]
        params: list[object] = []

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if department:
            clauses.append("department=%s")
            params.append(department)
        if search:
            clauses.append("(name LIKE %s OR email LIKE %s OR employee_id LIKE %s)")
            pattern = f"%{search}%"
            params.extend([pattern, pattern, pattern])

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE {where}
                ORDER BY created_at DESC, user_id DESC
                """,
                tuple(params),
            )
            return [_to_employee(r) for r in cur.fetchall()]

    def list_departments(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT department FROM users WHERE is_active=1 ORDER BY department")
            return [r["department"] for r in cur.fetchall()]

    def department_breakdown(self) -> Sequence[tuple[str, int]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT department, COUNT(*) AS cnt
                FROM users
                WHERE is_active=1
                GROUP BY department
                ORDER BY cnt DESC, department ASC
                """
            )
            return [(r["department"], int(r["cnt"])) for r in cur.fetchall()]
