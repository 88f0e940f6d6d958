from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.timekeeper.timekeeper.attendance.model import AttendanceRecord
from src.timekeeper.timekeeper.common.working_hours import compute_working_hours
from src.timekeeper.timekeeper.container import build_services
from src.timekeeper.timekeeper.core.enums import LeaveStatus, LeaveType, Role
from src.timekeeper.timekeeper.leaves.model import LeaveRecord
from src.timekeeper.timekeeper.main import create_app
from src.timekeeper.timekeeper.users.model import Employee
from src.timekeeper.timekeeper.users.service import to_identity

FIXED_NOW = datetime(2026, 2, 10, 9, 0, 0)
PASSWORD = "secret123"
PASSWORD_HASH = generate_password_hash(PASSWORD, method="pbkdf2:sha256:1000")


class FixedClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def set_time(self, hour: int, minute: int, second: int = 0) -> None:
        self.current = self.current.replace(hour=hour, minute=minute, second=second)


class InMemoryUsers:
    def __init__(self, users: list[Employee]):
        self._users = list(users)

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return next((u for u in self._users if u.user_id == user_id), None)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((u for u in self._users if u.email == email), None)

    def list_active(self, *, user_id=None, department=None, search=None):
        out = [u for u in self._users if u.is_active]
        if user_id is not None:
            out = [u for u in out if u.user_id == user_id]
        if department:
            out = [u for u in out if u.department == department]
        if search:
            s = search.lower()
            out = [u for u in out if s in u.name.lower() or s in u.email.lower() or s in u.employee_id.lower()]
        return out

    def list_departments(self):
        return sorted({u.department for u in self._users if u.is_active})

    def department_breakdown(self):
        counts: dict[str, int] = {}
        for u in self._users:
            if u.is_active:
                counts[u.department] = counts.get(u.department, 0) + 1
        return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


class InMemoryAttendance:
    """Mimics the MySQL store: unique (user, day) and conditional transitions."""

    def __init__(self):
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._order: dict[int, int] = {}
        self._id = 0
        self._lock = threading.Lock()

    def _new_id(self) -> int:
        self._id += 1
        self._order[self._id] = self._id
        return self._id

    def seed(self, user_id: int, work_date: date, check_in=None, check_out=None) -> AttendanceRecord:
        with self._lock:
            rec = AttendanceRecord(
                attendance_id=self._new_id(),
                user_id=user_id,
                work_date=work_date,
                check_in=check_in,
                check_out=check_out,
                working_hours=compute_working_hours(check_in, check_out),
            )
            self._by_user_date[(user_id, work_date)] = rec
            return rec

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def create_checkin(self, *, user_id: int, work_date: date, check_in: str, location=None):
        with self._lock:
            existing = self._by_user_date.get((user_id, work_date))
            if existing is None:
                rec = AttendanceRecord(
                    attendance_id=self._new_id(),
                    user_id=user_id,
                    work_date=work_date,
                    check_in=check_in,
                    check_out=None,
                    working_hours=compute_working_hours(check_in, None),
                    location_check_in=location,
                )
            elif existing.has_checked_in:
                return None
            else:
                rec = replace(
                    existing,
                    check_in=check_in,
                    working_hours=compute_working_hours(check_in, existing.check_out),
                    location_check_in=location or existing.location_check_in,
                )
            self._by_user_date[(user_id, work_date)] = rec
            return rec

    def update_checkout(self, *, attendance_id: int, check_in: str, check_out: str, location=None):
        with self._lock:
            for key, rec in self._by_user_date.items():
                if rec.attendance_id != attendance_id:
                    continue
                if rec.check_in != check_in or rec.has_checked_out:
                    return None
                updated = replace(
                    rec,
                    check_out=check_out,
                    working_hours=compute_working_hours(check_in, check_out),
                    location_check_out=location or rec.location_check_out,
                )
                self._by_user_date[key] = updated
                return updated
            return None

    def find_by_date_range(self, *, start_date: date, end_date: date, user_id=None):
        out = [
            r
            for r in self._by_user_date.values()
            if start_date <= r.work_date <= end_date and (user_id is None or r.user_id == user_id)
        ]
        out.sort(key=lambda r: r.attendance_id)
        out.sort(key=lambda r: r.work_date, reverse=True)
        return out

    def find_by_date(self, work_date: date, *, user_id=None):
        out = [r for r in self._by_user_date.values() if r.work_date == work_date and (user_id is None or r.user_id == user_id)]
        out.sort(key=lambda r: self._order[r.attendance_id], reverse=True)
        return out


class InMemoryLeaves:
    def __init__(self):
        self._items: dict[int, LeaveRecord] = {}
        self._next_id = 1

    def create(self, *, user_id, leave_type, start_date, end_date, days, reason, created_at):
        leave = LeaveRecord(
            leave_id=self._next_id,
            user_id=user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=created_at,
        )
        self._items[leave.leave_id] = leave
        self._next_id += 1
        return leave

    def get_by_id(self, leave_id):
        return self._items.get(int(leave_id))

    def decide(self, *, leave_id, status, approver_id, approved_at, comments=None):
        leave = self._items.get(int(leave_id))
        if not leave or leave.status != LeaveStatus.PENDING:
            return False
        self._items[leave.leave_id] = replace(
            leave,
            status=status,
            approver_id=approver_id,
            approved_at=approved_at,
            comments=comments if comments is not None else leave.comments,
        )
        return True

    def find_approved_overlapping(self, day):
        return [lv for lv in self._items.values() if lv.status == LeaveStatus.APPROVED and lv.covers(day)]

    def list_requests(self, *, status=None, user_id=None):
        out = [
            lv
            for lv in self._items.values()
            if (status is None or lv.status == status) and (user_id is None or lv.user_id == user_id)
        ]
        out.sort(key=lambda lv: (lv.created_at, lv.leave_id), reverse=True)
        return out

    def summarize_by_status(self, *, user_id=None):
        acc: dict[LeaveStatus, list[int]] = {}
        for lv in self._items.values():
            if user_id is not None and lv.user_id != user_id:
                continue
            entry = acc.setdefault(lv.status, [0, 0])
            entry[0] += 1
            entry[1] += lv.days
        return [(status, count, days) for status, (count, days) in acc.items()]

    def seed_approved(self, user_id: int, start: date, end: date, *, leave_type=LeaveType.SICK, reason="Flu"):
        leave = self.create(
            user_id=user_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            days=(end - start).days + 1,
            reason=reason,
            created_at=FIXED_NOW,
        )
        self.decide(leave_id=leave.leave_id, status=LeaveStatus.APPROVED, approver_id=5, approved_at=FIXED_NOW)
        return self._items[leave.leave_id]


def make_employee(user_id, name, role=Role.EMPLOYEE, department="Engineering", *, is_active=True, password_hash=PASSWORD_HASH):
    return Employee(
        user_id=user_id,
        employee_id=f"E{user_id:03d}",
        name=name,
        email=f"user{user_id}@example.com",
        department=department,
        position="Staff",
        role=role,
        password_hash=password_hash,
        is_active=is_active,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def roster() -> list[Employee]:
    return [
        make_employee(1, "Alice Nguyen"),
        make_employee(2, "bob Tran"),
        make_employee(3, "Chloe Le", department="Sales"),
        make_employee(4, "Minh Manager", Role.MANAGER),
        make_employee(5, "Hana HR", Role.HR, "Human Resources"),
        make_employee(6, "Admin Demo", Role.ADMIN, "Administration"),
        make_employee(7, "Zed Former", department="Sales", is_active=False),
    ]


@pytest.fixture
def users_repo(roster) -> InMemoryUsers:
    return InMemoryUsers(roster)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def identity(users_repo):
    """identity(user_id) -> Identity for a roster member."""

    def _identity(user_id: int):
        return to_identity(users_repo.get_by_id(user_id))

    return _identity


@pytest.fixture
def container(users_repo, attendance_repo, leaves_repo, clock):
    return build_services(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        secret_key="test-secret",
        clock=clock,
    )


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="config.testing")
    return app.test_client()


@pytest.fixture
def auth_headers(container, users_repo):
    """auth_headers(user_id) -> Authorization header for a roster member."""

    def _headers(user_id: int) -> dict:
        token = container.auth_service.issue_token(users_repo.get_by_id(user_id))
        return {"Authorization": f"Bearer {token}"}

    return _headers


class ScriptedCursor:
    """Cursor double: each execute() consumes the next scripted step.

    A step is an exception to raise or a dict with ``rows``, ``rowcount`` and
    ``lastrowid``.
    """

    def __init__(self, steps):
        self._steps = list(steps)
        self._rows: list[dict] = []
        self.executed: list[tuple[str, tuple]] = []
        self.rowcount = -1
        self.lastrowid = None
        self.closed = False

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))
        step = self._steps.pop(0)
        if isinstance(step, Exception):
            raise step
        self._rows = list(step.get("rows", []))
        self.rowcount = step.get("rowcount", len(self._rows))
        self.lastrowid = step.get("lastrowid")

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        self.closed = True


class ScriptedConnection:
    def __init__(self, cursor: ScriptedCursor):
        self._cursor = cursor
        self.isolation_level = None
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def start_transaction(self, isolation_level=None):
        self.isolation_level = isolation_level

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class ScriptedConnectionFactory:
    def __init__(self, steps):
        self.cursor = ScriptedCursor(steps)
        self.connection = ScriptedConnection(self.cursor)

    def connect(self, *, with_database: bool = True):
        return self.connection


@pytest.fixture
def scripted_db():
    """scripted_db(*steps) -> connection factory replaying those cursor steps."""

    def _factory(*steps):
        return ScriptedConnectionFactory(steps)

    return _factory
