from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, SystemClock
from ..common.pagination import paginate
from ..common.validators import require_date
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.permissions import Operation, is_elevated, require
from ..leaves.model import LeaveRecord
from ..leaves.repository import LeaveRepository
from ..users.model import Employee, Identity
from ..users.repository import UserRepository
from .model import AbsentLogRow, AttendanceLogRow, DailyLog, DailyLogRow, OnLeaveLogRow


def reconcile(
    day: date,
    roster: Sequence[Employee],
    records: Sequence[AttendanceRecord],
    leaves: Sequence[LeaveRecord],
) -> list[DailyLogRow]:
    """One row per roster employee: attendance, else approved leave, else absent.

    Ordered by name (case-insensitive), stable for equal names.
    """
    attendance_by_user: dict[int, AttendanceRecord] = {}
    for r in records:
        attendance_by_user.setdefault(r.user_id, r)

    leave_by_user: dict[int, LeaveRecord] = {}
    for lv in leaves:
        if lv.covers(day):
            leave_by_user.setdefault(lv.user_id, lv)

    rows: list[DailyLogRow] = []
    for employee in roster:
        record = attendance_by_user.get(employee.user_id)
        leave = leave_by_user.get(employee.user_id)
        if record:
            rows.append(AttendanceLogRow(employee=employee, record=record))
        elif leave:
            rows.append(OnLeaveLogRow(employee=employee, work_date=day, leave=leave))
        else:
            rows.append(AbsentLogRow(employee=employee, work_date=day))

    rows.sort(key=lambda row: (row.employee.name or "").casefold())
    return rows


class DailyLogService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        users: UserRepository,
        *,
        clock: Clock | None = None,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._users = users
        self._clock = clock or SystemClock()

    def _roster_for(self, caller: Identity, user_id: Optional[int]) -> list[Employee]:
        if not is_elevated(caller.role):
            require(caller.role, Operation.OWN_DAILY_LOG)
            me = self._users.get_by_id(caller.user_id)
            if me is None:
                me = Employee(
                    user_id=caller.user_id,
                    employee_id=caller.employee_id,
                    name=caller.name,
                    email="",
                    department=caller.department or "",
                    position="",
                    role=caller.role,
                )
            return [me]

        require(caller.role, Operation.ORG_DAILY_LOG)
        return list(self._users.list_active(user_id=user_id))

    def build_daily_log(
        self,
        caller: Identity,
        *,
        day: Optional[str | date] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        user_id: Optional[int] = None,
    ) -> DailyLog:
        target = require_date(day, "Date") if day else self._clock.today()

        roster = self._roster_for(caller, user_id)
        scope = None if is_elevated(caller.role) else caller.user_id
        if scope is None and user_id is not None:
            scope = int(user_id)

        records = self._attendance.find_by_date(target, user_id=scope)
        leaves = self._leaves.find_approved_overlapping(target)

        rows = reconcile(target, roster, records, leaves)
        sliced = paginate(rows, page, page_size)
        return DailyLog(
            day=target,
            rows=sliced.items,
            total=sliced.total,
            total_pages=sliced.total_pages,
            current_page=sliced.current_page,
        )
