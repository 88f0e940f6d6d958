"""Rows of a reconciled daily log.

Exactly one row per (employee, day): a persisted attendance record, or a
synthetic on-leave / absent row derived on read. Consumers dispatch on the
row class rather than on flags.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

from ..attendance.model import AttendanceRecord
from ..leaves.model import LeaveRecord
from ..users.model import Employee


@dataclass(frozen=True)
class AttendanceLogRow:
    employee: Employee
    record: AttendanceRecord

    synthetic = False

    @property
    def row_id(self) -> str:
        return str(self.record.attendance_id)

    @property
    def status(self) -> str:
        return self.record.status.value


@dataclass(frozen=True)
class OnLeaveLogRow:
    employee: Employee
    work_date: date
    leave: LeaveRecord

    synthetic = True
    status = "on_leave"

    @property
    def row_id(self) -> str:
        return f"leave_{self.employee.user_id}_{self.work_date:%Y-%m-%d}"


@dataclass(frozen=True)
class AbsentLogRow:
    employee: Employee
    work_date: date

    synthetic = True
    status = "absent"

    @property
    def row_id(self) -> str:
        return f"absent_{self.employee.user_id}_{self.work_date:%Y-%m-%d}"


DailyLogRow = Union[AttendanceLogRow, OnLeaveLogRow, AbsentLogRow]


@dataclass(frozen=True)
class DailyLog:
    day: date
    rows: list[DailyLogRow]
    total: int
    total_pages: int
    current_page: int


def row_to_dict(row: DailyLogRow) -> dict:
    if isinstance(row, AttendanceLogRow):
        out = row.record.to_dict()
        out["id"] = row.row_id
        out["user"] = row.employee.display()
        out["kind"] = "attendance"
        return out

    out = {
        "id": row.row_id,
        "user": row.employee.display(),
        "date": f"{row.work_date:%Y-%m-%d}",
        "checkIn": None,
        "checkOut": None,
        "workingHours": 0,
        "status": row.status,
    }
    if isinstance(row, OnLeaveLogRow):
        out["kind"] = "on_leave"
        out["leaveType"] = row.leave.leave_type.value
        out["leaveReason"] = row.leave.reason
    elif isinstance(row, AbsentLogRow):
        out["kind"] = "absent"
    else:
        raise TypeError(f"Unsupported daily log row: {type(row)!r}")
    return out
