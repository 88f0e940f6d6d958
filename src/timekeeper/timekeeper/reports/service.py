from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import weekday_name
from ..common.validators import require_date_range
from ..common.working_hours import format_time_12h, round_hours
from ..core.constants import STANDARD_DAY_HOURS
from ..core.enums import ReportRowStatus
from ..core.exceptions import EmptyRangeError
from ..core.permissions import Operation, require
from ..users.model import Employee, Identity
from ..users.repository import UserRepository
from .model import AttendanceReport, ReportRow, ReportSummary


def row_status(record: AttendanceRecord) -> ReportRowStatus:
    if record.has_checked_in and record.has_checked_out:
        return ReportRowStatus.COMPLETE
    if record.has_checked_in:
        return ReportRowStatus.INCOMPLETE
    return ReportRowStatus.ABSENT


def _ratio(part, whole, *, scale: int = 1) -> float:
    if not whole:
        return 0.0
    return round_hours(Decimal(str(part)) * scale / Decimal(str(whole)))


def summarize(rows: Sequence[ReportRow], *, standard_day_hours: int = STANDARD_DAY_HOURS) -> ReportSummary:
    total = len(rows)
    complete = sum(1 for r in rows if r.status == ReportRowStatus.COMPLETE)
    incomplete = sum(1 for r in rows if r.status == ReportRowStatus.INCOMPLETE)
    absent = sum(1 for r in rows if r.status == ReportRowStatus.ABSENT)
    hours = sum((Decimal(str(r.working_hours)) for r in rows), Decimal(0))
    max_hours = total * standard_day_hours

    return ReportSummary(
        total_records=total,
        complete_records=complete,
        incomplete_records=incomplete,
        absent_records=absent,
        complete_pct=_ratio(complete, total, scale=100),
        incomplete_pct=_ratio(incomplete, total, scale=100),
        absent_pct=_ratio(absent, total, scale=100),
        total_hours=round_hours(hours),
        average_hours_per_record=_ratio(hours, total),
        average_hours_complete_only=_ratio(hours, complete),
        max_possible_hours=float(max_hours),
        productivity_rate=_ratio(hours, max_hours, scale=100),
        standard_day_hours=standard_day_hours,
    )


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        standard_day_hours: int = STANDARD_DAY_HOURS,
    ):
        self._attendance = attendance
        self._users = users
        self._standard_day_hours = int(standard_day_hours)

    def _to_row(self, record: AttendanceRecord, employee: Optional[Employee]) -> ReportRow:
        return ReportRow(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            name=employee.name if employee else "",
            employee_id=employee.employee_id if employee else "",
            department=employee.department if employee else "",
            position=employee.position if employee else "",
            work_date=record.work_date,
            weekday=weekday_name(record.work_date),
            check_in=record.check_in,
            check_out=record.check_out,
            check_in_12h=format_time_12h(record.check_in),
            check_out_12h=format_time_12h(record.check_out),
            working_hours=record.working_hours,
            status=row_status(record),
        )

    def build_report(
        self,
        caller: Identity,
        *,
        start: Optional[str | date],
        end: Optional[str | date],
        user_id: Optional[int] = None,
    ) -> AttendanceReport:
        require(caller.role, Operation.REPORT)
        start_d, end_d = require_date_range(start, end)

        records = self._attendance.find_by_date_range(start_date=start_d, end_date=end_d, user_id=user_id)
        if not records:
            raise EmptyRangeError("No attendance records found for the specified date range")

        employees: dict[int, Optional[Employee]] = {}
        rows: list[ReportRow] = []
        for r in records:
            if r.user_id not in employees:
                employees[r.user_id] = self._users.get_by_id(r.user_id)
            rows.append(self._to_row(r, employees[r.user_id]))

        # date descending, then name ascending
        rows.sort(key=lambda x: x.name.casefold())
        rows.sort(key=lambda x: x.work_date, reverse=True)

        return AttendanceReport(
            start=start_d,
            end=end_d,
            user_id=user_id,
            rows=rows,
            summary=summarize(rows, standard_day_hours=self._standard_day_hours),
        )
