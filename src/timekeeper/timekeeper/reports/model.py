from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ReportRowStatus


@dataclass(frozen=True)
class ReportRow:
    """Read-model for report rendering/exports."""

    attendance_id: int
    user_id: int
    name: str
    employee_id: str
    department: str
    position: str
    work_date: date
    weekday: str
    check_in: Optional[str]
    check_out: Optional[str]
    check_in_12h: str
    check_out_12h: str
    working_hours: float
    status: ReportRowStatus

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user": {
                "id": self.user_id,
                "name": self.name,
                "employeeId": self.employee_id,
                "department": self.department,
                "position": self.position,
            },
            "date": self.work_date.strftime("%Y-%m-%d"),
            "dayOfWeek": self.weekday,
            "checkIn": self.check_in,
            "checkOut": self.check_out,
            "checkInDisplay": self.check_in_12h,
            "checkOutDisplay": self.check_out_12h,
            "workingHours": self.working_hours,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ReportSummary:
    total_records: int
    complete_records: int
    incomplete_records: int
    absent_records: int
    complete_pct: float
    incomplete_pct: float
    absent_pct: float
    total_hours: float
    average_hours_per_record: float
    average_hours_complete_only: float
    max_possible_hours: float
    productivity_rate: float
    standard_day_hours: int = 8

    def to_dict(self) -> dict:
        return {
            "totalRecords": self.total_records,
            "completeRecords": self.complete_records,
            "incompleteRecords": self.incomplete_records,
            "absentRecords": self.absent_records,
            "completePercentage": self.complete_pct,
            "incompletePercentage": self.incomplete_pct,
            "absentPercentage": self.absent_pct,
            "totalHours": self.total_hours,
            "averageHoursPerRecord": self.average_hours_per_record,
            "averageHoursCompleteOnly": self.average_hours_complete_only,
            "maxPossibleHours": self.max_possible_hours,
            "productivityRate": self.productivity_rate,
        }


@dataclass(frozen=True)
class AttendanceReport:
    start: date
    end: date
    user_id: Optional[int]
    rows: list[ReportRow]
    summary: ReportSummary
