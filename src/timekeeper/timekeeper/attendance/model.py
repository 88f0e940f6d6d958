from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (employee, calendar day).

    working_hours is derived by the store from check_in/check_out on every
    write and cannot be set by callers.
    """

    attendance_id: int
    user_id: int
    work_date: date
    check_in: Optional[str]
    check_out: Optional[str]
    working_hours: float
    status: AttendanceStatus = AttendanceStatus.PRESENT
    location_check_in: Optional[str] = None
    location_check_out: Optional[str] = None
    notes: Optional[str] = None

    @property
    def has_checked_in(self) -> bool:
        return bool(self.check_in and self.check_in.strip())

    @property
    def has_checked_out(self) -> bool:
        return bool(self.check_out and self.check_out.strip())

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user": self.user_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "checkIn": self.check_in,
            "checkOut": self.check_out,
            "workingHours": self.working_hours,
            "status": self.status.value,
            "location": {"checkIn": self.location_check_in, "checkOut": self.location_check_out},
            "notes": self.notes,
        }
