from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MonthlyStats:
    year: int
    month: int
    total_days: int
    present_days: int
    total_hours: float
    average_hours: float
    # No lateness rule is defined for records; kept in the shape and always 0.
    late_count: int = 0


@dataclass(frozen=True)
class DepartmentCount:
    department: str
    count: int


@dataclass(frozen=True)
class OrgSnapshot:
    day: date
    total_employees: int
    present_today: int
    absent_today: int
    attendance_rate: int
    department_breakdown: list[DepartmentCount]
