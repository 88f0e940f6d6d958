from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, SystemClock, month_bounds
from ..common.validators import require_date
from ..common.working_hours import round_hours
from ..core.exceptions import InvalidRangeError
from ..core.permissions import Operation, require
from ..users.model import Identity
from ..users.repository import UserRepository
from .model import DepartmentCount, MonthlyStats, OrgSnapshot

logger = logging.getLogger(__name__)


def attendance_rate(present: int, total: int) -> int:
    """Whole percent, half-up, clamped to [0, 100]; 0 for an empty roster."""
    if total <= 0:
        return 0
    rate = (Decimal(100) * present / total).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(rate)))


class StatisticsService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        clock: Clock | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._clock = clock or SystemClock()

    def monthly_stats(
        self,
        caller: Identity,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> MonthlyStats:
        """Totals over the caller's own records for one calendar month."""
        require(caller.role, Operation.MONTHLY_STATS)

        today = self._clock.today()
        try:
            year = today.year if year in (None, "") else int(year)
            month = today.month if month in (None, "") else int(month)
        except (TypeError, ValueError):
            raise InvalidRangeError("Year and month must be numbers")
        if not 1 <= year <= 9999:
            raise InvalidRangeError("Year must be between 1 and 9999")
        if not 1 <= month <= 12:
            raise InvalidRangeError("Month must be between 1 and 12")

        start, end = month_bounds(year, month)
        records = self._attendance.find_by_date_range(start_date=start, end_date=end, user_id=caller.user_id)

        present_days = sum(1 for r in records if r.has_checked_in)
        total = sum((Decimal(str(r.working_hours)) for r in records if r.working_hours > 0), Decimal(0))
        total_hours = round_hours(total)
        average_hours = round_hours(Decimal(str(total_hours)) / present_days) if present_days else 0.0

        logger.debug("Monthly stats for user %s %04d-%02d: %s records", caller.user_id, year, month, len(records))
        return MonthlyStats(
            year=year,
            month=month,
            total_days=len(records),
            present_days=present_days,
            total_hours=total_hours,
            average_hours=average_hours,
        )

    def org_snapshot(self, caller: Identity, *, day: Optional[str | date] = None) -> OrgSnapshot:
        require(caller.role, Operation.ORG_SNAPSHOT)

        target = require_date(day, "Date") if day else self._clock.today()

        total_employees = len(self._users.list_active())
        present_today = sum(1 for r in self._attendance.find_by_date(target) if r.has_checked_in)
        breakdown = [DepartmentCount(department=d, count=c) for d, c in self._users.department_breakdown()]
        breakdown.sort(key=lambda d: d.count, reverse=True)

        return OrgSnapshot(
            day=target,
            total_employees=total_employees,
            present_today=present_today,
            absent_today=max(0, total_employees - present_today),
            attendance_rate=attendance_rate(present_today, total_employees),
            department_breakdown=breakdown,
        )
