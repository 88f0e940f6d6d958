from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Protocol


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month (leap years included)."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def weekday_name(value: date) -> str:
    return calendar.day_name[value.weekday()]


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError

    def today(self) -> date:
        raise NotImplementedError


class SystemClock:
    """Local wall-clock time.

    Note: Services take a Clock so tests can pass a fixed one instead.
    """

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()
