from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import InvalidRangeError, ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: Optional[str | date], field_name: str) -> date:
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        raise InvalidRangeError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise InvalidRangeError(f"{field_name} must be a YYYY-MM-DD date")


def require_date_range(start: Optional[str | date], end: Optional[str | date]) -> tuple[date, date]:
    if not start or not end:
        raise InvalidRangeError("Start date and end date are required")
    start_d = require_date(start, "Start date")
    end_d = require_date(end, "End date")
    if end_d < start_d:
        raise InvalidRangeError("End date must not be before start date")
    return start_d, end_d


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidRangeError(f"{field_name} must be a positive integer")
    if number < 1:
        raise InvalidRangeError(f"{field_name} must be a positive integer")
    return number
