"""Working-hours arithmetic on wall-clock time-of-day strings.

Times are ``HH:MM`` or ``HH:MM:SS`` on a 24-hour clock. A checkout that is
numerically earlier than the check-in is treated as happening on the next day
(night shift).
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import SECONDS_PER_DAY

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^([0-9]{2}):([0-9]{2})(?::([0-9]{2}))?$")
_HUNDREDTHS = Decimal("0.01")


def parse_time_of_day(value: Optional[str]) -> Optional[int]:
    """Return seconds since midnight, or None when the value is missing or invalid."""
    if not value or not isinstance(value, str):
        return None

    match = _TIME_RE.match(value.strip())
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return hours * 3600 + minutes * 60 + seconds


def round_hours(value) -> float:
    """Round half-up to two decimals."""
    return float(Decimal(str(value)).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))


def compute_working_hours(check_in: Optional[str], check_out: Optional[str]) -> float:
    """Elapsed hours between check-in and checkout, 0 when either is unusable.

    Never raises: a malformed time degrades to zero hours.
    """
    start = parse_time_of_day(check_in)
    end = parse_time_of_day(check_out)
    if start is None or end is None:
        if check_in and check_out:
            logger.warning("Unparseable attendance times %r/%r, working hours set to 0", check_in, check_out)
        return 0.0

    if end >= start:
        elapsed = end - start
    else:
        elapsed = SECONDS_PER_DAY - start + end
        logger.warning(
            "Checkout %s is earlier than check-in %s, counted as an overnight shift", check_out, check_in
        )

    hours = (Decimal(elapsed) / Decimal(3600)).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP)
    return float(hours)


def format_time_12h(value: Optional[str]) -> str:
    """``"13:05:00"`` -> ``"1:05 PM"``; empty for missing, echoed back when unparseable."""
    if not value:
        return ""

    seconds = parse_time_of_day(value)
    if seconds is None:
        return value

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    hour12 = 12 if hours % 12 == 0 else hours % 12
    suffix = "PM" if hours >= 12 else "AM"
    return f"{hour12}:{minutes:02d} {suffix}"
