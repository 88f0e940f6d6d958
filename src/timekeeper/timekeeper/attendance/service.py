from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import Clock, SystemClock
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    NoCheckInFound,
    NotCheckedIn,
    NotFoundError,
    ValidationError,
)
from ..core.permissions import Operation, require
from ..users.model import Identity
from ..users.repository import UserRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodayStatus:
    has_checked_in: bool
    has_checked_out: bool
    attendance: Optional[AttendanceRecord]
    current_date: date


def _encode_location(location: Any) -> Optional[str]:
    if location is None or location == "":
        return None
    if isinstance(location, str):
        return location
    return json.dumps(location, sort_keys=True)


class AttendanceService:
    """Check-in/checkout use cases on top of the attendance store."""

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

    def check_in(self, caller: Identity, *, location: Any = None) -> AttendanceRecord:
        require(caller.role, Operation.CHECK_IN)
        return self._check_in(caller.user_id, location=location)

    def check_out(self, caller: Identity, *, location: Any = None) -> AttendanceRecord:
        require(caller.role, Operation.CHECK_OUT)
        return self._check_out(caller.user_id, location=location)

    def mark_attendance(self, caller: Identity, *, user_id: int, action: str, location: Any = None) -> AttendanceRecord:
        """Record a check-in or checkout for today on behalf of another employee."""
        require(caller.role, Operation.MARK_ATTENDANCE)

        target = self._users.get_by_id(int(user_id))
        if not target or not target.is_active:
            raise NotFoundError("User not found")

        action = str(action or "").strip().lower()
        if action == "checkin":
            record = self._check_in(target.user_id, location=location)
        elif action == "checkout":
            record = self._check_out(target.user_id, location=location)
        else:
            raise ValidationError("Action must be 'checkin' or 'checkout'")

        logger.info("User %s marked %s for user %s", caller.user_id, action, target.user_id)
        return record

    def today_status(self, caller: Identity) -> TodayStatus:
        require(caller.role, Operation.TODAY_STATUS)
        today = self._clock.today()
        record = self._attendance.get_for_user_and_date(caller.user_id, today)
        return TodayStatus(
            has_checked_in=bool(record and record.has_checked_in),
            has_checked_out=bool(record and record.has_checked_out),
            attendance=record,
            current_date=today,
        )

    def recent_attendance(self, caller: Identity, *, limit: int = DEFAULT_RECENT_LIMIT) -> list[dict]:
        """Today's records, newest first, with roster display fields."""
        require(caller.role, Operation.RECENT_ATTENDANCE)

        records = self._attendance.find_by_date(self._clock.today())[: max(int(limit), 0)]
        out: list[dict] = []
        for r in records:
            row = r.to_dict()
            user = self._users.get_by_id(r.user_id)
            row["user"] = user.display() if user else {"id": r.user_id}
            out.append(row)
        return out

    def _check_in(self, user_id: int, *, location: Any = None) -> AttendanceRecord:
        now = self._clock.now()
        today = now.date()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.has_checked_in:
            raise AlreadyCheckedIn("You have already checked in today")

        record = self._attendance.create_checkin(
            user_id=user_id,
            work_date=today,
            check_in=now.strftime("%H:%M:%S"),
            location=_encode_location(location),
        )
        if record is None:
            raise AlreadyCheckedIn("You have already checked in today")

        logger.info("User %s checked in on %s at %s", user_id, today, record.check_in)
        return record

    def _check_out(self, user_id: int, *, location: Any = None) -> AttendanceRecord:
        now = self._clock.now()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise NoCheckInFound("No check-in record found for today. Please check in first.")
        if not record.has_checked_in:
            raise NotCheckedIn("You must check in before checking out.")
        if record.has_checked_out:
            raise AlreadyCheckedOut("You have already checked out today")

        updated = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_in=record.check_in,
            check_out=now.strftime("%H:%M:%S"),
            location=_encode_location(location),
        )
        if updated is None:
            raise AlreadyCheckedOut("You have already checked out today")

        logger.info("User %s checked out on %s, %.2f hours", user_id, today, updated.working_hours)
        return updated
