from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance storage.

    Implementations must enforce a unique (user_id, work_date) pair and make
    check-in/checkout transitions conditional, so that under concurrent calls
    only one transition per day succeeds. working_hours is recomputed by the
    implementation in the same write that changes check_in or check_out.
    """

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in: str,
        location: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        """Create the day's record, or fill check_in on a record that has none.

        Returns None when the day already has a check-in.
        """

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_in: str,
        check_out: str,
        location: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        """Set check_out if it is still empty and check_in is unchanged.

        Returns None when another writer got there first.
        """

        raise NotImplementedError

    def find_by_date_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def find_by_date(self, work_date: date, *, user_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Records for one day, newest first."""

        raise NotImplementedError
