from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRecord


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
        created_at: datetime,
    ) -> LeaveRecord:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approver_id: int,
        approved_at: datetime,
        comments: Optional[str] = None,
    ) -> bool:
        """Apply a decision only while the request is still pending."""

        raise NotImplementedError

    def find_approved_overlapping(self, day: date) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRecord]:
        """Newest first."""

        raise NotImplementedError

    def summarize_by_status(self, *, user_id: Optional[int] = None) -> Sequence[tuple[LeaveStatus, int, int]]:
        """(status, request count, total days) per status."""

        raise NotImplementedError
