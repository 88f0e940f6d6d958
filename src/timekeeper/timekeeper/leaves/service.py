from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock
from ..common.pagination import Page, paginate
from ..common.validators import require_date, require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from ..core.permissions import Operation, can, require
from ..users.model import Identity
from .model import LeaveRecord, LeaveStats
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def leave_days(start_date: date, end_date: date) -> int:
    """Inclusive number of calendar days covered by a leave."""
    return (end_date - start_date).days + 1


class LeaveService:
    def __init__(self, leaves: LeaveRepository, *, clock: Clock | None = None):
        self._leaves = leaves
        self._clock = clock or SystemClock()

    def submit(
        self,
        caller: Identity,
        *,
        leave_type: str,
        start_date: str | date,
        end_date: str | date,
        reason: str,
    ) -> LeaveRecord:
        require(caller.role, Operation.SUBMIT_LEAVE)

        try:
            kind = LeaveType(str(leave_type or "").strip().lower())
        except ValueError:
            raise ValidationError("Invalid leave type")

        start = require_date(start_date, "Start date")
        end = require_date(end_date, "End date")
        if end < start:
            raise ValidationError("End date must not be before start date")

        reason = require_non_empty(reason, "Reason")
        leave = self._leaves.create(
            user_id=caller.user_id,
            leave_type=kind,
            start_date=start,
            end_date=end,
            days=leave_days(start, end),
            reason=reason,
            created_at=self._clock.now(),
        )
        logger.info("User %s requested %s leave for %s days", caller.user_id, kind.value, leave.days)
        return leave

    def decide(
        self,
        caller: Identity,
        *,
        leave_id: int,
        decision: str,
        comments: Optional[str] = None,
    ) -> LeaveRecord:
        require(caller.role, Operation.DECIDE_LEAVE)

        try:
            status = LeaveStatus(str(decision or "").strip().lower())
        except ValueError:
            status = None
        if status not in {LeaveStatus.APPROVED, LeaveStatus.REJECTED}:
            raise ValidationError("Decision must be 'approved' or 'rejected'")

        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        if leave.status != LeaveStatus.PENDING:
            raise InvalidStateError(f"Leave request is already {leave.status.value}")

        ok = self._leaves.decide(
            leave_id=leave.leave_id,
            status=status,
            approver_id=caller.user_id,
            approved_at=self._clock.now(),
            comments=str(comments or "").strip() or None,
        )
        if not ok:
            raise InvalidStateError("Leave request has already been decided")

        logger.info("Leave %s %s by user %s", leave.leave_id, status.value, caller.user_id)
        return self._leaves.get_by_id(leave.leave_id)

    def list_requests(
        self,
        caller: Identity,
        *,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        status: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Page[LeaveRecord]:
        status_filter = None
        if status:
            try:
                status_filter = LeaveStatus(status.strip().lower())
            except ValueError:
                raise ValidationError("Invalid leave status")

        if not can(caller.role, Operation.LIST_ALL_LEAVES):
            user_id = caller.user_id

        leaves = self._leaves.list_requests(status=status_filter, user_id=user_id)
        return paginate(leaves, page, page_size)

    def stats(self, caller: Identity) -> LeaveStats:
        user_id = None if can(caller.role, Operation.LIST_ALL_LEAVES) else caller.user_id

        counts = {s: 0 for s in LeaveStatus}
        approved_days = 0
        for status, count, days in self._leaves.summarize_by_status(user_id=user_id):
            counts[status] = count
            if status == LeaveStatus.APPROVED:
                approved_days = days

        return LeaveStats(
            pending=counts[LeaveStatus.PENDING],
            approved=counts[LeaveStatus.APPROVED],
            rejected=counts[LeaveStatus.REJECTED],
            total_days=approved_days,
        )
