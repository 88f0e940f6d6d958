from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRecord:
    """Leave request. days is fixed at submission: (end - start) + 1."""

    leave_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days: int
    reason: str
    status: LeaveStatus
    created_at: datetime
    approver_id: Optional[int] = None
    approved_at: Optional[datetime] = None
    comments: Optional[str] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "user": self.user_id,
            "leaveType": self.leave_type.value,
            "startDate": self.start_date.strftime("%Y-%m-%d"),
            "endDate": self.end_date.strftime("%Y-%m-%d"),
            "days": self.days,
            "reason": self.reason,
            "status": self.status.value,
            "approvedBy": self.approver_id,
            "approvedAt": self.approved_at.isoformat() if self.approved_at else None,
            "comments": self.comments,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class LeaveStats:
    pending: int
    approved: int
    rejected: int
    total_days: int
