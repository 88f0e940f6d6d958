from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for capability checks."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    HR = "hr"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half_day"


class LeaveType(str, Enum):
    SICK = "sick"
    CASUAL = "casual"
    ANNUAL = "annual"
    MATERNITY = "maternity"
    EMERGENCY = "emergency"


class LeaveStatus(str, Enum):
    """Approval state of a leave request. APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportRowStatus(str, Enum):
    COMPLETE = "Complete"
    INCOMPLETE = "Incomplete"
    ABSENT = "Absent"
