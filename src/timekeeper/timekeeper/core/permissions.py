from __future__ import annotations

from enum import Enum

from .enums import Role
from .exceptions import AuthorizationError


class Operation(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    TODAY_STATUS = "today_status"
    OWN_DAILY_LOG = "own_daily_log"
    ORG_DAILY_LOG = "org_daily_log"
    MONTHLY_STATS = "monthly_stats"
    ORG_SNAPSHOT = "org_snapshot"
    REPORT = "report"
    RECENT_ATTENDANCE = "recent_attendance"
    MARK_ATTENDANCE = "mark_attendance"
    SUBMIT_LEAVE = "submit_leave"
    DECIDE_LEAVE = "decide_leave"
    LIST_ALL_LEAVES = "list_all_leaves"
    LIST_ROSTER = "list_roster"


_SELF_SERVICE = frozenset(
    {
        Operation.CHECK_IN,
        Operation.CHECK_OUT,
        Operation.TODAY_STATUS,
        Operation.OWN_DAILY_LOG,
        Operation.MONTHLY_STATS,
        Operation.SUBMIT_LEAVE,
    }
)

_SUPERVISION = frozenset(
    {
        Operation.ORG_DAILY_LOG,
        Operation.ORG_SNAPSHOT,
        Operation.REPORT,
        Operation.RECENT_ATTENDANCE,
        Operation.LIST_ALL_LEAVES,
        Operation.LIST_ROSTER,
    }
)

_ADMINISTRATION = frozenset({Operation.DECIDE_LEAVE, Operation.MARK_ATTENDANCE})

CAPABILITIES: dict[Role, frozenset[Operation]] = {
    Role.EMPLOYEE: _SELF_SERVICE,
    Role.MANAGER: _SELF_SERVICE | _SUPERVISION,
    Role.HR: _SELF_SERVICE | _SUPERVISION,
    Role.ADMIN: _SELF_SERVICE | _SUPERVISION | _ADMINISTRATION,
}


def can(role: Role, operation: Operation) -> bool:
    return operation in CAPABILITIES.get(role, frozenset())


def require(role: Role, operation: Operation) -> None:
    if not can(role, operation):
        raise AuthorizationError(f"Role {role.value!r} may not perform {operation.value!r}")


def is_elevated(role: Role) -> bool:
    """Elevated roles see organisation-wide data instead of only their own."""
    return can(role, Operation.ORG_DAILY_LOG)
