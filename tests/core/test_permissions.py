from __future__ import annotations

import pytest

from src.timekeeper.timekeeper.core.enums import Role
from src.timekeeper.timekeeper.core.exceptions import AuthorizationError
from src.timekeeper.timekeeper.core.permissions import Operation, can, is_elevated, require


def test_employee_is_limited_to_self_service():
    assert can(Role.EMPLOYEE, Operation.CHECK_IN)
    assert can(Role.EMPLOYEE, Operation.SUBMIT_LEAVE)
    assert not can(Role.EMPLOYEE, Operation.REPORT)
    assert not can(Role.EMPLOYEE, Operation.DECIDE_LEAVE)
    assert not is_elevated(Role.EMPLOYEE)


@pytest.mark.parametrize("role", [Role.MANAGER, Role.HR, Role.ADMIN])
def test_supervisors_see_the_organisation(role):
    assert is_elevated(role)
    for op in (Operation.ORG_DAILY_LOG, Operation.ORG_SNAPSHOT, Operation.REPORT, Operation.LIST_ALL_LEAVES):
        assert can(role, op)


def test_only_admin_decides_leave_and_marks_attendance():
    for op in (Operation.DECIDE_LEAVE, Operation.MARK_ATTENDANCE):
        assert can(Role.ADMIN, op)
        assert not can(Role.HR, op)
        assert not can(Role.MANAGER, op)
        assert not can(Role.EMPLOYEE, op)


def test_require_raises_authorization_error():
    with pytest.raises(AuthorizationError, match="employee"):
        require(Role.EMPLOYEE, Operation.LIST_ROSTER)
