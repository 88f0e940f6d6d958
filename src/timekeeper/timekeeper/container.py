from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS, STANDARD_DAY_HOURS
from .daily_log.service import DailyLogService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .reports.service import ReportService
from .stats.service import StatisticsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, RosterService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    clock: Clock

    auth_service: AuthService
    roster_service: RosterService
    attendance_service: AttendanceService
    leave_service: LeaveService
    daily_log_service: DailyLogService
    statistics_service: StatisticsService
    report_service: ReportService


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    secret_key: str,
    clock: Optional[Clock] = None,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    standard_day_hours: int = STANDARD_DAY_HOURS,
) -> Container:
    clock = clock or SystemClock()
    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        clock=clock,
        auth_service=AuthService(users_repo, secret_key=secret_key, max_age=token_max_age),
        roster_service=RosterService(users_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo, clock=clock),
        leave_service=LeaveService(leaves_repo, clock=clock),
        daily_log_service=DailyLogService(attendance_repo, leaves_repo, users_repo, clock=clock),
        statistics_service=StatisticsService(attendance_repo, users_repo, clock=clock),
        report_service=ReportService(attendance_repo, users_repo, standard_day_hours=standard_day_hours),
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    standard_day_hours: int = STANDARD_DAY_HOURS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        secret_key=secret_key,
        token_max_age=token_max_age,
        standard_day_hours=standard_day_hours,
    )
