from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import LeaveRecord
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, user_id, leave_type, start_date, end_date, days, reason, status,
    created_at, approver_id, approved_at, comments
"""


def _to_leave(r: dict[str, Any]) -> LeaveRecord:
    return LeaveRecord(
        leave_id=int(r["leave_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days=int(r["days"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        approver_id=r.get("approver_id"),
        approved_at=r.get("approved_at"),
        comments=r.get("comments"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, days, reason, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    int(days),
                    reason,
                    LeaveStatus.PENDING.value,
                    created_at,
                ),
            )
            leave_id = int(cur.lastrowid)

        return LeaveRecord(
            leave_id=leave_id,
            user_id=int(user_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=int(days),
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=created_at,
        )

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = cur.fetchone()
            return _to_leave(r) if r else None

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approver_id: int,
        approved_at: datetime,
        comments: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approver_id=%s, approved_at=%s, comments=COALESCE(%s, comments)
                WHERE leave_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(approver_id),
                    approved_at,
                    comments,
                    int(leave_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def find_approved_overlapping(self, day: date) -> Sequence[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE status=%s AND start_date <= %s AND end_date >= %s
                ORDER BY created_at DESC
                """,
                (LeaveStatus.APPROVED.value, day, day),
            )
            return [_to_leave(r) for r in cur.fetchall()]

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC, leave_id DESC
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in cur.fetchall()]

    def summarize_by_status(self, *, user_id: Optional[int] = None) -> Sequence[tuple[LeaveStatus, int, int]]:
        where = "WHERE user_id=%s" if user_id is not None else ""
        params = (int(user_id),) if user_id is not None else ()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT status, COUNT(*) AS cnt, COALESCE(SUM(days), 0) AS total_days
                FROM leave_requests
                {where}
                GROUP BY status
                """,
                params,
            )
            return [(LeaveStatus(r["status"]), int(r["cnt"]), int(r["total_days"])) for r in cur.fetchall()]
