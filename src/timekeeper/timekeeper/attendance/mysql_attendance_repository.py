from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..common.working_hours import compute_working_hours
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import READ_COMMITTED, db_cursor
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    attendance_id, user_id, work_date, check_in, check_out, working_hours, status,
    location_check_in, location_check_out, notes
"""


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        working_hours=float(r.get("working_hours") or 0),
        status=AttendanceStatus(r.get("status") or AttendanceStatus.PRESENT.value),
        location_check_in=r.get("location_check_in"),
        location_check_out=r.get("location_check_out"),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _select_by_id(cur, attendance_id: int) -> Optional[AttendanceRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
        r = cur.fetchone()
        return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = cur.fetchone()
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in: str,
        location: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory, isolation_level=READ_COMMITTED) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in, working_hours, status, location_check_in)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        work_date,
                        check_in,
                        compute_working_hours(check_in, None),
                        AttendanceStatus.PRESENT.value,
                        location,
                    ),
                )
                return self._select_by_id(cur, int(cur.lastrowid))
            except mysql.connector.IntegrityError as e:
                if e.errno != errorcode.ER_DUP_ENTRY:
                    raise

            # A record for the day exists already; it may only be filled when it has no check-in.
            cur.execute(
                """
                SELECT attendance_id, check_in, check_out
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                FOR UPDATE
                """,
                (int(user_id), work_date),
            )
            existing = cur.fetchone()
            if not existing or (existing.get("check_in") or "").strip():
                return None

            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, working_hours=%s, location_check_in=COALESCE(%s, location_check_in)
                WHERE attendance_id=%s AND (check_in IS NULL OR check_in='')
                """,
                (
                    check_in,
                    compute_working_hours(check_in, existing.get("check_out")),
                    location,
                    int(existing["attendance_id"]),
                ),
            )
            if cur.rowcount == 0:
                return None
            return self._select_by_id(cur, int(existing["attendance_id"]))

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_in: str,
        check_out: str,
        location: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, working_hours=%s, location_check_out=COALESCE(%s, location_check_out)
                WHERE attendance_id=%s AND check_in=%s AND (check_out IS NULL OR check_out='')
                """,
                (check_out, compute_working_hours(check_in, check_out), location, int(attendance_id), check_in),
            )
            if cur.rowcount == 0:
                logger.info("Checkout for attendance %s lost a concurrent update", attendance_id)
                return None
            return self._select_by_id(cur, int(attendance_id))

    def find_by_date_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC, attendance_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in cur.fetchall()]

    def find_by_date(self, work_date: date, *, user_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["work_date=%s"]
        params: list[object] = [work_date]

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY created_at DESC, attendance_id DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in cur.fetchall()]
