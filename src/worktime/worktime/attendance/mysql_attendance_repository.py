from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import SessionStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceSession, ClosedSpan, OpenSpan, SessionSpan
from .repository import AttendanceRepository

_COLUMNS = """
    session_id, user_id, work_date, check_in_time, check_out_time,
    total_worked_minutes, status, note, is_manual
"""


def _row_to_session(r: dict) -> AttendanceSession:
    check_in = normalize_mysql_time(r["check_in_time"])
    check_out = normalize_mysql_time(r.get("check_out_time"))
    if check_out is None:
        span: SessionSpan = OpenSpan(check_in=check_in)
    else:
        span = ClosedSpan(check_in=check_in, check_out=check_out, worked_minutes=int(r["total_worked_minutes"] or 0))
    return AttendanceSession(
        session_id=int(r["session_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        span=span,
        status=SessionStatus(r["status"]),
        note=r.get("note"),
        is_manual=bool(r.get("is_manual")),
    )


def _span_params(span: SessionSpan) -> tuple:
    if isinstance(span, ClosedSpan):
        return span.check_in, span.check_out, span.worked_minutes
    return span.check_in, None, 0


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s AND check_out_time IS NULL
                ORDER BY work_date DESC, check_in_time DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s AND work_date=%s
                ORDER BY check_in_time ASC, session_id ASC
                """,
                (int(user_id), work_date),
            )
            return [_row_to_session(r) for r in fetchall(cur)]

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceSession]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start is not None:
            clauses.append("work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("work_date <= %s")
            params.append(end)

        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_sessions
            WHERE {" AND ".join(clauses)}
            ORDER BY work_date DESC, check_in_time ASC, session_id ASC
        """
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_session(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        span: SessionSpan,
        status: SessionStatus,
        note: Optional[str] = None,
        is_manual: bool = False,
    ) -> int:
        check_in, check_out, worked = _span_params(span)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_sessions(
                        user_id, work_date, check_in_time, check_out_time,
                        total_worked_minutes, status, note, is_manual
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, check_in, check_out, worked, status.value, note, int(bool(is_manual))),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_sessions_one_open lost a race with a concurrent check-in.
            raise ConflictError("An open session already exists for this user") from e

    def update(
        self,
        *,
        session_id: int,
        span: SessionSpan,
        status: SessionStatus,
        note: Optional[str] = None,
        is_manual: bool = False,
    ) -> bool:
        check_in, check_out, worked = _span_params(span)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE attendance_sessions
                    SET check_in_time=%s, check_out_time=%s, total_worked_minutes=%s,
                        status=%s, note=%s, is_manual=%s
                    WHERE session_id=%s
                    """,
                    (check_in, check_out, worked, status.value, note, int(bool(is_manual)), int(session_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            raise ConflictError("An open session already exists for this user") from e

    def delete(self, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0
