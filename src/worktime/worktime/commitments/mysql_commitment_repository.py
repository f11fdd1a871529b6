from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CommitmentChange, Holiday
from .repository import CommitmentRepository, HolidayRepository


class MySQLCommitmentRepository(CommitmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: int) -> Sequence[CommitmentChange]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT change_id, user_id, hours_per_day, effective_from
                FROM commitment_history
                WHERE user_id=%s
                ORDER BY effective_from ASC, change_id ASC
                """,
                (int(user_id),),
            )
            return [
                CommitmentChange(
                    change_id=int(r["change_id"]),
                    user_id=int(r["user_id"]),
                    hours_per_day=float(r["hours_per_day"]),
                    effective_from=r["effective_from"],
                )
                for r in fetchall(cur)
            ]

    def add(self, *, user_id: int, hours_per_day: float, effective_from: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO commitment_history(user_id, hours_per_day, effective_from) VALUES(%s,%s,%s)",
                (int(user_id), float(hours_per_day), effective_from),
            )
            return int(cur.lastrowid)


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_holiday(r: dict) -> Holiday:
        return Holiday(
            holiday_id=int(r["holiday_id"]),
            user_id=int(r["user_id"]),
            holiday_date=r["holiday_date"],
            title=r["title"],
        )

    def list_for_user(self, user_id: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, user_id, holiday_date, title
                FROM holidays
                WHERE user_id=%s
                ORDER BY holiday_date ASC
                """,
                (int(user_id),),
            )
            return [self._to_holiday(r) for r in fetchall(cur)]

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT holiday_id, user_id, holiday_date, title FROM holidays WHERE holiday_id=%s",
                (int(holiday_id),),
            )
            r = fetchone(cur)
            return self._to_holiday(r) if r else None

    def add(self, *, user_id: int, holiday_date: date, title: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO holidays(user_id, holiday_date, title) VALUES(%s,%s,%s)",
                (int(user_id), holiday_date, title),
            )
            return int(cur.lastrowid)

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
