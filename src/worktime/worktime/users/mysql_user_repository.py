from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import RoundingRule, Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


def _encode_off_days(days: Iterable[Weekday]) -> str:
    return ",".join(sorted(Weekday(d).value for d in days))


def _decode_off_days(value: Optional[str]) -> frozenset[Weekday]:
    return frozenset(Weekday(part) for part in (value or "").split(",") if part)


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, committed_hours_per_day, weekly_off_days, timezone, rounding_rule
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return User(
                user_id=int(r["user_id"]),
                full_name=r["full_name"],
                committed_hours_per_day=float(r["committed_hours_per_day"]),
                weekly_off_days=_decode_off_days(r.get("weekly_off_days")),
                timezone=r.get("timezone") or "UTC",
                rounding_rule=RoundingRule(r.get("rounding_rule") or RoundingRule.NONE.value),
            )

    def create_user(
        self,
        *,
        full_name: str,
        committed_hours_per_day: float,
        weekly_off_days: Iterable[Weekday],
        timezone: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, committed_hours_per_day, weekly_off_days, timezone)
                VALUES(%s,%s,%s,%s)
                """,
                (full_name, float(committed_hours_per_day), _encode_off_days(weekly_off_days), timezone),
            )
            return int(cur.lastrowid)

    def update_commitment(self, user_id: int, *, committed_hours_per_day: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET committed_hours_per_day=%s WHERE user_id=%s",
                (float(committed_hours_per_day), int(user_id)),
            )
            return cur.rowcount > 0

    def update_off_days(self, user_id: int, *, weekly_off_days: Iterable[Weekday]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET weekly_off_days=%s WHERE user_id=%s",
                (_encode_off_days(weekly_off_days), int(user_id)),
            )
            return cur.rowcount > 0

    def update_rounding(self, user_id: int, *, rounding_rule: RoundingRule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET rounding_rule=%s WHERE user_id=%s",
                (RoundingRule(rounding_rule).value, int(user_id)),
            )
            return cur.rowcount > 0
