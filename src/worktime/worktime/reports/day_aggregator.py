from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import DayKind, DayStatus, RoundingRule
from .model import DayStats
from .rounding.factory import round_minutes


def classify_day(worked: int, committed: int, *, has_session: bool, kind: Optional[DayKind] = None) -> DayStatus:
    """First matching rule wins."""

    if committed == 0:
        if has_session:
            return DayStatus.OVERTIME
        return DayStatus.OFF if kind == DayKind.OFF else DayStatus.HOLIDAY
    if worked == 0:
        return DayStatus.SHORT
    if worked > committed:
        return DayStatus.OVERTIME
    if worked == committed:
        return DayStatus.COMPLETE
    return DayStatus.SHORT


def build_day_stats(
    work_date: date,
    worked_minutes_raw: int,
    committed_minutes: int,
    rounding: RoundingRule | str = RoundingRule.NONE,
    *,
    has_session: Optional[bool] = None,
    kind: Optional[DayKind] = None,
) -> DayStats:
    """Aggregate one day's worked minutes against its commitment.

    ``kind`` is the cause of the commitment as resolved for the date; it only
    matters for zero-commitment days without work (``holiday`` vs ``off``).
    """

    raw = max(0, int(worked_minutes_raw))
    committed = max(0, int(committed_minutes))
    if has_session is None:
        has_session = raw > 0

    worked = round_minutes(raw, rounding)
    status = classify_day(worked, committed, has_session=has_session, kind=kind)

    return DayStats(
        work_date=work_date,
        worked_minutes=worked,
        committed_minutes=committed,
        status=status,
        overtime_minutes=max(0, worked - committed) if committed > 0 else 0,
        short_minutes=max(0, committed - worked) if committed > 0 else 0,
        is_off_day=committed == 0 and kind == DayKind.OFF,
        is_holiday=committed == 0 and kind == DayKind.HOLIDAY,
    )


def day_kind_of(stats: DayStats) -> DayKind:
    if stats.committed_minutes > 0:
        return DayKind.WORKING
    if stats.is_holiday:
        return DayKind.HOLIDAY
    if stats.is_off_day:
        return DayKind.OFF
    return DayKind.HOLIDAY if stats.status == DayStatus.HOLIDAY else DayKind.OFF
