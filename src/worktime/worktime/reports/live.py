from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceSession
from ..common.datetime_utils import Clock, minutes_between
from ..core.enums import RoundingRule
from .day_aggregator import build_day_stats, day_kind_of
from .model import ReportSummary


def live_minutes(sessions: Iterable[AttendanceSession], *, today: date, now: datetime) -> int:
    """Elapsed whole minutes of today's open sessions up to ``now``."""

    total = 0
    for s in sessions:
        if s.is_open and s.work_date == today:
            total += minutes_between(datetime.combine(s.work_date, s.check_in_time), now)
    return total


def project_live(
    summary: ReportSummary,
    sessions: Iterable[AttendanceSession],
    *,
    clock: Clock,
    rounding: RoundingRule | str = RoundingRule.NONE,
    today: Optional[date] = None,
) -> ReportSummary:
    """Return ``summary`` with today's entry counting open sessions up to now.

    Only today's DayStats is rebuilt and the totals are patched by the
    difference, so the range is not walked again. The result is advisory and
    must never be written back to storage.
    """

    now = clock.now()
    today = today or now.date()

    index = next((i for i, d in enumerate(summary.days) if d.work_date == today), None)
    if index is None:
        return summary

    sessions = [s for s in sessions if s.work_date == today]
    live = live_minutes(sessions, today=today, now=now)
    if live <= 0:
        return summary

    closed = sum(s.total_worked_minutes for s in sessions if not s.is_open)
    old = summary.days[index]
    new = build_day_stats(
        today,
        closed + live,
        old.committed_minutes,
        rounding,
        has_session=True,
        kind=day_kind_of(old),
    )

    days = list(summary.days)
    days[index] = new
    return replace(
        summary,
        total_worked_minutes=summary.total_worked_minutes - old.worked_minutes + new.worked_minutes,
        total_committed_minutes=summary.total_committed_minutes - old.committed_minutes + new.committed_minutes,
        overtime_minutes=summary.overtime_minutes - old.overtime_minutes + new.overtime_minutes,
        short_minutes=summary.short_minutes - old.short_minutes + new.short_minutes,
        days=tuple(days),
    )
