from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..attendance.model import AttendanceSession
from ..commitments.model import CommitmentChange, Holiday
from ..commitments.resolver import resolve_day
from ..core.enums import DayKind, RoundingRule
from ..users.model import User
from .day_aggregator import build_day_stats
from .model import DayStats, ReportSummary


def dates_in_range(start: date, end: date) -> list[date]:
    """Every calendar date from ``start`` to ``end`` inclusive; empty if reversed."""

    days: list[date] = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def worked_minutes_by_date(user_id: int, sessions: Iterable[AttendanceSession]) -> dict[date, int]:
    """Closed minutes per date for one user; open sessions count as zero."""

    totals: dict[date, int] = defaultdict(int)
    for s in sessions:
        if s.user_id != user_id:
            continue
        totals[s.work_date] += s.total_worked_minutes
    return dict(totals)


def fold_days(start: date | None, end: date | None, days: Sequence[DayStats], kinds: Sequence[DayKind]) -> ReportSummary:
    return ReportSummary(
        start=start,
        end=end,
        total_worked_minutes=sum(d.worked_minutes for d in days),
        total_committed_minutes=sum(d.committed_minutes for d in days),
        overtime_minutes=sum(d.overtime_minutes for d in days),
        short_minutes=sum(d.short_minutes for d in days),
        working_days=sum(1 for k in kinds if k == DayKind.WORKING),
        holidays=sum(1 for k in kinds if k == DayKind.HOLIDAY),
        off_days=sum(1 for k in kinds if k == DayKind.OFF),
        days=tuple(days),
    )


def build_report_summary(
    user_id: int,
    start: date,
    end: date,
    sessions: Iterable[AttendanceSession],
    user: User,
    holidays: Sequence[Holiday],
    history: Sequence[CommitmentChange],
    rounding: RoundingRule | str = RoundingRule.NONE,
) -> ReportSummary:
    """Walk the range day by day and fold per-day stats into totals.

    Range counters follow the cause of each day's commitment: a positive
    commitment is a working day, a zero commitment on a holiday date is a
    holiday, any other zero commitment is an off day.
    """

    if user is None:
        raise ValueError("user is required to build a report")

    worked_by_date = worked_minutes_by_date(user_id, sessions)
    days: list[DayStats] = []
    kinds: list[DayKind] = []

    for work_date in dates_in_range(start, end):
        commitment = resolve_day(user, work_date, holidays, history)
        worked = worked_by_date.get(work_date, 0)
        days.append(
            build_day_stats(
                work_date,
                worked,
                commitment.minutes,
                rounding,
                has_session=worked > 0,
                kind=commitment.kind,
            )
        )
        kinds.append(commitment.kind)

    return fold_days(start, end, days, kinds)
