"""Committed minutes for a calendar date.

Weekly off days and holidays always yield zero. Otherwise the most recent
commitment change effective on or before the date applies, falling back to
the user's default hours per day.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.constants import MINUTES_PER_HOUR
from ..core.enums import WEEKDAYS, DayKind, Weekday
from ..users.model import User
from .model import CommitmentChange, DayCommitment, Holiday


def weekday_of(value: date) -> Weekday:
    # Sunday-first: isoweekday() is Monday=1..Sunday=7.
    return WEEKDAYS[value.isoweekday() % 7]


def is_holiday(work_date: date, holidays: Iterable[Holiday]) -> bool:
    return any(h.holiday_date == work_date for h in holidays)


def effective_commitment(work_date: date, history: Sequence[CommitmentChange]) -> Optional[CommitmentChange]:
    """Latest change with ``effective_from <= work_date``.

    Entries sharing the winning date resolve to the one that comes last in
    ``history``, so changing the commitment twice on one day keeps the
    second value.
    """

    best: Optional[CommitmentChange] = None
    for entry in history:
        if entry.effective_from > work_date:
            continue
        if best is None or entry.effective_from >= best.effective_from:
            best = entry
    return best


def committed_minutes_for_date(
    user: User,
    work_date: date,
    holidays: Sequence[Holiday],
    history: Sequence[CommitmentChange],
) -> int:
    if user is None:
        raise ValueError("user is required to resolve a commitment")

    if weekday_of(work_date) in user.weekly_off_days:
        return 0
    if is_holiday(work_date, holidays):
        return 0

    entry = effective_commitment(work_date, history)
    hours = entry.hours_per_day if entry is not None else user.committed_hours_per_day
    return max(0, int(round(float(hours) * MINUTES_PER_HOUR)))


def resolve_day(
    user: User,
    work_date: date,
    holidays: Sequence[Holiday],
    history: Sequence[CommitmentChange],
) -> DayCommitment:
    minutes = committed_minutes_for_date(user, work_date, holidays, history)
    if minutes > 0:
        kind = DayKind.WORKING
    elif is_holiday(work_date, holidays):
        kind = DayKind.HOLIDAY
    else:
        kind = DayKind.OFF
    return DayCommitment(minutes=minutes, kind=kind)
