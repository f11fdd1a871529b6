from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Protocol

from ..core.exceptions import ValidationError


class Clock(Protocol):
    """Source of the current wall-clock time."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return now_local()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_hhmm(value: str) -> time:
    """Parse a zero-padded HH:MM string into a time."""
    try:
        return datetime.strptime(str(value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end``, truncated, never negative."""
    seconds = (end - start).total_seconds()
    return max(0, int(seconds // 60))


def clock_minutes(work_date: date, check_in: time, check_out: time) -> int:
    return minutes_between(datetime.combine(work_date, check_in), datetime.combine(work_date, check_out))


def subtract_months(value: date, months: int) -> date:
    """Same day ``months`` earlier, clamped to the month's last day."""
    month_index = value.year * 12 + (value.month - 1) - int(months)
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def format_minutes(minutes: int) -> str:
    """Render minutes as ``"7h 05m"`` for textual summaries."""
    sign = "-" if minutes < 0 else ""
    minutes = abs(int(minutes))
    return f"{sign}{minutes // 60}h {minutes % 60:02d}m"


def hours_label(minutes: int) -> str:
    return f"{minutes / 60:.2f}"
