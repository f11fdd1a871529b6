from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DayStatus


@dataclass(frozen=True)
class DayStats:
    """Derived figures for one calendar date (never persisted)."""

    work_date: date
    worked_minutes: int
    committed_minutes: int
    status: DayStatus
    overtime_minutes: int
    short_minutes: int
    is_off_day: bool
    is_holiday: bool

    def as_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "worked_minutes": self.worked_minutes,
            "committed_minutes": self.committed_minutes,
            "status": self.status.value,
            "overtime_minutes": self.overtime_minutes,
            "short_minutes": self.short_minutes,
            "is_off_day": self.is_off_day,
            "is_holiday": self.is_holiday,
        }


@dataclass(frozen=True)
class ReportSummary:
    """Range totals plus one DayStats per date, in date order."""

    start: Optional[date]
    end: Optional[date]
    total_worked_minutes: int
    total_committed_minutes: int
    overtime_minutes: int
    short_minutes: int
    working_days: int
    holidays: int
    off_days: int
    days: tuple[DayStats, ...] = ()

    def day(self, work_date: date) -> Optional[DayStats]:
        for stats in self.days:
            if stats.work_date == work_date:
                return stats
        return None

    def as_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "total_worked_minutes": self.total_worked_minutes,
            "total_committed_minutes": self.total_committed_minutes,
            "overtime_minutes": self.overtime_minutes,
            "short_minutes": self.short_minutes,
            "working_days": self.working_days,
            "holidays": self.holidays,
            "off_days": self.off_days,
            "days": [d.as_dict() for d in self.days],
        }
