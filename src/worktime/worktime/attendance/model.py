from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Union

from ..common.datetime_utils import clock_minutes
from ..core.enums import SessionStatus


@dataclass(frozen=True)
class OpenSpan:
    """Checked in, not yet checked out."""

    check_in: time


@dataclass(frozen=True)
class ClosedSpan:
    check_in: time
    check_out: time
    worked_minutes: int


SessionSpan = Union[OpenSpan, ClosedSpan]


def close_span(work_date: date, check_in: time, check_out: time) -> ClosedSpan:
    """Build a closed span, recomputing worked minutes from the clock times."""
    return ClosedSpan(check_in=check_in, check_out=check_out, worked_minutes=clock_minutes(work_date, check_in, check_out))


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in/check-out pair on one calendar date."""

    session_id: int
    user_id: int
    work_date: date
    span: SessionSpan
    status: SessionStatus
    note: Optional[str] = None
    is_manual: bool = False

    @property
    def is_open(self) -> bool:
        return isinstance(self.span, OpenSpan)

    @property
    def check_in_time(self) -> time:
        return self.span.check_in

    @property
    def check_out_time(self) -> Optional[time]:
        return self.span.check_out if isinstance(self.span, ClosedSpan) else None

    @property
    def total_worked_minutes(self) -> int:
        return self.span.worked_minutes if isinstance(self.span, ClosedSpan) else 0
