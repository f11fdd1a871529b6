from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceSession
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, SystemClock
from ..common.validators import require_rounding_rule
from ..commitments.repository import CommitmentRepository, HolidayRepository
from ..core.enums import ReportView, RoundingRule
from ..core.exceptions import NotFoundError
from ..users.repository import UserRepository
from .export import build_export_rows
from .live import project_live
from .model import ReportSummary
from .periods import report_range
from .summarizer import build_report_summary


@dataclass(frozen=True)
class ReportData:
    summary: ReportSummary
    sessions: list[AttendanceSession]
    rounding: RoundingRule

    def export_rows(self) -> list[dict]:
        return build_export_rows(self.summary, self.sessions)


class ReportService:
    """Loads a user's inputs and runs the reporting engine over a period."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        commitments: CommitmentRepository,
        holidays: HolidayRepository,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._commitments = commitments
        self._holidays = holidays
        self._clock = clock or SystemClock()

    def build(
        self,
        user_id: int,
        *,
        view: ReportView | str = ReportView.MONTHLY,
        start: Optional[date] = None,
        end: Optional[date] = None,
        rounding: RoundingRule | str | None = None,
        live: bool = True,
    ) -> ReportData:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")

        today = self._clock.now().date()
        start, end = report_range(view, today, start=start, end=end)
        rule = require_rounding_rule(rounding) if rounding is not None else user.rounding_rule

        sessions = list(self._attendance.list_for_user(user.user_id, start=start, end=end))
        summary = build_report_summary(
            user.user_id,
            start,
            end,
            sessions,
            user,
            self._holidays.list_for_user(user.user_id),
            self._commitments.list_for_user(user.user_id),
            rule,
        )
        if live and start <= today <= end:
            summary = project_live(
                summary,
                [s for s in sessions if s.work_date == today],
                clock=self._clock,
                rounding=rule,
                today=today,
            )
        return ReportData(summary=summary, sessions=sessions, rounding=rule)
