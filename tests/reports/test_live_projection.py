from __future__ import annotations

from datetime import date, datetime, time

from src.worktime.worktime.attendance.model import AttendanceSession, OpenSpan, close_span
from src.worktime.worktime.commitments.model import Holiday
from src.worktime.worktime.core.enums import DayStatus, SessionStatus
from src.worktime.worktime.reports.live import live_minutes, project_live
from src.worktime.worktime.reports.summarizer import build_report_summary

TODAY = date(2024, 6, 12)


class _Clock:
    def __init__(self, now):
        self._now = now

    def now(self):
        return self._now


def _sessions():
    return [
        AttendanceSession(1, 1, TODAY, close_span(TODAY, time(7, 0), time(8, 0)), SessionStatus.COMPLETE),
        AttendanceSession(2, 1, TODAY, OpenSpan(time(9, 0)), SessionStatus.INCOMPLETE),
    ]


def test_open_session_is_projected_into_today(user):
    sessions = _sessions()
    summary = build_report_summary(1, date(2024, 6, 10), date(2024, 6, 14), sessions, user, [], [])
    clock = _Clock(datetime(2024, 6, 12, 10, 30))

    projected = project_live(summary, sessions, clock=clock)

    today = projected.day(TODAY)
    assert today.worked_minutes == 150
    assert today.status == DayStatus.SHORT
    assert today.short_minutes == 330
    assert projected.total_worked_minutes == sum(d.worked_minutes for d in projected.days)
    assert projected.short_minutes == sum(d.short_minutes for d in projected.days)
    # inputs untouched
    assert summary.day(TODAY).worked_minutes == 60
    assert sessions[1].is_open


def test_nothing_changes_without_open_sessions(user):
    sessions = [s for s in _sessions() if not s.is_open]
    summary = build_report_summary(1, TODAY, TODAY, sessions, user, [], [])

    assert project_live(summary, sessions, clock=_Clock(datetime(2024, 6, 12, 18, 0))) is summary


def test_today_outside_range_is_untouched(user):
    sessions = _sessions()
    summary = build_report_summary(1, date(2024, 6, 1), date(2024, 6, 7), sessions, user, [], [])

    assert project_live(summary, sessions, clock=_Clock(datetime(2024, 6, 12, 10, 30))) is summary


def test_check_in_in_the_future_counts_zero():
    sessions = _sessions()
    assert live_minutes(sessions, today=TODAY, now=datetime(2024, 6, 12, 8, 30)) == 0
    assert live_minutes(sessions, today=TODAY, now=datetime(2024, 6, 12, 9, 59, 59)) == 59


def test_live_work_on_holiday_keeps_holiday_flag(user):

    holidays = [Holiday(1, 1, TODAY, "Mid-year")]
    sessions = [_sessions()[1]]
    summary = build_report_summary(1, TODAY, TODAY, sessions, user, holidays, [])

    projected = project_live(summary, sessions, clock=_Clock(datetime(2024, 6, 12, 11, 0)))

    day = projected.day(TODAY)
    assert day.status == DayStatus.OVERTIME
    assert day.is_holiday is True
    assert projected.holidays == 1
