from __future__ import annotations

from datetime import date, time

from src.worktime.worktime.attendance.model import AttendanceSession, OpenSpan, close_span
from src.worktime.worktime.commitments.model import CommitmentChange, Holiday
from src.worktime.worktime.core.enums import DayStatus, SessionStatus
from src.worktime.worktime.reports.summarizer import build_report_summary, dates_in_range


def closed(session_id: int, work_date: date, start: str, end: str, *, user_id: int = 1) -> AttendanceSession:
    check_in = time.fromisoformat(start)
    check_out = time.fromisoformat(end)
    return AttendanceSession(
        session_id=session_id,
        user_id=user_id,
        work_date=work_date,
        span=close_span(work_date, check_in, check_out),
        status=SessionStatus.COMPLETE,
    )


def test_dates_in_range_is_inclusive_and_empty_when_reversed():
    assert dates_in_range(date(2024, 2, 28), date(2024, 3, 1)) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]
    assert dates_in_range(date(2024, 3, 2), date(2024, 3, 1)) == []


def test_single_overtime_day(user):
    d = date(2024, 6, 10)
    summary = build_report_summary(1, d, d, [closed(1, d, "09:00", "17:30")], user, [], [], "none")

    day = summary.days[0]
    assert day.worked_minutes == 510
    assert day.committed_minutes == 480
    assert day.status == DayStatus.OVERTIME
    assert day.overtime_minutes == 30
    assert day.short_minutes == 0
    assert (summary.working_days, summary.holidays, summary.off_days) == (1, 0, 0)


def test_sessions_of_one_day_are_summed(user):
    d = date(2024, 6, 11)
    sessions = [closed(1, d, "08:00", "10:00"), closed(2, d, "13:00", "14:30")]

    day = build_report_summary(1, d, d, sessions, user, [], []).days[0]

    assert day.worked_minutes == 210
    assert day.status == DayStatus.SHORT
    assert day.short_minutes == 270


def test_other_users_and_open_sessions_do_not_count(user):
    d = date(2024, 6, 11)
    sessions = [
        closed(1, d, "09:00", "12:00", user_id=2),
        AttendanceSession(2, 1, d, OpenSpan(time(9, 0)), SessionStatus.INCOMPLETE),
    ]

    day = build_report_summary(1, d, d, sessions, user, [], []).days[0]

    assert day.worked_minutes == 0
    assert day.status == DayStatus.SHORT


def test_range_counters_follow_cause(user):
    holidays = [
        Holiday(1, 1, date(2024, 6, 12), "Mid-year"),
        # a holiday on a weekly off day still counts as a holiday
        Holiday(2, 1, date(2024, 6, 15), "Saturday holiday"),
    ]
    summary = build_report_summary(1, date(2024, 6, 10), date(2024, 6, 16), [], user, holidays, [])

    assert summary.working_days == 4
    assert summary.holidays == 2
    assert summary.off_days == 1
    statuses = {d.work_date: d.status for d in summary.days}
    assert statuses[date(2024, 6, 12)] == DayStatus.HOLIDAY
    assert statuses[date(2024, 6, 16)] == DayStatus.OFF


def test_totals_equal_sum_of_days(user):
    history = [CommitmentChange(1, 1, 6, date(2024, 6, 5))]
    sessions = [
        closed(1, date(2024, 6, 3), "09:00", "17:07"),
        closed(2, date(2024, 6, 4), "09:00", "12:00"),
        closed(3, date(2024, 6, 6), "08:00", "15:33"),
        closed(4, date(2024, 6, 8), "10:00", "12:00"),
    ]
    summary = build_report_summary(1, date(2024, 6, 1), date(2024, 6, 14), sessions, user, [], history, "5")

    assert len(summary.days) == 14
    assert [d.work_date for d in summary.days] == dates_in_range(date(2024, 6, 1), date(2024, 6, 14))
    assert summary.total_worked_minutes == sum(d.worked_minutes for d in summary.days)
    assert summary.total_committed_minutes == sum(d.committed_minutes for d in summary.days)
    assert summary.overtime_minutes == sum(d.overtime_minutes for d in summary.days)
    assert summary.short_minutes == sum(d.short_minutes for d in summary.days)
    # Saturday work on an off day
    assert summary.day(date(2024, 6, 8)).status == DayStatus.OVERTIME
    assert summary.day(date(2024, 6, 6)).committed_minutes == 360


def test_reversed_range_is_empty(user):
    summary = build_report_summary(1, date(2024, 6, 2), date(2024, 6, 1), [], user, [], [])
    assert summary.days == ()
    assert summary.total_committed_minutes == 0
    assert summary.working_days == summary.holidays == summary.off_days == 0
