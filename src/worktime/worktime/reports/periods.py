from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from ..core.enums import ReportView
from ..core.exceptions import ValidationError


def week_bounds(today: date) -> tuple[date, date]:
    """Sunday..Saturday week containing ``today``."""

    start = today - timedelta(days=today.isoweekday() % 7)
    return start, start + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    last = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last)


def report_range(
    view: ReportView | str,
    today: date,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> tuple[date, date]:
    try:
        view = ReportView(view)
    except ValueError:
        raise ValidationError("View must be one of: daily, weekly, monthly, custom")

    if view == ReportView.DAILY:
        return today, today
    if view == ReportView.WEEKLY:
        return week_bounds(today)
    if view == ReportView.MONTHLY:
        return month_bounds(today)

    if start is None or end is None:
        raise ValidationError("Custom reports need both start and end")
    if start > end:
        raise ValidationError("Start date must not be after end date")
    return start, end
