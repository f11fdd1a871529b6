from __future__ import annotations

from enum import Enum


class Weekday(str, Enum):
    """Weekday names, Sunday first (index == ``date.isoweekday() % 7``)."""

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)


class SessionStatus(str, Enum):
    """Stored state of a check-in/check-out session."""

    INCOMPLETE = "incomplete"
    COMPLETE = "complete"
    MANUAL = "manual"


class DayStatus(str, Enum):
    COMPLETE = "complete"
    SHORT = "short"
    OVERTIME = "overtime"
    OFF = "off"
    HOLIDAY = "holiday"


class DayKind(str, Enum):
    """Why a day has (or lacks) a commitment."""

    WORKING = "working"
    HOLIDAY = "holiday"
    OFF = "off"


class RoundingRule(str, Enum):
    NONE = "none"
    FIVE = "5"
    TEN = "10"


class ReportView(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"
