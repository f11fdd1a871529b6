from __future__ import annotations

from typing import Iterable

from ..core.constants import MAX_COMMITTED_HOURS, MAX_WEEKLY_OFF_DAYS
from ..core.enums import RoundingRule, Weekday
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    value = "" if value is None else str(value)
    if not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_hours_per_day(value) -> float:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Committed hours must be a number")
    if hours != hours or hours < 0 or hours > MAX_COMMITTED_HOURS:
        raise ValidationError(f"Committed hours must be between 0 and {MAX_COMMITTED_HOURS}")
    return hours


def require_weekdays(values: Iterable[str]) -> frozenset[Weekday]:
    days: set[Weekday] = set()
    for raw in values:
        try:
            days.add(Weekday(str(raw).strip().capitalize()))
        except ValueError:
            raise ValidationError(f"Unknown weekday: {raw!r}")
    if len(days) > MAX_WEEKLY_OFF_DAYS:
        raise ValidationError(f"At most {MAX_WEEKLY_OFF_DAYS} weekly off days are allowed")
    return frozenset(days)


def require_rounding_rule(value) -> RoundingRule:
    if isinstance(value, RoundingRule):
        return value
    try:
        return RoundingRule(str(value).strip())
    except ValueError:
        raise ValidationError("Rounding must be one of: none, 5, 10")
