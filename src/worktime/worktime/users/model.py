from __future__ import annotations

from dataclasses import dataclass, field

from ..core.constants import DEFAULT_COMMITTED_HOURS, DEFAULT_TIMEZONE
from ..core.enums import RoundingRule, Weekday


@dataclass(frozen=True)
class User:
    """Domain entity: the owner of a commitment schedule.

    Note: Plain data object (no DB access). ``timezone`` is informational,
    all date math works on naive calendar dates.
    """

    user_id: int
    full_name: str
    committed_hours_per_day: float = DEFAULT_COMMITTED_HOURS
    weekly_off_days: frozenset[Weekday] = field(default_factory=lambda: frozenset({Weekday.SATURDAY, Weekday.SUNDAY}))
    timezone: str = DEFAULT_TIMEZONE
    rounding_rule: RoundingRule = RoundingRule.NONE
