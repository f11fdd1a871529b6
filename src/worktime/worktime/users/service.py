from __future__ import annotations

import logging
from typing import Iterable

from ..common.validators import require_hours_per_day, require_non_empty, require_rounding_rule, require_weekdays
from ..core.constants import DEFAULT_COMMITTED_HOURS, DEFAULT_TIMEZONE, DEFAULT_WEEKLY_OFF_DAYS
from ..core.enums import RoundingRule
from ..core.exceptions import NotFoundError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserSettingsService:
    """Per-user settings read by the report engine (off days, rounding)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def register(
        self,
        *,
        full_name: str,
        committed_hours_per_day: float = DEFAULT_COMMITTED_HOURS,
        weekly_off_days: Iterable[str] = DEFAULT_WEEKLY_OFF_DAYS,
        timezone: str = DEFAULT_TIMEZONE,
    ) -> User:
        user_id = self._users.create_user(
            full_name=require_non_empty(full_name, "Full name"),
            committed_hours_per_day=require_hours_per_day(committed_hours_per_day),
            weekly_off_days=require_weekdays(weekly_off_days),
            timezone=(timezone or DEFAULT_TIMEZONE).strip(),
        )
        logger.info("Registered user %s", user_id)
        return self.get(user_id)

    def set_weekly_off_days(self, user_id: int, days: Iterable[str]) -> User:
        self.get(user_id)
        off_days = require_weekdays(days)
        self._users.update_off_days(int(user_id), weekly_off_days=off_days)
        logger.info("User %s weekly off days -> %s", user_id, sorted(d.value for d in off_days))
        return self.get(user_id)

    def set_rounding_rule(self, user_id: int, rule: str | RoundingRule) -> User:
        self.get(user_id)
        rounding = require_rounding_rule(rule)
        self._users.update_rounding(int(user_id), rounding_rule=rounding)
        return self.get(user_id)
