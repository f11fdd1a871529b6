from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock
from ..common.validators import require_hours_per_day, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import CommitmentChange, Holiday
from .repository import CommitmentRepository, HolidayRepository
from .resolver import committed_minutes_for_date

logger = logging.getLogger(__name__)


class CommitmentService:
    def __init__(
        self,
        users: UserRepository,
        commitments: CommitmentRepository,
        holidays: HolidayRepository,
        *,
        clock: Optional[Clock] = None,
    ):
        self._users = users
        self._commitments = commitments
        self._holidays = holidays
        self._clock = clock or SystemClock()

    def _require_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def change_commitment(
        self,
        user_id: int,
        hours_per_day: float,
        *,
        effective_from: Optional[date] = None,
    ) -> CommitmentChange:
        """Record a new daily commitment.

        Past dates keep resolving to the previous values; the user's default
        is updated as well so dates before any history entry follow it.
        """

        self._require_user(user_id)
        hours = require_hours_per_day(hours_per_day)
        effective_from = effective_from or self._clock.now().date()

        change_id = self._commitments.add(user_id=int(user_id), hours_per_day=hours, effective_from=effective_from)
        self._users.update_commitment(int(user_id), committed_hours_per_day=hours)
        logger.info("User %s commitment -> %.2fh/day from %s", user_id, hours, effective_from)
        return CommitmentChange(change_id=change_id, user_id=int(user_id), hours_per_day=hours, effective_from=effective_from)

    def history(self, user_id: int) -> list[CommitmentChange]:
        self._require_user(user_id)
        return list(self._commitments.list_for_user(int(user_id)))

    def committed_minutes_for(self, user_id: int, work_date: Optional[date] = None) -> int:
        user = self._require_user(user_id)
        work_date = work_date or self._clock.now().date()
        return committed_minutes_for_date(
            user,
            work_date,
            self._holidays.list_for_user(user.user_id),
            self._commitments.list_for_user(user.user_id),
        )


class HolidayService:
    def __init__(self, users: UserRepository, holidays: HolidayRepository):
        self._users = users
        self._holidays = holidays

    def list(self, user_id: int) -> list[Holiday]:
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")
        return list(self._holidays.list_for_user(int(user_id)))

    def add(self, user_id: int, *, holiday_date: date, title: str) -> Holiday:
        title = require_non_empty(title, "Holiday title")
        existing = self.list(user_id)
        if any(h.holiday_date == holiday_date for h in existing):
            raise ValidationError(f"{holiday_date.isoformat()} is already a holiday")

        holiday_id = self._holidays.add(user_id=int(user_id), holiday_date=holiday_date, title=title)
        logger.info("Holiday %s added for user %s on %s", holiday_id, user_id, holiday_date)
        return Holiday(holiday_id=holiday_id, user_id=int(user_id), holiday_date=holiday_date, title=title)

    def delete(self, holiday_id: int) -> None:
        holiday = self._holidays.get_by_id(int(holiday_id))
        if not holiday or not self._holidays.delete(holiday.holiday_id):
            raise NotFoundError("Holiday not found")
        logger.info("Holiday %s deleted", holiday_id)
