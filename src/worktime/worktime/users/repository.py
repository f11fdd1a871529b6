from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ..core.enums import RoundingRule, Weekday
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        full_name: str,
        committed_hours_per_day: float,
        weekly_off_days: Iterable[Weekday],
        timezone: str,
    ) -> int:
        raise NotImplementedError

    def update_commitment(self, user_id: int, *, committed_hours_per_day: float) -> bool:
        raise NotImplementedError

    def update_off_days(self, user_id: int, *, weekly_off_days: Iterable[Weekday]) -> bool:
        raise NotImplementedError

    def update_rounding(self, user_id: int, *, rounding_rule: RoundingRule) -> bool:
        raise NotImplementedError
