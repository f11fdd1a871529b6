from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CommitmentChange, Holiday


class CommitmentRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[CommitmentChange]:
        """History ordered by effective_from, then insertion order."""

        raise NotImplementedError

    def add(self, *, user_id: int, hours_per_day: float, effective_from: date) -> int:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[Holiday]:
        raise NotImplementedError

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def add(self, *, user_id: int, holiday_date: date, title: str) -> int:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> bool:
        raise NotImplementedError
