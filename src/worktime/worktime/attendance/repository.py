from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import AttendanceSession, SessionSpan


class AttendanceRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[AttendanceSession]:
        """Sessions of one day ordered by check-in time."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceSession]:
        """Newest day first, sessions of a day by check-in time."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        span: SessionSpan,
        status: SessionStatus,
        note: Optional[str] = None,
        is_manual: bool = False,
    ) -> int:
        """Insert a session; raises ConflictError when a second open session would appear."""

        raise NotImplementedError

    def update(
        self,
        *,
        session_id: int,
        span: SessionSpan,
        status: SessionStatus,
        note: Optional[str] = None,
        is_manual: bool = False,
    ) -> bool:
        raise NotImplementedError

    def delete(self, session_id: int) -> bool:
        raise NotImplementedError
