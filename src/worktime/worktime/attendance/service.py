from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime, time
from typing import Iterable, Optional

from ..common.datetime_utils import Clock, SystemClock, format_hhmm, minutes_between, parse_hhmm, subtract_months
from ..core.constants import DEFAULT_HISTORY_LIMIT, MANUAL_EDIT_WINDOW_MONTHS, MAX_SESSION_MINUTES
from ..core.enums import SessionStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..sync.outbox import SESSION_DELETE, SESSION_UPSERT, Outbox
from ..users.repository import UserRepository
from .model import AttendanceSession, ClosedSpan, OpenSpan, SessionSpan, close_span
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_END_OF_DAY = 24 * 60 + 1


def _as_time(value: time | str | None) -> Optional[time]:
    if value is None or isinstance(value, time):
        return value
    if not str(value).strip():
        return None
    return parse_hhmm(str(value))


def _to_minute(value: datetime) -> time:
    return value.time().replace(second=0, microsecond=0)


def _interval(span: SessionSpan) -> tuple[int, int]:
    start = span.check_in.hour * 60 + span.check_in.minute
    if isinstance(span, ClosedSpan):
        return start, span.check_out.hour * 60 + span.check_out.minute
    return start, _END_OF_DAY


class AttendanceService:
    """Session lifecycle: check-in, check-out, manual entries and edits.

    This is the single writer of sessions. It enforces the rules the report
    engine relies on: at most one open session per user, check-out after
    check-in, and no overlapping sessions on the same day.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        clock: Optional[Clock] = None,
        outbox: Optional[Outbox] = None,
        edit_window_months: int = MANUAL_EDIT_WINDOW_MONTHS,
    ):
        self._attendance = attendance
        self._users = users
        self._clock = clock or SystemClock()
        self._outbox = outbox
        self._edit_window_months = int(edit_window_months)

    def _require_user(self, user_id: int) -> None:
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")

    def _require_session(self, session_id: int) -> AttendanceSession:
        rec = self._attendance.get_by_id(int(session_id))
        if not rec:
            raise NotFoundError("Session not found")
        return rec

    def _check_edit_window(self, work_date: date, today: date) -> None:
        if work_date > today:
            raise ValidationError("Cannot record attendance for a future date")
        earliest = subtract_months(today, self._edit_window_months)
        if work_date < earliest:
            raise ValidationError(f"Cannot add or edit entries older than {self._edit_window_months} months")

    @staticmethod
    def _closed(work_date: date, check_in: time, check_out: time) -> ClosedSpan:
        if check_out <= check_in:
            raise ValidationError("Check-out must be after check-in")
        span = close_span(work_date, check_in, check_out)
        if span.worked_minutes > MAX_SESSION_MINUTES:
            raise ValidationError("Worked time cannot exceed 24 hours")
        return span

    @staticmethod
    def _ensure_no_overlap(span: SessionSpan, others: Iterable[AttendanceSession]) -> None:
        start, end = _interval(span)
        for other in others:
            o_start, o_end = _interval(other.span)
            if start == o_start or (start < o_end and o_start < end):
                raise ConflictError(
                    f"Session overlaps an existing session starting at {format_hhmm(other.check_in_time)}"
                )

    def _publish(self, rec: AttendanceSession) -> None:
        if self._outbox is None:
            return
        payload = asdict(rec)
        payload["span"] = {
            "check_in": format_hhmm(rec.check_in_time),
            "check_out": format_hhmm(rec.check_out_time) if rec.check_out_time else None,
            "worked_minutes": rec.total_worked_minutes,
        }
        payload["work_date"] = rec.work_date.isoformat()
        payload["status"] = rec.status.value
        self._outbox.enqueue(SESSION_UPSERT, rec.session_id, payload)

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceSession:
        now = now or self._clock.now()
        self._require_user(user_id)

        existing = self._attendance.get_open_for_user(int(user_id))
        if existing:
            raise ConflictError("You are already checked in")

        span = OpenSpan(check_in=_to_minute(now))
        self._ensure_no_overlap(span, self._attendance.list_for_user_and_date(int(user_id), now.date()))

        session_id = self._attendance.create(
            user_id=int(user_id),
            work_date=now.date(),
            span=span,
            status=SessionStatus.INCOMPLETE,
        )
        rec = self._require_session(session_id)
        logger.info("User %s checked in at %s (session %s)", user_id, format_hhmm(span.check_in), session_id)
        self._publish(rec)
        return rec

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceSession:
        now = now or self._clock.now()

        rec = self._attendance.get_open_for_user(int(user_id))
        if not rec:
            raise ConflictError("You are not checked in")
        if now.date() != rec.work_date:
            raise ValidationError("The open session started on another day; close it with a manual edit")

        span = self._closed(rec.work_date, rec.check_in_time, _to_minute(now))
        self._attendance.update(
            session_id=rec.session_id,
            span=span,
            status=SessionStatus.COMPLETE,
            note=rec.note,
            is_manual=rec.is_manual,
        )
        rec = self._require_session(rec.session_id)
        logger.info("User %s checked out after %d minutes (session %s)", user_id, span.worked_minutes, rec.session_id)
        self._publish(rec)
        return rec

    def add_manual(
        self,
        user_id: int,
        *,
        work_date: date,
        check_in: time | str,
        check_out: time | str,
        note: Optional[str] = None,
        today: Optional[date] = None,
    ) -> AttendanceSession:
        today = today or self._clock.now().date()
        self._require_user(user_id)
        self._check_edit_window(work_date, today)

        check_in_t = _as_time(check_in)
        check_out_t = _as_time(check_out)
        if check_in_t is None or check_out_t is None:
            raise ValidationError("Check-in and check-out are required")

        span = self._closed(work_date, check_in_t, check_out_t)
        self._ensure_no_overlap(span, self._attendance.list_for_user_and_date(int(user_id), work_date))

        session_id = self._attendance.create(
            user_id=int(user_id),
            work_date=work_date,
            span=span,
            status=SessionStatus.MANUAL,
            note=(note or "").strip() or None,
            is_manual=True,
        )
        rec = self._require_session(session_id)
        logger.info("Manual session %s added for user %s on %s", session_id, user_id, work_date)
        self._publish(rec)
        return rec

    def update(
        self,
        session_id: int,
        *,
        check_in: time | str | None = None,
        check_out: time | str | None = None,
        note: Optional[str] = None,
        today: Optional[date] = None,
    ) -> AttendanceSession:
        today = today or self._clock.now().date()
        rec = self._require_session(session_id)
        self._check_edit_window(rec.work_date, today)

        new_check_in = _as_time(check_in) or rec.check_in_time
        new_check_out = _as_time(check_out) or rec.check_out_time
        if new_check_out is None:
            span: SessionSpan = OpenSpan(check_in=new_check_in)
            status = SessionStatus.INCOMPLETE
        else:
            span = self._closed(rec.work_date, new_check_in, new_check_out)
            status = SessionStatus.MANUAL

        others = [s for s in self._attendance.list_for_user_and_date(rec.user_id, rec.work_date) if s.session_id != rec.session_id]
        self._ensure_no_overlap(span, others)

        self._attendance.update(
            session_id=rec.session_id,
            span=span,
            status=status,
            note=(note.strip() or None) if note is not None else rec.note,
            is_manual=True,
        )
        rec = self._require_session(rec.session_id)
        logger.info("Session %s edited (status=%s)", rec.session_id, rec.status.value)
        self._publish(rec)
        return rec

    def delete(self, session_id: int) -> None:
        rec = self._require_session(session_id)
        if not self._attendance.delete(rec.session_id):
            raise NotFoundError("Session not found")
        logger.info("Session %s deleted", rec.session_id)
        if self._outbox is not None:
            self._outbox.enqueue(SESSION_DELETE, rec.session_id, {"session_id": rec.session_id})

    def today_sessions(self, user_id: int, *, today: Optional[date] = None) -> list[AttendanceSession]:
        today = today or self._clock.now().date()
        return list(self._attendance.list_for_user_and_date(int(user_id), today))

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[AttendanceSession]:
        return list(self._attendance.list_for_user(int(user_id), limit=int(limit)))

    def elapsed_minutes(self, user_id: int, *, now: Optional[datetime] = None) -> int:
        """Minutes worked today so far, counting the open session up to ``now``."""

        now = now or self._clock.now()
        total = 0
        for rec in self._attendance.list_for_user_and_date(int(user_id), now.date()):
            if rec.is_open:
                total += minutes_between(datetime.combine(rec.work_date, rec.check_in_time), now)
            else:
                total += rec.total_worked_minutes
        return total
