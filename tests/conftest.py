from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.worktime.worktime.attendance.model import AttendanceSession, OpenSpan
from src.worktime.worktime.commitments.model import CommitmentChange, Holiday
from src.worktime.worktime.container import wire_container
from src.worktime.worktime.core.enums import RoundingRule, Weekday
from src.worktime.worktime.core.exceptions import ConflictError
from src.worktime.worktime.sync.model import OutboxOperation
from src.worktime.worktime.users.model import User


class FixedClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


class InMemoryUsers:
    def __init__(self, users=()):
        self._users: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def create_user(self, *, full_name, committed_hours_per_day, weekly_off_days, timezone) -> int:
        user_id = max(self._users, default=0) + 1
        self._users[user_id] = User(
            user_id=user_id,
            full_name=full_name,
            committed_hours_per_day=committed_hours_per_day,
            weekly_off_days=frozenset(weekly_off_days),
            timezone=timezone,
        )
        return user_id

    def _patch(self, user_id: int, **changes) -> bool:
        user = self._users.get(user_id)
        if not user:
            return False
        self._users[user_id] = replace(user, **changes)
        return True

    def update_commitment(self, user_id: int, *, committed_hours_per_day: float) -> bool:
        return self._patch(user_id, committed_hours_per_day=committed_hours_per_day)

    def update_off_days(self, user_id: int, *, weekly_off_days) -> bool:
        return self._patch(user_id, weekly_off_days=frozenset(weekly_off_days))

    def update_rounding(self, user_id: int, *, rounding_rule: RoundingRule) -> bool:
        return self._patch(user_id, rounding_rule=rounding_rule)


class InMemoryAttendance:
    def __init__(self):
        self._by_id: dict[int, AttendanceSession] = {}
        self._id = 0

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        return self._by_id.get(session_id)

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        return next((s for s in self._by_id.values() if s.user_id == user_id and s.is_open), None)

    def list_for_user_and_date(self, user_id: int, work_date: date):
        items = [s for s in self._by_id.values() if s.user_id == user_id and s.work_date == work_date]
        return sorted(items, key=lambda s: (s.check_in_time, s.session_id))

    def list_for_user(self, user_id: int, *, start=None, end=None, limit=None):
        items = [
            s
            for s in self._by_id.values()
            if s.user_id == user_id and (start is None or s.work_date >= start) and (end is None or s.work_date <= end)
        ]
        items.sort(key=lambda s: (s.check_in_time, s.session_id))
        items.sort(key=lambda s: s.work_date, reverse=True)
        return items[:limit] if limit is not None else items

    def create(self, *, user_id, work_date, span, status, note=None, is_manual=False) -> int:
        if isinstance(span, OpenSpan) and self.get_open_for_user(user_id):
            raise ConflictError("An open session already exists for this user")
        self._id += 1
        self._by_id[self._id] = AttendanceSession(
            session_id=self._id,
            user_id=user_id,
            work_date=work_date,
            span=span,
            status=status,
            note=note,
            is_manual=is_manual,
        )
        return self._id

    def update(self, *, session_id, span, status, note=None, is_manual=False) -> bool:
        rec = self._by_id.get(session_id)
        if not rec:
            return False
        self._by_id[session_id] = replace(rec, span=span, status=status, note=note, is_manual=is_manual)
        return True

    def delete(self, session_id: int) -> bool:
        return self._by_id.pop(session_id, None) is not None


class InMemoryCommitments:
    def __init__(self, entries=()):
        self._entries: list[CommitmentChange] = list(entries)

    def list_for_user(self, user_id: int):
        items = [c for c in self._entries if c.user_id == user_id]
        return sorted(items, key=lambda c: c.effective_from)

    def add(self, *, user_id, hours_per_day, effective_from) -> int:
        change_id = len(self._entries) + 1
        self._entries.append(CommitmentChange(change_id, user_id, hours_per_day, effective_from))
        return change_id


class InMemoryHolidays:
    def __init__(self, holidays=()):
        self._by_id: dict[int, Holiday] = {h.holiday_id: h for h in holidays}

    def list_for_user(self, user_id: int):
        return sorted((h for h in self._by_id.values() if h.user_id == user_id), key=lambda h: h.holiday_date)

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        return self._by_id.get(holiday_id)

    def add(self, *, user_id, holiday_date, title) -> int:
        holiday_id = max(self._by_id, default=0) + 1
        self._by_id[holiday_id] = Holiday(holiday_id, user_id, holiday_date, title)
        return holiday_id

    def delete(self, holiday_id: int) -> bool:
        return self._by_id.pop(holiday_id, None) is not None


class InMemoryOutboxStore:
    def __init__(self):
        self._ops: dict[str, OutboxOperation] = {}
        self._id = 0

    def upsert(self, *, key, kind, entity_id, payload) -> int:
        existing = self._ops.get(key)
        if existing:
            self._ops[key] = replace(existing, kind=kind, payload=payload)
            return existing.outbox_id
        self._id += 1
        self._ops[key] = OutboxOperation(outbox_id=self._id, key=key, kind=kind, entity_id=entity_id, payload=payload)
        return self._id

    def list_pending(self, *, limit=None):
        items = sorted(self._ops.values(), key=lambda op: op.outbox_id)
        return items[:limit] if limit is not None else items

    def remove(self, outbox_id: int) -> bool:
        for key, op in list(self._ops.items()):
            if op.outbox_id == outbox_id:
                del self._ops[key]
                return True
        return False

    def record_failure(self, outbox_id: int, *, error: str) -> None:
        for key, op in self._ops.items():
            if op.outbox_id == outbox_id:
                self._ops[key] = replace(op, attempts=op.attempts + 1, last_error=error)
                return


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2024, 6, 12, 10, 30)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def user() -> User:
    return User(
        user_id=1,
        full_name="A",
        committed_hours_per_day=8,
        weekly_off_days=frozenset({Weekday.SATURDAY, Weekday.SUNDAY}),
    )


@pytest.fixture
def users_repo(user) -> InMemoryUsers:
    return InMemoryUsers([user])


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def commitments_repo() -> InMemoryCommitments:
    return InMemoryCommitments()


@pytest.fixture
def holidays_repo() -> InMemoryHolidays:
    return InMemoryHolidays()


@pytest.fixture
def outbox_store() -> InMemoryOutboxStore:
    return InMemoryOutboxStore()


@pytest.fixture
def container(users_repo, attendance_repo, commitments_repo, holidays_repo, outbox_store, clock):
    return wire_container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        commitments_repo=commitments_repo,
        holidays_repo=holidays_repo,
        outbox_store=outbox_store,
        clock=clock,
    )
