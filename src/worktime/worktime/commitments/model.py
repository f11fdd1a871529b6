from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import DayKind


@dataclass(frozen=True)
class CommitmentChange:
    """From ``effective_from`` on, the daily commitment is ``hours_per_day``."""

    change_id: int
    user_id: int
    hours_per_day: float
    effective_from: date


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    user_id: int
    holiday_date: date
    title: str


@dataclass(frozen=True)
class DayCommitment:
    minutes: int
    kind: DayKind
