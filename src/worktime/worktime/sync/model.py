from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


def operation_key(kind: str, entity_id: int) -> str:
    return f"{kind}:{int(entity_id)}"


@dataclass(frozen=True)
class OutboxOperation:
    """A pending operation waiting to be replayed against the remote store."""

    outbox_id: int
    key: str
    kind: str
    entity_id: int
    payload: dict[str, Any] = field(default_factory=dict)
    attempts: int = 0
    last_error: Optional[str] = None


@dataclass(frozen=True)
class ReplayResult:
    delivered: int
    remaining: int
    failed_key: Optional[str] = None
