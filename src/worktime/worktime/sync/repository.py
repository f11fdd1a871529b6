from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import OutboxOperation


class OutboxStore(Protocol):
    """Durable, ordered storage for outbox operations."""

    def upsert(self, *, key: str, kind: str, entity_id: int, payload: dict[str, Any]) -> int:
        """Insert a new operation, or replace the payload of the one with the same key.

        Replacing keeps the original position in the queue. Returns outbox_id.
        """

        raise NotImplementedError

    def list_pending(self, *, limit: Optional[int] = None) -> Sequence[OutboxOperation]:
        """Pending operations in insertion order."""

        raise NotImplementedError

    def remove(self, outbox_id: int) -> bool:
        raise NotImplementedError

    def record_failure(self, outbox_id: int, *, error: str) -> None:
        raise NotImplementedError
