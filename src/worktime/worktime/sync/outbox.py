from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .model import OutboxOperation, ReplayResult, operation_key
from .repository import OutboxStore

logger = logging.getLogger(__name__)

SESSION_UPSERT = "session.upsert"
SESSION_DELETE = "session.delete"


class Outbox:
    """Retry-with-dedup queue of operations to mirror on a remote store.

    Operations are keyed by ``kind:entity_id``. Enqueuing an existing key
    replaces its payload, so a replay that partially succeeded never sends
    the same record twice. Handlers must be idempotent.
    """

    def __init__(self, store: OutboxStore):
        self._store = store

    def enqueue(self, kind: str, entity_id: int, payload: dict[str, Any]) -> int:
        key = operation_key(kind, entity_id)
        outbox_id = self._store.upsert(key=key, kind=kind, entity_id=int(entity_id), payload=dict(payload))
        logger.debug("Outbox enqueued %s (id=%s)", key, outbox_id)
        return outbox_id

    def pending(self) -> list[OutboxOperation]:
        return list(self._store.list_pending())

    def replay(self, handler: Callable[[OutboxOperation], None], *, limit: Optional[int] = None) -> ReplayResult:
        """Deliver pending operations in order, stopping at the first failure."""

        pending = list(self._store.list_pending(limit=limit))
        delivered = 0
        for op in pending:
            try:
                handler(op)
            except Exception as e:
                self._store.record_failure(op.outbox_id, error=str(e) or e.__class__.__name__)
                logger.warning("Outbox replay stopped at %s (attempt %d): %s", op.key, op.attempts + 1, e)
                return ReplayResult(delivered=delivered, remaining=len(self._store.list_pending()), failed_key=op.key)
            self._store.remove(op.outbox_id)
            delivered += 1

        remaining = len(self._store.list_pending())
        if delivered:
            logger.info("Outbox delivered %d operation(s), %d remaining", delivered, remaining)
        return ReplayResult(delivered=delivered, remaining=remaining)
