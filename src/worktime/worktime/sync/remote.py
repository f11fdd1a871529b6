from __future__ import annotations

import logging
from typing import Optional

import httpx

from .model import OutboxOperation
from .outbox import SESSION_DELETE, SESSION_UPSERT

logger = logging.getLogger(__name__)


class RemoteSyncError(Exception):
    """The remote mirror rejected or could not receive an operation."""


class HttpSessionMirror:
    """Outbox handler that mirrors session writes to a remote HTTP store.

    ``session.upsert`` becomes ``PUT {base_url}/sessions/{id}`` with the
    payload as JSON, ``session.delete`` becomes ``DELETE``. A 404 on delete
    counts as delivered so replays stay idempotent.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 15,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpSessionMirror":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __call__(self, op: OutboxOperation) -> None:
        path = f"/sessions/{op.entity_id}"
        try:
            if op.kind == SESSION_UPSERT:
                resp = self._client.put(path, json=op.payload)
            elif op.kind == SESSION_DELETE:
                resp = self._client.delete(path)
                if resp.status_code == 404:
                    return
            else:
                raise RemoteSyncError(f"Unknown outbox operation: {op.kind}")
        except httpx.HTTPError as e:
            raise RemoteSyncError(f"Remote unreachable: {e}") from e

        if resp.status_code >= 400:
            raise RemoteSyncError(f"Remote error: {resp.status_code} {resp.text}")
        logger.debug("Mirrored %s (%s)", op.key, resp.status_code)
