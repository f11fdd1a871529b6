from __future__ import annotations

import httpx
import pytest

from src.worktime.worktime.sync.model import OutboxOperation
from src.worktime.worktime.sync.outbox import SESSION_DELETE, SESSION_UPSERT, Outbox
from src.worktime.worktime.sync.remote import HttpSessionMirror, RemoteSyncError


def _mirror(handler):
    return HttpSessionMirror("https://mirror.test/api/", api_key="k", transport=httpx.MockTransport(handler))


def test_replay_drains_outbox_over_http(outbox_store):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.headers.get("Authorization")))
        return httpx.Response(404 if request.method == "DELETE" else 200)

    outbox = Outbox(outbox_store)
    outbox.enqueue(SESSION_UPSERT, 3, {"session_id": 3, "work_date": "2024-06-10"})
    outbox.enqueue(SESSION_DELETE, 4, {"session_id": 4})

    with _mirror(handler) as mirror:
        result = outbox.replay(mirror)

    assert (result.delivered, result.remaining) == (2, 0)
    assert seen == [
        ("PUT", "/api/sessions/3", "Bearer k"),
        ("DELETE", "/api/sessions/4", "Bearer k"),
    ]


def test_remote_error_keeps_operation_pending(outbox_store):
    outbox = Outbox(outbox_store)
    outbox.enqueue(SESSION_UPSERT, 3, {"session_id": 3})

    with _mirror(lambda request: httpx.Response(503, text="busy")) as mirror:
        result = outbox.replay(mirror)

    assert result.failed_key == "session.upsert:3"
    pending = outbox.pending()
    assert pending[0].attempts == 1
    assert "503" in pending[0].last_error


def test_unknown_kind_is_rejected():
    op = OutboxOperation(outbox_id=1, key="user.upsert:1", kind="user.upsert", entity_id=1)
    with _mirror(lambda request: httpx.Response(200)) as mirror:
        with pytest.raises(RemoteSyncError):
            mirror(op)
