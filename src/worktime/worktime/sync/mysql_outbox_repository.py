from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OutboxOperation
from .repository import OutboxStore


class MySQLOutboxRepository(OutboxStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, *, key: str, kind: str, entity_id: int, payload: dict[str, Any]) -> int:
        body = json.dumps(payload, default=str)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO outbox(op_key, kind, entity_id, payload)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE kind=VALUES(kind), payload=VALUES(payload)
                """,
                (key, kind, int(entity_id), body),
            )

            # If it was an update, lastrowid can be 0; fetch outbox_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute("SELECT outbox_id FROM outbox WHERE op_key=%s", (key,))
            r = fetchone(cur)
            return int(r["outbox_id"]) if r else 0

    def list_pending(self, *, limit: Optional[int] = None) -> Sequence[OutboxOperation]:
        sql = """
            SELECT outbox_id, op_key, kind, entity_id, payload, attempts, last_error
            FROM outbox
            ORDER BY outbox_id ASC
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                OutboxOperation(
                    outbox_id=int(r["outbox_id"]),
                    key=r["op_key"],
                    kind=r["kind"],
                    entity_id=int(r["entity_id"]),
                    payload=json.loads(r["payload"]) if isinstance(r["payload"], (str, bytes)) else dict(r["payload"]),
                    attempts=int(r["attempts"] or 0),
                    last_error=r.get("last_error"),
                )
                for r in fetchall(cur)
            ]

    def remove(self, outbox_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM outbox WHERE outbox_id=%s", (int(outbox_id),))
            return cur.rowcount > 0

    def record_failure(self, outbox_id: int, *, error: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE outbox SET attempts=attempts+1, last_error=%s WHERE outbox_id=%s",
                (error[:255], int(outbox_id)),
            )
