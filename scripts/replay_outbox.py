from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.worktime.worktime.database.connection import DBConfig, DatabaseConnection
from src.worktime.worktime.sync.mysql_outbox_repository import MySQLOutboxRepository
from src.worktime.worktime.sync.outbox import Outbox
from src.worktime.worktime.sync.remote import HttpSessionMirror

logger = logging.getLogger("replay_outbox")


def main() -> int:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    sync_url = getattr(settings, "SYNC_URL", "")
    if not sync_url:
        logger.error("SYNC_URL is not configured; nothing to replay against")
        return 2

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(settings.DB_CONFIG)))
    outbox = Outbox(MySQLOutboxRepository(conn))

    with HttpSessionMirror(sync_url, api_key=getattr(settings, "SYNC_API_KEY", "") or None) as mirror:
        result = outbox.replay(mirror, limit=getattr(settings, "SYNC_BATCH_SIZE", None))

    logger.info("delivered=%d remaining=%d", result.delivered, result.remaining)
    return 1 if result.failed_key else 0


if __name__ == "__main__":
    sys.exit(main())
