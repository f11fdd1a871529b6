import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
ENABLE_OUTBOX = bool(int(os.getenv("ENABLE_OUTBOX", "0")))

MANUAL_EDIT_WINDOW_MONTHS = int(os.getenv("MANUAL_EDIT_WINDOW_MONTHS", "3"))

# Remote mirror drained by scripts/replay_outbox.py
SYNC_URL = os.getenv("SYNC_URL", "")
SYNC_API_KEY = os.getenv("SYNC_API_KEY", "")
SYNC_BATCH_SIZE = int(os.getenv("SYNC_BATCH_SIZE", "100"))
