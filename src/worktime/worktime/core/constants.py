"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_COMMITTED_HOURS = 8.0
DEFAULT_WEEKLY_OFF_DAYS = ("Saturday", "Sunday")
DEFAULT_TIMEZONE = "UTC"
DEFAULT_HISTORY_LIMIT = 30

MAX_WEEKLY_OFF_DAYS = 2
MAX_COMMITTED_HOURS = 24
MAX_SESSION_MINUTES = 24 * 60
MANUAL_EDIT_WINDOW_MONTHS = 3

MINUTES_PER_HOUR = 60
