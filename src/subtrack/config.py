"""Environment-driven settings for subtrack.

Values are read once at import time; the CLI exposes ``--db-path`` on top of
``SUBTRACK_DB_PATH``.
"""

import os

# Storage
DB_PATH_ENV = "SUBTRACK_DB_PATH"
DEFAULT_DB_DIR = ".subtrack"
DEFAULT_DB_FILENAME = "subtrack.db"

# User defaults
DEFAULT_CURRENCY: str = os.getenv("SUBTRACK_CURRENCY", "INR").upper()
DEFAULT_REMINDER_DAYS: int = int(os.getenv("SUBTRACK_REMINDER_DAYS", "1"))
DEFAULT_THEME: str = "light"

# Dashboard windows, in days from now (inclusive)
UPCOMING_RENEWAL_WINDOW_DAYS: int = 30
EXPIRING_SOON_WINDOW_DAYS: int = 7

# Logging
LOG_LEVEL: str = os.getenv("SUBTRACK_LOG_LEVEL", "WARNING").upper()
