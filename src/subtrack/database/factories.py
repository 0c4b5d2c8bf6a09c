"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from subtrack.config import DB_PATH_ENV, DEFAULT_DB_DIR, DEFAULT_DB_FILENAME
from subtrack.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SUBTRACK_DB_PATH
            environment variable, then defaults to ~/.subtrack/subtrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        home = Path.home()
        db_dir = home / DEFAULT_DB_DIR
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / DEFAULT_DB_FILENAME)

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
