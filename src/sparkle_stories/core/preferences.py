"""
SQLite-backed key-value store for user preferences
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import get_data_dir


SCHEMA_VERSION = 1


def get_database_path() -> Path:
    """Get the path to the SQLite preferences database."""
    return get_data_dir() / "sparkle_stories.db"


@contextmanager
def get_db_connection(db_path: Optional[Path] = None):
    """Get a database connection with proper cleanup."""
    path = db_path if db_path is not None else get_database_path()
    conn = sqlite3.connect(path, timeout=30.0)
    conn.row_factory = sqlite3.Row

    try:
        yield conn
    finally:
        conn.close()


def init_database(db_path: Optional[Path] = None) -> None:
    """Create the preferences schema if it does not exist."""
    path = db_path if db_path is not None else get_database_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection(path) as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS preferences (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        conn.commit()


class PreferenceStore:
    """Durable key-value preferences scoped to this machine.

    Failures are logged and reported as missing values (get) or ignored
    writes (set); a broken preferences database never stops the app.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path if db_path is not None else get_database_path()
        self._ready = False

    def _ensure_schema(self) -> None:
        if not self._ready:
            init_database(self.db_path)
            self._ready = True

    def get(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None if absent or unreadable."""
        try:
            self._ensure_schema()
            with get_db_connection(self.db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM preferences WHERE key = ?", (key,)
                ).fetchone()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to read preference {key!r}: {e}")
            return None

        return row["value"] if row else None

    def set(self, key: str, value: str) -> bool:
        """Store value under key. Returns True on success."""
        try:
            self._ensure_schema()
            with get_db_connection(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO preferences (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    """,
                    (key, value),
                )
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to save preference {key!r}: {e}")
            return False

        return True


class MemoryPreferenceStore:
    """In-process preferences; nothing survives a restart."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> bool:
        self._values[key] = value
        return True
