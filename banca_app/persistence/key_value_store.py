"""SQLite-backed string key/value storage for ledger snapshots."""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..errors import PersistenceError
from ..logging.config import get_logger


class KeyValueStore:
    """
    Persistent map of string keys to string values.

    Values are opaque text (JSON documents in practice); the store never
    interprets them.
    """

    def __init__(self, db_path: str = "banca.db"):
        self.db_path = Path(db_path)
        self.logger = get_logger("banca.store")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_items (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", db_path=str(self.db_path), error=str(e))
            raise PersistenceError(
                f"Database error: {str(e)}",
                operation="connect",
                target=str(self.db_path),
            ) from e
        finally:
            if conn:
                conn.close()

    def get_item(self, key: str) -> Optional[str]:
        """Value stored under key, None if absent."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_items WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        with self._lock:
            with self._get_connection() as conn:
                now = datetime.now(timezone.utc).isoformat()
                conn.execute("""
                    INSERT OR REPLACE INTO kv_items (key, value, updated_at)
                    VALUES (?, ?, ?)
                """, (key, value, now))
                conn.commit()

        self.logger.debug("Item stored", key=key, size=len(value))

    def remove_item(self, key: str) -> bool:
        """Delete key; returns whether something was removed."""
        with self._lock:
            with self._get_connection() as conn:
                cursor = conn.execute("DELETE FROM kv_items WHERE key = ?", (key,))
                conn.commit()
                return cursor.rowcount > 0
