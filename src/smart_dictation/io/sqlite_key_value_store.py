"""SQLite-backed key-value persistence."""

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

from smart_dictation.core import StorageUnavailableError
from smart_dictation.io.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class SqliteKeyValueStore(KeyValueStore):
    """Owns the SQLite connection and the single ``kv_store`` table.

    Every write is one statement followed by a commit, so each store
    operation is an atomic replace of one key.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        try:
            self.connection = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Cannot open store at {self.db_path}: {e}") from e
        self.connection.row_factory = sqlite3.Row

    def ensure_schema(self) -> None:
        """Create the table if it does not exist."""
        try:
            cur = self.connection.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )
            self.connection.commit()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Failed to create schema: {e}") from e

    def get(self, key: str) -> Optional[str]:
        try:
            cur = self.connection.cursor()
            cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Failed to read key {key!r}: {e}") from e
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            cur = self.connection.cursor()
            cur.execute(
                """
                INSERT INTO kv_store (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value
                """,
                (key, value),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Failed to write key {key!r}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            cur = self.connection.cursor()
            cur.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            self.connection.commit()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Failed to remove key {key!r}: {e}") from e

    def keys(self) -> List[str]:
        try:
            cur = self.connection.cursor()
            cur.execute("SELECT key FROM kv_store ORDER BY key")
            rows = cur.fetchall()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"Failed to list keys: {e}") from e
        return [row["key"] for row in rows]

    def close(self) -> None:
        logger.debug("Closing key-value store at %s", self.db_path)
        self.connection.close()
