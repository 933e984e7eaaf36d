"""
Key/value store for locally cached session data.

The inspection room keeps two kinds of local, non-canonical data:
- Drafts: the full working copy of an inspection report, keyed by report id
- Inspector task lists, keyed by user id

Both are opaque strings (JSON) under string keys, with last-write-wins
semantics. IKeyValueStore is the interface the services depend on;
SqliteKeyValueStore persists entries in the key_value_store table.
"""

import sqlite3
from abc import ABC, abstractmethod
from typing import List, Optional

from ..exceptions import DatabaseError


class IKeyValueStore(ABC):
    """Abstract string key/value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""
        pass

    @abstractmethod
    def keys(self, prefix: str = "") -> List[str]:
        """List stored keys starting with prefix."""
        pass


class SqliteKeyValueStore(IKeyValueStore):
    """SQLite-backed key/value store."""

    def __init__(self, connection: sqlite3.Connection):
        self.conn = connection

    def get(self, key: str) -> Optional[str]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT value FROM key_value_store WHERE key = ?", (key,))
        row = cursor.fetchone()
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        """
        Store value under key.

        Raises:
            DatabaseError: If the write fails
        """
        try:
            cursor = self.conn.cursor()
            cursor.execute(
                """
                INSERT INTO key_value_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value)
            )
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to store key {key}: {e}") from e

    def delete(self, key: str) -> None:
        """
        Remove key if present.

        Raises:
            DatabaseError: If the delete fails
        """
        try:
            cursor = self.conn.cursor()
            cursor.execute("DELETE FROM key_value_store WHERE key = ?", (key,))
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to delete key {key}: {e}") from e

    def keys(self, prefix: str = "") -> List[str]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT key FROM key_value_store ORDER BY key")
        return [row[0] for row in cursor.fetchall() if row[0].startswith(prefix)]
