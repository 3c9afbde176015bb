"""Key-value storage collaborators for the record store.

The record store only needs two primitives: read the serialized blob stored
under a key, and replace it. ``SqliteStorage`` keeps the blob in the
``kv_store`` table; ``MemoryStorage`` keeps it in a dict and is used by tests
and by callers that do not want anything on disk.
"""

from __future__ import annotations

import sqlite3
from typing import Protocol


class KeyValueStorage(Protocol):
    """Get/set access to serialized values under string keys."""

    def get(self, key: str) -> str | None:
        """Return the stored value for *key*, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...


class SqliteStorage:
    """``KeyValueStorage`` backed by the ``kv_store`` table.

    The connection is owned by the caller and must be closed after use.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialise with an open database connection.

        Args:
            conn: An open sqlite3.Connection with the schema initialised
                (see continuum.db.schema.initialize).
        """
        self._conn = conn

    def get(self, key: str) -> str | None:
        row = self._conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self._conn.execute(
            """
            INSERT INTO kv_store (key, value)
            VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = datetime('now')
            """,
            (key, value),
        )
        self._conn.commit()

    def delete(self, key: str) -> None:
        """Remove *key* entirely (absent key reads back as None)."""
        self._conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self._conn.commit()


class MemoryStorage:
    """In-memory ``KeyValueStorage``; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
