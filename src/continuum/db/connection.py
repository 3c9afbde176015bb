"""SQLite connection layer for the decision journal.

A journal is one SQLite file (``.continuum.db`` by default) holding the
``kv_store`` table. ``Database.open()`` is what commands use: it connects
and brings the schema up to date in one step. ``connect()`` alone gives a
bare connection for tests and migrations.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from continuum.db.schema import initialize

# Milliseconds a writer waits on a locked journal before giving up.
BUSY_TIMEOUT_MS = 5000


class Database:
    """A journal file on disk."""

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> sqlite3.Connection:
        """Return a new connection with Row access, WAL and a busy timeout."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS}")
        return conn

    def open(self) -> sqlite3.Connection:
        """Connect and apply pending migrations. The caller closes it."""
        conn = self.connect()
        try:
            initialize(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def __enter__(self) -> sqlite3.Connection:
        self._conn = self.open()
        return self._conn

    def __exit__(self, *args: object) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
