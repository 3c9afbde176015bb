"""Tests for the journal's SQLite connection layer."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from continuum.db.connection import BUSY_TIMEOUT_MS, Database
from continuum.db.schema import CURRENT_VERSION


def _tables(conn) -> set[str]:
    return {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}


def test_connect_creates_file(tmp_path):
    db_path = tmp_path / ".continuum.db"
    conn = Database(db_path).connect()
    conn.close()
    assert db_path.exists()


def test_connect_sets_wal_and_busy_timeout(tmp_path):
    conn = Database(tmp_path / ".continuum.db").connect()
    mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
    timeout = conn.execute("PRAGMA busy_timeout").fetchone()[0]
    conn.close()
    assert mode == "wal"
    assert timeout == BUSY_TIMEOUT_MS


def test_connect_does_not_migrate(tmp_path):
    conn = Database(tmp_path / ".continuum.db").connect()
    assert "kv_store" not in _tables(conn)
    conn.close()


def test_open_applies_schema(tmp_path):
    conn = Database(tmp_path / ".continuum.db").open()
    version = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()[0]
    tables = _tables(conn)
    conn.close()
    assert version == CURRENT_VERSION
    assert "kv_store" in tables


def test_open_twice_keeps_data(tmp_path):
    path = tmp_path / ".continuum.db"
    conn = Database(path).open()
    conn.execute("INSERT INTO kv_store (key, value) VALUES ('k', 'v')")
    conn.commit()
    conn.close()

    conn = Database(path).open()
    row = conn.execute("SELECT value FROM kv_store WHERE key = 'k'").fetchone()
    conn.close()
    assert row["value"] == "v"


def test_context_manager_yields_migrated_connection_and_closes(tmp_path):
    with Database(tmp_path / ".continuum.db") as conn:
        assert "kv_store" in _tables(conn)
    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")


def test_accepts_path_str(tmp_path):
    db = Database(str(tmp_path / ".continuum.db"))
    assert isinstance(db.db_path, Path)
    with db as conn:
        assert conn.execute("SELECT 1").fetchone()[0] == 1
