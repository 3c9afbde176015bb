"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from continuum.db.connection import Database
from continuum.db.repository import RecordStore
from continuum.db.schema import initialize
from continuum.db.storage import MemoryStorage


@pytest.fixture
def tmp_db(tmp_path):
    """File-based DB in tmp_path with schema initialized, closed after test."""
    db = Database(tmp_path / ".continuum.db")
    conn = db.connect()
    initialize(conn)
    yield conn
    conn.close()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage):
    """RecordStore over an in-memory storage fake."""
    return RecordStore(memory_storage)
