"""Continuum storage layer."""

from continuum.db.connection import Database
from continuum.db.migrations import MIGRATIONS, run_migrations
from continuum.db.models import DecisionRecord, RecordValidationError, new_record
from continuum.db.repository import RecordStore
from continuum.db.schema import initialize
from continuum.db.storage import KeyValueStorage, MemoryStorage, SqliteStorage

__all__ = [
    "Database",
    "DecisionRecord",
    "KeyValueStorage",
    "MemoryStorage",
    "MIGRATIONS",
    "RecordStore",
    "RecordValidationError",
    "SqliteStorage",
    "initialize",
    "new_record",
    "run_migrations",
]
