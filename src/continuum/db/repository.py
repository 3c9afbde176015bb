"""Record store: CRUD over the full decision collection.

The whole collection is serialized as one JSON array under a single key of
an injected ``KeyValueStorage``. Every operation reads and re-materializes
the full list; there is no incremental diffing. Downstream analytics rely on
always receiving the complete, validated collection.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from continuum.db.models import DecisionRecord, RecordValidationError
from continuum.db.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_KEY = "continuumDecisions"


class RecordStore:
    """Data access layer for decision records.

    Wraps a ``KeyValueStorage`` collaborator. Malformed stored data never
    propagates: an unparseable blob reads as an empty collection and
    individual invalid entries are skipped, both with a logged warning.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_KEY) -> None:
        """Initialise with a storage collaborator.

        Args:
            storage: Anything with ``get(key)`` / ``set(key, value)``.
            key: Logical key holding the serialized collection.
        """
        self._storage = storage
        self._key = key

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> list[DecisionRecord]:
        """Return copies of all records in persisted (insertion) order."""
        return self._load()

    def get_by_id(self, record_id: int) -> DecisionRecord | None:
        """Return the record with *record_id*, or None if absent."""
        for record in self._load():
            if record.id == record_id:
                return record
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, record: DecisionRecord) -> DecisionRecord:
        """Append *record* and return the stored copy.

        If its ``id`` is already taken the id is bumped past the current
        maximum so ids are never reused; a ``timestamp`` equal to the old id
        moves with it.
        """
        records = self._load()
        stored = record.copy()
        ids = {r.id for r in records}
        if stored.id in ids:
            new_id = max(ids) + 1
            logger.debug("Record id %d already taken, using %d", stored.id, new_id)
            if stored.timestamp == stored.id:
                stored.timestamp = new_id
            stored.id = new_id
        records.append(stored)
        self._save(records)
        logger.info("Added decision %d: %s", stored.id, stored.title)
        return stored.copy()

    def remove(self, record_id: int) -> bool:
        """Delete the record with *record_id*. Returns False if it was absent."""
        records = self._load()
        kept = [r for r in records if r.id != record_id]
        if len(kept) == len(records):
            return False
        self._save(kept)
        logger.info("Removed decision %d", record_id)
        return True

    def update(
        self, record_id: int, fields: dict[str, Any], *, now: int | None = None
    ) -> DecisionRecord | None:
        """Merge *fields* (JSON keys) over the stored record and persist it.

        The merged record keeps its ``id`` and gets a new ``timestamp``.
        Returns None (and writes nothing) if *record_id* is absent.

        Raises:
            RecordValidationError: if the merged record is invalid.
        """
        records = self._load()
        for index, record in enumerate(records):
            if record.id == record_id:
                merged = record.merged(fields, now=now)
                records[index] = merged
                self._save(records)
                logger.info("Updated decision %d", record_id)
                return merged.copy()
        return None

    def merge(self, incoming: Iterable[DecisionRecord]) -> list[DecisionRecord]:
        """Append records whose ids are not yet present; existing records win.

        Returns the records that were actually added.
        """
        records = self._load()
        ids = {r.id for r in records}
        added: list[DecisionRecord] = []
        for record in incoming:
            if record.id in ids:
                logger.debug("Skipping record %d: id already present", record.id)
                continue
            ids.add(record.id)
            added.append(record.copy())
        if added:
            self._save(records + added)
        return added

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def dump(self) -> list[dict[str, Any]]:
        """Return the collection in its persisted JSON shape."""
        return [r.to_dict() for r in self._load()]

    def _load(self) -> list[DecisionRecord]:
        raw = self._storage.get(self._key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Stored decisions under '%s' are not valid JSON; treating as empty", self._key)
            return []
        if not isinstance(data, list):
            logger.warning("Stored decisions under '%s' are not an array; treating as empty", self._key)
            return []

        records: list[DecisionRecord] = []
        for entry in data:
            try:
                records.append(DecisionRecord.from_dict(entry))
            except RecordValidationError as exc:
                logger.warning("Skipping invalid stored decision: %s", exc)
        return records

    def _save(self, records: list[DecisionRecord]) -> None:
        self._storage.set(self._key, json.dumps([r.to_dict() for r in records]))
