"""JSON export/import of the decision collection.

Export is a pretty-printed UTF-8 JSON array in exactly the persisted record
shape. Import accepts the same document and merges it by ``id``: records
already in the store win and imported duplicates are dropped.

An import document is validated as a whole before anything is merged. If it
does not parse, is not an array, or any entry lacks a required field, the
whole batch is rejected with ``ImportFormatError``. Missing optional fields
(tags, emotionalState, alternatives) are defaulted, not rejected.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from continuum.db.models import DecisionRecord, RecordValidationError
from continuum.db.repository import RecordStore

logger = logging.getLogger(__name__)


class ImportFormatError(ValueError):
    """Raised when an import document is not a valid decision array."""


# ------------------------------------------------------------------
# Export / import
# ------------------------------------------------------------------


def serialize(records: list[dict[str, Any]]) -> str:
    """Render already-dumped records as the pretty-printed export document."""
    return json.dumps(records, indent=2, ensure_ascii=False)


def export_json(store: RecordStore) -> str:
    """Serialize the whole collection as a pretty-printed JSON document."""
    return serialize(store.dump())


def export_filename(when: datetime | None = None) -> str:
    """``continuum-decisions-<YYYY-MM-DD>.json`` for the export date."""
    when = when or datetime.now()
    return f"continuum-decisions-{when.date().isoformat()}.json"


def parse_import(text: str) -> list[DecisionRecord]:
    """Validate an import document and return its records.

    Raises:
        ImportFormatError: if the document is not JSON, not an array, or
            any entry is not a valid decision record.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise ImportFormatError(f"Import file is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ImportFormatError("Invalid file format: expected a JSON array of decisions")

    records: list[DecisionRecord] = []
    for index, entry in enumerate(data):
        try:
            records.append(DecisionRecord.from_dict(entry))
        except RecordValidationError as exc:
            raise ImportFormatError(f"Entry {index}: {exc}") from exc
    return records


def import_json(store: RecordStore, text: str) -> int:
    """Merge the decisions in *text* into *store*. Returns how many were added.

    Raises:
        ImportFormatError: see :func:`parse_import`; nothing is merged.
    """
    records = parse_import(text)
    added = store.merge(records)
    logger.info(
        "Imported %d new decisions (%d already present)",
        len(added),
        len(records) - len(added),
    )
    return len(added)


# ------------------------------------------------------------------
# Export destination
# ------------------------------------------------------------------


def validate_output_path(output: str, allowed_base: Path | None = None) -> Path:
    """Resolve where an export file goes.

    An absolute *output* is used as given. A relative one must stay inside
    *allowed_base* (the working directory by default), so ``-o ../x.json``
    is refused rather than written beside the project.

    Raises:
        ValueError: if a relative path resolves outside *allowed_base*.
    """
    path = Path(output)
    if path.is_absolute():
        return path.resolve()

    base = (allowed_base or Path.cwd()).resolve()
    resolved = (base / path).resolve()
    if not resolved.is_relative_to(base):
        raise ValueError(f"Export path '{output}' resolves outside '{base}'")
    return resolved


def check_overwrite(path: Path, yes: bool) -> bool:
    """Ask before replacing an earlier export. ``--yes`` skips the prompt."""
    if yes or not path.exists():
        return True
    return typer.confirm(f"  {path.name} already exists. Replace this export?", default=False)


def write_output(path: Path, content: str) -> None:
    """Write an export document via a sibling temp file and ``os.replace``.

    A failed export leaves any previous file at *path* untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
