"""Shared helpers for CLI commands: config, store and engine wiring."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console

from continuum.cli.errors import err_config, err_no_db
from continuum.config import ConfigError, ContinuumConfig, load_config
from continuum.db.connection import Database
from continuum.db.repository import RecordStore
from continuum.db.storage import SqliteStorage
from continuum.engine.insights import InsightGenerator, InsightRules
from continuum.engine.sentiment import SentimentScorer
from continuum.engine.tagging import TagClassifier

console = Console()


def load_cfg() -> ContinuumConfig:
    """Load config or exit 1 with an actionable message."""
    try:
        return load_config()
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(1)


def resolve_db(db: Path | None, cfg: ContinuumConfig) -> Path:
    return db if db is not None else Path(cfg.storage.path)


@contextmanager
def open_store(db_path: Path, cfg: ContinuumConfig) -> Iterator[RecordStore]:
    """Yield a RecordStore over *db_path*; exit 1 if the journal does not exist."""
    if not db_path.exists():
        console.print(err_no_db(str(db_path)))
        raise typer.Exit(1)

    conn = Database(db_path).open()
    try:
        yield RecordStore(SqliteStorage(conn), key=cfg.storage.key)
    finally:
        conn.close()


def make_classifier(cfg: ContinuumConfig) -> TagClassifier:
    return TagClassifier(cfg.tagging.rules)


def make_generator(cfg: ContinuumConfig) -> InsightGenerator:
    return InsightGenerator(
        scorer=SentimentScorer(cfg.sentiment.positive, cfg.sentiment.negative),
        rules=InsightRules(
            sunk_cost_phrases=tuple(cfg.biases.sunk_cost_phrases),
            recent_window=cfg.insights.recent_window,
        ),
        latency=cfg.insights.latency_seconds,
    )


def split_tags(raw: str | None) -> list[str]:
    """'a, b,,c ' → ['a', 'b', 'c']"""
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]
