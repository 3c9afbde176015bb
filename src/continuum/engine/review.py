"""Per-decision review and collection statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from continuum.db.models import DecisionRecord, now_ms
from continuum.engine.query import QueryEngine
from continuum.engine.tagging import has_tag

WELL_DOCUMENTED = "Well-documented decision with balanced considerations."


@dataclass
class DecisionReview:
    """Quality indicators and notes for a single decision."""

    record_id: int
    emotional_state: int
    reasoning_length: int
    alternatives: str     # Detailed | Brief
    constraints: str      # Comprehensive | Minimal
    notes: list[str] = field(default_factory=list)


@dataclass
class CollectionStats:
    total: int = 0
    time_sensitive: int = 0
    financial: int = 0
    learning: int = 0
    this_month: int = 0
    average_emotion: float = 0.0


def review_decision(record: DecisionRecord) -> DecisionReview:
    """Score one decision's documentation and flag notable conditions."""
    notes: list[str] = []
    constraints = record.constraints.lower()

    if len(record.reasoning) < 100:
        notes.append("Brief reasoning - consider documenting more details for future reference.")
    if record.emotional_state <= 3:
        notes.append("Made under emotional stress - this might affect decision quality.")
    if "time" in constraints and "enough time" not in constraints:
        notes.append("Time-constrained decision - evaluate if time pressure led to optimal choice.")
    if has_tag(record.tags, "learning"):
        notes.append("Learning-focused decision - good for long-term growth.")
    if has_tag(record.tags, "financial"):
        notes.append("Financial decision - consider tracking outcomes for ROI analysis.")

    return DecisionReview(
        record_id=record.id,
        emotional_state=record.emotional_state,
        reasoning_length=len(record.reasoning),
        alternatives="Detailed" if len(record.alternatives) > 100 else "Brief",
        constraints="Comprehensive" if len(record.constraints) > 50 else "Minimal",
        notes=notes or [WELL_DOCUMENTED],
    )


def collection_stats(records: Sequence[DecisionRecord], *, now: int | None = None) -> CollectionStats:
    """Category counts, this-month activity and mean emotional state."""
    stats = CollectionStats(total=len(records))
    if not records:
        return stats

    today = datetime.fromtimestamp((now if now is not None else now_ms()) / 1000)
    for r in records:
        constraints = r.constraints.lower()
        reasoning = r.reasoning.lower()

        if (
            "time" in constraints or "deadline" in constraints
            or has_tag(r.tags, "time-sensitive") or has_tag(r.tags, "urgent")
        ):
            stats.time_sensitive += 1
        if (
            "money" in constraints or "budget" in constraints or "cost" in constraints
            or has_tag(r.tags, "financial")
        ):
            stats.financial += 1
        if (
            "learn" in reasoning or "growth" in reasoning or "experience" in reasoning
            or has_tag(r.tags, "learning")
        ):
            stats.learning += 1

        made = datetime.fromtimestamp(r.timestamp / 1000)
        if (made.year, made.month) == (today.year, today.month):
            stats.this_month += 1

    stats.average_emotion = sum(r.emotional_state for r in records) / len(records)
    return stats


def monthly_activity(
    records: Sequence[DecisionRecord], *, now: int | None = None, months: int = 6
) -> list[tuple[str, int]]:
    """Decisions per calendar month for the last *months* months, oldest first.

    Labels are abbreviated month names ("Oct").
    """
    today = datetime.fromtimestamp((now if now is not None else now_ms()) / 1000).date()
    buckets: list[date] = []
    year, month = today.year, today.month
    for _ in range(months):
        buckets.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    buckets.reverse()

    counts = {(b.year, b.month): 0 for b in buckets}
    for r in records:
        made = datetime.fromtimestamp(r.timestamp / 1000)
        key = (made.year, made.month)
        if key in counts:
            counts[key] += 1

    return [(f"{b:%b}", counts[(b.year, b.month)]) for b in buckets]


def recent(records: Sequence[DecisionRecord], n: int = 5) -> list[DecisionRecord]:
    """The *n* newest decisions."""
    return QueryEngine().query(records)[:n]
