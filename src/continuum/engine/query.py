"""Search, filter, sort and paginate decision records.

Filters and the search term compose by logical AND; the result is always
newest first (``timestamp`` descending, stable for equal timestamps).
Pagination is a separate, stateless slice over an already-filtered list.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from continuum.db.models import DecisionRecord, now_ms
from continuum.engine.tagging import has_tag

_MS_PER_DAY = 1000 * 60 * 60 * 24

# Timeframe → maximum age in days. "all" means no limit.
TIMEFRAME_DAYS: dict[str, int | None] = {
    "all": None,
    "week": 7,
    "month": 30,
    "year": 365,
}


@dataclass
class QueryFilter:
    """Timeline filter.

    Attributes:
        timeframe: One of all | week | month | year. None behaves like "all".
        tag: Tag to require (case-insensitive). None or "all" disables it.
    """

    timeframe: str | None = "all"
    tag: str | None = "all"

    def __post_init__(self) -> None:
        if self.timeframe is not None and self.timeframe not in TIMEFRAME_DAYS:
            raise ValueError(
                f"Unknown timeframe '{self.timeframe}'. "
                f"Expected one of: {', '.join(TIMEFRAME_DAYS)}"
            )


@dataclass
class Page:
    """One page of a query result."""

    items: list[DecisionRecord] = field(default_factory=list)
    page: int = 1
    items_per_page: int = 5
    total: int = 0
    total_pages: int = 0


class QueryEngine:
    """Stateless query pipeline over a materialized record list."""

    def query(
        self,
        records: Sequence[DecisionRecord],
        filter: QueryFilter | None = None,
        search_term: str = "",
        *,
        now: int | None = None,
    ) -> list[DecisionRecord]:
        """Return matching records, newest first.

        Args:
            records: Full collection (e.g. ``RecordStore.list()``).
            filter: Timeframe/tag filter; None means no filtering.
            search_term: Case-insensitive substring matched against title,
                intent, final decision, reasoning and tags.
            now: Reference time in epoch ms for timeframe filters.
        """
        filter = filter or QueryFilter()
        result = list(records)

        if search_term:
            term = search_term.lower()
            result = [r for r in result if _matches_search(r, term)]

        max_days = TIMEFRAME_DAYS.get(filter.timeframe or "all")
        if max_days is not None:
            reference = now if now is not None else now_ms()
            result = [
                r for r in result
                if (reference - r.timestamp) / _MS_PER_DAY <= max_days
            ]

        if filter.tag and filter.tag.lower() != "all":
            result = [r for r in result if has_tag(r.tags, filter.tag)]

        # sorted() is stable, so equal timestamps keep their input order
        return sorted(result, key=lambda r: r.timestamp, reverse=True)


def paginate(
    records: Sequence[DecisionRecord], page: int = 1, items_per_page: int = 5
) -> Page:
    """Slice ``[(page-1)*n, page*n)`` out of *records*.

    Pages past the end come back empty; ``total_pages`` is
    ``ceil(total / items_per_page)`` (0 for an empty list).

    Raises:
        ValueError: if *page* or *items_per_page* is below 1.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if items_per_page < 1:
        raise ValueError("items_per_page must be >= 1")

    total = len(records)
    start = (page - 1) * items_per_page
    return Page(
        items=list(records[start:start + items_per_page]),
        page=page,
        items_per_page=items_per_page,
        total=total,
        total_pages=math.ceil(total / items_per_page),
    )


def _matches_search(record: DecisionRecord, term: str) -> bool:
    fields = (record.title, record.intent, record.final_decision, record.reasoning)
    if any(term in f.lower() for f in fields):
        return True
    return any(term in tag.lower() for tag in record.tags)
