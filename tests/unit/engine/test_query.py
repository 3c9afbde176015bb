"""Tests for the query pipeline and pagination."""

from __future__ import annotations

import pytest

from continuum.db.models import DecisionRecord
from continuum.engine.query import Page, QueryEngine, QueryFilter, paginate

DAY = 24 * 60 * 60 * 1000
NOW = 1_800_000_000_000


def _record(id, title="Decision", age_days=0, tags=(), **fields):
    return DecisionRecord(
        id=id,
        title=title,
        intent=fields.pop("intent", "intent"),
        constraints=fields.pop("constraints", "constraints"),
        final_decision=fields.pop("final_decision", "final"),
        reasoning=fields.pop("reasoning", "reasoning"),
        tags=list(tags),
        timestamp=NOW - age_days * DAY - id,
    )


def _ids(records):
    return [r.id for r in records]


# ------------------------------------------------------------------
# Search
# ------------------------------------------------------------------

@pytest.mark.parametrize(
    "field, value",
    [
        ("title", "Buy a LAPTOP"),
        ("intent", "new laptop for work"),
        ("final_decision", "laptop it is"),
        ("reasoning", "old laptop died"),
    ],
)
def test_search_matches_text_fields(field, value):
    records = [_record(1, **{field: value}), _record(2)]
    assert _ids(QueryEngine().query(records, search_term="laptop", now=NOW)) == [1]


def test_search_matches_tags():
    records = [_record(1, tags=["Financial"]), _record(2, tags=["work"])]
    assert _ids(QueryEngine().query(records, search_term="finan", now=NOW)) == [1]


def test_search_ignores_constraints_and_alternatives():
    records = [_record(1, constraints="laptop budget")]
    assert QueryEngine().query(records, search_term="laptop", now=NOW) == []


def test_empty_search_returns_everything():
    records = [_record(1), _record(2)]
    assert len(QueryEngine().query(records, search_term="", now=NOW)) == 2


# ------------------------------------------------------------------
# Filters
# ------------------------------------------------------------------

@pytest.mark.parametrize(
    "timeframe, expected",
    [
        ("all", [1, 2, 3, 4]),
        ("week", [1]),
        ("month", [1, 2]),
        ("year", [1, 2, 3]),
    ],
)
def test_timeframe_filter(timeframe, expected):
    records = [
        _record(1, age_days=3),
        _record(2, age_days=20),
        _record(3, age_days=200),
        _record(4, age_days=400),
    ]
    result = QueryEngine().query(records, QueryFilter(timeframe=timeframe), now=NOW)
    assert _ids(result) == expected


def test_unknown_timeframe_rejected():
    with pytest.raises(ValueError, match="timeframe"):
        QueryFilter(timeframe="decade")


def test_tag_filter_case_insensitive():
    records = [_record(1, tags=["Work"]), _record(2, tags=["personal"])]
    result = QueryEngine().query(records, QueryFilter(tag="work"), now=NOW)
    assert _ids(result) == [1]


def test_tag_all_disables_filter():
    records = [_record(1, tags=["Work"]), _record(2)]
    assert len(QueryEngine().query(records, QueryFilter(tag="all"), now=NOW)) == 2


def test_filters_compose_with_and():
    records = [
        _record(1, title="laptop", age_days=2, tags=["work"]),
        _record(2, title="laptop", age_days=60, tags=["work"]),
        _record(3, title="laptop", age_days=2, tags=["personal"]),
        _record(4, title="phone", age_days=2, tags=["work"]),
    ]
    result = QueryEngine().query(
        records, QueryFilter(timeframe="month", tag="work"), "laptop", now=NOW
    )
    assert _ids(result) == [1]


# ------------------------------------------------------------------
# Ordering
# ------------------------------------------------------------------

def test_sorted_newest_first():
    records = [_record(1, age_days=5), _record(2, age_days=1), _record(3, age_days=9)]
    assert _ids(QueryEngine().query(records, now=NOW)) == [2, 1, 3]


def test_equal_timestamps_keep_input_order():
    records = [
        DecisionRecord(id=i, title="t", intent="i", constraints="c",
                       final_decision="f", reasoning="r", timestamp=NOW)
        for i in (3, 1, 2)
    ]
    assert _ids(QueryEngine().query(records, now=NOW)) == [3, 1, 2]


def test_input_not_mutated():
    records = [_record(1, age_days=5), _record(2, age_days=1)]
    QueryEngine().query(records, now=NOW)
    assert _ids(records) == [1, 2]


# ------------------------------------------------------------------
# Pagination
# ------------------------------------------------------------------

def test_paginate_slices():
    records = [_record(i) for i in range(1, 13)]
    page = paginate(records, page=2, items_per_page=5)
    assert _ids(page.items) == [6, 7, 8, 9, 10]
    assert page.total == 12
    assert page.total_pages == 3


def test_paginate_last_partial_page():
    records = [_record(i) for i in range(1, 13)]
    assert _ids(paginate(records, page=3, items_per_page=5).items) == [11, 12]


def test_paginate_past_end_is_empty():
    records = [_record(i) for i in range(1, 4)]
    page = paginate(records, page=4, items_per_page=5)
    assert page.items == []
    assert page.total_pages == 1


def test_paginate_empty():
    assert paginate([], page=1) == Page(items=[], page=1, items_per_page=5, total=0, total_pages=0)


@pytest.mark.parametrize("page, per_page", [(0, 5), (1, 0), (-1, 5)])
def test_paginate_rejects_bad_arguments(page, per_page):
    with pytest.raises(ValueError):
        paginate([], page=page, items_per_page=per_page)
