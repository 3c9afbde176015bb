"""Tests for the DecisionRecord schema and boundary validation."""

from __future__ import annotations

from datetime import datetime

import pytest

from continuum.db.models import (
    DecisionRecord,
    RecordValidationError,
    format_date,
    new_record,
    parse_emotion,
)
from continuum.engine.tagging import TagClassifier, TagRule


def _raw(**overrides):
    data = {
        "id": 1_700_000_000_000,
        "title": "Buy laptop",
        "intent": "Work faster",
        "constraints": "Budget of 1500",
        "alternatives": "Repair the old one",
        "finalDecision": "Refurbished MacBook",
        "reasoning": "Better value",
        "emotionalState": 7,
        "tags": ["financial"],
        "timestamp": 1_700_000_000_000,
        "date": "Tuesday, November 14, 2023",
    }
    data.update(overrides)
    return data


# ------------------------------------------------------------------
# from_dict / to_dict
# ------------------------------------------------------------------

def test_from_dict_round_trips_to_dict():
    raw = _raw()
    assert DecisionRecord.from_dict(raw).to_dict() == raw


def test_from_dict_maps_camel_case_fields():
    record = DecisionRecord.from_dict(_raw())
    assert record.final_decision == "Refurbished MacBook"
    assert record.emotional_state == 7


def test_missing_optional_fields_get_defaults():
    raw = _raw()
    for key in ("tags", "emotionalState", "alternatives"):
        del raw[key]
    record = DecisionRecord.from_dict(raw)
    assert record.tags == []
    assert record.emotional_state == 5
    assert record.alternatives == ""


def test_missing_timestamp_falls_back_to_id():
    raw = _raw()
    del raw["timestamp"]
    del raw["date"]
    record = DecisionRecord.from_dict(raw)
    assert record.timestamp == record.id
    assert record.date == format_date(record.id)


@pytest.mark.parametrize("field", ["title", "intent", "constraints", "finalDecision", "reasoning"])
def test_missing_required_field_rejected(field):
    raw = _raw()
    del raw[field]
    with pytest.raises(RecordValidationError, match=field):
        DecisionRecord.from_dict(raw)


def test_blank_title_rejected():
    with pytest.raises(RecordValidationError, match="title"):
        DecisionRecord.from_dict(_raw(title="   "))


@pytest.mark.parametrize("bad_id", [None, "123", 1.5, True])
def test_non_integer_id_rejected(bad_id):
    with pytest.raises(RecordValidationError, match="id"):
        DecisionRecord.from_dict(_raw(id=bad_id))


def test_non_object_rejected():
    with pytest.raises(RecordValidationError):
        DecisionRecord.from_dict(["not", "a", "record"])


def test_tags_must_be_list():
    with pytest.raises(RecordValidationError, match="tags"):
        DecisionRecord.from_dict(_raw(tags="work"))


def test_tags_deduplicated_case_insensitively():
    record = DecisionRecord.from_dict(_raw(tags=["Work", "work", "WORK", "family"]))
    assert record.tags == ["Work", "family"]


# ------------------------------------------------------------------
# emotionalState
# ------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [(-3, 0), (0, 0), (10, 10), (42, 10), ("7", 7), (6.9, 6)])
def test_emotional_state_clamped(raw, expected):
    assert DecisionRecord.from_dict(_raw(emotionalState=raw)).emotional_state == expected


def test_emotional_state_none_defaults_to_five():
    assert parse_emotion(None) == 5


@pytest.mark.parametrize("bad", ["calm", True, [5]])
def test_emotional_state_non_numeric_rejected(bad):
    with pytest.raises(RecordValidationError, match="emotionalState"):
        parse_emotion(bad)


# ------------------------------------------------------------------
# merged()
# ------------------------------------------------------------------

def test_merged_overlays_fields_and_restamps():
    record = DecisionRecord.from_dict(_raw())
    later = record.timestamp + 60_000
    merged = record.merged({"reasoning": "Cheaper in the long run", "id": 99}, now=later)
    assert merged.id == record.id
    assert merged.reasoning == "Cheaper in the long run"
    assert merged.title == record.title
    assert merged.timestamp == later
    assert merged.date == format_date(later)


def test_merged_does_not_mutate_original():
    record = DecisionRecord.from_dict(_raw())
    record.merged({"title": "Other"}, now=record.timestamp + 1)
    assert record.title == "Buy laptop"


def test_merged_rejects_invalid_result():
    record = DecisionRecord.from_dict(_raw())
    with pytest.raises(RecordValidationError):
        record.merged({"title": ""})


# ------------------------------------------------------------------
# format_date / new_record
# ------------------------------------------------------------------

def test_format_date_long_form():
    stamp = int(datetime(2026, 10, 19, 12, 0).timestamp() * 1000)
    assert format_date(stamp) == "Monday, October 19, 2026"


def test_new_record_trims_and_stamps():
    record = new_record(
        title="  Take the job  ",
        intent=" Grow ",
        constraints=" Relocation ",
        final_decision=" Accept ",
        reasoning=" New skills ",
        now=1_700_000_000_000,
    )
    assert record.title == "Take the job"
    assert record.id == record.timestamp == 1_700_000_000_000
    assert record.emotional_state == 5


def test_new_record_merges_auto_tags_after_user_tags():
    record = new_record(
        title="Take the job",
        intent="Grow",
        constraints="Tight deadline",
        final_decision="Accept",
        reasoning="Good for my career",
        tags=["Work", "big"],
        now=1,
    )
    assert record.tags == ["Work", "big", "time-sensitive"]


def test_new_record_uses_given_classifier():
    classifier = TagClassifier([TagRule("health", ("sleep",))])
    record = new_record(
        title="Go to bed",
        intent="Rest",
        constraints="Need sleep",
        final_decision="Bed at ten",
        reasoning="Tired",
        classifier=classifier,
        now=1,
    )
    assert record.tags == ["health"]


def test_new_record_blank_title_rejected():
    with pytest.raises(RecordValidationError):
        new_record(title="  ", intent="i", constraints="c", final_decision="f", reasoning="r", now=1)


@pytest.mark.parametrize("huge", [float("inf"), float("nan"), 10**400])
def test_emotional_state_non_finite_rejected(huge):
    with pytest.raises(RecordValidationError, match="emotionalState"):
        parse_emotion(huge)


def test_timestamp_outside_date_range_rejected():
    raw = _raw(id=10**17)
    del raw["timestamp"]
    del raw["date"]
    with pytest.raises(RecordValidationError, match="date range"):
        DecisionRecord.from_dict(raw)
