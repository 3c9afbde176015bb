"""Tests for keyword auto-tagging and tag set helpers."""

from __future__ import annotations

import pytest

from continuum.engine.tagging import DEFAULT_TAG_RULES, TagClassifier, TagRule, has_tag, merge_tags


@pytest.mark.parametrize(
    "constraints, reasoning, expected",
    [
        ("Tight deadline", "", ["time-sensitive"]),
        ("Limited budget", "", ["financial"]),
        ("", "A chance to learn Rust", ["learning"]),
        ("", "Lots of stress lately", ["emotional"]),
        ("", "Better for my career", ["work"]),
        ("", "Family comes first", ["personal"]),
    ],
)
def test_each_keyword_family(constraints, reasoning, expected):
    assert TagClassifier().classify(constraints, reasoning) == expected


def test_tags_in_rule_order():
    tags = TagClassifier().classify("Family budget, urgent", "job growth")
    assert tags == ["time-sensitive", "financial", "learning", "work", "personal"]


def test_case_insensitive_keywords():
    assert TagClassifier().classify("DEADLINE", "") == ["time-sensitive"]


def test_substring_match():
    # "timeline" contains "time"
    assert TagClassifier().classify("Project timeline", "") == ["time-sensitive"]


def test_no_match():
    assert TagClassifier().classify("Nothing here", "Just because") == []


def test_empty_inputs():
    assert TagClassifier().classify("", "") == []


def test_custom_rules_replace_defaults():
    classifier = TagClassifier([TagRule("health", ("sleep", "gym"))])
    assert classifier.classify("Deadline", "more gym time") == ["health"]


def test_default_rule_table_covers_six_families():
    assert [r.tag for r in DEFAULT_TAG_RULES] == [
        "time-sensitive", "financial", "learning", "emotional", "work", "personal",
    ]


# ------------------------------------------------------------------
# merge_tags / has_tag
# ------------------------------------------------------------------

def test_merge_tags_first_casing_wins():
    assert merge_tags(["Work"], ["work", "learning"]) == ["Work", "learning"]


def test_merge_tags_drops_blank_and_trims():
    assert merge_tags([" a ", "", "  "], ["A", "b"]) == ["a", "b"]


def test_has_tag_case_insensitive():
    assert has_tag(["Time-Sensitive"], "time-sensitive")
    assert not has_tag(["work"], "personal")
