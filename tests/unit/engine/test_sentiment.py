"""Tests for lexicon sentiment scoring."""

from __future__ import annotations

import pytest

from continuum.db.models import DecisionRecord
from continuum.engine.sentiment import NEUTRAL_SCORE, SentimentScorer


def _record(reasoning="", constraints=""):
    return DecisionRecord(
        id=1, title="t", intent="i", constraints=constraints,
        final_decision="f", reasoning=reasoning,
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 50.0),
        ("nothing to see", 50.0),
        ("good great excellent", 65.0),
        ("bad poor", 40.0),
        ("good but difficult", 50.0),
        ("GOOD", 55.0),
    ],
)
def test_single_text(text, expected):
    assert SentimentScorer().score(text) == expected


def test_repeated_word_counts_each_occurrence():
    assert SentimentScorer().score("good good good") == 65.0
    assert SentimentScorer().score("good, really good") == 60.0


def test_substring_matches():
    # "winning" contains "win"
    assert SentimentScorer().score("winning") == 55.0


def test_clamped_high():
    assert SentimentScorer().score("great " * 30) == 100.0


def test_clamped_low():
    assert SentimentScorer().score("failure " * 30) == 0.0


def test_collection_mean_of_clamped_scores():
    scorer = SentimentScorer()
    # 100 (clamped from 200) and 50 → 75
    assert scorer.score(["great " * 30, "neutral"]) == 75.0


def test_empty_collection_is_neutral():
    assert SentimentScorer().score([]) == NEUTRAL_SCORE


def test_records_scored_on_reasoning_and_constraints():
    records = [_record(reasoning="happy", constraints="worried"), _record(reasoning="confident")]
    assert SentimentScorer().score(records) == pytest.approx((50.0 + 55.0) / 2)


def test_custom_lexicon():
    scorer = SentimentScorer(positive=["Yay"], negative=["meh"])
    assert scorer.score("yay yay meh good") == 55.0
