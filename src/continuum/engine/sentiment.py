"""Lexicon-based sentiment scoring.

score(text) = 50 + 5 × (positive word occurrences) − 5 × (negative word
occurrences), clamped to [0, 100]. Words are matched as substrings of the
lower-cased text, not as tokens, so "stressed out" hits "stressed" and
"winning" hits "win". Every occurrence counts: "good, really good" scores
60, where once-per-word scoring would give 55. Repeated words are read as
emphasis.

A collection of texts scores as the mean of the per-text (already clamped)
scores; an empty collection scores 50.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from continuum.db.models import DecisionRecord

NEUTRAL_SCORE = 50.0
_STEP = 5

POSITIVE_WORDS: tuple[str, ...] = (
    "good", "great", "excellent", "positive", "happy",
    "satisfied", "confident", "optimistic", "success", "win",
)
NEGATIVE_WORDS: tuple[str, ...] = (
    "bad", "poor", "negative", "unhappy", "stressed",
    "anxious", "worried", "failure", "lose", "difficult",
)


class SentimentScorer:
    """Scores free text against a positive and a negative lexicon."""

    def __init__(
        self,
        positive: Sequence[str] | None = None,
        negative: Sequence[str] | None = None,
    ) -> None:
        self.positive = tuple(w.lower() for w in (POSITIVE_WORDS if positive is None else positive))
        self.negative = tuple(w.lower() for w in (NEGATIVE_WORDS if negative is None else negative))

    def score(self, text: str | Iterable[str | DecisionRecord]) -> float:
        """Score a single text, or average over a collection of texts.

        Records in a collection are scored on their reasoning and
        constraints together.
        """
        if isinstance(text, str):
            return self._score_one(text)

        scores = [self._score_one(_record_text(item)) for item in text]
        if not scores:
            return NEUTRAL_SCORE
        return sum(scores) / len(scores)

    def _score_one(self, text: str) -> float:
        lowered = (text or "").lower()
        score = NEUTRAL_SCORE
        for word in self.positive:
            score += _STEP * lowered.count(word)
        for word in self.negative:
            score -= _STEP * lowered.count(word)
        return float(max(0.0, min(100.0, score)))


def _record_text(item: str | DecisionRecord) -> str:
    if isinstance(item, DecisionRecord):
        return f"{item.reasoning} {item.constraints}"
    return item
