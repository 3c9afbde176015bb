"""Heuristic insight generation over the decision history.

Four independent analyzers, each a pure function of the record list:

  patterns      time pressure, low emotional average, recurring clusters, growth mindset
  biases        confirmation bias, sunk-cost language, emotional decisions, availability bias
  improvements  documentation quality, follow-up coverage, framework usage, decision speed
  sentiment     sentiment trend, work/personal emotion gap, negative constraint language

Thresholds and confidence values are fixed constants; the keyword and phrase
tables (``InsightRules``) are data and may be swapped. Every analyzer returns
an empty list, never an error, when its data is insufficient.

``InsightGenerator.run`` is the asynchronous entry point: it waits a fixed
latency before computing, then resolves with the insights for one kind.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from continuum.db.models import DecisionRecord
from continuum.engine.clustering import SimilarityClusterer
from continuum.engine.query import QueryEngine
from continuum.engine.sentiment import SentimentScorer
from continuum.engine.tagging import has_tag

logger = logging.getLogger(__name__)

SUNK_COST_PHRASES: tuple[str, ...] = ("already invested", "too late to change", "can't waste")
FRAMEWORK_KEYWORDS: tuple[str, ...] = ("framework", "process", "method")
SPEED_KEYWORDS: tuple[str, ...] = ("quick", "immediate")

DEFAULT_LATENCY = 1.0
DEFAULT_RECENT_WINDOW = 5

# Availability bias is only judged with enough history on both sides.
_AVAILABILITY_MIN_TOTAL = 10
_AVAILABILITY_MIN_RECENT = 3


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Insight:
    """A short heuristic observation about the decision history."""

    title: str
    message: str
    confidence: int
    severity: Severity = Severity.INFO
    icon: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


@dataclass
class InsightRules:
    """Keyword and phrase tables consulted by the analyzers."""

    sunk_cost_phrases: tuple[str, ...] = SUNK_COST_PHRASES
    framework_keywords: tuple[str, ...] = FRAMEWORK_KEYWORDS
    speed_keywords: tuple[str, ...] = SPEED_KEYWORDS
    recent_window: int = DEFAULT_RECENT_WINDOW


REPORT_TITLES: dict[str, str] = {
    "patterns": "Pattern Analysis",
    "biases": "Cognitive Bias Detection",
    "improvements": "Improvement Suggestions",
    "sentiment": "Sentiment Analysis",
}
KINDS: tuple[str, ...] = tuple(REPORT_TITLES)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _percent(count: int, total: int) -> int:
    """Rounded percentage, halves rounding up."""
    return math.floor(count / total * 100 + 0.5)


def _mean_emotion(records: Sequence[DecisionRecord]) -> float:
    return sum(r.emotional_state for r in records) / len(records)


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(n in lowered for n in needles)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class InsightGenerator:
    """Runs the four analyzers over a record collection."""

    def __init__(
        self,
        *,
        clusterer: SimilarityClusterer | None = None,
        scorer: SentimentScorer | None = None,
        rules: InsightRules | None = None,
        latency: float = DEFAULT_LATENCY,
    ) -> None:
        self.clusterer = clusterer or SimilarityClusterer()
        self.scorer = scorer or SentimentScorer()
        self.rules = rules or InsightRules()
        self.latency = latency
        self._analyzers: dict[str, Callable[[Sequence[DecisionRecord]], list[Insight]]] = {
            "patterns": self.analyze_patterns,
            "biases": self.detect_biases,
            "improvements": self.suggest_improvements,
            "sentiment": self.analyze_sentiment,
        }

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def analyze(self, kind: str, records: Sequence[DecisionRecord]) -> list[Insight]:
        """Synchronously compute insights of *kind* over *records*.

        Records are ordered newest first before analysis so that the
        "recent" window always means the most recent decisions.

        Raises:
            ValueError: if *kind* is not one of ``KINDS``.
        """
        analyzer = self._analyzer(kind)
        ordered = QueryEngine().query(records)
        return analyzer(ordered)

    async def run(self, kind: str, records: Sequence[DecisionRecord]) -> list[Insight]:
        """Wait ``latency`` seconds, then resolve with the insights of *kind*.

        The records are snapshotted when the run starts; concurrent runs
        share no state, so a caller that fires several should keep the last.

        Raises:
            ValueError: if *kind* is not one of ``KINDS``.
        """
        self._analyzer(kind)
        snapshot = [r.copy() for r in records]
        logger.debug("Insight run '%s' queued over %d decisions", kind, len(snapshot))
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        insights = self.analyze(kind, snapshot)
        logger.debug("Insight run '%s' produced %d insights", kind, len(insights))
        return insights

    def submit(self, kind: str, records: Sequence[DecisionRecord]) -> InsightTask:
        """Schedule :meth:`run` on the running event loop and return its handle.

        *records* is copied here, so later changes to the caller's list do
        not reach the scheduled run.
        """
        snapshot = [r.copy() for r in records]
        return InsightTask(kind, asyncio.ensure_future(self.run(kind, snapshot)))

    def _analyzer(self, kind: str) -> Callable[[Sequence[DecisionRecord]], list[Insight]]:
        try:
            return self._analyzers[kind]
        except KeyError:
            raise ValueError(
                f"Unknown insight kind '{kind}'. Expected one of: {', '.join(KINDS)}"
            ) from None

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def analyze_patterns(self, records: Sequence[DecisionRecord]) -> list[Insight]:
        insights: list[Insight] = []
        total = len(records)
        if total == 0:
            return insights

        time_count = sum(
            1 for r in records
            if "time" in r.constraints.lower() or has_tag(r.tags, "time-sensitive")
        )
        if time_count > total * 0.3:
            insights.append(Insight(
                title="Time Pressure Pattern",
                message=(
                    f"You make time-sensitive decisions in {_percent(time_count, total)}% of cases. "
                    "Consider if artificial deadlines are helping or hurting decision quality."
                ),
                confidence=85,
                icon="⏳",
            ))

        avg_emotion = _mean_emotion(records)
        if avg_emotion < 4:
            insights.append(Insight(
                title="Emotional State Alert",
                message=(
                    f"Your average emotional state during decisions is {avg_emotion:.1f}/10. "
                    "Lower emotional states can lead to risk-averse or impulsive choices."
                ),
                confidence=90,
                severity=Severity.WARNING,
                icon="😟",
            ))

        clusters = self.clusterer.cluster(records)
        if clusters:
            insights.append(Insight(
                title="Recurring Decision Patterns",
                message=(
                    f"Found {len(clusters)} clusters of similar decisions. This suggests recurring "
                    "themes in your life that might benefit from standardized decision frameworks."
                ),
                confidence=75,
                icon="🔄",
            ))

        learning_count = sum(
            1 for r in records
            if "learn" in r.reasoning.lower() or has_tag(r.tags, "learning")
        )
        if learning_count > total * 0.4:
            insights.append(Insight(
                title="Growth Mindset Detected",
                message=(
                    f"{_percent(learning_count, total)}% of your decisions prioritize learning and "
                    "growth. This is a strong indicator of long-term thinking."
                ),
                confidence=88,
                icon="📚",
            ))

        return insights

    # ------------------------------------------------------------------
    # Biases
    # ------------------------------------------------------------------

    def detect_biases(self, records: Sequence[DecisionRecord]) -> list[Insight]:
        insights: list[Insight] = []
        total = len(records)
        if total == 0:
            return insights

        with_alternatives = sum(1 for r in records if len(r.alternatives) > 50)
        if with_alternatives / total < 0.5:
            insights.append(Insight(
                title="Potential Confirmation Bias",
                message=(
                    f"Only {_percent(with_alternatives, total)}% of decisions thoroughly consider "
                    "alternatives. This might indicate confirmation bias - seeking information "
                    "that confirms pre-existing views."
                ),
                confidence=80,
                severity=Severity.WARNING,
                icon="🔍",
            ))

        sunk_cost = sum(
            1 for r in records if _contains_any(r.reasoning, self.rules.sunk_cost_phrases)
        )
        if sunk_cost > 0:
            insights.append(Insight(
                title="Sunk Cost Fallacy Alert",
                message=(
                    f"Found {sunk_cost} decisions with language suggesting sunk cost thinking. "
                    "Remember: past investments shouldn't dictate future decisions if better "
                    "alternatives exist."
                ),
                confidence=70,
                severity=Severity.DANGER,
                icon="💸",
            ))

        high_emotion = sum(
            1 for r in records if r.emotional_state <= 3 or r.emotional_state >= 8
        )
        if high_emotion > total * 0.25:
            insights.append(Insight(
                title="Emotional Decision Making",
                message=(
                    f"{_percent(high_emotion, total)}% of decisions were made in high-emotion "
                    'states. Consider implementing a "cooling off" period for important decisions.'
                ),
                confidence=82,
                severity=Severity.WARNING,
                icon="😤",
            ))

        if self._recent_differs(records):
            insights.append(Insight(
                title="Availability Bias Warning",
                message=(
                    "Your most recent decisions show different patterns than historical ones. "
                    "This could be availability bias - overweighting recent, memorable information."
                ),
                confidence=75,
                icon="📰",
            ))

        return insights

    def _recent_differs(self, records: Sequence[DecisionRecord]) -> bool:
        """True when the recent window departs from history in mood and topics.

        Mood: mean emotional state differs by more than 2. Topics: fewer than
        half of the recent window's distinct tags also occur in history.
        """
        recent = records[: self.rules.recent_window]
        historical = records[len(recent):]
        if (
            len(recent) < _AVAILABILITY_MIN_RECENT
            or len(records) < _AVAILABILITY_MIN_TOTAL
            or not historical
        ):
            return False

        emotion_delta = abs(_mean_emotion(recent) - _mean_emotion(historical))

        recent_tags = {t.casefold() for r in recent for t in r.tags}
        historical_tags = {t.casefold() for r in historical for t in r.tags}
        overlap = len(recent_tags & historical_tags)
        tag_similarity = overlap / max(len(recent_tags), 1)

        return emotion_delta > 2 and tag_similarity < 0.5

    # ------------------------------------------------------------------
    # Improvements
    # ------------------------------------------------------------------

    def suggest_improvements(self, records: Sequence[DecisionRecord]) -> list[Insight]:
        insights: list[Insight] = []
        total = len(records)
        if total == 0:
            return insights

        avg_reasoning = sum(len(r.reasoning) for r in records) / total
        if avg_reasoning < 100:
            insights.append(Insight(
                title="Improve Documentation",
                message=(
                    f"Your average reasoning length is {math.floor(avg_reasoning + 0.5)} characters. "
                    "More detailed reasoning improves future recall and learning. "
                    "Aim for at least 200 characters."
                ),
                confidence=85,
                icon="📝",
            ))

        follow_ups = sum(1 for r in records if has_tag(r.tags, "follow-up"))
        if follow_ups < total * 0.1:
            insights.append(Insight(
                title="Add Decision Follow-ups",
                message=(
                    "Only a few decisions have follow-up tracking. Consider adding 'follow-up' "
                    "tags to important decisions to review outcomes later."
                ),
                confidence=90,
                icon="🔁",
            ))

        frameworks = sum(
            1 for r in records if _contains_any(r.reasoning, self.rules.framework_keywords)
        )
        if frameworks < total * 0.2:
            insights.append(Insight(
                title="Use Decision Frameworks",
                message=(
                    f"Only {_percent(frameworks, total)}% of decisions mention using a framework. "
                    "Structured approaches like Cost-Benefit Analysis or Pro/Con lists can "
                    "improve consistency."
                ),
                confidence=88,
                icon="⚙️",
            ))

        quick = sum(
            1 for r in records if _contains_any(r.constraints, self.rules.speed_keywords)
        )
        if quick > total * 0.4:
            insights.append(Insight(
                title="Balance Decision Speed",
                message=(
                    f"{_percent(quick, total)}% of decisions are made under time pressure. "
                    "Consider if some decisions deserve more deliberate thinking time."
                ),
                confidence=83,
                icon="⏱️",
            ))

        return insights

    # ------------------------------------------------------------------
    # Sentiment
    # ------------------------------------------------------------------

    def analyze_sentiment(self, records: Sequence[DecisionRecord]) -> list[Insight]:
        insights: list[Insight] = []
        if not records:
            return insights

        recent = self.scorer.score(records[: self.rules.recent_window])
        overall = self.scorer.score(records)
        if recent > overall + 10:
            insights.append(Insight(
                title="Improving Decision Sentiment",
                message=(
                    "Your recent decisions show more positive language than your historical "
                    "average. This could indicate growing confidence or satisfaction."
                ),
                confidence=78,
                icon="📈",
            ))
        elif recent < overall - 10:
            insights.append(Insight(
                title="Declining Decision Sentiment",
                message=(
                    "Your recent decisions show more negative language than your historical "
                    "average. Consider if external factors are affecting your decision-making mood."
                ),
                confidence=76,
                severity=Severity.WARNING,
                icon="📉",
            ))

        work = [r for r in records if has_tag(r.tags, "work")]
        personal = [r for r in records if has_tag(r.tags, "personal")]
        if work and personal:
            work_emotion = _mean_emotion(work)
            personal_emotion = _mean_emotion(personal)
            if abs(work_emotion - personal_emotion) > 2:
                insights.append(Insight(
                    title="Work/Personal Emotion Gap",
                    message=(
                        f"Significant emotion difference between work decisions "
                        f"({work_emotion:.1f}/10) and personal decisions ({personal_emotion:.1f}/10)."
                    ),
                    confidence=82,
                    icon="🏢",
                ))

        long_constraints = [r.constraints for r in records if len(r.constraints) > 100]
        if long_constraints and self.scorer.score(long_constraints) < 40:
            insights.append(Insight(
                title="Negative Constraint Language",
                message=(
                    "Your constraint descriptions tend to use negative language. Reframing "
                    "constraints as challenges or parameters might improve decision mindset."
                ),
                confidence=79,
                severity=Severity.WARNING,
                icon="🚧",
            ))

        return insights


@dataclass
class InsightTask:
    """Handle for a deferred insight run.

    ``cancel()`` is a no-op: once submitted, a run always completes. Callers
    that no longer want the result simply ignore it.
    """

    kind: str
    _future: asyncio.Future[list[Insight]] = field(repr=False)

    def cancel(self) -> bool:
        return False

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> list[Insight]:
        return self._future.result()

    def __await__(self):
        return self._future.__await__()
