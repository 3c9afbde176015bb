"""Keyword-driven auto-tagging for decision records.

Each rule is a keyword family: if any of its keywords appears as a substring
of the lower-cased constraints + reasoning text, the rule's tag is emitted.
Rules are data (``TagRule``) so callers can extend or replace the table
without touching the classifier.

Usage:
    classifier = TagClassifier()
    tags = classifier.classify("Tight deadline", "Good for my career")
    # ['time-sensitive', 'work']
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class TagRule:
    """One keyword family → one canonical tag."""

    tag: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """Return True if any keyword occurs in *text* (already lower-cased)."""
        return any(keyword in text for keyword in self.keywords)


DEFAULT_TAG_RULES: tuple[TagRule, ...] = (
    TagRule("time-sensitive", ("time", "deadline", "urgent")),
    TagRule("financial", ("money", "budget", "cost", "paid")),
    TagRule("learning", ("learn", "experience", "growth", "skill")),
    TagRule("emotional", ("stress", "emotional", "feeling", "anxiety")),
    TagRule("work", ("work", "job", "career")),
    TagRule("personal", ("personal", "life", "family")),
)


class TagClassifier:
    """Derives heuristic tags from a decision's constraints and reasoning."""

    def __init__(self, rules: Sequence[TagRule] | None = None) -> None:
        self.rules: tuple[TagRule, ...] = tuple(DEFAULT_TAG_RULES if rules is None else rules)

    def classify(self, constraints: str, reasoning: str) -> list[str]:
        """Return the tags whose keyword family appears in the two texts.

        Tags come out in rule-table order, each at most once.
        """
        text = f"{constraints or ''} {reasoning or ''}".lower()
        return merge_tags(rule.tag for rule in self.rules if rule.matches(text))


def merge_tags(*groups: Iterable[str]) -> list[str]:
    """Union tag groups, case-insensitively, preserving first-seen order and casing.

    Blank tags are dropped and surrounding whitespace is trimmed, so
    ``merge_tags(["Work"], ["work", "learning"])`` gives ``["Work", "learning"]``.
    """
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for tag in group:
            cleaned = str(tag).strip()
            folded = cleaned.casefold()
            if not cleaned or folded in seen:
                continue
            seen.add(folded)
            merged.append(cleaned)
    return merged


def has_tag(tags: Iterable[str], tag: str) -> bool:
    """Case-insensitive tag membership."""
    wanted = tag.casefold()
    return any(t.casefold() == wanted for t in tags)
