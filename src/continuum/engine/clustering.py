"""Greedy similarity clustering of decision records.

Single pass, order-dependent, not transitive:

  for i ascending, skipping records already clustered:
      for j > i, skipping records already clustered:
          similarity = 10 × |tags(i) ∩ tags(j)|
                     +  5 × |words of title(j) found in distinct words of title(i)|
          similarity ≥ 15  →  j joins i's cluster
      emit the cluster if it gained at least one member

Title overlap is deliberately one-directional: title(j)'s words are tested
against the *set* of title(i)'s words, so a word repeated in title(j) counts
each time it appears.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from continuum.db.models import DecisionRecord

TAG_WEIGHT = 10
TITLE_WORD_WEIGHT = 5
THRESHOLD = 15

_WORD_SPLIT_RE = re.compile(r"\W+")


def title_words(title: str) -> list[str]:
    """Split a title on non-word characters, lower-cased. Empty pieces are dropped."""
    return [w for w in _WORD_SPLIT_RE.split(title.lower()) if w]


def similarity(a: DecisionRecord, b: DecisionRecord) -> int:
    """Similarity of *b* to *a* (asymmetric in the title term)."""
    a_tags = {t.casefold() for t in a.tags}
    common_tags = sum(1 for t in b.tags if t.casefold() in a_tags)

    a_words = set(title_words(a.title))
    common_words = sum(1 for w in title_words(b.title) if w in a_words)

    return TAG_WEIGHT * common_tags + TITLE_WORD_WEIGHT * common_words


class SimilarityClusterer:
    """Groups records into clusters of related decisions."""

    def __init__(self, threshold: int = THRESHOLD) -> None:
        self.threshold = threshold

    def cluster(self, records: Sequence[DecisionRecord]) -> list[list[int]]:
        """Return clusters as lists of record indices (each of size ≥ 2).

        The first index of each cluster is its seed; members follow in
        ascending order. Empty input yields no clusters.
        """
        clusters: list[list[int]] = []
        assigned: set[int] = set()

        for i, seed in enumerate(records):
            if i in assigned:
                continue
            cluster = [i]
            for j in range(i + 1, len(records)):
                if j in assigned:
                    continue
                if similarity(seed, records[j]) >= self.threshold:
                    cluster.append(j)
                    assigned.add(j)
            if len(cluster) > 1:
                clusters.append(cluster)
                assigned.add(i)

        return clusters
