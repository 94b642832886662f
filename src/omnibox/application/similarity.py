"""
String similarity used by providers to score candidates against typed text.

The metric is the Sørensen-Dice coefficient over character bigrams. Each bigram
of the first string can be matched at most once, so repeated bigrams are
counted as a multiset.
"""

from __future__ import annotations

from collections import Counter

DEFAULT_THRESHOLD = 0.4
_SUBSTRING_LENGTH = 2


def raw_similarity(first: str, second: str, case_sensitive: bool = False) -> float:
    """Return the unfloored Dice bigram similarity in ``[0, 1]``."""
    if not case_sensitive:
        first = first.lower()
        second = second.lower()

    if len(first) < _SUBSTRING_LENGTH or len(second) < _SUBSTRING_LENGTH:
        return 0.0

    remaining = Counter(first[i : i + _SUBSTRING_LENGTH] for i in range(len(first) - _SUBSTRING_LENGTH + 1))
    matches = 0
    for i in range(len(second) - _SUBSTRING_LENGTH + 1):
        bigram = second[i : i + _SUBSTRING_LENGTH]
        if remaining[bigram] > 0:
            remaining[bigram] -= 1
            matches += 1

    total = len(first) + len(second) - (_SUBSTRING_LENGTH - 1) * 2
    return (matches * 2) / total


class SimilarityScorer:
    """Dice similarity with a floor.

    Scores below ``threshold`` are reported as exactly ``0.0``, which callers
    treat as "no match signal" rather than a weak match.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Similarity threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold

    def __call__(self, first: str, second: str) -> float:
        return self.similarity(first, second)

    def similarity(self, first: str, second: str) -> float:
        score = raw_similarity(first, second)
        if score >= self.threshold:
            return score
        return 0.0

    def best(self, query: str, candidates: list[str]) -> float:
        """Highest floored similarity between ``query`` and any candidate."""
        return max((self.similarity(query, candidate) for candidate in candidates), default=0.0)


_default_scorer = SimilarityScorer()


def similarity(first: str, second: str) -> float:
    """Floored similarity using the default threshold."""
    return _default_scorer.similarity(first, second)
