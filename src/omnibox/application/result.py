"""
Accumulated matches for the current query.

The result set does not maintain its invariants on its own: callers run
``deduplicate()`` and ``sort()`` before reading ``get_top_matches()``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from omnibox.domain.types import AutocompleteMatch

DEFAULT_MAX_RESULTS = 8


class AutocompleteResult:
    def __init__(self, max_results: int = DEFAULT_MAX_RESULTS) -> None:
        self._matches: list[AutocompleteMatch] = []
        self.max_results = max_results

    def __len__(self) -> int:
        return len(self._matches)

    @property
    def matches(self) -> list[AutocompleteMatch]:
        return list(self._matches)

    def add_match(self, match: AutocompleteMatch) -> None:
        self._matches.append(match)

    def add_matches(self, matches: Iterable[AutocompleteMatch]) -> None:
        self._matches.extend(matches)

    def clear(self) -> None:
        self._matches = []

    def deduplicate(self) -> None:
        """Keep the highest-relevance match per destination."""
        self.sort()
        seen: set[str] = set()
        unique: list[AutocompleteMatch] = []
        for match in self._matches:
            if match.destination_url in seen:
                continue
            seen.add(match.destination_url)
            unique.append(match)
        self._matches = unique

    def sort(self) -> None:
        # list.sort is stable, so equal relevance keeps insertion order
        self._matches.sort(key=lambda match: match.relevance, reverse=True)

    def get_top_matches(self, limit: Optional[int] = None) -> list[AutocompleteMatch]:
        if limit is None:
            limit = self.max_results
        return self._matches[: max(limit, 0)]
