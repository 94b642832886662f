"""Typed-URL and browsing history suggestions."""

from __future__ import annotations

import math
from typing import Optional

from omnibox.application.providers.base import BaseProvider
from omnibox.application.similarity import SimilarityScorer
from omnibox.domain.protocols import HistoryStore, ResultsCallback
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, HistoryEntry, MatchType
from omnibox.logger import get_logger
from omnibox.url import get_url_from_input

logger = get_logger("providers.history_url")

TYPED_URL_RELEVANCE = 1300
BASE_RELEVANCE = 900
SIMILARITY_WEIGHT = 300
TYPED_COUNT_WEIGHT = 10
EXACT_MATCH_BOOST = 200
EXACT_MATCH_FLOOR = 1400
PREFIX_MATCH_BOOST = 50
MAX_RELEVANCE = 1450
DEFAULT_MATCH_RELEVANCE = 1400


def _url_variants(text: str) -> tuple[str, str, str]:
    return text, f"http://{text}", f"https://{text}"


class HistoryURLProvider(BaseProvider):
    """Offers the typed text as a URL, then history entries resembling it."""

    name = "HistoryURLProvider"

    def __init__(self, history_store: HistoryStore, scorer: Optional[SimilarityScorer] = None) -> None:
        super().__init__()
        self._history = history_store
        self._scorer = scorer or SimilarityScorer()

    def start(self, input: AutocompleteInput, on_results: ResultsCallback) -> None:
        if not input.text:
            self.emit_now(on_results, [])
            return
        super().start(input, on_results)

    async def run(self, input: AutocompleteInput, emit: ResultsCallback) -> None:
        typed: list[AutocompleteMatch] = []
        url = get_url_from_input(input.text)
        if url:
            typed.append(
                AutocompleteMatch(
                    provider_name=self.name,
                    relevance=TYPED_URL_RELEVANCE,
                    contents=input.text,
                    description="Open URL",
                    destination_url=url,
                    type=MatchType.URL_WHAT_YOU_TYPED,
                    is_default=True,
                )
            )
            emit(typed)

        history = await self._history.list_entries()
        results = [match for entry in history if (match := self._score_entry(input, entry)) is not None]
        results.sort(key=lambda match: match.relevance, reverse=True)
        logger.debug(f"{len(results)} history match(es) for '{input.text}'")
        emit(typed + results)

    def _score_entry(self, input: AutocompleteInput, entry: HistoryEntry) -> Optional[AutocompleteMatch]:
        query = input.lowered
        url_lower = entry.url.lower()
        title_lower = entry.title.lower()

        url_similarity = self._scorer(query, url_lower)
        title_similarity = self._scorer(query, title_lower) if title_lower else 0.0
        best = max(url_similarity, title_similarity)
        is_prefix = url_lower.startswith(_url_variants(query))

        if best <= 0 and not is_prefix:
            return None

        similarity_score = math.ceil(BASE_RELEVANCE + best * SIMILARITY_WEIGHT)
        relevance = similarity_score + entry.typed_count * TYPED_COUNT_WEIGHT + entry.visit_count

        if url_lower in _url_variants(query):
            relevance = max(relevance + EXACT_MATCH_BOOST, EXACT_MATCH_FLOOR)
        elif is_prefix:
            relevance = max(relevance + PREFIX_MATCH_BOOST, similarity_score + PREFIX_MATCH_BOOST)

        relevance = min(relevance, MAX_RELEVANCE)

        inline = None
        if is_prefix and not input.prevent_inline_autocomplete and len(entry.url) > len(input.text):
            inline = entry.url

        return AutocompleteMatch(
            provider_name=self.name,
            relevance=relevance,
            contents=entry.url,
            description=entry.title,
            destination_url=entry.url,
            type=MatchType.HISTORY_URL,
            is_default=relevance > DEFAULT_MATCH_RELEVANCE,
            inline_completion=inline,
        )
