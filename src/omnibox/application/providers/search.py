"""Verbatim search plus remote query suggestions."""

from __future__ import annotations

import math
from typing import Optional

from omnibox.application.providers.base import BaseProvider
from omnibox.application.similarity import SimilarityScorer
from omnibox.domain.protocols import ResultsCallback, SuggestClient
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, MatchType
from omnibox.infrastructure.search.suggest_client import SuggestClientError
from omnibox.logger import get_logger
from omnibox.url import DEFAULT_SEARCH_URL, create_search_url, get_url_from_input

logger = get_logger("providers.search")

VERBATIM_RELEVANCE = 1300
VERBATIM_URL_RELEVANCE = 1250
SUGGESTION_BASE_RELEVANCE = 800
SUGGESTION_STEP = 50
SIMILARITY_WEIGHT = 200
MAX_SUGGESTION_RELEVANCE = 1000


class SearchProvider(BaseProvider):
    """Emits a "search for what you typed" match right away, then suggestions.

    ``stop`` cancels an outstanding suggestion request.
    """

    name = "SearchProvider"

    def __init__(
        self,
        client: Optional[SuggestClient] = None,
        scorer: Optional[SimilarityScorer] = None,
        search_url: str = DEFAULT_SEARCH_URL,
    ) -> None:
        super().__init__()
        self._client = client
        self._scorer = scorer or SimilarityScorer()
        self._search_url = search_url

    def start(self, input: AutocompleteInput, on_results: ResultsCallback) -> None:
        if not input.text:
            self.emit_now(on_results, [])
            return
        super().start(input, on_results)

    async def run(self, input: AutocompleteInput, emit: ResultsCallback) -> None:
        text = input.text
        verbatim = AutocompleteMatch(
            provider_name=self.name,
            relevance=VERBATIM_URL_RELEVANCE if get_url_from_input(text) else VERBATIM_RELEVANCE,
            contents=text,
            description=f'Search for "{text}"',
            destination_url=create_search_url(text, self._search_url),
            type=MatchType.VERBATIM,
            is_default=True,
        )
        emit([verbatim])

        if self._client is None:
            return

        try:
            suggestions = await self._client.fetch(text)
        except SuggestClientError as e:
            logger.warning(f"Search suggestions unavailable: {e}")
            return

        results = [verbatim]
        for index, suggestion in enumerate(suggestions):
            base = SUGGESTION_BASE_RELEVANCE - index * SUGGESTION_STEP
            similarity = self._scorer(text.lower(), suggestion.lower())
            results.append(
                AutocompleteMatch(
                    provider_name=self.name,
                    relevance=min(MAX_SUGGESTION_RELEVANCE, math.ceil(base + similarity * SIMILARITY_WEIGHT)),
                    contents=suggestion,
                    destination_url=create_search_url(suggestion, self._search_url),
                    type=MatchType.SEARCH_QUERY,
                )
            )
        emit(results)
