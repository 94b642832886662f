"""Suggests switching to an already open tab whose title or URL matches the input."""

from __future__ import annotations

import math
from typing import Optional

from omnibox.application.providers.base import BaseProvider
from omnibox.application.similarity import SimilarityScorer
from omnibox.domain.protocols import ResultsCallback, TabStore
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, MatchType, tab_destination
from omnibox.logger import get_logger

logger = get_logger("providers.open_tab")

BASE_RELEVANCE = 1100
SIMILARITY_WEIGHT = 300
MAX_RELEVANCE = 1500
# Ceiling for tabs whose URL does not literally contain the query
NO_URL_MATCH_CAP = 1200


class OpenTabProvider(BaseProvider):
    name = "OpenTabProvider"

    def __init__(
        self,
        tab_store: TabStore,
        scorer: Optional[SimilarityScorer] = None,
        min_query_length: int = 3,
    ) -> None:
        super().__init__()
        self._tabs = tab_store
        self._scorer = scorer or SimilarityScorer()
        self._min_query_length = min_query_length

    def start(self, input: AutocompleteInput, on_results: ResultsCallback) -> None:
        if len(input.text) < self._min_query_length:
            self.emit_now(on_results, [])
            return
        super().start(input, on_results)

    async def run(self, input: AutocompleteInput, emit: ResultsCallback) -> None:
        query = input.lowered
        tabs = await self._tabs.list_tabs()

        results: list[AutocompleteMatch] = []
        for tab in tabs:
            url_lower = tab.url.lower()
            best = max(self._scorer(query, tab.title.lower()), self._scorer(query, url_lower))
            if best <= 0:
                continue

            relevance = min(MAX_RELEVANCE, math.ceil(BASE_RELEVANCE + best * SIMILARITY_WEIGHT))
            if query not in url_lower:
                relevance = min(NO_URL_MATCH_CAP, relevance)

            results.append(
                AutocompleteMatch(
                    provider_name=self.name,
                    relevance=relevance,
                    contents=tab.title,
                    description=f"Switch to this tab - {tab.url}",
                    destination_url=tab_destination(tab),
                    type=MatchType.OPEN_TAB,
                    is_default=True,
                )
            )

        logger.debug(f"Matched {len(results)} of {len(tabs)} open tab(s)")
        emit(results)
