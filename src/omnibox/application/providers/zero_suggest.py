"""Suggestions shown on focus before anything is typed.

Open tabs are delivered as soon as the tab store answers, without waiting for
history. The history batch then carries the tabs along with it, since every
batch replaces the provider's previous contribution.
"""

from __future__ import annotations

from omnibox.application.providers.base import BaseProvider
from omnibox.domain.protocols import HistoryStore, ResultsCallback, TabStore
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, InputType, MatchType, tab_destination
from omnibox.logger import get_logger

logger = get_logger("providers.zero_suggest")

TAB_BASE_RELEVANCE = 800
HISTORY_BASE_RELEVANCE = 700
RELEVANCE_STEP = 50


class ZeroSuggestProvider(BaseProvider):
    name = "ZeroSuggestProvider"

    def __init__(
        self,
        tab_store: TabStore,
        history_store: HistoryStore,
        tab_limit: int = 10,
        history_limit: int = 5,
    ) -> None:
        super().__init__()
        self._tabs = tab_store
        self._history = history_store
        self._tab_limit = tab_limit
        self._history_limit = history_limit

    def start(self, input: AutocompleteInput, on_results: ResultsCallback) -> None:
        if input.type != InputType.FOCUS or input.text:
            self.emit_now(on_results, [])
            return
        super().start(input, on_results)

    async def run(self, input: AutocompleteInput, emit: ResultsCallback) -> None:
        tabs = await self._tabs.list_tabs()
        tab_matches = [
            AutocompleteMatch(
                provider_name=self.name,
                relevance=TAB_BASE_RELEVANCE - index * RELEVANCE_STEP,
                contents=tab.title,
                description=f"Switch to this tab - {tab.url}",
                destination_url=tab_destination(tab),
                type=MatchType.OPEN_TAB,
            )
            for index, tab in enumerate(tabs[: self._tab_limit])
        ]
        emit(tab_matches)

        history = await self._history.list_entries()
        most_visited = sorted(history, key=lambda entry: entry.visit_count, reverse=True)[: self._history_limit]
        history_matches = [
            AutocompleteMatch(
                provider_name=self.name,
                relevance=HISTORY_BASE_RELEVANCE - index * RELEVANCE_STEP,
                contents=entry.title,
                description=entry.url,
                destination_url=entry.url,
                type=MatchType.ZERO_SUGGEST,
            )
            for index, entry in enumerate(most_visited)
        ]
        logger.debug(f"Zero suggest: {len(tab_matches)} tab(s), {len(history_matches)} history entr(ies)")
        emit(tab_matches + history_matches)
