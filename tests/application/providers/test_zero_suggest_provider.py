"""Tests for ZeroSuggestProvider."""

import asyncio

import pytest

from omnibox.application.providers.zero_suggest import ZeroSuggestProvider
from omnibox.domain.types import MatchType, TabInfo
from omnibox.infrastructure.stores import InMemoryHistoryStore, InMemoryTabStore
from tests.helpers import FailingHistoryStore, Recorder, drain, focus, keystroke


class GatedHistoryStore:
    """History store that answers only after ``release``."""

    def __init__(self, entries):
        self._entries = entries
        self._released = asyncio.Event()

    def release(self) -> None:
        self._released.set()

    async def list_entries(self):
        await self._released.wait()
        return list(self._entries)


class TestZeroSuggestProvider:
    """Suggestions on focus with an empty address bar."""

    @pytest.mark.asyncio
    async def test_focus_with_empty_text_suggests_tabs_then_history(self, tab_store, history_store):
        provider = ZeroSuggestProvider(tab_store, history_store)
        recorder = Recorder()

        provider.start(focus(), recorder)
        await drain()

        assert len(recorder.calls) == 2
        tab_batch, full_batch = recorder.calls

        assert [match.relevance for match in tab_batch] == [800, 750, 700]
        assert all(match.type is MatchType.OPEN_TAB for match in tab_batch)
        assert [match.destination_url for match in tab_batch] == ["space-1:1", "space-1:2", "space-1:3"]

        history_matches = [match for match in full_batch if match.type is MatchType.ZERO_SUGGEST]
        assert full_batch[: len(tab_batch)] == tab_batch
        assert [match.destination_url for match in history_matches] == [
            "http://localhost:3000/",
            "https://www.google.com/",
            "https://stackoverflow.com/questions",
            "https://news.ycombinator.com/",
            "https://github.com/",
        ]
        assert [match.relevance for match in history_matches] == [700, 650, 600, 550, 500]

    @pytest.mark.asyncio
    async def test_tabs_are_shown_without_waiting_for_history(self, tab_store, history):
        history_store = GatedHistoryStore(history)
        provider = ZeroSuggestProvider(tab_store, history_store)
        recorder = Recorder()

        provider.start(focus(), recorder)
        await drain()
        assert len(recorder.calls) == 1
        assert len(recorder.last) == 3

        history_store.release()
        await drain()
        assert len(recorder.calls) == 2
        assert len(recorder.last) == 8

    @pytest.mark.asyncio
    async def test_limits_recent_tabs(self):
        tabs = [TabInfo(id=i, title=f"Tab {i}", url=f"https://{i}.example/", space_id="s") for i in range(15)]
        provider = ZeroSuggestProvider(InMemoryTabStore(tabs, active_space="s"), InMemoryHistoryStore())
        recorder = Recorder()

        provider.start(focus(), recorder)
        await drain()

        assert len(recorder.last) == 10
        assert recorder.last[0].destination_url == "s:0"
        assert recorder.last[-1].relevance == 350

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query_input", [keystroke(""), keystroke("git"), focus("git")])
    async def test_only_fires_on_empty_focus(self, tab_store, history_store, query_input):
        provider = ZeroSuggestProvider(tab_store, history_store)
        recorder = Recorder()

        provider.start(query_input, recorder)
        await drain()

        assert recorder.calls == [[]]

    @pytest.mark.asyncio
    async def test_history_failure_keeps_tab_batch(self, tab_store):
        provider = ZeroSuggestProvider(tab_store, FailingHistoryStore())
        recorder = Recorder()

        provider.start(focus(), recorder)
        await drain()

        assert len(recorder.calls) == 1
        assert len(recorder.last) == 3
        assert not provider.is_running
