"""Tests for HistoryURLProvider."""

from dataclasses import replace

import pytest

from omnibox.application.providers.history_url import HistoryURLProvider
from omnibox.domain.types import MatchType
from omnibox.infrastructure.stores import InMemoryHistoryStore
from tests.helpers import FailingHistoryStore, Recorder, drain, keystroke


class TestHistoryURLProvider:
    """Typed URL and history matching."""

    @pytest.mark.asyncio
    async def test_empty_input_yields_empty_batch(self, history_store):
        provider = HistoryURLProvider(history_store)
        recorder = Recorder()

        provider.start(keystroke(""), recorder)

        assert recorder.calls == [[]]

    @pytest.mark.asyncio
    async def test_typed_url_is_sent_before_history(self, history_store):
        provider = HistoryURLProvider(history_store)
        recorder = Recorder()

        provider.start(keystroke("github.com"), recorder)
        await drain()

        assert len(recorder.calls) == 2
        [typed] = recorder.calls[0]
        assert typed.type is MatchType.URL_WHAT_YOU_TYPED
        assert typed.destination_url == "http://github.com"
        assert typed.relevance == 1300
        assert typed.is_default is True

        final = recorder.last
        assert final[0] == typed
        [history_match] = final[1:]
        assert history_match.type is MatchType.HISTORY_URL
        assert history_match.destination_url == "https://github.com/"
        assert history_match.description == "GitHub"
        # ceil(900 + 10/14 * 300) + 10 typed * 10 + 50 visits, plus the prefix bonus
        assert history_match.relevance == 1315
        assert history_match.inline_completion == "https://github.com/"
        assert history_match.is_default is False

    @pytest.mark.asyncio
    async def test_exact_url_match_is_boosted_and_capped(self, history_store):
        provider = HistoryURLProvider(history_store)
        recorder = Recorder()

        provider.start(keystroke("localhost:3000/"), recorder)
        await drain()

        match = next(m for m in recorder.last if m.destination_url == "http://localhost:3000/")
        assert match.relevance == 1450
        assert match.is_default is True

    @pytest.mark.asyncio
    async def test_prevent_inline_autocomplete(self, history_store):
        provider = HistoryURLProvider(history_store)
        recorder = Recorder()

        provider.start(replace(keystroke("github.com"), prevent_inline_autocomplete=True), recorder)
        await drain()

        assert all(match.inline_completion is None for match in recorder.last)

    @pytest.mark.asyncio
    async def test_non_url_without_history_yields_empty_batch(self):
        provider = HistoryURLProvider(InMemoryHistoryStore())
        recorder = Recorder()

        provider.start(keystroke("git"), recorder)
        await drain()

        assert recorder.calls == [[]]

    @pytest.mark.asyncio
    async def test_history_failure_keeps_typed_url(self):
        provider = HistoryURLProvider(FailingHistoryStore())
        recorder = Recorder()

        provider.start(keystroke("example.com"), recorder)
        await drain()

        assert len(recorder.calls) == 1
        assert recorder.last[0].destination_url == "http://example.com"
