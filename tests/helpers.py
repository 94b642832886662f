"""Builders and stub collaborators shared by omnibox tests."""

import asyncio
from typing import Optional

from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, HistoryEntry, InputType, MatchType, TabInfo


def make_match(
    destination: str,
    relevance: int,
    provider: str = "StubProvider",
    match_type: MatchType = MatchType.HISTORY_URL,
    contents: Optional[str] = None,
) -> AutocompleteMatch:
    return AutocompleteMatch(
        provider_name=provider,
        relevance=relevance,
        contents=contents or destination,
        destination_url=destination,
        type=match_type,
    )


def keystroke(text: str) -> AutocompleteInput:
    return AutocompleteInput(text=text, type=InputType.KEYSTROKE)


def focus(text: str = "") -> AutocompleteInput:
    return AutocompleteInput(text=text, type=InputType.FOCUS)


class Recorder:
    """Collects every batch or snapshot passed to a callback."""

    def __init__(self) -> None:
        self.calls: list[list[AutocompleteMatch]] = []

    def __call__(self, matches: list[AutocompleteMatch]) -> None:
        self.calls.append(list(matches))

    @property
    def last(self) -> list[AutocompleteMatch]:
        return self.calls[-1] if self.calls else []


class SlowTabStore:
    """Tab store whose answer is held back until ``release`` is called."""

    def __init__(self, tabs: list[TabInfo]) -> None:
        self._tabs = tabs
        self._released = asyncio.Event()
        self.calls = 0

    def release(self) -> None:
        self._released.set()

    async def list_tabs(self) -> list[TabInfo]:
        self.calls += 1
        await self._released.wait()
        return list(self._tabs)


class FailingHistoryStore:
    async def list_entries(self) -> list[HistoryEntry]:
        raise ConnectionError("history backend unavailable")


async def drain(rounds: int = 10) -> None:
    """Let pending tasks run for a few loop iterations."""
    for _ in range(rounds):
        await asyncio.sleep(0)
