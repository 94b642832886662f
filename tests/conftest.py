"""Shared fixtures for omnibox tests."""

import pytest

from omnibox.domain.types import HistoryEntry, TabInfo
from omnibox.infrastructure.stores import InMemoryHistoryStore, InMemoryTabStore


@pytest.fixture
def github_tab() -> TabInfo:
    return TabInfo(id=1, title="GitHub", url="https://github.com/", space_id="space-1")


@pytest.fixture
def tabs() -> list[TabInfo]:
    return [
        TabInfo(id=1, title="GitHub", url="https://github.com/", space_id="space-1"),
        TabInfo(id=2, title="Python Docs", url="https://docs.python.org/3/", space_id="space-1"),
        TabInfo(id=3, title="Hacker News", url="https://news.ycombinator.com/", space_id="space-1"),
        TabInfo(id=4, title="GitLab", url="https://gitlab.com/", space_id="space-2"),
    ]


@pytest.fixture
def history() -> list[HistoryEntry]:
    return [
        HistoryEntry(id=1, url="https://www.google.com/", title="Google", visit_count=100, typed_count=20),
        HistoryEntry(id=2, url="https://github.com/", title="GitHub", visit_count=50, typed_count=10),
        HistoryEntry(id=3, url="https://stackoverflow.com/questions", title="Stack Overflow", visit_count=80),
        HistoryEntry(id=4, url="https://developer.mozilla.org/en-US/", title="MDN Web Docs", visit_count=30),
        HistoryEntry(id=5, url="http://localhost:3000/", title="Local Dev Server", visit_count=200, typed_count=50),
        HistoryEntry(id=6, url="https://news.ycombinator.com/", title="Hacker News", visit_count=60),
    ]


@pytest.fixture
def tab_store(tabs) -> InMemoryTabStore:
    return InMemoryTabStore(tabs, active_space="space-1")


@pytest.fixture
def history_store(history) -> InMemoryHistoryStore:
    return InMemoryHistoryStore(history)
