"""Tests for tab and history stores."""

import json

import pytest
from pydantic import ValidationError

from omnibox.domain.types import HistoryEntry, TabInfo
from omnibox.infrastructure.stores import InMemoryHistoryStore, InMemoryTabStore, load_history, load_tabs


class TestInMemoryTabStore:
    @pytest.mark.asyncio
    async def test_lists_only_active_space(self, tabs):
        store = InMemoryTabStore(tabs, active_space="space-2")
        assert [tab.title for tab in await store.list_tabs()] == ["GitLab"]

        store.set_active_space("space-1")
        assert [tab.id for tab in await store.list_tabs()] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_defaults_to_first_tab_space(self, tabs):
        store = InMemoryTabStore(tabs)
        assert store.active_space == "space-1"

    @pytest.mark.asyncio
    async def test_empty_store(self):
        store = InMemoryTabStore()
        assert store.active_space is None
        assert await store.list_tabs() == []

    @pytest.mark.asyncio
    async def test_activate_moves_tab_to_front(self, tab_store):
        tab_store.activate(3)
        assert [tab.id for tab in await tab_store.list_tabs()] == [3, 1, 2]

    def test_activate_unknown_tab(self, tab_store):
        with pytest.raises(KeyError):
            tab_store.activate(99)

    @pytest.mark.asyncio
    async def test_set_tabs_replaces_snapshot(self, tab_store):
        tab_store.set_tabs([TabInfo(id=9, title="New", url="https://new.example/", space_id="space-1")])
        assert [tab.id for tab in await tab_store.list_tabs()] == [9]


class TestInMemoryHistoryStore:
    @pytest.mark.asyncio
    async def test_add_entries(self):
        store = InMemoryHistoryStore()
        assert await store.list_entries() == []

        store.add(HistoryEntry(id=1, url="https://example.com/", title="Example"))
        [entry] = await store.list_entries()
        assert entry.visit_count == 0
        assert entry.typed_count == 0


class TestLoaders:
    @pytest.mark.asyncio
    async def test_load_tabs_from_list(self, tmp_path, tabs):
        path = tmp_path / "tabs.json"
        path.write_text(json.dumps([tab.model_dump() for tab in tabs]))

        store = load_tabs(path)

        assert store.active_space == "space-1"
        assert len(await store.list_tabs()) == 3

    @pytest.mark.asyncio
    async def test_load_tabs_from_object_with_active_space(self, tmp_path, tabs):
        path = tmp_path / "tabs.json"
        path.write_text(json.dumps({"active_space": "space-2", "tabs": [tab.model_dump() for tab in tabs]}))

        store = load_tabs(path)

        assert [tab.title for tab in await store.list_tabs()] == ["GitLab"]

    def test_load_tabs_rejects_invalid_records(self, tmp_path):
        path = tmp_path / "tabs.json"
        path.write_text(json.dumps([{"id": "one", "title": "Broken"}]))
        with pytest.raises(ValidationError):
            load_tabs(path)

    def test_load_tabs_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tabs(tmp_path / "nope.json")

    @pytest.mark.asyncio
    async def test_load_history(self, tmp_path, history):
        path = tmp_path / "history.json"
        path.write_text(json.dumps([entry.model_dump() for entry in history]))

        store = load_history(path)

        assert await store.list_entries() == history

    def test_load_history_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_history(tmp_path / "nope.json")
