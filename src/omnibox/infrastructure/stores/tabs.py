"""Tab store implementations backed by memory or a JSON snapshot."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from omnibox.domain.types import TabInfo
from omnibox.logger import get_logger

logger = get_logger("stores.tabs")

_tab_list = TypeAdapter(list[TabInfo])


class InMemoryTabStore:
    """Holds open tabs for every space and answers for the active one.

    Tabs are kept in recency order, most recently active first.
    """

    def __init__(self, tabs: Iterable[TabInfo] = (), active_space: Optional[str] = None) -> None:
        self._tabs = list(tabs)
        self._active_space = active_space
        if self._active_space is None and self._tabs:
            self._active_space = self._tabs[0].space_id

    @property
    def active_space(self) -> Optional[str]:
        return self._active_space

    def set_active_space(self, space_id: Optional[str]) -> None:
        self._active_space = space_id

    def set_tabs(self, tabs: Iterable[TabInfo]) -> None:
        self._tabs = list(tabs)

    def activate(self, tab_id: int) -> None:
        """Move a tab to the front of the recency order."""
        for index, tab in enumerate(self._tabs):
            if tab.id == tab_id:
                self._tabs.insert(0, self._tabs.pop(index))
                return
        raise KeyError(f"Unknown tab id: {tab_id}")

    async def list_tabs(self) -> list[TabInfo]:
        if not self._active_space:
            return []
        return [tab for tab in self._tabs if tab.space_id == self._active_space]


def load_tabs(path: str | Path, active_space: Optional[str] = None) -> InMemoryTabStore:
    """
    Load a tab snapshot from a JSON file.

    The file holds either a list of tabs or an object ``{"active_space": ..., "tabs": [...]}``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If a tab record is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tab snapshot not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        active_space = active_space or data.get("active_space")
        data = data.get("tabs", [])

    try:
        tabs = _tab_list.validate_python(data)
    except ValidationError as e:
        logger.error(f"Invalid tab snapshot {path}: {e}")
        raise

    logger.info(f"Loaded {len(tabs)} tab(s) from {path}")
    return InMemoryTabStore(tabs, active_space=active_space)
