"""History store implementations backed by memory or a JSON snapshot."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from omnibox.domain.types import HistoryEntry
from omnibox.logger import get_logger

logger = get_logger("stores.history")

_entry_list = TypeAdapter(list[HistoryEntry])


class InMemoryHistoryStore:
    """History entries kept in memory. Empty by default."""

    def __init__(self, entries: Iterable[HistoryEntry] = ()) -> None:
        self._entries = list(entries)

    def add(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    async def list_entries(self) -> list[HistoryEntry]:
        return list(self._entries)


def load_history(path: str | Path) -> InMemoryHistoryStore:
    """
    Load history entries from a JSON list.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If an entry is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"History snapshot not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        entries = _entry_list.validate_python(data)
    except ValidationError as e:
        logger.error(f"Invalid history snapshot {path}: {e}")
        raise

    logger.info(f"Loaded {len(entries)} history entr(ies) from {path}")
    return InMemoryHistoryStore(entries)
