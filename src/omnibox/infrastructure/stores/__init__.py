"""Tab and history stores the providers read from."""

from omnibox.infrastructure.stores.history import InMemoryHistoryStore, load_history
from omnibox.infrastructure.stores.tabs import InMemoryTabStore, load_tabs

__all__ = ["InMemoryHistoryStore", "InMemoryTabStore", "load_history", "load_tabs"]
