"""Domain types and protocols for the omnibox engine."""

from omnibox.domain.protocols import (
    AutocompleteProvider,
    HistoryStore,
    Navigator,
    ResultsCallback,
    SuggestClient,
    TabStore,
    UpdateCallback,
)
from omnibox.domain.types import (
    AutocompleteInput,
    AutocompleteMatch,
    HistoryEntry,
    InputType,
    MatchType,
    TabInfo,
    tab_destination,
)

__all__ = [
    "AutocompleteInput",
    "AutocompleteMatch",
    "AutocompleteProvider",
    "HistoryEntry",
    "HistoryStore",
    "InputType",
    "MatchType",
    "Navigator",
    "ResultsCallback",
    "SuggestClient",
    "TabInfo",
    "TabStore",
    "UpdateCallback",
    "tab_destination",
]
