"""Protocols for providers and the collaborators they read from."""

from typing import Callable, Protocol

from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, HistoryEntry, TabInfo

__all__ = [
    "AutocompleteProvider",
    "HistoryStore",
    "Navigator",
    "ResultsCallback",
    "SuggestClient",
    "TabStore",
    "UpdateCallback",
]

ResultsCallback = Callable[[list[AutocompleteMatch]], None]
"""Receives one provider batch. Each call replaces the provider's previous batch."""

UpdateCallback = Callable[[list[AutocompleteMatch]], None]
"""Receives a ranked top-N snapshot for display."""


class AutocompleteProvider(Protocol):
    """Contract implemented by every suggestion source.

    Providers are long-lived. ``start`` is invoked once per query generation and
    ``stop`` when that generation is superseded or cancelled.
    """

    name: str

    def start(self, input: AutocompleteInput, on_results: ResultsCallback) -> None:
        """Begin producing suggestions for ``input``.

        ``on_results`` may be called zero or more times, synchronously or after
        the provider suspends on a lookup.
        """
        ...

    def stop(self) -> None:
        """Request cancellation of in-flight work for the latest ``start``.

        Cancellation is best-effort: a batch already on its way may still arrive.
        """
        ...


class TabStore(Protocol):
    """Lists open tabs in the active browsing space, most recent first."""

    async def list_tabs(self) -> list[TabInfo]:
        ...


class HistoryStore(Protocol):
    """Lists visited entries. An empty list is a valid answer."""

    async def list_entries(self) -> list[HistoryEntry]:
        ...


class SuggestClient(Protocol):
    """Fetches remote search suggestions for a query."""

    async def fetch(self, query: str) -> list[str]:
        """Return suggested queries.

        `SuggestClientError` is raised if the request runs into any issues.
        """
        ...

    async def shutdown(self) -> None:
        """Close down any open connections."""
        ...


class Navigator(Protocol):
    """Browser actions the omnibox can trigger when a match is opened."""

    def go_to(self, url: str) -> None:
        ...

    def new_tab(self, url: str) -> None:
        ...

    def switch_to_tab(self, tab_id: int) -> None:
        ...

    def run_pedal(self, action: str) -> None:
        ...
