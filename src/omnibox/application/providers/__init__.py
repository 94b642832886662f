"""Suggestion providers."""

from omnibox.application.providers.base import BaseProvider
from omnibox.application.providers.history_url import HistoryURLProvider
from omnibox.application.providers.open_tab import OpenTabProvider
from omnibox.application.providers.pedal import PedalProvider
from omnibox.application.providers.search import SearchProvider
from omnibox.application.providers.zero_suggest import ZeroSuggestProvider

__all__ = [
    "BaseProvider",
    "HistoryURLProvider",
    "OpenTabProvider",
    "PedalProvider",
    "SearchProvider",
    "ZeroSuggestProvider",
]
