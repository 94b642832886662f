"""Core value types shared by providers, the result set and the controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class InputType(str, Enum):
    """Why a query was started."""

    FOCUS = "focus"
    KEYSTROKE = "keystroke"


class MatchType(str, Enum):
    """Kind of suggestion; the UI picks the selection behaviour from it."""

    HISTORY_URL = "history-url"
    ZERO_SUGGEST = "zero-suggest"
    VERBATIM = "verbatim"
    URL_WHAT_YOU_TYPED = "url-what-you-typed"
    SEARCH_QUERY = "search-query"
    OPEN_TAB = "open-tab"
    PEDAL = "pedal"


@dataclass(frozen=True, slots=True)
class AutocompleteInput:
    """Input state for one autocomplete query."""

    text: str
    type: InputType = InputType.KEYSTROKE
    current_url: Optional[str] = None
    """URL of the page currently shown, if any."""
    prevent_inline_autocomplete: bool = False
    """Hint to providers that inline completion is unwanted."""

    @property
    def lowered(self) -> str:
        return self.text.lower()


@dataclass(frozen=True, slots=True)
class AutocompleteMatch:
    """A single autocomplete suggestion.

    ``destination_url`` is the identity of a suggestion: two matches with the
    same destination are the same suggestion regardless of provider or type.
    It holds a URL, a ``"<space_id>:<tab_id>"`` tab token or a pedal command.
    """

    provider_name: str
    relevance: int
    contents: str
    destination_url: str
    type: MatchType
    description: Optional[str] = None
    is_default: Optional[bool] = None
    inline_completion: Optional[str] = None


class TabInfo(BaseModel):
    """An open tab as reported by the tab store."""

    id: int = Field(..., description="Tab identifier")
    title: str = Field(default="", description="Tab title")
    url: str = Field(..., description="URL loaded in the tab")
    space_id: str = Field(..., description="Browsing space the tab belongs to")

    class Config:
        """Pydantic configuration."""

        frozen = True


class HistoryEntry(BaseModel):
    """A visited page as reported by the history store."""

    id: int
    url: str
    title: str = ""
    visit_count: int = 0
    typed_count: int = 0
    last_visit_time: float = 0.0

    class Config:
        """Pydantic configuration."""

        frozen = True


def tab_destination(tab: TabInfo) -> str:
    """Synthetic destination token that the UI resolves to a tab switch."""
    return f"{tab.space_id}:{tab.id}"
