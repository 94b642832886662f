"""
Entry point used by the address bar UI.

Turns focus and keystroke events into queries, builds the provider set from
options, and resolves a selected match into a browser action.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from omnibox.application.controller import AutocompleteController
from omnibox.application.providers import (
    HistoryURLProvider,
    OpenTabProvider,
    PedalProvider,
    SearchProvider,
    ZeroSuggestProvider,
)
from omnibox.application.similarity import SimilarityScorer
from omnibox.config import OmniboxConfig
from omnibox.domain.protocols import (
    AutocompleteProvider,
    HistoryStore,
    Navigator,
    SuggestClient,
    TabStore,
    UpdateCallback,
)
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, InputType, MatchType
from omnibox.logger import get_logger

logger = get_logger("omnibox")

WhereToOpen = Literal["current", "new_tab"]


@dataclass(frozen=True, slots=True)
class OmniboxOptions:
    """Which optional providers take part in queries."""

    has_zero_suggest: bool = True
    has_pedals: bool = True
    has_search: bool = True
    has_history: bool = True


class ActionKind(str, Enum):
    NAVIGATE = "navigate"
    NEW_TAB = "new_tab"
    SWITCH_TAB = "switch_tab"
    PEDAL = "pedal"


@dataclass(frozen=True, slots=True)
class MatchAction:
    """What selecting a match does."""

    kind: ActionKind
    target: str
    """URL, pedal command token or the raw tab token."""
    space_id: Optional[str] = None
    tab_id: Optional[int] = None


def resolve_match(match: AutocompleteMatch, where: WhereToOpen = "current") -> MatchAction:
    """
    Decide how a selected match is opened.

    Raises:
        ValueError: If an open-tab match carries a malformed ``space:tab`` token
    """
    if match.type is MatchType.OPEN_TAB:
        space_id, _, tab_part = match.destination_url.rpartition(":")
        try:
            tab_id = int(tab_part)
        except ValueError as e:
            raise ValueError(f"Malformed tab destination: {match.destination_url!r}") from e
        return MatchAction(ActionKind.SWITCH_TAB, match.destination_url, space_id=space_id or None, tab_id=tab_id)

    if match.type is MatchType.PEDAL:
        return MatchAction(ActionKind.PEDAL, match.destination_url)

    kind = ActionKind.NAVIGATE if where == "current" else ActionKind.NEW_TAB
    return MatchAction(kind, match.destination_url)


def build_providers(
    config: OmniboxConfig,
    tab_store: TabStore,
    history_store: HistoryStore,
    options: OmniboxOptions = OmniboxOptions(),
    suggest_client: Optional[SuggestClient] = None,
) -> list[AutocompleteProvider]:
    """Instantiate the providers enabled by ``options``, sharing one scorer."""
    scorer = SimilarityScorer(config.similarity_threshold)
    providers: list[AutocompleteProvider] = []

    if options.has_search:
        providers.append(SearchProvider(suggest_client, scorer=scorer, search_url=config.search_url))
    if options.has_history:
        providers.append(HistoryURLProvider(history_store, scorer=scorer))

    providers.append(OpenTabProvider(tab_store, scorer=scorer, min_query_length=config.min_open_tab_query_length))

    if options.has_zero_suggest:
        providers.append(
            ZeroSuggestProvider(
                tab_store,
                history_store,
                tab_limit=config.zero_suggest_tab_limit,
                history_limit=config.zero_suggest_history_limit,
            )
        )
    if options.has_pedals:
        providers.append(PedalProvider(config.pedals, scorer=scorer))

    logger.debug(f"Built providers: {[provider.name for provider in providers]}")
    return providers


class Omnibox:
    """Address bar autocomplete session."""

    def __init__(
        self,
        on_update: UpdateCallback,
        tab_store: TabStore,
        history_store: HistoryStore,
        *,
        config: Optional[OmniboxConfig] = None,
        options: Optional[OmniboxOptions] = None,
        suggest_client: Optional[SuggestClient] = None,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self.config = config or OmniboxConfig()
        providers = build_providers(
            self.config, tab_store, history_store, options or OmniboxOptions(), suggest_client
        )
        self.controller = AutocompleteController(
            providers,
            on_update,
            max_results=self.config.max_results,
            provider_timeout=self.config.provider_timeout,
        )
        self._navigator = navigator
        self._last_input_text = ""

    async def open(self) -> None:
        await self.controller.open()

    async def close(self) -> None:
        await self.controller.close()

    async def __aenter__(self) -> "Omnibox":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def handle_input(self, text: str, event_type: InputType | str) -> Optional[int]:
        """
        Run a query for a focus or keystroke event.

        Keystrokes that leave the text unchanged (arrow keys, modifiers) do not
        start a query. Focus always does, so zero suggest can refresh.

        Returns:
            The generation started, or None when the event was ignored
        """
        event_type = InputType(event_type)
        generation = None
        if event_type is InputType.FOCUS or text != self._last_input_text:
            generation = self.controller.start(AutocompleteInput(text=text, type=event_type))
        self._last_input_text = text
        return generation

    def stop_query(self) -> None:
        """Call when the address bar is blurred or closed."""
        self.controller.stop()
        self._last_input_text = ""

    def open_match(self, match: AutocompleteMatch, where: WhereToOpen = "current") -> MatchAction:
        """
        Resolve ``match`` and, when a navigator is attached, perform the action.

        Returns:
            The resolved action
        """
        action = resolve_match(match, where)
        logger.info(f"Opening {match.type.value} match as {action.kind.value}: {action.target}")

        if self._navigator is None:
            return action

        if action.kind is ActionKind.SWITCH_TAB:
            assert action.tab_id is not None
            self._navigator.switch_to_tab(action.tab_id)
        elif action.kind is ActionKind.PEDAL:
            self._navigator.run_pedal(action.target)
        elif action.kind is ActionKind.NEW_TAB:
            self._navigator.new_tab(action.target)
        else:
            self._navigator.go_to(action.target)
        return action
