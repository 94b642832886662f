"""Command shortcuts ("pedals") such as opening settings from the address bar."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Optional

from omnibox.application.similarity import SimilarityScorer
from omnibox.config import DEFAULT_PEDALS, PedalConfig
from omnibox.domain.protocols import ResultsCallback
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch, MatchType
from omnibox.logger import get_logger

logger = get_logger("providers.pedal")

BASE_RELEVANCE = 1100
SIMILARITY_WEIGHT = 100


class PedalProvider:
    """Matches the input against a table of pedal triggers.

    At most one pedal is suggested: the first table entry with an exact or
    similar trigger wins, even if a later entry would score higher.
    """

    name = "PedalProvider"

    def __init__(
        self,
        pedals: Optional[Sequence[PedalConfig]] = None,
        scorer: Optional[SimilarityScorer] = None,
    ) -> None:
        self._pedals = list(DEFAULT_PEDALS if pedals is None else pedals)
        self._scorer = scorer or SimilarityScorer()

    @property
    def pedals(self) -> list[PedalConfig]:
        return list(self._pedals)

    def match(self, text: str) -> Optional[AutocompleteMatch]:
        query = text.lower().strip()
        if not query:
            return None

        for pedal in self._pedals:
            triggers = [trigger.lower() for trigger in pedal.triggers]
            if not any(query == trigger or self._scorer(query, trigger) > 0 for trigger in triggers):
                continue

            best = self._scorer.best(query, triggers)
            logger.debug(f"Pedal {pedal.action} triggered by '{query}' (similarity={best:.2f})")
            return AutocompleteMatch(
                provider_name=self.name,
                relevance=math.ceil(BASE_RELEVANCE + best * SIMILARITY_WEIGHT),
                contents=pedal.description,
                destination_url=pedal.action,
                type=MatchType.PEDAL,
                is_default=False,
            )
        return None

    def start(self, input: AutocompleteInput, on_results: ResultsCallback) -> None:
        match = self.match(input.text)
        on_results([match] if match else [])

    def stop(self) -> None:
        # Matching is synchronous; nothing is ever in flight
        pass
