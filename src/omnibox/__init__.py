"""Address bar autocomplete engine."""

from omnibox.application import (
    AutocompleteController,
    AutocompleteResult,
    Omnibox,
    OmniboxOptions,
    SimilarityScorer,
    similarity,
)
from omnibox.config import OmniboxConfig, PedalConfig, load_config
from omnibox.domain import AutocompleteInput, AutocompleteMatch, InputType, MatchType

__all__ = [
    "AutocompleteController",
    "AutocompleteInput",
    "AutocompleteMatch",
    "AutocompleteResult",
    "InputType",
    "MatchType",
    "Omnibox",
    "OmniboxConfig",
    "OmniboxOptions",
    "PedalConfig",
    "SimilarityScorer",
    "load_config",
    "similarity",
]
