"""Autocomplete engine: scoring, providers, result set and query coordination."""

from omnibox.application.controller import AutocompleteController, ProviderBatch, QueryState
from omnibox.application.omnibox import (
    ActionKind,
    MatchAction,
    Omnibox,
    OmniboxOptions,
    build_providers,
    resolve_match,
)
from omnibox.application.result import AutocompleteResult
from omnibox.application.similarity import SimilarityScorer, raw_similarity, similarity

__all__ = [
    "ActionKind",
    "AutocompleteController",
    "AutocompleteResult",
    "MatchAction",
    "Omnibox",
    "OmniboxOptions",
    "ProviderBatch",
    "QueryState",
    "SimilarityScorer",
    "build_providers",
    "raw_similarity",
    "resolve_match",
    "similarity",
]
