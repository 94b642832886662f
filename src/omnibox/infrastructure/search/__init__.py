"""Remote search suggestion backends."""

from omnibox.infrastructure.search.suggest_client import GoogleSuggestClient, SuggestClientError

__all__ = ["GoogleSuggestClient", "SuggestClientError"]
