"""HTTP client for the Google suggest endpoint."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from omnibox.logger import get_logger

logger = get_logger("search.suggest_client")

DEFAULT_SUGGEST_URL = "https://suggestqueries.google.com/complete/search"


class SuggestClientError(Exception):
    """Raised when suggestions cannot be fetched or decoded."""


class GoogleSuggestClient:
    """Fetches query suggestions.

    The endpoint answers with a JSON array ``[query, [suggestions], ...]``;
    only the suggestion list is returned.
    """

    def __init__(
        self,
        url: str = DEFAULT_SUGGEST_URL,
        timeout: float = 2.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch(self, query: str) -> list[str]:
        try:
            response = await self._client.get(self._url, params={"client": "chrome", "q": query})
            response.raise_for_status()
            data: Any = response.json()
        except httpx.HTTPError as e:
            raise SuggestClientError(f"Suggest request failed for '{query}': {e}") from e
        except ValueError as e:
            raise SuggestClientError(f"Suggest response for '{query}' is not JSON: {e}") from e

        if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
            raise SuggestClientError(f"Unexpected suggest response shape for '{query}'")

        suggestions = [item for item in data[1] if isinstance(item, str)]
        logger.debug(f"Fetched {len(suggestions)} suggestion(s) for '{query}'")
        return suggestions

    async def shutdown(self) -> None:
        await self._client.aclose()
