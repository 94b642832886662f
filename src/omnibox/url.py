"""
Address bar text classification.

Decides whether typed text is a URL and builds search URLs for everything else.
"""

import re
from typing import Optional
from urllib.parse import quote

DEFAULT_SEARCH_URL = "https://www.google.com/search?q={query}"

_KNOWN_SCHEMES = (
    "http://",
    "https://",
    "chrome-extension://",
    "file://",
    "ftp://",
    "mailto:",
    "tel:",
    "data:",
)

# Domain-like input such as example.com or sub.example.co.uk/path?x=1
_DOMAIN_PATTERN = re.compile(
    r"^[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)


def get_url_from_input(text: str) -> Optional[str]:
    """
    Interpret address bar text as a URL.

    Args:
        text: Raw text typed into the address bar

    Returns:
        The URL to load, with ``http://`` added to bare domains, or None when
        the text should be treated as a search
    """
    trimmed = text.strip()
    if not trimmed or " " in trimmed:
        return None

    if trimmed.lower().startswith(_KNOWN_SCHEMES):
        return trimmed

    if _DOMAIN_PATTERN.match(trimmed):
        return f"http://{trimmed}"

    return None


def create_search_url(query: str, template: str = DEFAULT_SEARCH_URL) -> str:
    """Build the search engine URL for ``query``."""
    return template.replace("{query}", quote(query, safe=""))
