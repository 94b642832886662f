"""
Utility functions for the omnibox package.
"""

import os


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/omnibox).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def truncate(text: str, limit: int = 50) -> str:
    """Shorten text for log lines, appending an ellipsis when cut."""
    return f"{text[:limit]}{'...' if len(text) > limit else ''}"
