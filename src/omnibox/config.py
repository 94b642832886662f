"""Omnibox engine configuration.

Holds the tunables that providers, the result set and the controller are
constructed with, and loads them from JSON files or the environment.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, PositiveFloat, ValidationError

from omnibox.logger import get_logger

logger = get_logger("config")


class PedalConfig(BaseModel):
    """A command shortcut matched against the typed text."""

    triggers: list[str] = Field(..., min_length=1, description="Phrases that activate the pedal")
    action: str = Field(..., description="Opaque command token handed to the UI")
    description: str = Field(..., description="Text shown for the suggestion")

    class Config:
        """Pydantic configuration."""

        frozen = True


DEFAULT_PEDALS: tuple[PedalConfig, ...] = (
    PedalConfig(
        triggers=["settings", "app icon", "profiles", "spaces", "about flow", "onboarding"],
        action="open_settings",
        description="Open settings",
    ),
    PedalConfig(
        triggers=["new window", "window", "browser window"],
        action="open_new_window",
        description="Open new window",
    ),
    PedalConfig(
        triggers=["extensions", "extension", "extension manager"],
        action="open_extensions",
        description="Extensions Manager",
    ),
)


class OmniboxConfig(BaseModel):
    """Configuration for the autocomplete engine."""

    max_results: int = Field(default=8, ge=1, description="Size of the top-N snapshot")
    similarity_threshold: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Similarity scores below this are reported as 0"
    )
    min_open_tab_query_length: int = Field(
        default=3, ge=0, description="Open tab matching is skipped for shorter input"
    )
    zero_suggest_tab_limit: int = Field(default=10, ge=0)
    zero_suggest_history_limit: int = Field(default=5, ge=0)
    provider_timeout: Optional[PositiveFloat] = Field(
        default=3.0, description="Seconds a provider may keep contributing to a query; None disables"
    )
    pedals: list[PedalConfig] = Field(default_factory=lambda: list(DEFAULT_PEDALS))
    search_url: str = Field(
        default="https://www.google.com/search?q={query}",
        description="Search engine URL; {query} is replaced by the encoded text",
    )
    suggest_url: str = Field(
        default="https://suggestqueries.google.com/complete/search",
        description="Endpoint returning [query, [suggestions], ...] JSON",
    )
    suggest_timeout: float = Field(default=2.0, gt=0)

    class Config:
        """Pydantic configuration."""

        frozen = True

    @classmethod
    def from_env(cls, base: Optional["OmniboxConfig"] = None) -> "OmniboxConfig":
        """
        Build a configuration, overriding fields from OMNIBOX_* environment variables.

        Args:
            base: Configuration to start from (defaults when None)

        Returns:
            OmniboxConfig with overrides applied

        Raises:
            ValidationError: If an environment value cannot be coerced
        """
        base = base or cls()
        overrides: dict[str, object] = {}
        for field_name in ("max_results", "similarity_threshold", "min_open_tab_query_length", "suggest_timeout"):
            value = os.getenv(f"OMNIBOX_{field_name.upper()}")
            if value:
                overrides[field_name] = value

        timeout = os.getenv("OMNIBOX_PROVIDER_TIMEOUT")
        if timeout:
            overrides["provider_timeout"] = None if timeout.lower() in ("none", "off", "0") else timeout

        for field_name in ("search_url", "suggest_url"):
            value = os.getenv(f"OMNIBOX_{field_name.upper()}")
            if value:
                overrides[field_name] = value

        if not overrides:
            return base

        logger.debug(f"Applying environment overrides: {sorted(overrides)}")
        try:
            return cls(**{**base.model_dump(), **overrides})
        except ValidationError as e:
            logger.error(f"Invalid omnibox environment configuration: {e}")
            raise


def load_config(config_path: Optional[str | Path] = None) -> OmniboxConfig:
    """
    Load omnibox configuration from a JSON file.

    Args:
        config_path: Path to the JSON configuration file. If None, the defaults
            are returned.

    Returns:
        OmniboxConfig: Parsed configuration object

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If the configuration structure is invalid
    """
    if config_path is None:
        return OmniboxConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        error_msg = f"Omnibox configuration file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.info(f"Loading omnibox configuration from: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in configuration file {config_path}: {e}")
        raise

    try:
        config = OmniboxConfig(**data)
    except ValidationError as e:
        logger.error(f"Invalid configuration structure in {config_path}: {e}")
        raise

    logger.info(f"Loaded configuration with {len(config.pedals)} pedal(s)")
    return config
