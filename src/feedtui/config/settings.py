"""Application settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.  Every
variable is prefixed with ``FEEDTUI_``, e.g. ``FEEDTUI_ARCHIVE_TIMEOUT_SECONDS``.

Usage::

    from feedtui.config.settings import get_settings

    settings = get_settings()
    timeout = settings.archive_timeout_seconds
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedtui.feeds.archive.config import WB_BOILERPLATE_PHRASES


class Settings(BaseSettings):
    """Dashboard configuration backed by environment variables and an optional .env file.

    Every field has a default, so the dashboard starts with an empty environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDTUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Archive feed
    # ------------------------------------------------------------------

    archive_base_url: str = "https://web.archive.org"
    """Scheme and host of the Wayback Machine.  Both the CDX index and the
    playback URLs are derived from it."""

    archive_timeout_seconds: float = Field(default=20.0, gt=0)
    """Client-level timeout applied to every archive request."""

    archive_concurrency: int = Field(default=3, ge=1, le=16)
    """Maximum number of archived pages fetched at the same time."""

    archive_user_agent: str = "feedtui/1.0"
    """User-Agent header sent with index and playback requests."""

    archive_max_items: int = Field(default=20, ge=1)
    """Default number of captures shown when a panel does not set its own."""

    archive_boilerplate_phrases: list[str] = Field(
        default_factory=lambda: list(WB_BOILERPLATE_PHRASES)
    )
    """Lower-case site taglines that disqualify a generic page description.

    Supplied as a JSON list in the environment, e.g.
    ``FEEDTUI_ARCHIVE_BOILERPLATE_PHRASES='["join the conversation"]'``.
    """

    # ------------------------------------------------------------------
    # Application behaviour
    # ------------------------------------------------------------------

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings singleton.

    In tests, call ``get_settings.cache_clear()`` after patching environment
    variables.

    Returns:
        Settings: The validated settings object.
    """
    return Settings()
