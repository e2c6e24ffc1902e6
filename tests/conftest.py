"""Shared pytest fixtures for feedtui tests.

Fixture summary
---------------
settings        — Settings built from defaults, with the cached singleton cleared.
fixtures_dir    — Path to ``tests/fixtures``.
cdx_body        — The CDX index fixture as a JSON string.
read_html       — Callable returning an archived-page HTML fixture by name.

No test touches the network; HTTP is mocked with ``respx``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test environment bootstrap
# ---------------------------------------------------------------------------
# Keep a developer's .env or shell FEEDTUI_* variables from leaking into tests.

for _key in [k for k in os.environ if k.startswith("FEEDTUI_")]:
    del os.environ[_key]

from feedtui.config.settings import Settings, get_settings  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def settings() -> Settings:
    """Settings with every default, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def cdx_body() -> str:
    """The CDX index fixture (header + mixed post/non-post rows)."""
    return (FIXTURES_DIR / "api_responses" / "wayback" / "cdx_response.json").read_text(
        encoding="utf-8"
    )


@pytest.fixture
def read_html() -> Callable[[str], str]:
    """Return a loader for ``tests/fixtures/html/wayback/<name>.html``."""

    def _read(name: str) -> str:
        return (FIXTURES_DIR / "html" / "wayback" / f"{name}.html").read_text(
            encoding="utf-8"
        )

    return _read
