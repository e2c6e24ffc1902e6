"""Configuration package for feedtui.

Re-exports the settings symbols so callers can write::

    from feedtui.config import get_settings
"""

from __future__ import annotations

from feedtui.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
