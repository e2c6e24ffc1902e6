"""Registry of feed fetchers keyed by :class:`~feedtui.feeds.base.FeedKind`.

Fetchers register themselves on import using the ``@register`` decorator.

Example — registering a fetcher::

    from feedtui.feeds.base import FeedFetcher, FeedKind
    from feedtui.feeds.registry import register

    @register
    class ArchiveFetcher(FeedFetcher):
        feed_kind = FeedKind.ARCHIVE
        ...

Example — looking up a fetcher::

    from feedtui.feeds.registry import get_fetcher

    cls = get_fetcher("archive")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from feedtui.feeds.base import FeedKind

if TYPE_CHECKING:
    from feedtui.feeds.base import FeedFetcher

logger = logging.getLogger(__name__)

_REGISTRY: dict[FeedKind, type[FeedFetcher]] = {}


def register(cls: type[FeedFetcher]) -> type[FeedFetcher]:
    """Class decorator that adds a fetcher to the registry.

    A second registration for the same kind replaces the first and logs a
    warning.

    Args:
        cls: A :class:`~feedtui.feeds.base.FeedFetcher` subclass with
            ``feed_kind`` set.

    Returns:
        *cls* unchanged.
    """
    kind = FeedKind(cls.feed_kind)
    existing = _REGISTRY.get(kind)
    if existing is not None and existing is not cls:
        logger.warning(
            "registry: %s replaces %s for feed kind '%s'",
            cls.__name__,
            existing.__name__,
            kind.value,
        )
    _REGISTRY[kind] = cls
    return cls


def get_fetcher(kind: FeedKind | str) -> type[FeedFetcher]:
    """Return the fetcher class registered for *kind*.

    Raises:
        KeyError: If no fetcher is registered for *kind*.
    """
    try:
        return _REGISTRY[FeedKind(kind)]
    except (KeyError, ValueError) as exc:
        raise KeyError(
            f"No fetcher registered for feed kind '{kind}'. "
            f"Registered: {sorted(k.value for k in _REGISTRY)}"
        ) from exc


def list_feed_kinds() -> list[str]:
    """Return the registered feed kinds, sorted."""
    return sorted(k.value for k in _REGISTRY)
