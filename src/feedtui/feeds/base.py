"""Feed kinds, the ``FeedData`` sum type, and the fetcher interface.

A panel never talks to a fetcher directly; it calls :func:`load_feed`, which
turns the fetcher's result (or its expected failure) into exactly one of
:class:`FeedLoading`, :class:`FeedItems` or :class:`FeedError`.

Example usage::

    from feedtui.feeds.base import FeedFetcher, FeedKind

    class MyFetcher(FeedFetcher):
        feed_kind = FeedKind.ARCHIVE

        async def fetch(self): ...
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from feedtui.core.exceptions import FeedtuiError

logger = logging.getLogger(__name__)


class FeedKind(str, Enum):
    """Kinds of feed a dashboard panel can show.

    Only ``ARCHIVE`` has a fetcher in this package.  The other kinds are
    never registered here; they exist so a panel can tell its own
    :class:`FeedItems` apart from another panel's (see
    :meth:`~feedtui.feeds.archive.panel.ArchiveFeedPanel.update_data`).
    """

    ARCHIVE = "archive"
    GITHUB = "github"
    HACKERNEWS = "hackernews"
    RSS = "rss"
    STOCKS = "stocks"


# ---------------------------------------------------------------------------
# FeedData variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeedLoading:
    """A poll is in progress."""


@dataclass(frozen=True)
class FeedItems:
    """A poll finished with data.

    Attributes:
        kind: Feed kind that produced the items.
        items: Items in display order.
    """

    kind: FeedKind
    items: tuple[Any, ...]


@dataclass(frozen=True)
class FeedError:
    """A poll failed as a whole.

    Attributes:
        message: Text shown in place of the item list.
    """

    message: str


FeedData = Union[FeedLoading, FeedItems, FeedError]


@dataclass(frozen=True)
class SelectedItem:
    """The panel item under the cursor, in a feed-independent shape.

    Attributes:
        title: Main line of the item.
        url: Link opened when the item is activated, or ``None``.
        description: Longer text, or ``None``.
        source: Who or what produced the item.
        metadata: Secondary line (dates, counts), or ``None``.
    """

    title: str
    url: str | None
    description: str | None
    source: str
    metadata: str | None


# ---------------------------------------------------------------------------
# Fetcher interface
# ---------------------------------------------------------------------------


class FeedFetcher(ABC):
    """Abstract base class for all feed fetchers.

    Class Attributes:
        feed_kind: The :class:`FeedKind` this fetcher produces.
    """

    feed_kind: FeedKind

    @abstractmethod
    async def fetch(self) -> list[Any]:
        """Fetch the current items of this feed.

        Returns:
            Items in display order.

        Raises:
            FeedFetchError: When no meaningful result can be produced.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} feed_kind={self.feed_kind.value!r}>"


async def load_feed(fetcher: FeedFetcher) -> FeedData:
    """Run one poll of *fetcher* and wrap the outcome as :data:`FeedData`.

    Only :class:`~feedtui.core.exceptions.FeedtuiError` is converted into
    :class:`FeedError`; anything else is a bug and propagates.

    Args:
        fetcher: The fetcher to poll.

    Returns:
        :class:`FeedItems` on success, :class:`FeedError` on failure.
    """
    try:
        items = await fetcher.fetch()
    except FeedtuiError as exc:
        logger.warning("feed %s failed: %s", fetcher.feed_kind.value, exc)
        return FeedError(message=str(exc))
    return FeedItems(kind=fetcher.feed_kind, items=tuple(items))
