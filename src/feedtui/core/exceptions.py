"""Application-wide exception hierarchy for feedtui.

All custom exceptions subclass ``FeedtuiError`` so a panel can turn any
expected failure into an error message with a single ``except`` clause.

Hierarchy::

    FeedtuiError
    └── FeedFetchError
        └── ArchiveRateLimitError      (retry_after: float)
"""

from __future__ import annotations


class FeedtuiError(Exception):
    """Base class for all feedtui exceptions."""


class FeedFetchError(FeedtuiError):
    """Raised when a feed cannot produce any data for a poll.

    Only failures that make the whole result meaningless are raised; a feed
    that can return partial data does so instead.

    Args:
        message: Human-readable description of the failure.
        feed: Feed kind that failed (e.g. ``"archive"``).
        source: URL or endpoint that was being queried.
    """

    def __init__(
        self,
        message: str,
        feed: str | None = None,
        source: str | None = None,
    ) -> None:
        super().__init__(message)
        self.feed = feed
        self.source = source


class ArchiveRateLimitError(FeedFetchError):
    """Raised when the archive index answers HTTP 429.

    Args:
        message: Human-readable description of the rate limit.
        retry_after: Seconds to wait before polling again. Defaults to 60.
        feed: Feed kind that was rate-limited.
        source: Endpoint that returned the 429.
    """

    def __init__(
        self,
        message: str,
        retry_after: float = 60.0,
        feed: str | None = None,
        source: str | None = None,
    ) -> None:
        super().__init__(message, feed=feed, source=source)
        self.retry_after = retry_after
