"""Configuration constants for the Wayback Machine archive feed.

Defines CDX API parameters, playback URL shape, concurrency and size
limits, and the recognised post URL patterns used by
:class:`~feedtui.feeds.archive.fetcher.ArchiveFetcher`.

Reference: https://github.com/internetarchive/wayback/tree/master/wayback-cdx-server
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# API constants
# ---------------------------------------------------------------------------

WB_BASE_URL: str = "https://web.archive.org"
"""Default scheme and host of the Wayback Machine."""

WB_CDX_PATH: str = "/cdx/search/cdx"
"""Path of the CDX index endpoint, relative to the archive base URL."""

WB_CDX_BASE_URL: str = WB_BASE_URL + WB_CDX_PATH
"""Full CDX endpoint on the default archive host."""

WB_RAW_FLAG: str = "id_"
"""Playback modifier appended to the capture timestamp.

``id_`` asks for the original bytes without the Wayback toolbar, so the
archived ``<head>`` metadata is intact.
"""

WB_PLAYBACK_URL_TEMPLATE: str = "{base}/web/{timestamp}{flag}/{url}"
"""URL pattern for retrieving one archived page."""

WB_DEFAULT_OUTPUT: str = "json"
"""CDX output format.  ``json`` returns a 2D array whose first row holds the
field names."""

WB_INDEX_FIELDS: str = "timestamp,original,statuscode"
"""Fields requested from the CDX index, in row order."""

WB_INDEX_MIN_COLUMNS: int = 3
"""Rows shorter than this are dropped."""

WB_DEFAULT_STATUS_FILTER: str = "statuscode:200"
"""Only captures whose original HTTP status was 200."""

WB_DEFAULT_COLLAPSE: str = "urlkey"
"""Collapse on the canonical URL key, so each post appears once."""

WB_STATUS_SEGMENT: str = "/status"
"""Path segment that marks a post (content-detail) URL."""

WB_STATUS_MARKER: str = WB_STATUS_SEGMENT + "/"
"""Marker immediately followed by the numeric post id."""

WB_STATUS_QUERY_SUFFIX: str = WB_STATUS_MARKER + "*"
"""Suffix appended to profile patterns to scope the index to post pages."""

WB_ID_TERMINATORS: tuple[str, ...] = ("?", "%", "#", '"')
"""Characters that end the post id: query strings, percent-encoding
artifacts and stray quotes from malformed captures."""

WB_AUTHOR_HOSTS: tuple[str, ...] = ("twitter.com/", "x.com/")
"""Host prefixes whose first path segment is the author handle."""

# ---------------------------------------------------------------------------
# Fetch limits
# ---------------------------------------------------------------------------

WB_CONCURRENT_FETCH_LIMIT: int = 3
"""Maximum archived pages fetched at the same time."""

WB_REQUEST_TIMEOUT: float = 20.0
"""Client-level timeout (seconds) for every archive request."""

WB_CONTENT_FETCH_SIZE_LIMIT: int = 5 * 1024 * 1024
"""Archived page bodies larger than this (bytes) are not parsed."""

WB_USER_AGENT: str = "feedtui/1.0"
"""User-Agent sent with index and playback requests."""

# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

WB_BOILERPLATE_PHRASES: tuple[str, ...] = (
    "from breaking news and entertainment to sports and politics",
    "the latest tweets from",
    "join the conversation",
    "log in to twitter",
    "sign up for twitter",
    "javascript is not available",
    "we've detected that javascript is disabled",
    "something went wrong, but don",
)
"""Lower-case site taglines that disqualify a generic page description.

Overridable through ``Settings.archive_boilerplate_phrases``.
"""

WB_MIN_DESCRIPTION_LENGTH: int = 20
"""A generic page description must be longer than this to count as content."""
