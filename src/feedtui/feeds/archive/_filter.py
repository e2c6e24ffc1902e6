"""Capture classification for the archive feed.

Decides which raw index rows are genuine post captures and derives the
display fields of a :class:`~feedtui.feeds.archive.models.ContentCapture`.
Every function here is pure and total: rejection is ``None``, never an
exception.
"""

from __future__ import annotations

import logging

from feedtui.feeds.archive.config import (
    WB_AUTHOR_HOSTS,
    WB_BASE_URL,
    WB_ID_TERMINATORS,
    WB_PLAYBACK_URL_TEMPLATE,
    WB_RAW_FLAG,
    WB_STATUS_MARKER,
)
from feedtui.feeds.archive._index import record_from_row
from feedtui.feeds.archive.models import ContentCapture, RawCaptureRecord

logger = logging.getLogger(__name__)


def format_timestamp(timestamp: str) -> str:
    """Render a CDX timestamp for display.

    ``"20230615143022"`` becomes ``"2023-06-15 14:30"``, ``"20230615"``
    becomes ``"2023-06-15"``; anything shorter than eight characters is
    returned unchanged.
    """
    if len(timestamp) < 8:
        return timestamp
    date = f"{timestamp[0:4]}-{timestamp[4:6]}-{timestamp[6:8]}"
    if len(timestamp) >= 12:
        return f"{date} {timestamp[8:10]}:{timestamp[10:12]}"
    return date


def extract_author(url: str) -> str | None:
    """Return the ``@handle`` of a post URL, or ``None``.

    The scheme and a leading ``www.`` are ignored; the host must be one of
    :data:`~feedtui.feeds.archive.config.WB_AUTHOR_HOSTS`.

    Args:
        url: Original post URL, e.g. ``"https://twitter.com/jack/status/20"``.

    Returns:
        ``"@jack"`` for the example above.
    """
    path = url
    for scheme in ("https://", "http://"):
        if path.startswith(scheme):
            path = path[len(scheme):]
            break
    if path.startswith("www."):
        path = path[len("www."):]

    for host in WB_AUTHOR_HOSTS:
        if path.startswith(host):
            handle = path[len(host):].split("/", 1)[0]
            return f"@{handle}" if handle else None
    return None


def extract_content_id(url: str) -> str | None:
    """Return the post id that follows ``/status/`` in *url*, or ``None``.

    The id is cut at the first query, percent-encoding, fragment or quote
    character and must start with a decimal digit.
    """
    if WB_STATUS_MARKER not in url:
        return None
    candidate = url.split(WB_STATUS_MARKER, 1)[1]
    for terminator in WB_ID_TERMINATORS:
        candidate = candidate.split(terminator, 1)[0]
    if not candidate or not candidate[0].isdigit() or not candidate[0].isascii():
        return None
    return candidate


def build_archive_url(timestamp: str, original_url: str, base_url: str = WB_BASE_URL) -> str:
    """Return the raw playback URL of a capture."""
    return WB_PLAYBACK_URL_TEMPLATE.format(
        base=base_url.rstrip("/"),
        timestamp=timestamp,
        flag=WB_RAW_FLAG,
        url=original_url,
    )


def classify(
    record: RawCaptureRecord,
    base_url: str = WB_BASE_URL,
) -> ContentCapture | None:
    """Turn a raw index row into a post capture, or reject it.

    Args:
        record: One row of the index response.
        base_url: Archive scheme and host used for the playback URL.

    Returns:
        A :class:`ContentCapture` with ``content_text=None``, or ``None``
        when the URL is not a post page.
    """
    if extract_content_id(record.original_url) is None:
        logger.debug("archive: not a post capture: %s", record.original_url)
        return None

    return ContentCapture(
        timestamp=record.timestamp,
        original_url=record.original_url,
        archive_url=build_archive_url(record.timestamp, record.original_url, base_url),
        date_display=format_timestamp(record.timestamp),
        author_handle=extract_author(record.original_url),
        content_text=None,
    )


def classify_row(row: object, base_url: str = WB_BASE_URL) -> ContentCapture | None:
    """Classify an undecoded index row (any JSON value).

    Rows that are not lists of at least three strings are rejected.
    """
    record = record_from_row(row)
    if record is None:
        return None
    return classify(record, base_url)
