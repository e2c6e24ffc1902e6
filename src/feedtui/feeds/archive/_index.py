"""Wayback Machine CDX index query helpers.

Internal module used by
:class:`~feedtui.feeds.archive.fetcher.ArchiveFetcher`.

Provides:
- :func:`build_query` — scope a profile/search pattern to post pages.
- :func:`build_index_params` — CDX query parameters for one index request.
- :func:`parse_index_rows` — decode the CDX 2D array into raw records.
- :func:`fetch_index` — one index round trip; every failure is fatal.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from feedtui.core.exceptions import ArchiveRateLimitError, FeedFetchError
from feedtui.feeds.archive.config import (
    WB_CDX_PATH,
    WB_DEFAULT_COLLAPSE,
    WB_DEFAULT_OUTPUT,
    WB_DEFAULT_STATUS_FILTER,
    WB_INDEX_FIELDS,
    WB_INDEX_MIN_COLUMNS,
    WB_STATUS_QUERY_SUFFIX,
    WB_STATUS_SEGMENT,
)
from feedtui.feeds.archive.models import RawCaptureRecord

logger = logging.getLogger(__name__)

_FEED = "archive"


def build_query(user_query: str) -> str:
    """Return the CDX URL pattern for a profile or search query.

    A query that already names the ``/status`` segment is used verbatim.
    Otherwise trailing ``*`` and ``/`` characters are stripped and
    ``/status/*`` is appended, so the result limit is not spent on profile
    or media captures.

    Args:
        user_query: Pattern as configured, e.g. ``"twitter.com/someone*"``.

    Returns:
        The pattern sent as the CDX ``url`` parameter.
    """
    if WB_STATUS_SEGMENT in user_query:
        return user_query
    base = user_query.rstrip("*").rstrip("/")
    return f"{base}{WB_STATUS_QUERY_SUFFIX}"


def build_index_params(query: str, limit: int) -> dict[str, Any]:
    """Return the CDX query parameters for *query*.

    ``limit`` is raised by one because the first response row is the header.
    """
    return {
        "url": query,
        "output": WB_DEFAULT_OUTPUT,
        "limit": limit + 1,
        "fl": WB_INDEX_FIELDS,
        "filter": WB_DEFAULT_STATUS_FILTER,
        "collapse": WB_DEFAULT_COLLAPSE,
    }


def record_from_row(row: Any) -> RawCaptureRecord | None:
    """Return the raw record held by one index row, or ``None`` if malformed.

    A row must be a list of at least three strings; extra columns are ignored.
    """
    if not isinstance(row, list) or len(row) < WB_INDEX_MIN_COLUMNS:
        return None
    timestamp, original, status = row[0], row[1], row[2]
    if not all(isinstance(v, str) for v in (timestamp, original, status)):
        return None
    return RawCaptureRecord(timestamp=timestamp, original_url=original, status_code=status)


def parse_index_rows(data: Any) -> list[RawCaptureRecord]:
    """Decode a CDX ``output=json`` payload into raw capture records.

    Row 0 is the header and is always skipped, so a header-only payload
    yields no records.  Rows that are not lists of at least three strings
    are dropped.

    Args:
        data: The decoded JSON body.

    Returns:
        Raw records in response order.

    Raises:
        FeedFetchError: If *data* is not a JSON array.
    """
    if not isinstance(data, list):
        raise FeedFetchError(
            f"archive: index response is a {type(data).__name__}, expected an array",
            feed=_FEED,
        )

    records: list[RawCaptureRecord] = []
    for row in data[1:]:
        record = record_from_row(row)
        if record is None:
            logger.debug("archive: dropping malformed index row %r", row)
            continue
        records.append(record)
    return records


async def fetch_index(
    client: httpx.AsyncClient,
    query: str,
    limit: int,
    base_url: str,
) -> list[RawCaptureRecord]:
    """Fetch the capture index for *query*.

    Partial index results are meaningless, so every failure raises.  An
    empty body, which the CDX server sends when nothing matched, yields no
    records.

    Args:
        client: Shared async HTTP client.
        query: CDX URL pattern (see :func:`build_query`).
        limit: Maximum number of data rows wanted.
        base_url: Archive scheme and host, e.g. ``"https://web.archive.org"``.

    Returns:
        Raw capture records in response order.

    Raises:
        ArchiveRateLimitError: On HTTP 429.
        FeedFetchError: On network errors, a request URL httpx refuses to
            build, other HTTP errors or an undecodable body.
    """
    endpoint = base_url.rstrip("/") + WB_CDX_PATH
    params = build_index_params(query, limit)

    try:
        response = await client.get(endpoint, params=params)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise FeedFetchError(
            f"archive: index request failed: {exc}",
            feed=_FEED,
            source=endpoint,
        ) from exc

    if response.status_code == 429:
        try:
            retry_after = float(response.headers.get("Retry-After", 60))
        except ValueError:
            retry_after = 60.0
        raise ArchiveRateLimitError(
            "archive: index rate limited (HTTP 429)",
            retry_after=retry_after,
            feed=_FEED,
            source=endpoint,
        )

    if response.status_code >= 400:
        raise FeedFetchError(
            f"archive: index returned HTTP {response.status_code}",
            feed=_FEED,
            source=endpoint,
        )

    if not response.text.strip():
        logger.info("archive: empty index response for url_pattern=%s", query)
        return []

    try:
        data = response.json()
    except ValueError as exc:
        raise FeedFetchError(
            f"archive: index response is not valid JSON: {exc}",
            feed=_FEED,
            source=endpoint,
        ) from exc

    records = parse_index_rows(data)
    logger.info(
        "archive: index returned %d rows for url_pattern=%s", len(records), query
    )
    return records
