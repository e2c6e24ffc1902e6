"""Archived page retrieval for the archive feed.

Provides two async functions used by
:class:`~feedtui.feeds.archive.fetcher.ArchiveFetcher`:

- :func:`fetch_capture_text` — fetches one archived page and runs the
  extraction cascade on it.
- :func:`enrich` — fetches every capture with bounded concurrency and
  returns the captures with ``content_text`` filled in.

**Concurrency**: at most ``concurrency`` pages (3 by default) are in flight;
further fetches wait on an ``asyncio.Semaphore``.  Each task carries the
index of its capture and writes its result into a pre-sized list, so the
output order never depends on completion order.

**Error isolation**: a single failure (network error, timeout, non-2xx
status, oversized or unparsable body) is logged and leaves that capture's
``content_text`` as ``None``.  The batch never fails.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Sequence

import httpx

from feedtui.feeds.archive.config import (
    WB_CONCURRENT_FETCH_LIMIT,
    WB_CONTENT_FETCH_SIZE_LIMIT,
)
from feedtui.feeds.archive.extractor import extract_text
from feedtui.feeds.archive.models import ContentCapture

logger = logging.getLogger(__name__)


async def fetch_capture_text(
    capture: ContentCapture,
    client: httpx.AsyncClient,
    semaphore: asyncio.Semaphore,
    boilerplate_phrases: Sequence[str] | None = None,
) -> str | None:
    """Fetch the archived page of *capture* and extract its post text.

    The semaphore is held only for the HTTP round trip; parsing happens
    after the slot is released.

    Args:
        capture: Capture whose ``archive_url`` is fetched.
        client: Shared :class:`httpx.AsyncClient`.
        semaphore: Limits the number of pages in flight.
        boilerplate_phrases: Passed through to
            :func:`~feedtui.feeds.archive.extractor.extract_text`.

    Returns:
        The recovered text, or ``None`` on any failure.
    """
    url = capture.archive_url

    async with semaphore:
        try:
            response = await client.get(url, follow_redirects=True)
        except httpx.TimeoutException:
            logger.warning("archive: timeout fetching %s", url)
            return None
        except httpx.RequestError as exc:
            logger.warning("archive: request error for %s: %s", url, exc)
            return None
        except httpx.InvalidURL as exc:
            logger.warning("archive: unusable playback URL %r: %s", url, exc)
            return None

    if not response.is_success:
        logger.info("archive: HTTP %d for %s", response.status_code, url)
        return None

    if len(response.content) > WB_CONTENT_FETCH_SIZE_LIMIT:
        logger.info(
            "archive: skipping extraction for %s — %d bytes exceeds limit",
            url,
            len(response.content),
        )
        return None

    try:
        text = extract_text(response.text, boilerplate_phrases)
    except Exception as exc:  # noqa: BLE001
        logger.warning("archive: extraction error for %s: %s", url, exc)
        return None

    if text is None:
        logger.info("archive: no post text found in %s", url)
    else:
        logger.debug("archive: extracted %d chars from %s", len(text), url)
    return text


async def enrich(
    captures: Sequence[ContentCapture],
    client: httpx.AsyncClient,
    concurrency: int = WB_CONCURRENT_FETCH_LIMIT,
    boilerplate_phrases: Sequence[str] | None = None,
) -> list[ContentCapture]:
    """Fill in ``content_text`` for every capture.

    Args:
        captures: Captures in display order.
        client: Shared :class:`httpx.AsyncClient` for page requests.
        concurrency: Maximum pages fetched at the same time.
        boilerplate_phrases: Passed through to the extraction cascade.

    Returns:
        A new list of the same length and order as *captures*.
    """
    if not captures:
        return []

    semaphore = asyncio.Semaphore(concurrency)
    results: list[ContentCapture] = list(captures)

    async def _run(index: int, capture: ContentCapture) -> None:
        text = await fetch_capture_text(capture, client, semaphore, boilerplate_phrases)
        results[index] = dataclasses.replace(capture, content_text=text)

    await asyncio.gather(*(_run(i, c) for i, c in enumerate(captures)))

    recovered = sum(1 for c in results if c.content_text is not None)
    logger.info(
        "archive: content fetch complete — %d recovered / %d attempted",
        recovered,
        len(results),
    )
    return results
