"""Wayback Machine archive feed fetcher.

Recovers archived social-media posts for a profile or search pattern.

**Design notes**:

- One :meth:`ArchiveFetcher.fetch` call runs the whole pipeline:
  query scoping → CDX index fetch → per-row classification → concurrent
  page enrichment.  Nothing is cached between calls.
- Only the index stage can fail a poll (:class:`FeedFetchError`).  Rows
  that are malformed or are not post pages are dropped silently, and a
  page that cannot be fetched or parsed keeps ``content_text=None``.
- Output order is the index order (reverse-chronological, one capture per
  canonical URL thanks to ``collapse=urlkey``).
- Low-level helpers live in :mod:`._index`, :mod:`._filter` and
  :mod:`._content_fetcher` to keep this file concise.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import httpx

from feedtui.config.settings import Settings, get_settings
from feedtui.feeds.archive._content_fetcher import enrich
from feedtui.feeds.archive._filter import classify
from feedtui.feeds.archive._index import build_index_params, build_query, fetch_index
from feedtui.feeds.archive.config import WB_CDX_PATH
from feedtui.feeds.archive.models import ContentCapture
from feedtui.feeds.base import FeedFetcher, FeedKind
from feedtui.feeds.registry import register

logger = logging.getLogger(__name__)


@register
class ArchiveFetcher(FeedFetcher):
    """Fetches archived posts from the Wayback Machine.

    Args:
        archive_query: Profile or search pattern, e.g. ``"twitter.com/someone*"``.
        max_items: Upper bound on returned captures.  Defaults to
            ``Settings.archive_max_items``.
        http_client: Optional injected :class:`httpx.AsyncClient`.  An
            injected client is used for every request and is not closed.
        settings: Optional settings object; defaults to :func:`get_settings`.
    """

    feed_kind: FeedKind = FeedKind.ARCHIVE

    def __init__(
        self,
        archive_query: str,
        max_items: int | None = None,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.archive_query = archive_query
        self.max_items = max_items if max_items is not None else self._settings.archive_max_items
        self._http_client = http_client

    # ------------------------------------------------------------------
    # FeedFetcher implementation
    # ------------------------------------------------------------------

    async def fetch(self) -> list[ContentCapture]:
        """Run the archive pipeline once.

        Returns:
            At most ``max_items`` captures in index order, each with
            ``content_text`` recovered where possible.

        Raises:
            FeedFetchError: If the index query fails.
            ArchiveRateLimitError: If the index answers HTTP 429.
        """
        query = build_query(self.archive_query)
        base_url = self._settings.archive_base_url

        async with self._client() as client:
            records = await fetch_index(client, query, self.max_items, base_url)

            captures: list[ContentCapture] = []
            for record in records:
                if len(captures) >= self.max_items:
                    break
                capture = classify(record, base_url)
                if capture is not None:
                    captures.append(capture)

            logger.info(
                "archive: %d of %d index rows are post captures for url_pattern=%s",
                len(captures),
                len(records),
                query,
            )

            return await enrich(
                captures,
                client,
                concurrency=self._settings.archive_concurrency,
                boilerplate_phrases=self._settings.archive_boilerplate_phrases,
            )

    async def health_check(self) -> dict[str, Any]:
        """Verify CDX index connectivity with a one-row query.

        Returns:
            Dict with ``status`` (``"ok"`` | ``"degraded"`` | ``"down"``),
            ``feed``, ``checked_at``, and either ``captures_returned`` or
            ``detail``.
        """
        checked_at = datetime.now(tz=timezone.utc).isoformat()
        base: dict[str, Any] = {"feed": self.feed_kind.value, "checked_at": checked_at}

        endpoint = self._settings.archive_base_url.rstrip("/") + WB_CDX_PATH
        params = build_index_params(build_query(self.archive_query), 1)

        try:
            async with self._client() as client:
                response = await client.get(endpoint, params=params)
                response.raise_for_status()
                if not response.text.strip():
                    return {**base, "status": "ok", "captures_returned": 0}
                data = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            return {
                **base,
                "status": "down" if status >= 500 else "degraded",
                "detail": f"HTTP {status} from Wayback Machine CDX API",
            }
        except httpx.RequestError as exc:
            return {**base, "status": "down", "detail": f"Connection error: {exc}"}
        except httpx.InvalidURL as exc:
            return {**base, "status": "degraded", "detail": f"Invalid request URL: {exc}"}
        except ValueError as exc:
            return {**base, "status": "degraded", "detail": f"Invalid JSON: {exc}"}

        if isinstance(data, list):
            return {**base, "status": "ok", "captures_returned": max(0, len(data) - 1)}
        return {**base, "status": "degraded", "detail": "Unexpected CDX response shape"}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a fresh one closed on exit."""
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(
            timeout=self._settings.archive_timeout_seconds,
            headers={"User-Agent": self._settings.archive_user_agent},
        ) as client:
            yield client
