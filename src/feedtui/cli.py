"""Print the archived posts for a profile or search pattern.

Runs one archive fetch and writes the captures to stdout::

    feedtui-archive "twitter.com/someone*" --limit 10

Exit codes:
    0 — Success (including zero captures).
    1 — The archive index could not be queried.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from feedtui.config.settings import get_settings
from feedtui.core.exceptions import FeedFetchError
from feedtui.core.logging_config import configure_logging
from feedtui.feeds.archive.fetcher import ArchiveFetcher
from feedtui.feeds.archive.models import ContentCapture


def format_capture(index: int, capture: ContentCapture) -> str:
    """Render one capture as a three-line text block."""
    preview = capture.content_text or capture.original_url
    author = capture.author_handle or "unknown"
    return (
        f"{index}. {preview}\n"
        f"   {author} | {capture.date_display}\n"
        f"   {capture.archive_url}"
    )


async def _run(query: str, limit: int | None) -> int:
    fetcher = ArchiveFetcher(query, max_items=limit)
    try:
        captures = await fetcher.fetch()
    except FeedFetchError as exc:
        print(f"[feedtui-archive] ERROR: {exc}", file=sys.stderr)
        return 1

    if not captures:
        print("No archived tweets found.")
        return 0
    for i, capture in enumerate(captures, start=1):
        print(format_capture(i, capture))
    return 0


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="feedtui-archive",
        description="Recover archived posts from the Wayback Machine.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "query",
        help='Profile or search pattern, e.g. "twitter.com/someone*".',
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum captures to show (default: FEEDTUI_ARCHIVE_MAX_ITEMS).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging verbosity (default: FEEDTUI_LOG_LEVEL).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``feedtui-archive`` command."""
    args = _parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)
    return asyncio.run(_run(args.query, args.limit))


if __name__ == "__main__":
    sys.exit(main())
