"""Data model of the archive feed."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawCaptureRecord:
    """One data row of the CDX index response.

    Attributes:
        timestamp: Capture timestamp, ``YYYYMMDDhhmmss``.
        original_url: The URL as it was captured.
        status_code: HTTP status of the original capture, as a string.
    """

    timestamp: str
    original_url: str
    status_code: str


@dataclass(frozen=True)
class ContentCapture:
    """One archived post, as shown in the archive panel.

    Instances are immutable; enrichment builds a copy with ``content_text``
    filled in via :func:`dataclasses.replace`.

    Attributes:
        timestamp: Raw capture timestamp (opaque, precision varies).
        original_url: Post URL as archived.
        archive_url: Playback URL of the raw archived page.
        date_display: ``YYYY-MM-DD[ HH:MM]`` rendering of ``timestamp``.
        author_handle: ``@handle`` taken from the URL, or ``None``.
        content_text: Recovered post text, or ``None`` when it could not be
            fetched or extracted.
    """

    timestamp: str
    original_url: str
    archive_url: str
    date_display: str
    author_handle: str | None = None
    content_text: str | None = None
