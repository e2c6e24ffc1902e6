"""State of an archive panel on the dashboard.

The panel holds what the renderer needs: a loading flag, an optional error
message, the current captures and a cursor into them.  Drawing is done
elsewhere.
"""

from __future__ import annotations

import logging

import httpx

from feedtui.core.logging_config import panel_id_var
from feedtui.core.schemas import ArchivePanelConfig
from feedtui.feeds.archive.fetcher import ArchiveFetcher
from feedtui.feeds.archive.models import ContentCapture
from feedtui.feeds.base import (
    FeedData,
    FeedError,
    FeedItems,
    FeedKind,
    FeedLoading,
    SelectedItem,
    load_feed,
)

logger = logging.getLogger(__name__)

_DEFAULT_SOURCE = "Wayback Machine"


class ArchiveFeedPanel:
    """Dashboard panel showing archived posts.

    Args:
        config: Validated panel configuration.
    """

    def __init__(self, config: ArchivePanelConfig) -> None:
        self.config = config
        self.items: list[ContentCapture] = []
        self.loading: bool = True
        self.error: str | None = None
        self.cursor: int = 0
        self.selected: bool = False

    @property
    def id(self) -> str:
        return f"archive-{self.config.position.row}-{self.config.position.col}"

    @property
    def title(self) -> str:
        return self.config.title

    @property
    def position(self) -> tuple[int, int]:
        return (self.config.position.row, self.config.position.col)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def create_fetcher(self, http_client: httpx.AsyncClient | None = None) -> ArchiveFetcher:
        return ArchiveFetcher(
            self.config.archive_query,
            max_items=self.config.max_items,
            http_client=http_client,
        )

    def update_data(self, data: FeedData) -> None:
        """Apply the outcome of a poll.

        An error keeps the previous items so the renderer can decide what to
        show; new items clear any previous error.
        """
        self.loading = False
        if isinstance(data, FeedItems):
            if data.kind is not FeedKind.ARCHIVE:
                logger.debug("panel %s: ignoring %s items", self.id, data.kind.value)
                return
            self.items = list(data.items)
            self.error = None
            if self.cursor >= len(self.items):
                self.cursor = max(0, len(self.items) - 1)
        elif isinstance(data, FeedError):
            self.error = data.message
        elif isinstance(data, FeedLoading):
            self.loading = True

    async def refresh(self, http_client: httpx.AsyncClient | None = None) -> FeedData:
        """Poll the archive once and apply the result.

        Log records emitted during the poll carry this panel's id.
        """
        token = panel_id_var.set(self.id)
        try:
            self.update_data(FeedLoading())
            data = await load_feed(self.create_fetcher(http_client))
            self.update_data(data)
            return data
        finally:
            panel_id_var.reset(token)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def scroll_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def scroll_down(self) -> None:
        if self.cursor < max(0, len(self.items) - 1):
            self.cursor += 1

    def set_selected(self, selected: bool) -> None:
        self.selected = selected

    def selected_item(self) -> SelectedItem | None:
        """Return the capture under the cursor, or ``None`` if there is none."""
        if not 0 <= self.cursor < len(self.items):
            return None
        item = self.items[self.cursor]
        return SelectedItem(
            title=item.content_text or item.original_url,
            url=item.archive_url,
            description=item.content_text,
            source=item.author_handle or _DEFAULT_SOURCE,
            metadata=item.date_display,
        )
