"""Tests for the archive panel state (feeds/archive/panel.py).

Covers:
- Identity, title, position and initial state
- update_data() for items, error and loading
- Cursor clamping on scroll and on shrinking item lists
- selected_item() mapping and empty list
- refresh() end-to-end with respx, success and index failure
"""

from __future__ import annotations

import httpx
import pytest
import respx

from feedtui.core.schemas import ArchivePanelConfig, PanelPosition
from feedtui.feeds.archive.config import WB_CDX_BASE_URL
from feedtui.feeds.archive.fetcher import ArchiveFetcher
from feedtui.feeds.archive.models import ContentCapture
from feedtui.feeds.archive.panel import ArchiveFeedPanel
from feedtui.feeds.base import FeedError, FeedItems, FeedKind, FeedLoading


def _config() -> ArchivePanelConfig:
    return ArchivePanelConfig(
        title="Test Archive",
        archive_query="twitter.com/testuser*",
        max_items=10,
        position=PanelPosition(row=0, col=1),
    )


def _item(idx: int, text: str | None = None) -> ContentCapture:
    return ContentCapture(
        timestamp=f"2023061514302{idx}",
        original_url=f"https://twitter.com/testuser/status/{idx}",
        archive_url=(
            f"https://web.archive.org/web/2023061514302{idx}id_/"
            f"https://twitter.com/testuser/status/{idx}"
        ),
        date_display=f"2023-06-15 14:3{idx}",
        author_handle="@testuser",
        content_text=text if text is not None else f"Tweet number {idx}",
    )


def _items(n: int) -> FeedItems:
    return FeedItems(kind=FeedKind.ARCHIVE, items=tuple(_item(i) for i in range(n)))


class TestPanelState:
    def test_identity(self) -> None:
        panel = ArchiveFeedPanel(_config())

        assert panel.id == "archive-0-1"
        assert panel.title == "Test Archive"
        assert panel.position == (0, 1)

    def test_initial_state(self) -> None:
        panel = ArchiveFeedPanel(_config())

        assert panel.loading is True
        assert panel.items == []
        assert panel.error is None
        assert panel.cursor == 0
        assert panel.selected is False

    def test_update_with_items(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(_items(3))

        assert panel.loading is False
        assert len(panel.items) == 3
        assert panel.error is None

    def test_update_with_error_keeps_items(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(_items(2))
        panel.update_data(FeedError("Network error"))

        assert panel.loading is False
        assert panel.error == "Network error"
        assert len(panel.items) == 2

    def test_items_clear_previous_error(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(FeedError("boom"))
        panel.update_data(_items(1))

        assert panel.error is None

    def test_update_loading(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.loading = False
        panel.update_data(FeedLoading())

        assert panel.loading is True

    def test_items_of_other_feed_kind_are_ignored(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(FeedItems(kind=FeedKind.RSS, items=("x",)))

        assert panel.items == []
        assert panel.loading is False

    def test_set_selected(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.set_selected(True)
        assert panel.selected is True
        panel.set_selected(False)
        assert panel.selected is False


class TestNavigation:
    def test_scroll_down_stops_at_last_item(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(_items(3))

        for expected in (1, 2, 2):
            panel.scroll_down()
            assert panel.cursor == expected

    def test_scroll_up_stops_at_first_item(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(_items(3))
        panel.scroll_down()
        panel.scroll_down()

        for expected in (1, 0, 0):
            panel.scroll_up()
            assert panel.cursor == expected

    def test_scroll_on_empty_list(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.scroll_down()
        panel.scroll_up()

        assert panel.cursor == 0

    def test_cursor_clamped_when_list_shrinks(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(_items(5))
        for _ in range(4):
            panel.scroll_down()
        panel.update_data(_items(2))

        assert panel.cursor == 1


class TestSelectedItem:
    def test_maps_capture_fields(self) -> None:
        panel = ArchiveFeedPanel(_config())
        panel.update_data(_items(2))

        selected = panel.selected_item()
        assert selected is not None
        assert selected.title == "Tweet number 0"
        assert selected.description == "Tweet number 0"
        assert selected.url is not None and "web.archive.org" in selected.url
        assert selected.source == "@testuser"
        assert selected.metadata == "2023-06-15 14:30"

    def test_falls_back_to_url_and_archive_source(self) -> None:
        panel = ArchiveFeedPanel(_config())
        bare = ContentCapture(
            timestamp="20230615",
            original_url="https://example.social/u/status/5",
            archive_url="https://web.archive.org/web/20230615id_/https://example.social/u/status/5",
            date_display="2023-06-15",
        )
        panel.update_data(FeedItems(kind=FeedKind.ARCHIVE, items=(bare,)))

        selected = panel.selected_item()
        assert selected is not None
        assert selected.title == "https://example.social/u/status/5"
        assert selected.description is None
        assert selected.source == "Wayback Machine"

    def test_empty_list(self) -> None:
        assert ArchiveFeedPanel(_config()).selected_item() is None


class TestRefresh:
    def test_create_fetcher_uses_panel_config(self) -> None:
        fetcher = ArchiveFeedPanel(_config()).create_fetcher()

        assert isinstance(fetcher, ArchiveFetcher)
        assert fetcher.archive_query == "twitter.com/testuser*"
        assert fetcher.max_items == 10

    @pytest.mark.asyncio
    async def test_refresh_loads_items(self) -> None:
        panel = ArchiveFeedPanel(_config())
        index = [
            ["timestamp", "original", "statuscode"],
            ["20230615143022", "https://twitter.com/testuser/status/123", "200"],
        ]
        with respx.mock:
            respx.get(WB_CDX_BASE_URL).mock(return_value=httpx.Response(200, json=index))
            respx.route(method="GET", path__startswith="/web/").mock(
                return_value=httpx.Response(500)
            )
            async with httpx.AsyncClient() as client:
                data = await panel.refresh(http_client=client)

        assert isinstance(data, FeedItems)
        assert panel.loading is False
        assert panel.error is None
        assert [c.author_handle for c in panel.items] == ["@testuser"]
        assert panel.items[0].content_text is None

    @pytest.mark.asyncio
    async def test_refresh_surfaces_index_error(self) -> None:
        panel = ArchiveFeedPanel(_config())
        with respx.mock:
            respx.get(WB_CDX_BASE_URL).mock(side_effect=httpx.ConnectError("refused"))
            async with httpx.AsyncClient() as client:
                data = await panel.refresh(http_client=client)

        assert isinstance(data, FeedError)
        assert panel.loading is False
        assert panel.error is not None and "index request failed" in panel.error
        assert panel.items == []
