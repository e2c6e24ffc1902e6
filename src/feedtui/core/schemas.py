"""Pydantic schemas for panel configuration.

Reading these from a dashboard config file is the caller's job; this module
only validates the values.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PanelPosition(BaseModel):
    """Grid cell a panel occupies.

    Attributes:
        row: Zero-based grid row.
        col: Zero-based grid column.
    """

    row: int = Field(default=0, ge=0)
    col: int = Field(default=0, ge=0)


class ArchivePanelConfig(BaseModel):
    """Configuration of one archive panel.

    Attributes:
        title: Panel title shown in the border.
        archive_query: Profile or search pattern, e.g. ``"twitter.com/someone*"``.
        max_items: Maximum captures shown (1–200).
        position: Grid cell of the panel.
    """

    title: str = "Archived Tweets"
    archive_query: str = Field(min_length=1)
    max_items: int = Field(default=20, ge=1, le=200)
    position: PanelPosition = Field(default_factory=PanelPosition)
