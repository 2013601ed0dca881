"""Sheet state entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .errors import PlacementNotFound, StickerNotFound
from .value_objects import Placement, SheetConfig, StickerSpec


@dataclass
class SheetState:
    """Authoritative in-memory model of one print sheet.

    Placements are kept in a plain mapping from placement id to
    ``Placement``; insertion order is the sheet order reported to
    renderers and to the print service.

    Attributes:
        config: Paper size, margin and gap.
        stickers: Sticker catalog keyed by sticker id.
        placements: Committed placements keyed by placement id.
        selected_id: Placement currently selected in the editor, if any.
    """

    config: SheetConfig = field(default_factory=SheetConfig)
    stickers: dict[str, StickerSpec] = field(default_factory=dict)
    placements: dict[str, Placement] = field(default_factory=dict)
    selected_id: str | None = None

    @property
    def placement_count(self) -> int:
        """Number of committed placements."""
        return len(self.placements)

    def snapshot(self) -> tuple[Placement, ...]:
        """Immutable copy of the committed placements in sheet order."""
        return tuple(self.placements.values())

    def get_placement(self, placement_id: str) -> Placement:
        """Look up a committed placement.

        Raises:
            PlacementNotFound: If the id is not on the sheet.
        """
        try:
            return self.placements[placement_id]
        except KeyError:
            raise PlacementNotFound(placement_id) from None

    def get_sticker(self, sticker_id: str) -> StickerSpec:
        """Look up a sticker in the catalog.

        Raises:
            StickerNotFound: If the id is not in the catalog.
        """
        try:
            return self.stickers[sticker_id]
        except KeyError:
            raise StickerNotFound(sticker_id) from None

    def register_stickers(self, stickers: Iterable[StickerSpec]) -> None:
        """Add or replace catalog entries."""
        for sticker in stickers:
            self.stickers[sticker.id] = sticker

    def put(self, placement: Placement) -> None:
        """Insert or replace a placement, keeping its sheet position."""
        self.placements[placement.id] = placement

    def discard(self, placement_id: str) -> Placement:
        """Remove a placement and drop the selection if it pointed at it.

        Raises:
            PlacementNotFound: If the id is not on the sheet.
        """
        placement = self.get_placement(placement_id)
        del self.placements[placement_id]
        if self.selected_id == placement_id:
            self.selected_id = None
        return placement

    def clear(self) -> None:
        """Remove every placement and the selection."""
        self.placements.clear()
        self.selected_id = None
