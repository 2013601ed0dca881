"""Placement errors raised by the sticker sheet engine."""

from __future__ import annotations


class PlacementError(Exception):
    """Base class for rejected placement operations."""


class InvalidStickerMetadata(PlacementError):
    """Raised when a sticker lacks a usable physical print size."""

    def __init__(self, sticker_id: str) -> None:
        self.sticker_id = sticker_id
        super().__init__(
            f"Sticker '{sticker_id}' is missing print size metadata. "
            "Re-export it from the editor."
        )


class NoSpaceAvailable(PlacementError):
    """Raised when no valid position can be found for a new placement."""

    def __init__(self, sticker_id: str, reason: str = "no space left on the sheet") -> None:
        self.sticker_id = sticker_id
        self.reason = reason
        super().__init__(f"Cannot place sticker '{sticker_id}': {reason}")


class StickerNotFound(PlacementError):
    """Raised when a sticker id is not present in the catalog."""

    def __init__(self, sticker_id: str) -> None:
        self.sticker_id = sticker_id
        super().__init__(f"Sticker not found: {sticker_id}")


class PlacementNotFound(PlacementError):
    """Raised when a placement id is not present on the sheet."""

    def __init__(self, placement_id: str) -> None:
        self.placement_id = placement_id
        super().__init__(f"Placement not found: {placement_id}")
