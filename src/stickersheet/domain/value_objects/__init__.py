"""Value objects for the sticker sheet domain."""

from ._core_geometry import Point2D, Rect
from ._sheet import (
    DEFAULT_GAP_MM,
    DEFAULT_MARGIN_MM,
    PAPER_DIMENSIONS,
    PaperDimensions,
    PaperSize,
    Placement,
    SheetConfig,
    StickerSpec,
)

__all__ = [
    "DEFAULT_GAP_MM",
    "DEFAULT_MARGIN_MM",
    "PAPER_DIMENSIONS",
    "PaperDimensions",
    "PaperSize",
    "Placement",
    "Point2D",
    "Rect",
    "SheetConfig",
    "StickerSpec",
]
