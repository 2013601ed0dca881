"""Domain layer - placement engine for sticker print sheets."""

from .entities import SheetState
from .errors import (
    InvalidStickerMetadata,
    NoSpaceAvailable,
    PlacementError,
    PlacementNotFound,
    StickerNotFound,
)
from .geometry import (
    expand_rect,
    expanded_bounds,
    placement_bounds,
    rects_intersect,
    rotated_bounds,
)
from .services import (
    MM_SEARCH,
    LayoutViolation,
    PlacementSearch,
    PlacementValidator,
    SearchHit,
    SearchLimits,
    SearchStage,
    ViolationKind,
    pixel_search_limits,
)
from .value_objects import (
    DEFAULT_GAP_MM,
    DEFAULT_MARGIN_MM,
    PAPER_DIMENSIONS,
    PaperSize,
    Placement,
    Point2D,
    Rect,
    SheetConfig,
    StickerSpec,
)

__all__ = [
    "DEFAULT_GAP_MM",
    "DEFAULT_MARGIN_MM",
    "InvalidStickerMetadata",
    "LayoutViolation",
    "MM_SEARCH",
    "NoSpaceAvailable",
    "PAPER_DIMENSIONS",
    "PaperSize",
    "Placement",
    "PlacementError",
    "PlacementNotFound",
    "PlacementSearch",
    "PlacementValidator",
    "Point2D",
    "Rect",
    "SearchHit",
    "SearchLimits",
    "SearchStage",
    "SheetConfig",
    "SheetState",
    "StickerNotFound",
    "StickerSpec",
    "ViolationKind",
    "expand_rect",
    "expanded_bounds",
    "pixel_search_limits",
    "placement_bounds",
    "rects_intersect",
    "rotated_bounds",
]
