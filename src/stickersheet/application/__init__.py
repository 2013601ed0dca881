"""Application layer - editor operations over the placement engine."""

from .orchestrator import (
    MoveOutcome,
    MoveResult,
    PlacementOrchestrator,
    new_placement_id,
)
from .viewport import (
    DEFAULT_CANVAS_PADDING,
    MM_PER_INCH,
    SCREEN_DPI,
    SheetViewport,
    mm_to_px,
    px_to_mm,
)

__all__ = [
    "DEFAULT_CANVAS_PADDING",
    "MM_PER_INCH",
    "MoveOutcome",
    "MoveResult",
    "PlacementOrchestrator",
    "SCREEN_DPI",
    "SheetViewport",
    "mm_to_px",
    "new_placement_id",
    "px_to_mm",
]
