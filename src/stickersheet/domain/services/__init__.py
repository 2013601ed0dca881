"""Domain services for validating and resolving placements."""

from .search import (
    MM_SEARCH,
    PIXEL_MIN_RADIUS,
    PlacementSearch,
    SearchHit,
    SearchLimits,
    SearchStage,
    pixel_search_limits,
)
from .validator import LayoutViolation, PlacementValidator, ViolationKind

__all__ = [
    "LayoutViolation",
    "MM_SEARCH",
    "PIXEL_MIN_RADIUS",
    "PlacementSearch",
    "PlacementValidator",
    "SearchHit",
    "SearchLimits",
    "SearchStage",
    "ViolationKind",
    "pixel_search_limits",
]
