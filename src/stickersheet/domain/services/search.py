"""Nearest-valid-position search for sticker placements.

When a requested position breaks the sheet invariants, the search looks
for the closest position that does not, in three stages:

1. Direct: the requested position itself.
2. Axis nudge: one step along +x, -x, +y, -y, in that order.
3. Ring scan: concentric rings of growing radius, each sampled at evenly
   spaced angles. Smaller rings are always tried before larger ones.

Drag and rotate resolution additionally retries the placement's original
position once every ring is exhausted.

The search runs in a working frame that is the millimeter frame scaled by
``units_per_mm``. Fresh placements search directly in millimeters; drag
resolution searches in screen pixels so that its step and radius follow
the current zoom. Candidates are always converted back to millimeters
before validation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from ..value_objects import Placement, Point2D, Rect
from .validator import PlacementValidator

logger = logging.getLogger(__name__)

__all__ = [
    "MM_SEARCH",
    "PIXEL_MIN_RADIUS",
    "PlacementSearch",
    "SearchHit",
    "SearchLimits",
    "SearchStage",
    "pixel_search_limits",
]

# Drag resolution never scans a radius smaller than this, in pixels.
PIXEL_MIN_RADIUS = 200.0


class SearchStage(str, Enum):
    """Stage of the search that produced a valid position."""

    DIRECT = "direct"
    AXIS = "axis"
    RING = "ring"
    ORIGINAL = "original"


@dataclass(frozen=True)
class SearchLimits:
    """Bounds on a placement search.

    Exactly one of ``max_rings`` and ``max_radius`` must be set. With
    ``max_radius`` the ring count follows from the step size.

    Attributes:
        min_step: Smallest ring spacing in working units. The actual step is
            ``max(min_step, gap)`` with the gap expressed in working units.
        samples: Number of evenly spaced angles tested on every ring.
        max_rings: Fixed number of rings to scan.
        max_radius: Largest ring radius to scan, in working units.
        fallback_to_original: Retry the pre-edit position after the rings.
    """

    min_step: float
    samples: int
    max_rings: int | None = None
    max_radius: float | None = None
    fallback_to_original: bool = False

    def __post_init__(self) -> None:
        if self.min_step <= 0:
            raise ValueError("Minimum step must be positive")
        if self.samples < 1:
            raise ValueError("At least one angle sample is required")
        if (self.max_rings is None) == (self.max_radius is None):
            raise ValueError("Exactly one of max_rings and max_radius must be set")
        if self.max_rings is not None and self.max_rings < 0:
            raise ValueError("Ring count must be non-negative")
        if self.max_radius is not None and self.max_radius < 0:
            raise ValueError("Search radius must be non-negative")

    def step_for_gap(self, gap: float) -> float:
        """Ring spacing for a gap expressed in working units."""
        return max(self.min_step, gap)

    def ring_count(self, step: float) -> int:
        """Number of rings scanned for a given step."""
        if self.max_rings is not None:
            return self.max_rings
        assert self.max_radius is not None
        return int(math.floor(self.max_radius / step + 1e-9))


# Fresh adds and duplicates, in millimeters.
MM_SEARCH = SearchLimits(min_step=2.0, samples=24, max_rings=140)


def pixel_search_limits(printable_px: Rect) -> SearchLimits:
    """Limits for drag and rotate resolution in screen pixels.

    The scan radius covers the shorter side of the printable area but is
    never less than ``PIXEL_MIN_RADIUS``.

    Args:
        printable_px: Printable rectangle measured in pixels.
    """
    max_radius = max(
        PIXEL_MIN_RADIUS, min(printable_px.width, printable_px.height)
    )
    return SearchLimits(
        min_step=8.0,
        samples=20,
        max_radius=max_radius,
        fallback_to_original=True,
    )


@dataclass(frozen=True)
class SearchHit:
    """A valid position found by the search.

    Attributes:
        placement: The candidate placement at the valid position, in mm.
        stage: Search stage that produced it.
        ring: Ring index for ring hits, 0 otherwise.
    """

    placement: Placement
    stage: SearchStage
    ring: int = 0


class PlacementSearch:
    """Greedy nearest-available-slot search around a requested point.

    Attributes:
        validator: Validator deciding whether a candidate can be committed.
        limits: Bounds on the number of positions tested.
        units_per_mm: Scale from millimeters to the working frame.
    """

    def __init__(
        self,
        validator: PlacementValidator,
        limits: SearchLimits = MM_SEARCH,
        units_per_mm: float = 1.0,
    ) -> None:
        if units_per_mm <= 0:
            raise ValueError("Scale must be positive")
        self.validator = validator
        self.limits = limits
        self.units_per_mm = units_per_mm

    def find_nearest_valid(
        self,
        base: Placement,
        start: Point2D,
        others: Sequence[Placement],
        bounds: Rect,
        gap_mm: float,
        original: Point2D | None = None,
    ) -> SearchHit | None:
        """Find the valid position closest to a requested point.

        Args:
            base: Placement to position. Only its position changes.
            start: Requested top-left corner, in working units.
            others: Snapshot of the committed placements.
            bounds: Printable rectangle, in millimeters.
            gap_mm: Clearance required around every sticker.
            original: Pre-edit top-left corner in working units, tried last
                when the limits enable the original-position fallback.

        Returns:
            The first valid hit, or None if every tested position is invalid.
        """
        def try_at(point: Point2D) -> Placement | None:
            candidate = replace(
                base,
                x_mm=point.x / self.units_per_mm,
                y_mm=point.y / self.units_per_mm,
            )
            if self.validator.is_valid(candidate, others, bounds, gap_mm):
                return candidate
            return None

        found = try_at(start)
        if found is not None:
            return SearchHit(placement=found, stage=SearchStage.DIRECT)

        step = self.limits.step_for_gap(max(0.0, gap_mm) * self.units_per_mm)
        axis_offsets = ((step, 0.0), (-step, 0.0), (0.0, step), (0.0, -step))
        for dx, dy in axis_offsets:
            found = try_at(start.offset(dx, dy))
            if found is not None:
                logger.debug("Placement '%s' resolved by axis nudge", base.id)
                return SearchHit(placement=found, stage=SearchStage.AXIS)

        samples = self.limits.samples
        rings = self.limits.ring_count(step)
        for ring in range(1, rings + 1):
            radius = ring * step
            for i in range(samples):
                theta = (i / samples) * math.pi * 2
                found = try_at(
                    start.offset(math.cos(theta) * radius, math.sin(theta) * radius)
                )
                if found is not None:
                    logger.debug(
                        "Placement '%s' resolved on ring %d (radius %.2f)",
                        base.id,
                        ring,
                        radius,
                    )
                    return SearchHit(placement=found, stage=SearchStage.RING, ring=ring)

        if self.limits.fallback_to_original and original is not None:
            found = try_at(original)
            if found is not None:
                logger.debug("Placement '%s' snapped back to its original position", base.id)
                return SearchHit(placement=found, stage=SearchStage.ORIGINAL)

        logger.debug(
            "No valid position for '%s' within %d rings of (%.2f, %.2f)",
            base.id,
            rings,
            start.x,
            start.y,
        )
        return None
