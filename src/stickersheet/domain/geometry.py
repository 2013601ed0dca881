"""Geometry kernel for sticker placement.

Pure functions over axis-aligned rectangles. Overlap uses strict
separation tests, so rectangles that merely share an edge are reported
as intersecting.
"""

from __future__ import annotations

import math

from .value_objects import Placement, Rect, StickerSpec


def rects_intersect(a: Rect, b: Rect) -> bool:
    """Check if two rectangles intersect.

    Two rectangles are separate only when one lies strictly to the left,
    right, above or below the other. Touching edges count as intersecting.

    Args:
        a: First rectangle.
        b: Second rectangle.

    Returns:
        True unless the rectangles are strictly separated.
    """
    return not (
        a.right < b.x
        or a.x > b.right
        or a.bottom < b.y
        or a.y > b.bottom
    )


def expand_rect(rect: Rect, pad: float) -> Rect:
    """Grow all four sides of a rectangle by pad."""
    return Rect(
        x=rect.x - pad,
        y=rect.y - pad,
        width=rect.width + pad * 2,
        height=rect.height + pad * 2,
    )


def rotated_bounds(
    width: float, height: float, rotation_deg: float
) -> tuple[float, float]:
    """Size of the axis-aligned box around a rectangle rotated about its center.

    Args:
        width: Un-rotated width.
        height: Un-rotated height.
        rotation_deg: Rotation in degrees.

    Returns:
        Tuple of (bounding width, bounding height).
    """
    theta = math.radians(rotation_deg)
    cos = math.cos(theta)
    sin = math.sin(theta)
    w = abs(width * cos) + abs(height * sin)
    h = abs(width * sin) + abs(height * cos)
    return (w, h)


def placement_bounds(placement: Placement, sticker: StickerSpec) -> Rect:
    """Rotated axis-aligned bounding box of a placed sticker.

    The sticker is rotated about the center of its un-rotated rectangle.

    Raises:
        ValueError: If the sticker has no usable print size.
    """
    if not sticker.has_print_size:
        raise ValueError(f"Sticker '{sticker.id}' has no print size")
    width = float(sticker.width_mm)  # type: ignore[arg-type]
    height = float(sticker.height_mm)  # type: ignore[arg-type]
    cx = placement.x_mm + width / 2
    cy = placement.y_mm + height / 2
    bw, bh = rotated_bounds(width, height, placement.rotation_deg)
    return Rect(x=cx - bw / 2, y=cy - bh / 2, width=bw, height=bh)


def expanded_bounds(
    placement: Placement, sticker: StickerSpec, gap_mm: float
) -> Rect:
    """Rotated bounding box grown by the sheet gap on every side."""
    return expand_rect(placement_bounds(placement, sticker), max(0.0, gap_mm))
