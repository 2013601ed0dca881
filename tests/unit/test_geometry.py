"""Unit tests for the geometry kernel and core geometry value objects."""

from __future__ import annotations

import math

import pytest

from stickersheet.domain import (
    Placement,
    Point2D,
    Rect,
    StickerSpec,
    expand_rect,
    expanded_bounds,
    placement_bounds,
    rects_intersect,
    rotated_bounds,
)


# =============================================================================
# Rect and Point2D
# =============================================================================


class TestRect:
    """Tests for Rect."""

    def test_edges_and_center(self) -> None:
        rect = Rect(x=10, y=20, width=30, height=40)
        assert rect.right == 40
        assert rect.bottom == 60
        assert rect.center == Point2D(25, 40)
        assert rect.origin == Point2D(10, 20)

    def test_contains_is_inclusive(self) -> None:
        """A rectangle sharing edges with its container is contained."""
        outer = Rect(0, 0, 100, 100)
        assert outer.contains(outer)
        assert outer.contains(Rect(0, 0, 50, 100))

    def test_contains_rejects_overhang(self) -> None:
        outer = Rect(0, 0, 100, 100)
        assert not outer.contains(Rect(-0.01, 0, 50, 50))
        assert not outer.contains(Rect(60, 60, 40.01, 10))

    def test_scaled(self) -> None:
        assert Rect(1, 2, 3, 4).scaled(2) == Rect(2, 4, 6, 8)


class TestPoint2D:
    """Tests for Point2D."""

    def test_offset(self) -> None:
        assert Point2D(1, 2).offset(3, -4) == Point2D(4, -2)

    def test_distance(self) -> None:
        assert Point2D(0, 0).distance_to(Point2D(3, 4)) == 5


# =============================================================================
# Intersection and expansion
# =============================================================================


class TestRectsIntersect:
    """Tests for rects_intersect."""

    def test_overlapping(self) -> None:
        assert rects_intersect(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))

    def test_touching_edge_counts_as_intersecting(self) -> None:
        assert rects_intersect(Rect(0, 0, 10, 10), Rect(10, 0, 5, 5))
        assert rects_intersect(Rect(0, 0, 10, 10), Rect(0, 10, 5, 5))

    def test_touching_corner_counts_as_intersecting(self) -> None:
        assert rects_intersect(Rect(0, 0, 10, 10), Rect(10, 10, 5, 5))

    def test_strictly_separated(self) -> None:
        assert not rects_intersect(Rect(0, 0, 10, 10), Rect(10.01, 0, 5, 5))
        assert not rects_intersect(Rect(0, 0, 10, 10), Rect(0, -5.01, 5, 5))

    def test_containment_intersects(self) -> None:
        assert rects_intersect(Rect(0, 0, 100, 100), Rect(10, 10, 5, 5))

    def test_symmetric(self) -> None:
        a = Rect(0, 0, 10, 10)
        b = Rect(9, 9, 10, 10)
        assert rects_intersect(a, b) == rects_intersect(b, a)


class TestExpandRect:
    """Tests for expand_rect."""

    def test_grows_every_side(self) -> None:
        assert expand_rect(Rect(5, 5, 10, 10), 2) == Rect(3, 3, 14, 14)

    def test_zero_pad_is_identity(self) -> None:
        assert expand_rect(Rect(5, 5, 10, 10), 0) == Rect(5, 5, 10, 10)


# =============================================================================
# Rotated placement bounds
# =============================================================================


class TestRotatedBounds:
    """Tests for rotated_bounds."""

    def test_no_rotation(self) -> None:
        assert rotated_bounds(50, 20, 0) == (50, 20)

    def test_quarter_turn_swaps_sides(self) -> None:
        w, h = rotated_bounds(50, 20, 90)
        assert w == pytest.approx(20)
        assert h == pytest.approx(50)

    def test_diagonal(self) -> None:
        w, h = rotated_bounds(50, 20, 45)
        expected = 70 * math.sqrt(2) / 2
        assert w == pytest.approx(expected)
        assert h == pytest.approx(expected)

    def test_negative_angle_matches_positive(self) -> None:
        assert rotated_bounds(50, 20, -30) == pytest.approx(rotated_bounds(50, 20, 30))


class TestPlacementBounds:
    """Tests for placement_bounds and expanded_bounds."""

    @pytest.fixture
    def banner(self) -> StickerSpec:
        return StickerSpec(id="banner", width_mm=50.0, height_mm=20.0)

    def test_unrotated_matches_stored_rect(self, banner: StickerSpec) -> None:
        placement = Placement(id="p", sticker_id="banner", x_mm=10, y_mm=20)
        assert placement_bounds(placement, banner) == Rect(10, 20, 50, 20)

    def test_rotation_is_about_center(self, banner: StickerSpec) -> None:
        placement = Placement(
            id="p", sticker_id="banner", x_mm=10, y_mm=20, rotation_deg=90
        )
        bounds = placement_bounds(placement, banner)
        assert bounds.center.x == pytest.approx(35)
        assert bounds.center.y == pytest.approx(30)
        assert bounds.x == pytest.approx(25)
        assert bounds.y == pytest.approx(5)
        assert bounds.width == pytest.approx(20)
        assert bounds.height == pytest.approx(50)

    def test_missing_size_raises(self) -> None:
        sticker = StickerSpec(id="s", width_mm=None, height_mm=10.0)
        placement = Placement(id="p", sticker_id="s", x_mm=0, y_mm=0)
        with pytest.raises(ValueError, match="no print size"):
            placement_bounds(placement, sticker)

    def test_expanded_bounds_adds_gap(self, banner: StickerSpec) -> None:
        placement = Placement(id="p", sticker_id="banner", x_mm=10, y_mm=20)
        assert expanded_bounds(placement, banner, 2) == Rect(8, 18, 54, 24)

    def test_negative_gap_treated_as_zero(self, banner: StickerSpec) -> None:
        placement = Placement(id="p", sticker_id="banner", x_mm=10, y_mm=20)
        assert expanded_bounds(placement, banner, -3) == Rect(10, 20, 50, 20)
