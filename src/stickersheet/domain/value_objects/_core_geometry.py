"""Core geometry value objects in sheet coordinates.

Sheet coordinates put the origin at the top-left corner of the paper with
y growing downwards. All lengths are in millimeters unless a caller works
in a scaled frame (see ``PlacementSearch``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    """2D point in sheet coordinate space."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point2D:
        """Return a new point shifted by (dx, dy)."""
        return Point2D(self.x + dx, self.y + dy)

    def distance_to(self, other: Point2D) -> float:
        """Euclidean distance to another point."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height

    @property
    def center(self) -> Point2D:
        """Center point of the rectangle."""
        return Point2D(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def origin(self) -> Point2D:
        """Top-left corner."""
        return Point2D(self.x, self.y)

    def contains(self, other: Rect) -> bool:
        """Check if another rectangle lies entirely inside this one.

        Edges may coincide: a rectangle is contained in itself.
        """
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def scaled(self, factor: float) -> Rect:
        """Return this rectangle with every coordinate multiplied by factor."""
        return Rect(
            x=self.x * factor,
            y=self.y * factor,
            width=self.width * factor,
            height=self.height * factor,
        )
