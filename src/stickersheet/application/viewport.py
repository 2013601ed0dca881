"""Screen-space scale for interactive sheet editing.

The editor draws the paper scaled to fit its canvas. Drag and rotate
resolution searches in that pixel frame, so its step and radius follow
the zoom the user sees.
"""

from __future__ import annotations

from dataclasses import dataclass

from stickersheet.domain.value_objects import Point2D, Rect, SheetConfig

# Screen resolution assumed when no canvas size is known.
SCREEN_DPI = 96.0
MM_PER_INCH = 25.4
DEFAULT_CANVAS_PADDING = 16.0


def mm_to_px(mm: float, dpi: float = SCREEN_DPI) -> float:
    """Convert millimeters to screen pixels at the given DPI."""
    return mm / MM_PER_INCH * dpi


def px_to_mm(px: float, dpi: float = SCREEN_DPI) -> float:
    """Convert screen pixels to millimeters at the given DPI."""
    return px / dpi * MM_PER_INCH


@dataclass(frozen=True)
class SheetViewport:
    """Mapping between sheet millimeters and canvas pixels.

    Attributes:
        scale_px_per_mm: Pixels per millimeter.
        origin_x: Canvas x of the paper's top-left corner.
        origin_y: Canvas y of the paper's top-left corner.
    """

    scale_px_per_mm: float = SCREEN_DPI / MM_PER_INCH
    origin_x: float = 0.0
    origin_y: float = 0.0

    def __post_init__(self) -> None:
        if self.scale_px_per_mm <= 0:
            raise ValueError("Viewport scale must be positive")

    @classmethod
    def fit(
        cls,
        canvas_width: float,
        canvas_height: float,
        config: SheetConfig,
        padding: float = DEFAULT_CANVAS_PADDING,
    ) -> SheetViewport:
        """Center the paper in a canvas at the largest uniform scale.

        Args:
            canvas_width: Canvas width in pixels.
            canvas_height: Canvas height in pixels.
            config: Sheet whose paper is fitted.
            padding: Blank border kept on each side of the canvas.

        Returns:
            A viewport; the screen-DPI default when the canvas is empty.
        """
        if canvas_width <= 0 or canvas_height <= 0:
            return cls()
        paper = config.paper
        available_w = max(1.0, canvas_width - padding * 2)
        available_h = max(1.0, canvas_height - padding * 2)
        scale = min(available_w / paper.width_mm, available_h / paper.height_mm)
        return cls(
            scale_px_per_mm=scale,
            origin_x=(canvas_width - paper.width_mm * scale) / 2,
            origin_y=(canvas_height - paper.height_mm * scale) / 2,
        )

    def to_px(self, point: Point2D) -> Point2D:
        """Sheet millimeters to canvas pixels."""
        return Point2D(
            self.origin_x + point.x * self.scale_px_per_mm,
            self.origin_y + point.y * self.scale_px_per_mm,
        )

    def to_mm(self, point: Point2D) -> Point2D:
        """Canvas pixels to sheet millimeters."""
        return Point2D(
            (point.x - self.origin_x) / self.scale_px_per_mm,
            (point.y - self.origin_y) / self.scale_px_per_mm,
        )

    def rect_to_px(self, rect: Rect) -> Rect:
        """Sheet rectangle to canvas pixels."""
        origin = self.to_px(rect.origin)
        return Rect(
            x=origin.x,
            y=origin.y,
            width=rect.width * self.scale_px_per_mm,
            height=rect.height * self.scale_px_per_mm,
        )
