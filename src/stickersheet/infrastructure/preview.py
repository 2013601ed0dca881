"""SVG preview rendering of a sticker sheet.

Draws the paper, the printable area and each committed placement. The
rendering is read-only: it shows the same boxes the validator uses but
never decides validity itself.
"""

from __future__ import annotations

from html import escape
from pathlib import Path

from stickersheet.domain.entities import SheetState
from stickersheet.domain.geometry import expanded_bounds
from stickersheet.domain.value_objects import Placement, StickerSpec


class SheetPreviewRenderer:
    """Renders a sheet as an SVG document.

    Attributes:
        scale: Pixels per millimeter (default 3).
        sticker_fill: Fill color for sticker bodies.
        sticker_stroke: Stroke color for sticker outlines.
        bounds_stroke: Stroke color for gap-expanded bounds.
        text_color: Color for labels.
        show_bounds: Whether to draw each placement's gap-expanded bounds.
        show_labels: Whether to label stickers with their title or id.
    """

    def __init__(
        self,
        scale: float = 3.0,
        sticker_fill: str = "#ADD8E6",  # Light blue
        sticker_stroke: str = "#000000",  # Black
        bounds_stroke: str = "#FF6347",  # Tomato
        text_color: str = "#000000",  # Black
        show_bounds: bool = False,
        show_labels: bool = True,
    ) -> None:
        if scale <= 0:
            raise ValueError("Preview scale must be positive")
        self.scale = scale
        self.sticker_fill = sticker_fill
        self.sticker_stroke = sticker_stroke
        self.bounds_stroke = bounds_stroke
        self.text_color = text_color
        self.show_bounds = show_bounds
        self.show_labels = show_labels

    def render_svg(self, state: SheetState) -> str:
        """Generate an SVG preview of the sheet.

        Args:
            state: Sheet to render.

        Returns:
            SVG string representation of the sheet.
        """
        config = state.config
        paper = config.paper
        printable = config.printable_rect
        s = self.scale
        svg_width = paper.width_mm * s
        svg_height = paper.height_mm * s

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Paper -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white" stroke="{self.sticker_stroke}" stroke-width="1"/>',
            "",
            "  <!-- Printable area (inside margin) -->",
            f'  <rect x="{printable.x * s}" y="{printable.y * s}" '
            f'width="{printable.width * s}" height="{printable.height * s}" '
            f'fill="none" stroke="#999999" stroke-dasharray="5,5"/>',
            "",
            "  <!-- Placements -->",
        ]

        for placement in state.snapshot():
            sticker = state.stickers.get(placement.sticker_id)
            if sticker is None or not sticker.has_print_size:
                parts.append(
                    f"  <!-- {escape(placement.id)}: sticker has no print size -->"
                )
                continue
            parts.append(self._render_placement(placement, sticker, config.gap_mm))

        parts.append("")
        parts.append("</svg>")
        return "\n".join(parts)

    def render_to_file(self, state: SheetState, path: Path) -> None:
        """Write the SVG preview of a sheet to a file."""
        path.write_text(self.render_svg(state), encoding="utf-8")

    def _render_placement(
        self, placement: Placement, sticker: StickerSpec, gap_mm: float
    ) -> str:
        s = self.scale
        w = float(sticker.width_mm) * s  # type: ignore[arg-type]
        h = float(sticker.height_mm) * s  # type: ignore[arg-type]
        x = placement.x_mm * s
        y = placement.y_mm * s
        cx = x + w / 2
        cy = y + h / 2

        svg_parts = [
            f'  <g id="{escape(placement.id)}">',
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{self.sticker_fill}" stroke="{self.sticker_stroke}" '
            f'transform="rotate({placement.rotation_deg} {cx} {cy})"/>',
        ]

        if self.show_bounds:
            bounds = expanded_bounds(placement, sticker, gap_mm)
            svg_parts.append(
                f'    <rect x="{bounds.x * s}" y="{bounds.y * s}" '
                f'width="{bounds.width * s}" height="{bounds.height * s}" '
                f'fill="none" stroke="{self.bounds_stroke}" stroke-dasharray="3,3"/>'
            )

        if self.show_labels:
            font_size = min(12.0, min(w, h) / 6)
            if font_size >= 6:
                label = escape(sticker.title or sticker.id)
                svg_parts.append(
                    f'    <text x="{cx}" y="{cy}" text-anchor="middle" '
                    f'font-family="Arial, sans-serif" font-size="{font_size}" '
                    f'fill="{self.text_color}">{label}</text>'
                )

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)
