"""Sheet, sticker and placement value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._core_geometry import Rect

DEFAULT_MARGIN_MM = 7.0
DEFAULT_GAP_MM = 2.0


class PaperSize(str, Enum):
    """Supported print paper sizes."""

    A4 = "A4"
    LETTER = "LETTER"


@dataclass(frozen=True)
class PaperDimensions:
    """Physical paper dimensions in millimeters."""

    width_mm: float
    height_mm: float


PAPER_DIMENSIONS: dict[PaperSize, PaperDimensions] = {
    PaperSize.A4: PaperDimensions(width_mm=210.0, height_mm=297.0),
    PaperSize.LETTER: PaperDimensions(width_mm=215.9, height_mm=279.4),
}


@dataclass(frozen=True)
class SheetConfig:
    """Configuration of the print sheet.

    Attributes:
        paper_size: Paper format the sheet is printed on.
        margin_mm: Unprintable border on every side of the paper.
        gap_mm: Minimum clearance kept around every sticker.
    """

    paper_size: PaperSize = PaperSize.A4
    margin_mm: float = DEFAULT_MARGIN_MM
    gap_mm: float = DEFAULT_GAP_MM

    def __post_init__(self) -> None:
        if self.margin_mm < 0:
            raise ValueError("Margin must be non-negative")
        if self.gap_mm < 0:
            raise ValueError("Gap must be non-negative")
        paper = PAPER_DIMENSIONS[PaperSize(self.paper_size)]
        if 2 * self.margin_mm >= min(paper.width_mm, paper.height_mm):
            raise ValueError("Margin leaves no printable area on the paper")

    @property
    def paper(self) -> PaperDimensions:
        """Dimensions of the configured paper size."""
        return PAPER_DIMENSIONS[PaperSize(self.paper_size)]

    @property
    def printable_rect(self) -> Rect:
        """Paper rectangle minus margins, the placement containment boundary."""
        m = self.margin_mm
        return Rect(
            x=m,
            y=m,
            width=self.paper.width_mm - 2 * m,
            height=self.paper.height_mm - 2 * m,
        )


@dataclass(frozen=True)
class StickerSpec:
    """Exported sticker as supplied by the sticker catalog.

    Only the physical print size matters for placement. A sticker whose
    width or height is missing or not positive cannot be placed.

    Attributes:
        id: Catalog identifier.
        width_mm: Printed width, or None when the export lacks size metadata.
        height_mm: Printed height, or None when the export lacks size metadata.
        image_url: Reference to the exported image.
        title: Optional display title.
    """

    id: str
    width_mm: float | None
    height_mm: float | None
    image_url: str | None = None
    title: str | None = None

    @property
    def has_print_size(self) -> bool:
        """True if both physical dimensions are present and positive."""
        return bool(
            self.width_mm is not None
            and self.height_mm is not None
            and self.width_mm > 0
            and self.height_mm > 0
        )


@dataclass(frozen=True)
class Placement:
    """A sticker placed on the sheet.

    Attributes:
        id: Unique, opaque placement identifier.
        sticker_id: Catalog id of the placed sticker.
        x_mm: Left edge of the un-rotated sticker.
        y_mm: Top edge of the un-rotated sticker.
        rotation_deg: Clockwise rotation about the sticker center.
    """

    id: str
    sticker_id: str
    x_mm: float
    y_mm: float
    rotation_deg: float = 0.0
