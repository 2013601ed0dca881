"""Pydantic schema for saved sticker sheet documents.

A sheet document captures everything needed to reopen a layout: the sheet
configuration, the sticker catalog entries it references, and the
committed placements in sheet order.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from stickersheet.domain.value_objects import (
    DEFAULT_GAP_MM,
    DEFAULT_MARGIN_MM,
    PaperSize,
)

# Supported schema versions for sheet documents
# Version 1.0: Initial schema with paper size, margin, gap, stickers and placements
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class SheetConfigSchema(BaseModel):
    """Sheet configuration section.

    Attributes:
        paper_size: Paper format (A4 or LETTER).
        margin_mm: Unprintable border on every side in millimeters.
        gap_mm: Minimum clearance around every sticker in millimeters.
    """

    model_config = ConfigDict(extra="forbid")

    paper_size: PaperSize = PaperSize.A4
    margin_mm: float = Field(default=DEFAULT_MARGIN_MM, ge=0, allow_inf_nan=False)
    gap_mm: float = Field(default=DEFAULT_GAP_MM, ge=0, allow_inf_nan=False)


class StickerSchema(BaseModel):
    """Sticker catalog entry.

    Width and height may be null for stickers exported without print size
    metadata; such stickers load but cannot be placed.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    width_mm: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    height_mm: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    image_url: str | None = None
    title: str | None = None


class PlacementSchema(BaseModel):
    """Committed placement of a sticker on the sheet."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    sticker_id: str = Field(..., min_length=1)
    x_mm: float = Field(..., allow_inf_nan=False)
    y_mm: float = Field(..., allow_inf_nan=False)
    rotation_deg: float = Field(default=0.0, allow_inf_nan=False)


class SheetDocument(BaseModel):
    """Root model of a saved sticker sheet.

    Attributes:
        version: Schema version, must be in SUPPORTED_VERSIONS.
        sheet: Sheet configuration.
        stickers: Catalog entries for the stickers on the sheet.
        placements: Placements in sheet order.
    """

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    sheet: SheetConfigSchema = Field(default_factory=SheetConfigSchema)
    stickers: list[StickerSchema] = Field(default_factory=list)
    placements: list[PlacementSchema] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported schema version '{v}'. Supported: {supported}")
        return v

    @model_validator(mode="after")
    def validate_references(self) -> "SheetDocument":
        sticker_ids = [s.id for s in self.stickers]
        if len(sticker_ids) != len(set(sticker_ids)):
            raise ValueError("Sticker ids must be unique")

        placement_ids = [p.id for p in self.placements]
        if len(placement_ids) != len(set(placement_ids)):
            raise ValueError("Placement ids must be unique")

        known = set(sticker_ids)
        missing = sorted({p.sticker_id for p in self.placements} - known)
        if missing:
            raise ValueError(
                f"Placements reference unknown stickers: {', '.join(missing)}"
            )
        return self
