"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from stickersheet.application.config import (
    PlacementSchema,
    SheetConfigSchema,
    StickerSchema,
)


class RectSchema(BaseModel):
    """Axis-aligned rectangle in millimeters."""

    x: float = Field(..., description="Left edge")
    y: float = Field(..., description="Top edge")
    width: float = Field(..., description="Width")
    height: float = Field(..., description="Height")


class SheetResponseSchema(BaseModel):
    """Full state of a sheet session."""

    sheet_id: str = Field(..., description="Session id")
    sheet: SheetConfigSchema = Field(..., description="Paper size, margin and gap")
    printable: RectSchema = Field(..., description="Printable area in millimeters")
    stickers: list[StickerSchema] = Field(
        default_factory=list, description="Sticker catalog"
    )
    placements: list[PlacementSchema] = Field(
        default_factory=list, description="Committed placements in sheet order"
    )
    selected_id: str | None = Field(default=None, description="Selected placement")


class MoveResultSchema(BaseModel):
    """Result of a move or rotate request."""

    outcome: str = Field(..., description="committed, resolved or reverted")
    stage: str | None = Field(
        default=None, description="Search stage that resolved a blocked request"
    )
    placement: PlacementSchema = Field(..., description="Placement as committed")
    requested: PlacementSchema = Field(..., description="Placement as requested")


class ViolationSchema(BaseModel):
    """A broken sheet invariant."""

    kind: str = Field(..., description="Violation kind")
    placement_id: str = Field(..., description="Placement the violation was found on")
    other_id: str | None = Field(default=None, description="Second placement, for overlaps")
    message: str = Field(..., description="Readable description")


class ViolationListSchema(BaseModel):
    """Audit of a sheet's placements."""

    is_valid: bool = Field(..., description="True if no violations were found")
    violations: list[ViolationSchema] = Field(default_factory=list)


class ReconfigureResponseSchema(BaseModel):
    """Result of changing the sheet configuration."""

    cleared: bool = Field(..., description="True if the paper change removed all placements")
    sheet: SheetResponseSchema = Field(..., description="Sheet after the change")
    violations: list[ViolationSchema] = Field(
        default_factory=list,
        description="Placements that no longer satisfy the new margin or gap",
    )


class PrintResponseSchema(BaseModel):
    """Generated PDF reference."""

    pdf_url: str = Field(..., description="Public URL of the PDF")
    pdf_public_id: str | None = Field(default=None, description="Storage id of the PDF")


class ErrorResponseSchema(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")
