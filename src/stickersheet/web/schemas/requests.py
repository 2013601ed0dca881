"""Pydantic request schemas for the REST API."""

from pydantic import BaseModel, Field

from stickersheet.application.config import SheetConfigSchema, StickerSchema


class CreateSheetRequest(BaseModel):
    """Request for opening a new sheet."""

    sheet: SheetConfigSchema = Field(
        default_factory=SheetConfigSchema, description="Paper size, margin and gap"
    )
    stickers: list[StickerSchema] = Field(
        default_factory=list, description="Initial sticker catalog entries"
    )


class RegisterStickersRequest(BaseModel):
    """Request for adding catalog entries to a sheet."""

    stickers: list[StickerSchema] = Field(
        ..., min_length=1, description="Sticker catalog entries"
    )


class AddPlacementRequest(BaseModel):
    """Request for placing a sticker."""

    sticker_id: str = Field(..., min_length=1, description="Catalog id of the sticker")


class MovePlacementRequest(BaseModel):
    """Request for moving a placement to a dropped position."""

    x_mm: float = Field(
        ..., allow_inf_nan=False, description="Requested left edge in millimeters"
    )
    y_mm: float = Field(
        ..., allow_inf_nan=False, description="Requested top edge in millimeters"
    )
    scale_px_per_mm: float | None = Field(
        default=None,
        gt=0,
        allow_inf_nan=False,
        description="Canvas scale used to resolve a blocked drop (default: 96 DPI)",
    )


class RotatePlacementRequest(BaseModel):
    """Request for rotating a placement about its center."""

    rotation_deg: float = Field(
        ..., allow_inf_nan=False, description="Requested rotation in degrees"
    )
    scale_px_per_mm: float | None = Field(
        default=None,
        gt=0,
        allow_inf_nan=False,
        description="Canvas scale used to resolve a blocked rotation (default: 96 DPI)",
    )


class SelectPlacementRequest(BaseModel):
    """Request for changing the selected placement."""

    placement_id: str | None = Field(
        default=None, description="Placement to select, or null to clear"
    )
