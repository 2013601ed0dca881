"""Pydantic schemas for the REST API."""

from stickersheet.web.schemas.requests import (
    AddPlacementRequest,
    CreateSheetRequest,
    MovePlacementRequest,
    RegisterStickersRequest,
    RotatePlacementRequest,
    SelectPlacementRequest,
)
from stickersheet.web.schemas.responses import (
    ErrorResponseSchema,
    MoveResultSchema,
    PrintResponseSchema,
    ReconfigureResponseSchema,
    RectSchema,
    SheetResponseSchema,
    ViolationListSchema,
    ViolationSchema,
)

__all__ = [
    # Requests
    "AddPlacementRequest",
    "CreateSheetRequest",
    "MovePlacementRequest",
    "RegisterStickersRequest",
    "RotatePlacementRequest",
    "SelectPlacementRequest",
    # Responses
    "ErrorResponseSchema",
    "MoveResultSchema",
    "PrintResponseSchema",
    "ReconfigureResponseSchema",
    "RectSchema",
    "SheetResponseSchema",
    "ViolationListSchema",
    "ViolationSchema",
]
