"""Sheet editing endpoints."""

from fastapi import APIRouter, HTTPException, status

from stickersheet.application import MoveResult, PlacementOrchestrator, SheetViewport
from stickersheet.application.config import (
    PlacementSchema,
    SheetConfigSchema,
    sheet_config_from_schema,
    state_to_document,
    sticker_from_schema,
)
from stickersheet.domain import LayoutViolation, Placement, SheetConfig
from stickersheet.infrastructure import build_print_request
from stickersheet.web.dependencies import PrintClientDep, SessionStoreDep
from stickersheet.web.schemas.requests import (
    AddPlacementRequest,
    CreateSheetRequest,
    MovePlacementRequest,
    RegisterStickersRequest,
    RotatePlacementRequest,
    SelectPlacementRequest,
)
from stickersheet.web.schemas.responses import (
    MoveResultSchema,
    PrintResponseSchema,
    ReconfigureResponseSchema,
    RectSchema,
    SheetResponseSchema,
    ViolationListSchema,
    ViolationSchema,
)

router = APIRouter(prefix="/sheets", tags=["sheets"])


def _sheet_config(schema: SheetConfigSchema) -> SheetConfig:
    try:
        return sheet_config_from_schema(schema)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "error_type": "invalid_sheet"},
        ) from e


def _sheet_to_schema(sheet_id: str, orchestrator: PlacementOrchestrator) -> SheetResponseSchema:
    """Convert a session's state to its response schema."""
    document = state_to_document(orchestrator.state)
    printable = orchestrator.config.printable_rect
    return SheetResponseSchema(
        sheet_id=sheet_id,
        sheet=document.sheet,
        printable=RectSchema(
            x=printable.x, y=printable.y, width=printable.width, height=printable.height
        ),
        stickers=document.stickers,
        placements=document.placements,
        selected_id=orchestrator.state.selected_id,
    )


def _placement_to_schema(placement: Placement) -> PlacementSchema:
    return PlacementSchema(
        id=placement.id,
        sticker_id=placement.sticker_id,
        x_mm=placement.x_mm,
        y_mm=placement.y_mm,
        rotation_deg=placement.rotation_deg,
    )


def _move_to_schema(result: MoveResult) -> MoveResultSchema:
    return MoveResultSchema(
        outcome=result.outcome.value,
        stage=result.stage.value if result.stage is not None else None,
        placement=_placement_to_schema(result.placement),
        requested=_placement_to_schema(result.requested),
    )


def _violations(orchestrator: PlacementOrchestrator) -> list[ViolationSchema]:
    config = orchestrator.config
    found: list[LayoutViolation] = orchestrator.validator.find_violations(
        orchestrator.placements, config.printable_rect, config.gap_mm
    )
    return [
        ViolationSchema(
            kind=v.kind.value,
            placement_id=v.placement_id,
            other_id=v.other_id,
            message=v.message,
        )
        for v in found
    ]


def _request_viewport(scale: float | None) -> SheetViewport | None:
    """Viewport for a single request; None keeps the session default."""
    return SheetViewport(scale_px_per_mm=scale) if scale is not None else None


# =============================================================================
# Sheets
# =============================================================================


@router.post("", response_model=SheetResponseSchema, status_code=status.HTTP_201_CREATED)
async def create_sheet(
    request: CreateSheetRequest,
    store: SessionStoreDep,
) -> SheetResponseSchema:
    """Open a new empty sheet.

    Raises:
        HTTPException: If the margin leaves no printable area.
    """
    config = _sheet_config(request.sheet)
    sheet_id, orchestrator = store.create(
        config, [sticker_from_schema(s) for s in request.stickers]
    )
    return _sheet_to_schema(sheet_id, orchestrator)


@router.get("/{sheet_id}", response_model=SheetResponseSchema)
async def get_sheet(sheet_id: str, store: SessionStoreDep) -> SheetResponseSchema:
    """Get the current state of a sheet."""
    return _sheet_to_schema(sheet_id, store.get(sheet_id))


@router.delete("/{sheet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_sheet(sheet_id: str, store: SessionStoreDep) -> None:
    """Close a sheet session."""
    store.close(sheet_id)


@router.put("/{sheet_id}/config", response_model=ReconfigureResponseSchema)
async def reconfigure_sheet(
    sheet_id: str,
    request: SheetConfigSchema,
    store: SessionStoreDep,
) -> ReconfigureResponseSchema:
    """Change paper size, margin or gap.

    A paper size change removes every placement. Margin and gap changes
    keep placements; any that no longer fit are listed as violations.
    """
    orchestrator = store.get(sheet_id)
    cleared = orchestrator.reconfigure(_sheet_config(request))
    return ReconfigureResponseSchema(
        cleared=cleared,
        sheet=_sheet_to_schema(sheet_id, orchestrator),
        violations=_violations(orchestrator),
    )


@router.get("/{sheet_id}/violations", response_model=ViolationListSchema)
async def audit_sheet(sheet_id: str, store: SessionStoreDep) -> ViolationListSchema:
    """List placements that break the sheet invariants."""
    violations = _violations(store.get(sheet_id))
    return ViolationListSchema(is_valid=not violations, violations=violations)


# =============================================================================
# Sticker catalog
# =============================================================================


@router.post("/{sheet_id}/stickers", response_model=SheetResponseSchema)
async def register_stickers(
    sheet_id: str,
    request: RegisterStickersRequest,
    store: SessionStoreDep,
) -> SheetResponseSchema:
    """Add or replace sticker catalog entries."""
    orchestrator = store.get(sheet_id)
    orchestrator.register_stickers(sticker_from_schema(s) for s in request.stickers)
    return _sheet_to_schema(sheet_id, orchestrator)


@router.post("/{sheet_id}/stickers/import", response_model=SheetResponseSchema)
async def import_stickers(
    sheet_id: str,
    store: SessionStoreDep,
    client: PrintClientDep,
) -> SheetResponseSchema:
    """Import the sticker catalog from the print service.

    Raises:
        PrintServiceError: If the service fails (handled by exception handler).
    """
    orchestrator = store.get(sheet_id)
    orchestrator.register_stickers(await client.list_stickers())
    return _sheet_to_schema(sheet_id, orchestrator)


# =============================================================================
# Placements
# =============================================================================


@router.post(
    "/{sheet_id}/placements",
    response_model=PlacementSchema,
    status_code=status.HTTP_201_CREATED,
)
async def add_placement(
    sheet_id: str,
    request: AddPlacementRequest,
    store: SessionStoreDep,
) -> PlacementSchema:
    """Place a sticker as close as possible to the printable top-left.

    Raises:
        InvalidStickerMetadata: 422, sticker has no print size.
        NoSpaceAvailable: 409, the sheet is full.
    """
    placement = store.get(sheet_id).add(request.sticker_id)
    return _placement_to_schema(placement)


@router.delete("/{sheet_id}/placements", response_model=SheetResponseSchema)
async def clear_placements(sheet_id: str, store: SessionStoreDep) -> SheetResponseSchema:
    """Remove every placement from the sheet."""
    orchestrator = store.get(sheet_id)
    orchestrator.clear()
    return _sheet_to_schema(sheet_id, orchestrator)


@router.post(
    "/{sheet_id}/placements/{placement_id}/duplicate",
    response_model=PlacementSchema,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_placement(
    sheet_id: str,
    placement_id: str,
    store: SessionStoreDep,
) -> PlacementSchema:
    """Copy a placement next to the original."""
    placement = store.get(sheet_id).duplicate(placement_id)
    return _placement_to_schema(placement)


@router.put("/{sheet_id}/placements/{placement_id}/position", response_model=MoveResultSchema)
async def move_placement(
    sheet_id: str,
    placement_id: str,
    request: MovePlacementRequest,
    store: SessionStoreDep,
) -> MoveResultSchema:
    """Move a placement to a dropped position.

    A blocked drop is resolved to the nearest valid position or reverted;
    the outcome field says which.
    """
    result = store.get(sheet_id).move(
        placement_id,
        request.x_mm,
        request.y_mm,
        viewport=_request_viewport(request.scale_px_per_mm),
    )
    return _move_to_schema(result)


@router.put("/{sheet_id}/placements/{placement_id}/rotation", response_model=MoveResultSchema)
async def rotate_placement(
    sheet_id: str,
    placement_id: str,
    request: RotatePlacementRequest,
    store: SessionStoreDep,
) -> MoveResultSchema:
    """Rotate a placement about its center."""
    result = store.get(sheet_id).rotate(
        placement_id,
        request.rotation_deg,
        viewport=_request_viewport(request.scale_px_per_mm),
    )
    return _move_to_schema(result)


@router.delete(
    "/{sheet_id}/placements/{placement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_placement(
    sheet_id: str,
    placement_id: str,
    store: SessionStoreDep,
) -> None:
    """Delete a placement."""
    store.get(sheet_id).remove(placement_id)


@router.put("/{sheet_id}/selection", response_model=SheetResponseSchema)
async def select_placement(
    sheet_id: str,
    request: SelectPlacementRequest,
    store: SessionStoreDep,
) -> SheetResponseSchema:
    """Select a placement, or clear the selection."""
    orchestrator = store.get(sheet_id)
    orchestrator.select(request.placement_id)
    return _sheet_to_schema(sheet_id, orchestrator)


# =============================================================================
# Printing
# =============================================================================


@router.post("/{sheet_id}/print", response_model=PrintResponseSchema)
async def print_sheet(
    sheet_id: str,
    store: SessionStoreDep,
    client: PrintClientDep,
) -> PrintResponseSchema:
    """Generate a PDF of the committed placements.

    Raises:
        HTTPException: 422 if the sheet is empty or has violations.
        PrintServiceError: 502, the print service failed.
    """
    orchestrator = store.get(sheet_id)
    if not orchestrator.state.placement_count:
        raise HTTPException(
            status_code=422,
            detail={"error": "The sheet has no placements", "error_type": "empty_sheet"},
        )
    violations = _violations(orchestrator)
    if violations:
        raise HTTPException(
            status_code=422,
            detail={
                "error": "The sheet has placements that break the layout rules",
                "error_type": "invalid_layout",
                "violations": [v.model_dump() for v in violations],
            },
        )
    printed = await client.generate_sheet_pdf(build_print_request(orchestrator.state))
    return PrintResponseSchema(pdf_url=printed.pdf_url, pdf_public_id=printed.pdf_public_id)
