"""Adapter between SheetDocument and the domain sheet state.

This module converts the Pydantic document model to the domain
``SheetState`` used by the orchestrator, and back again for saving.
Loading a document does not re-run placement search: committed
placements are restored exactly as saved, and ``find_violations`` is the
way to check a hand-edited document.
"""

from stickersheet.application.config.schema import (
    PlacementSchema,
    SheetConfigSchema,
    SheetDocument,
    StickerSchema,
)
from stickersheet.domain.entities import SheetState
from stickersheet.domain.value_objects import (
    Placement,
    SheetConfig,
    StickerSpec,
)


def sheet_config_from_schema(schema: SheetConfigSchema) -> SheetConfig:
    """Convert the sheet section to a domain SheetConfig.

    Raises:
        ValueError: If the margin leaves no printable area on the paper.
    """
    return SheetConfig(
        paper_size=schema.paper_size,
        margin_mm=schema.margin_mm,
        gap_mm=schema.gap_mm,
    )


def sticker_from_schema(schema: StickerSchema) -> StickerSpec:
    return StickerSpec(
        id=schema.id,
        width_mm=schema.width_mm,
        height_mm=schema.height_mm,
        image_url=schema.image_url,
        title=schema.title,
    )


def document_to_state(document: SheetDocument) -> SheetState:
    """Build a SheetState from a validated document.

    Args:
        document: A validated SheetDocument instance

    Returns:
        A SheetState with the document's config, catalog and placements,
        in document order and with nothing selected.

    Raises:
        ValueError: If the sheet section describes an impossible sheet.

    Example:
        >>> document = load_document(Path("sheet.json"))
        >>> orchestrator = PlacementOrchestrator(document_to_state(document))
    """
    state = SheetState(config=sheet_config_from_schema(document.sheet))
    state.register_stickers(sticker_from_schema(s) for s in document.stickers)
    for p in document.placements:
        state.put(
            Placement(
                id=p.id,
                sticker_id=p.sticker_id,
                x_mm=p.x_mm,
                y_mm=p.y_mm,
                rotation_deg=p.rotation_deg,
            )
        )
    return state


def state_to_document(state: SheetState) -> SheetDocument:
    """Capture a SheetState as a document ready for saving."""
    config = state.config
    return SheetDocument(
        sheet=SheetConfigSchema(
            paper_size=config.paper_size,
            margin_mm=config.margin_mm,
            gap_mm=config.gap_mm,
        ),
        stickers=[
            StickerSchema(
                id=s.id,
                width_mm=s.width_mm if s.width_mm and s.width_mm > 0 else None,
                height_mm=s.height_mm if s.height_mm and s.height_mm > 0 else None,
                image_url=s.image_url,
                title=s.title,
            )
            for s in state.stickers.values()
        ],
        placements=[
            PlacementSchema(
                id=p.id,
                sticker_id=p.sticker_id,
                x_mm=p.x_mm,
                y_mm=p.y_mm,
                rotation_deg=p.rotation_deg,
            )
            for p in state.snapshot()
        ],
    )
