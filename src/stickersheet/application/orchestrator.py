"""Placement orchestrator.

This module is the facade the surrounding editor calls for every sheet
edit. It composes the validator and the search over the sheet state and
only commits results that satisfy the sheet invariants.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable

from stickersheet.domain.entities import SheetState
from stickersheet.domain.errors import InvalidStickerMetadata, NoSpaceAvailable
from stickersheet.domain.services import (
    MM_SEARCH,
    PlacementSearch,
    PlacementValidator,
    SearchStage,
    pixel_search_limits,
)
from stickersheet.domain.value_objects import (
    PaperSize,
    Placement,
    Point2D,
    SheetConfig,
    StickerSpec,
)

from .viewport import SheetViewport

logger = logging.getLogger(__name__)

__all__ = [
    "MoveOutcome",
    "MoveResult",
    "PlacementOrchestrator",
    "new_placement_id",
]


def new_placement_id() -> str:
    """Generate an opaque placement id."""
    return f"placed_{uuid.uuid4().hex[:8]}"


class MoveOutcome(str, Enum):
    """How a move or rotate request was settled.

    Attributes:
        COMMITTED: The requested value was valid and committed as-is.
        RESOLVED: The request was invalid; a nearby valid position was committed.
        REVERTED: No valid position was found; the placement kept its
            last committed value.
    """

    COMMITTED = "committed"
    RESOLVED = "resolved"
    REVERTED = "reverted"


@dataclass(frozen=True)
class MoveResult:
    """Result of a move or rotate request.

    Attributes:
        outcome: How the request was settled.
        placement: The placement as committed after the request.
        requested: The placement as the user asked for it.
        stage: Search stage that resolved the request, if a search ran
            and succeeded.
    """

    outcome: MoveOutcome
    placement: Placement
    requested: Placement
    stage: SearchStage | None = None

    @property
    def reverted(self) -> bool:
        """True if the request left the placement unchanged."""
        return self.outcome is MoveOutcome.REVERTED


class PlacementOrchestrator:
    """Applies editor operations to a sheet while keeping it valid.

    Every committed state satisfies the sheet invariants, with one
    exception kept for compatibility: changing margin or gap does not
    re-validate existing placements (see ``reconfigure``).

    Attributes:
        state: The sheet being edited. Owned by this orchestrator.
        viewport: Canvas scale used to resolve drags and rotations.
    """

    def __init__(
        self,
        state: SheetState | None = None,
        viewport: SheetViewport | None = None,
        id_factory: Callable[[], str] = new_placement_id,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            state: Sheet to edit. A fresh default A4 sheet if omitted.
            viewport: Canvas mapping for drag resolution. Screen DPI if omitted.
            id_factory: Generator of new placement ids.
        """
        self.state = state if state is not None else SheetState()
        self.viewport = viewport if viewport is not None else SheetViewport()
        self._id_factory = id_factory
        self.validator = PlacementValidator(self.state.stickers)

    @property
    def config(self) -> SheetConfig:
        """Current sheet configuration."""
        return self.state.config

    @property
    def placements(self) -> tuple[Placement, ...]:
        """Committed placements in sheet order."""
        return self.state.snapshot()

    def register_stickers(self, stickers: Iterable[StickerSpec]) -> None:
        """Add stickers to the catalog used for sizing placements."""
        self.state.register_stickers(stickers)

    def select(self, placement_id: str | None) -> None:
        """Select a placement, or clear the selection with None."""
        if placement_id is not None:
            self.state.get_placement(placement_id)
        self.state.selected_id = placement_id

    # -------------------------------------------------------------------------
    # Creating placements
    # -------------------------------------------------------------------------

    def add(self, sticker_id: str) -> Placement:
        """Place a sticker as close as possible to the printable top-left.

        Args:
            sticker_id: Catalog id of the sticker to place.

        Returns:
            The committed placement, which also becomes the selection.

        Raises:
            StickerNotFound: If the sticker is not in the catalog.
            InvalidStickerMetadata: If the sticker has no print size.
            NoSpaceAvailable: If the search finds no valid position.
        """
        sticker = self._require_print_size(sticker_id)
        printable = self.config.printable_rect
        base = Placement(
            id=self._next_id(),
            sticker_id=sticker.id,
            x_mm=printable.x,
            y_mm=printable.y,
            rotation_deg=0.0,
        )
        return self._place_new(base, Point2D(printable.x, printable.y))

    def duplicate(self, placement_id: str) -> Placement:
        """Copy a placement, starting the search just to its right.

        The requested start is the original's position offset by its
        width plus the gap.

        Raises:
            PlacementNotFound: If the placement is not on the sheet.
            InvalidStickerMetadata: If its sticker has no print size.
            NoSpaceAvailable: If the search finds no valid position.
        """
        source = self.state.get_placement(placement_id)
        sticker = self._require_print_size(source.sticker_id)
        start = Point2D(
            source.x_mm + float(sticker.width_mm) + self.config.gap_mm,  # type: ignore[arg-type]
            source.y_mm,
        )
        base = replace(source, id=self._next_id(), x_mm=start.x, y_mm=start.y)
        return self._place_new(base, start)

    def _place_new(self, base: Placement, start: Point2D) -> Placement:
        search = PlacementSearch(self.validator, MM_SEARCH)
        hit = search.find_nearest_valid(
            base=base,
            start=start,
            others=self.state.snapshot(),
            bounds=self.config.printable_rect,
            gap_mm=self.config.gap_mm,
        )
        if hit is None:
            logger.warning(
                "No space left on the sheet for sticker '%s'", base.sticker_id
            )
            raise NoSpaceAvailable(base.sticker_id)

        self.state.put(hit.placement)
        self.state.selected_id = hit.placement.id
        logger.info(
            "Placed sticker '%s' as '%s' at (%.2f, %.2f) via %s",
            hit.placement.sticker_id,
            hit.placement.id,
            hit.placement.x_mm,
            hit.placement.y_mm,
            hit.stage.value,
        )
        return hit.placement

    def _next_id(self) -> str:
        placement_id = self._id_factory()
        while placement_id in self.state.placements:
            placement_id = self._id_factory()
        return placement_id

    def _require_print_size(self, sticker_id: str) -> StickerSpec:
        sticker = self.state.get_sticker(sticker_id)
        if not sticker.has_print_size:
            logger.warning("Sticker '%s' is missing print size metadata", sticker_id)
            raise InvalidStickerMetadata(sticker_id)
        return sticker

    # -------------------------------------------------------------------------
    # Editing placements
    # -------------------------------------------------------------------------

    def move(
        self,
        placement_id: str,
        x_mm: float,
        y_mm: float,
        viewport: SheetViewport | None = None,
    ) -> MoveResult:
        """Move a placement to a dropped position.

        Args:
            placement_id: Placement being dragged.
            x_mm: Requested left edge of the un-rotated sticker.
            y_mm: Requested top edge of the un-rotated sticker.
            viewport: Canvas scale for this drop only. Defaults to self.viewport.

        Returns:
            MoveResult describing what was committed.

        Raises:
            PlacementNotFound: If the placement is not on the sheet.
        """
        existing = self.state.get_placement(placement_id)
        return self._settle(
            existing, replace(existing, x_mm=x_mm, y_mm=y_mm), viewport
        )

    def rotate(
        self,
        placement_id: str,
        rotation_deg: float,
        viewport: SheetViewport | None = None,
    ) -> MoveResult:
        """Rotate a placement about its center.

        If the rotated sticker no longer fits where it is, it is shifted to
        the nearest position where it does, or the rotation is reverted.

        Raises:
            PlacementNotFound: If the placement is not on the sheet.
        """
        existing = self.state.get_placement(placement_id)
        return self._settle(
            existing, replace(existing, rotation_deg=rotation_deg), viewport
        )

    def _settle(
        self,
        existing: Placement,
        candidate: Placement,
        viewport: SheetViewport | None = None,
    ) -> MoveResult:
        if not all(
            math.isfinite(v)
            for v in (candidate.x_mm, candidate.y_mm, candidate.rotation_deg)
        ):
            return self._revert(existing, candidate)

        others = self.state.snapshot()
        printable = self.config.printable_rect
        gap = self.config.gap_mm

        if self.validator.is_valid(candidate, others, printable, gap):
            self.state.put(candidate)
            return MoveResult(
                outcome=MoveOutcome.COMMITTED,
                placement=candidate,
                requested=candidate,
            )

        sticker = self.state.stickers.get(candidate.sticker_id)
        if sticker is None or not sticker.has_print_size:
            return self._revert(existing, candidate)

        scale = (viewport or self.viewport).scale_px_per_mm
        search = PlacementSearch(
            self.validator,
            pixel_search_limits(printable.scaled(scale)),
            units_per_mm=scale,
        )
        hit = search.find_nearest_valid(
            base=candidate,
            start=Point2D(candidate.x_mm * scale, candidate.y_mm * scale),
            others=others,
            bounds=printable,
            gap_mm=gap,
            original=Point2D(existing.x_mm * scale, existing.y_mm * scale),
        )
        # Snapping back to the original position is a revert, not a resolution.
        if hit is None or hit.stage is SearchStage.ORIGINAL:
            return self._revert(existing, candidate)

        self.state.put(hit.placement)
        logger.debug(
            "Resolved '%s' to (%.2f, %.2f) via %s",
            candidate.id,
            hit.placement.x_mm,
            hit.placement.y_mm,
            hit.stage.value,
        )
        return MoveResult(
            outcome=MoveOutcome.RESOLVED,
            placement=hit.placement,
            requested=candidate,
            stage=hit.stage,
        )

    def _revert(self, existing: Placement, candidate: Placement) -> MoveResult:
        logger.warning(
            "Could not resolve '%s'; reverting to (%.2f, %.2f) at %.1f deg",
            existing.id,
            existing.x_mm,
            existing.y_mm,
            existing.rotation_deg,
        )
        return MoveResult(
            outcome=MoveOutcome.REVERTED,
            placement=existing,
            requested=candidate,
        )

    # -------------------------------------------------------------------------
    # Removing placements and reconfiguring the sheet
    # -------------------------------------------------------------------------

    def remove(self, placement_id: str) -> Placement:
        """Delete a placement. The remaining placements stay where they are.

        Raises:
            PlacementNotFound: If the placement is not on the sheet.
        """
        removed = self.state.discard(placement_id)
        logger.info("Removed placement '%s'", placement_id)
        return removed

    def clear(self) -> None:
        """Remove every placement from the sheet."""
        count = self.state.placement_count
        self.state.clear()
        logger.info("Cleared %d placements", count)

    def reconfigure(self, config: SheetConfig) -> bool:
        """Apply a new sheet configuration.

        A paper size change clears every placement. Margin and gap changes
        keep placements as they are without re-validating them; the next
        move or rotate of a placement validates it against the new values.

        Args:
            config: New sheet configuration.

        Returns:
            True if the placements were cleared.
        """
        reset = config.paper_size != self.state.config.paper_size
        self.state.config = config
        if reset:
            count = self.state.placement_count
            self.state.clear()
            logger.info(
                "Paper size changed to %s; cleared %d placements",
                PaperSize(config.paper_size).value,
                count,
            )
        return reset
