"""Unit tests for PlacementOrchestrator.

Tests cover:
- add and duplicate with the millimeter search
- move and rotate with fast-path commits, resolution and reverts
- remove, clear, select and reconfigure
- sheet invariants after sequences of edits
"""

from __future__ import annotations

import re

import pytest

from stickersheet.application import MoveOutcome, PlacementOrchestrator, SheetViewport
from stickersheet.domain import (
    InvalidStickerMetadata,
    NoSpaceAvailable,
    PaperSize,
    Placement,
    PlacementNotFound,
    PlacementValidator,
    Point2D,
    SheetConfig,
    SheetState,
    StickerNotFound,
    StickerSpec,
    ViolationKind,
)


def _violations(orchestrator: PlacementOrchestrator) -> list:
    config = orchestrator.config
    return PlacementValidator(orchestrator.state.stickers).find_violations(
        orchestrator.placements, config.printable_rect, config.gap_mm
    )


def _distance(placement: Placement, x: float, y: float) -> float:
    return Point2D(placement.x_mm, placement.y_mm).distance_to(Point2D(x, y))


# =============================================================================
# Adding placements
# =============================================================================


class TestAdd:
    """Tests for adding stickers to the sheet."""

    def test_first_sticker_lands_on_printable_corner_without_gap(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        placement = zero_gap_orchestrator.add("square50")
        assert (placement.x_mm, placement.y_mm) == (7, 7)
        assert placement.rotation_deg == 0

    def test_first_sticker_with_gap_lands_near_corner(
        self, orchestrator: PlacementOrchestrator
    ) -> None:
        """The 2mm gap keeps the sticker off the printable corner itself;
        the nearest valid point is on the second 2mm ring."""
        placement = orchestrator.add("square50")
        assert _distance(placement, 7, 7) == pytest.approx(4)
        assert placement.x_mm >= 9 and placement.y_mm >= 9 - 1e-9
        assert _violations(orchestrator) == []

    def test_second_sticker_resolved_by_ring_scan(
        self, orchestrator: PlacementOrchestrator
    ) -> None:
        first = orchestrator.add("square50")
        second = orchestrator.add("square50")
        assert _violations(orchestrator) == []
        assert _distance(second, 7, 7) > 2
        assert second.id != first.id

    def test_second_sticker_without_gap_sits_beside_first(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        zero_gap_orchestrator.add("square50")
        second = zero_gap_orchestrator.add("square50")
        assert second.x_mm == pytest.approx(59)
        assert second.y_mm == pytest.approx(7)

    def test_new_placement_is_selected(self, orchestrator: PlacementOrchestrator) -> None:
        placement = orchestrator.add("small20")
        assert orchestrator.state.selected_id == placement.id

    def test_placements_keep_add_order(self, orchestrator: PlacementOrchestrator) -> None:
        ids = [orchestrator.add("small20").id for _ in range(3)]
        assert [p.id for p in orchestrator.placements] == ids

    def test_too_wide_raises_no_space(self, orchestrator: PlacementOrchestrator) -> None:
        with pytest.raises(NoSpaceAvailable) as exc_info:
            orchestrator.add("wide")
        assert exc_info.value.sticker_id == "wide"
        assert orchestrator.placements == ()

    def test_missing_size_rejected_before_search(
        self, orchestrator: PlacementOrchestrator
    ) -> None:
        with pytest.raises(InvalidStickerMetadata, match="print size"):
            orchestrator.add("unsized")
        assert orchestrator.placements == ()
        assert orchestrator.state.selected_id is None

    def test_unknown_sticker(self, orchestrator: PlacementOrchestrator) -> None:
        with pytest.raises(StickerNotFound):
            orchestrator.add("nope")

    def test_failed_add_keeps_selection(self, orchestrator: PlacementOrchestrator) -> None:
        placement = orchestrator.add("small20")
        with pytest.raises(NoSpaceAvailable):
            orchestrator.add("wide")
        assert orchestrator.state.selected_id == placement.id
        assert orchestrator.placements == (placement,)

    def test_full_sheet_raises_no_space(self, catalog: list[StickerSpec]) -> None:
        state = SheetState(config=SheetConfig(margin_mm=80, gap_mm=0))
        state.register_stickers(catalog)
        orchestrator = PlacementOrchestrator(state)
        orchestrator.add("square50")
        orchestrator.add("square50")
        with pytest.raises(NoSpaceAvailable):
            orchestrator.add("square50")
        assert len(orchestrator.placements) == 2


class TestPlacementIds:
    """Tests for placement id generation."""

    def test_default_id_format(self, state: SheetState) -> None:
        placement = PlacementOrchestrator(state).add("small20")
        assert re.fullmatch(r"placed_[0-9a-f]{8}", placement.id)

    def test_colliding_ids_are_regenerated(self, zero_gap_state: SheetState) -> None:
        ids = iter(["placed_x", "placed_x", "placed_y"])
        orchestrator = PlacementOrchestrator(zero_gap_state, id_factory=lambda: next(ids))
        assert orchestrator.add("small20").id == "placed_x"
        assert orchestrator.add("small20").id == "placed_y"


# =============================================================================
# Duplicating placements
# =============================================================================


class TestDuplicate:
    """Tests for duplicating placements."""

    def test_copy_starts_to_the_right(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        source = zero_gap_orchestrator.add("square50")
        copy = zero_gap_orchestrator.duplicate(source.id)
        assert copy.sticker_id == source.sticker_id
        assert copy.x_mm == pytest.approx(59)
        assert copy.y_mm == pytest.approx(7)
        assert zero_gap_orchestrator.state.selected_id == copy.id

    def test_copy_never_overlaps_source(self, orchestrator: PlacementOrchestrator) -> None:
        source = orchestrator.add("banner")
        for _ in range(4):
            orchestrator.duplicate(source.id)
        assert _violations(orchestrator) == []
        assert len(orchestrator.placements) == 5

    def test_copy_keeps_rotation(self, zero_gap_orchestrator: PlacementOrchestrator) -> None:
        source = zero_gap_orchestrator.add("small20")
        zero_gap_orchestrator.move(source.id, 100, 100)
        zero_gap_orchestrator.rotate(source.id, 30)
        copy = zero_gap_orchestrator.duplicate(source.id)
        assert copy.rotation_deg == 30
        assert _violations(zero_gap_orchestrator) == []

    def test_unknown_placement(self, orchestrator: PlacementOrchestrator) -> None:
        with pytest.raises(PlacementNotFound):
            orchestrator.duplicate("nope")

    def test_missing_size(self, orchestrator: PlacementOrchestrator) -> None:
        orchestrator.state.put(
            Placement(id="legacy", sticker_id="unsized", x_mm=50, y_mm=50)
        )
        with pytest.raises(InvalidStickerMetadata):
            orchestrator.duplicate("legacy")
        assert len(orchestrator.placements) == 1


# =============================================================================
# Moving and rotating
# =============================================================================


class TestMove:
    """Tests for drag resolution."""

    def test_valid_move_committed_as_is(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        placement = zero_gap_orchestrator.add("square50")
        result = zero_gap_orchestrator.move(placement.id, 100, 120)
        assert result.outcome is MoveOutcome.COMMITTED
        assert (result.placement.x_mm, result.placement.y_mm) == (100, 120)
        assert zero_gap_orchestrator.state.get_placement(placement.id) == result.placement

    def test_blocked_drop_resolved_nearby(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        zero_gap_orchestrator.add("square50")
        second = zero_gap_orchestrator.add("square50")
        result = zero_gap_orchestrator.move(second.id, 30, 7)
        assert result.outcome is MoveOutcome.RESOLVED
        assert result.stage is not None
        assert (result.requested.x_mm, result.requested.y_mm) == (30, 7)
        assert (result.placement.x_mm, result.placement.y_mm) != (30, 7)
        assert _violations(zero_gap_orchestrator) == []

    def test_drop_far_outside_paper_reverts(
        self, orchestrator: PlacementOrchestrator
    ) -> None:
        placement = orchestrator.add("square50")
        result = orchestrator.move(placement.id, 900, 900)
        assert result.outcome is MoveOutcome.REVERTED
        assert result.reverted
        assert result.placement == placement
        assert orchestrator.state.get_placement(placement.id) == placement

    def test_unsized_placement_reverts(self, orchestrator: PlacementOrchestrator) -> None:
        legacy = Placement(id="legacy", sticker_id="unsized", x_mm=50, y_mm=50)
        orchestrator.state.put(legacy)
        result = orchestrator.move("legacy", 60, 60)
        assert result.reverted
        assert orchestrator.state.get_placement("legacy") == legacy

    def test_unknown_placement(self, orchestrator: PlacementOrchestrator) -> None:
        with pytest.raises(PlacementNotFound):
            orchestrator.move("nope", 10, 10)

    def test_move_keeps_sheet_order(self, orchestrator: PlacementOrchestrator) -> None:
        ids = [orchestrator.add("small20").id for _ in range(3)]
        orchestrator.move(ids[0], 150, 250)
        assert [p.id for p in orchestrator.placements] == ids

    @pytest.mark.parametrize(
        ("x", "y"),
        [(float("inf"), 10.0), (10.0, float("-inf")), (float("nan"), float("nan"))],
    )
    def test_non_finite_drop_reverts(
        self, orchestrator: PlacementOrchestrator, x: float, y: float
    ) -> None:
        placement = orchestrator.add("square50")
        result = orchestrator.move(placement.id, x, y)
        assert result.reverted
        assert orchestrator.state.get_placement(placement.id) == placement

    def test_viewport_override_is_per_call(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        default = zero_gap_orchestrator.viewport
        zero_gap_orchestrator.add("square50")
        second = zero_gap_orchestrator.add("square50")
        result = zero_gap_orchestrator.move(
            second.id, 30, 7, viewport=SheetViewport(scale_px_per_mm=2.5)
        )
        assert result.outcome is MoveOutcome.RESOLVED
        assert zero_gap_orchestrator.viewport is default
        assert _violations(zero_gap_orchestrator) == []


class TestRotate:
    """Tests for rotation resolution."""

    def test_rotation_stored_as_given(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        placement = zero_gap_orchestrator.add("small20")
        zero_gap_orchestrator.move(placement.id, 100, 100)
        result = zero_gap_orchestrator.rotate(placement.id, 370)
        assert result.outcome is MoveOutcome.COMMITTED
        assert result.placement.rotation_deg == 370

    def test_rotation_near_edge_shifts_sticker(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        placement = zero_gap_orchestrator.add("square50")
        result = zero_gap_orchestrator.rotate(placement.id, 45)
        assert result.outcome is MoveOutcome.RESOLVED
        assert result.placement.rotation_deg == 45
        assert result.placement.x_mm > placement.x_mm
        assert result.placement.y_mm > placement.y_mm
        assert _violations(zero_gap_orchestrator) == []

    def test_rotation_that_cannot_fit_reverts(self, catalog: list[StickerSpec]) -> None:
        """A 50mm square fills a 50mm-wide printable strip; at 45 degrees
        it no longer fits anywhere."""
        state = SheetState(config=SheetConfig(margin_mm=80, gap_mm=0))
        state.register_stickers(catalog)
        orchestrator = PlacementOrchestrator(state)
        placement = orchestrator.add("square50")
        result = orchestrator.rotate(placement.id, 45)
        assert result.reverted
        assert orchestrator.state.get_placement(placement.id).rotation_deg == 0

    @pytest.mark.parametrize("degrees", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rotation_reverts(
        self, orchestrator: PlacementOrchestrator, degrees: float
    ) -> None:
        placement = orchestrator.add("square50")
        result = orchestrator.rotate(placement.id, degrees)
        assert result.reverted
        assert orchestrator.state.get_placement(placement.id) == placement


# =============================================================================
# Removing, selecting and reconfiguring
# =============================================================================


class TestRemoveAndClear:
    """Tests for deleting placements."""

    def test_remove_leaves_others_in_place(
        self, orchestrator: PlacementOrchestrator
    ) -> None:
        first = orchestrator.add("small20")
        second = orchestrator.add("small20")
        third = orchestrator.add("small20")
        orchestrator.remove(second.id)
        assert orchestrator.placements == (first, third)

    def test_remove_clears_selection(self, orchestrator: PlacementOrchestrator) -> None:
        placement = orchestrator.add("small20")
        orchestrator.remove(placement.id)
        assert orchestrator.state.selected_id is None

    def test_remove_unknown(self, orchestrator: PlacementOrchestrator) -> None:
        with pytest.raises(PlacementNotFound):
            orchestrator.remove("nope")

    def test_clear(self, orchestrator: PlacementOrchestrator) -> None:
        orchestrator.add("small20")
        orchestrator.add("small20")
        orchestrator.clear()
        assert orchestrator.placements == ()
        assert orchestrator.state.selected_id is None


class TestSelect:
    """Tests for the selected placement."""

    def test_select_and_clear(self, orchestrator: PlacementOrchestrator) -> None:
        first = orchestrator.add("small20")
        orchestrator.add("small20")
        orchestrator.select(first.id)
        assert orchestrator.state.selected_id == first.id
        orchestrator.select(None)
        assert orchestrator.state.selected_id is None

    def test_select_unknown(self, orchestrator: PlacementOrchestrator) -> None:
        with pytest.raises(PlacementNotFound):
            orchestrator.select("nope")


class TestReconfigure:
    """Tests for changing the sheet configuration."""

    def test_paper_change_clears_sheet(self, orchestrator: PlacementOrchestrator) -> None:
        orchestrator.add("small20")
        orchestrator.add("square50")
        cleared = orchestrator.reconfigure(SheetConfig(paper_size=PaperSize.LETTER))
        assert cleared is True
        assert orchestrator.placements == ()
        assert orchestrator.state.selected_id is None
        assert orchestrator.config.paper_size == PaperSize.LETTER

    def test_same_paper_keeps_placements(self, orchestrator: PlacementOrchestrator) -> None:
        placement = orchestrator.add("small20")
        cleared = orchestrator.reconfigure(SheetConfig(gap_mm=3))
        assert cleared is False
        assert orchestrator.placements == (placement,)

    def test_margin_change_is_not_revalidated(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        placement = zero_gap_orchestrator.add("square50")
        zero_gap_orchestrator.reconfigure(SheetConfig(margin_mm=10, gap_mm=0))
        assert zero_gap_orchestrator.placements == (placement,)
        kinds = [v.kind for v in _violations(zero_gap_orchestrator)]
        assert kinds == [ViolationKind.OUT_OF_BOUNDS]

    def test_stale_placement_validated_when_touched(
        self, zero_gap_orchestrator: PlacementOrchestrator
    ) -> None:
        placement = zero_gap_orchestrator.add("square50")
        zero_gap_orchestrator.reconfigure(SheetConfig(margin_mm=10, gap_mm=0))
        result = zero_gap_orchestrator.move(placement.id, 7, 7)
        assert result.outcome is MoveOutcome.RESOLVED
        assert result.placement.x_mm >= 10
        assert result.placement.y_mm >= 10
        assert _violations(zero_gap_orchestrator) == []


# =============================================================================
# Invariants across edit sequences
# =============================================================================


class TestInvariants:
    """Every committed state satisfies the overlap and containment rules."""

    def test_sequence_of_edits(self, orchestrator: PlacementOrchestrator) -> None:
        placed = []
        for sticker_id in ["square50", "small20", "banner"] * 3:
            placed.append(orchestrator.add(sticker_id))
            assert _violations(orchestrator) == []

        orchestrator.duplicate(placed[0].id)
        assert _violations(orchestrator) == []

        for index, (x, y) in enumerate([(9, 9), (100, 100), (150, 250), (60, 30)]):
            orchestrator.move(placed[index].id, x, y)
            assert _violations(orchestrator) == []

        orchestrator.rotate(placed[1].id, 45)
        orchestrator.rotate(placed[2].id, -90)
        assert _violations(orchestrator) == []

        orchestrator.remove(placed[4].id)
        orchestrator.add("square50")
        assert _violations(orchestrator) == []

        ids = [p.id for p in orchestrator.placements]
        assert len(ids) == len(set(ids))
