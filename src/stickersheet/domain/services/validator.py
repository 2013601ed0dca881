"""Placement validity checking.

The validator decides whether a candidate placement satisfies the sheet
invariants against a snapshot of the other committed placements:

- its gap-expanded rotated bounding box lies inside the printable rect
- that box does not intersect the expanded box of any other placement
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from ..geometry import expanded_bounds, rects_intersect
from ..value_objects import Placement, Rect, StickerSpec

__all__ = [
    "LayoutViolation",
    "PlacementValidator",
    "ViolationKind",
]


class ViolationKind(str, Enum):
    """Kinds of broken sheet invariants."""

    OUT_OF_BOUNDS = "out_of_bounds"
    OVERLAP = "overlap"
    MISSING_SIZE = "missing_size"
    DUPLICATE_ID = "duplicate_id"


@dataclass(frozen=True)
class LayoutViolation:
    """A single broken invariant in a placement set.

    Attributes:
        kind: Which invariant is broken.
        placement_id: Placement the violation was found on.
        other_id: Second placement involved, for overlaps.
        message: Human-readable description.
    """

    kind: ViolationKind
    placement_id: str
    message: str
    other_id: str | None = None


class PlacementValidator:
    """Checks placements against containment and overlap invariants.

    The validator only reads the sticker catalog it is given and the
    arguments of each call, so repeated calls with the same inputs always
    return the same verdict.

    Attributes:
        stickers: Sticker catalog keyed by sticker id.
    """

    def __init__(self, stickers: Mapping[str, StickerSpec]) -> None:
        self.stickers = stickers

    def footprint(self, placement: Placement, gap_mm: float) -> Rect | None:
        """Expanded rotated bounding box of a placement.

        Returns:
            The box used for all overlap and containment checks, or None if
            the sticker is unknown or has no print size.
        """
        sticker = self.stickers.get(placement.sticker_id)
        if sticker is None or not sticker.has_print_size:
            return None
        return expanded_bounds(placement, sticker, gap_mm)

    def is_valid(
        self,
        candidate: Placement,
        others: Iterable[Placement],
        printable: Rect,
        gap_mm: float,
    ) -> bool:
        """Check if a candidate placement can be committed.

        Args:
            candidate: Placement to check.
            others: Committed placements. An entry sharing the candidate's
                id is the candidate's own previous state and is skipped.
            printable: Printable rectangle of the sheet.
            gap_mm: Clearance required around every sticker.

        Returns:
            True if the candidate is fully inside the printable rect and
            clear of every other placement.
        """
        rect = self.footprint(candidate, gap_mm)
        if rect is None:
            return False

        if not printable.contains(rect):
            return False

        for other in others:
            if other.id == candidate.id:
                continue
            other_rect = self.footprint(other, gap_mm)
            if other_rect is None:
                continue
            if rects_intersect(rect, other_rect):
                return False

        return True

    def find_violations(
        self,
        placements: Iterable[Placement],
        printable: Rect,
        gap_mm: float,
    ) -> list[LayoutViolation]:
        """Audit a whole placement set against the sheet invariants.

        Useful after a margin or gap change, which leaves committed
        placements untouched even when they no longer fit.

        Args:
            placements: Placements to audit, in sheet order.
            printable: Printable rectangle of the sheet.
            gap_mm: Clearance required around every sticker.

        Returns:
            List of violations. Each overlapping pair is reported once.
        """
        items = list(placements)
        violations: list[LayoutViolation] = []
        seen_ids: set[str] = set()
        rects: list[tuple[Placement, Rect]] = []

        for placement in items:
            if placement.id in seen_ids:
                violations.append(
                    LayoutViolation(
                        kind=ViolationKind.DUPLICATE_ID,
                        placement_id=placement.id,
                        message=f"Placement id '{placement.id}' is used more than once",
                    )
                )
            seen_ids.add(placement.id)

            rect = self.footprint(placement, gap_mm)
            if rect is None:
                violations.append(
                    LayoutViolation(
                        kind=ViolationKind.MISSING_SIZE,
                        placement_id=placement.id,
                        message=(
                            f"Sticker '{placement.sticker_id}' has no print size"
                        ),
                    )
                )
                continue

            if not printable.contains(rect):
                violations.append(
                    LayoutViolation(
                        kind=ViolationKind.OUT_OF_BOUNDS,
                        placement_id=placement.id,
                        message=(
                            f"Placement '{placement.id}' extends outside the "
                            f"printable area"
                        ),
                    )
                )
            rects.append((placement, rect))

        for i, (first, first_rect) in enumerate(rects):
            for second, second_rect in rects[i + 1:]:
                if rects_intersect(first_rect, second_rect):
                    violations.append(
                        LayoutViolation(
                            kind=ViolationKind.OVERLAP,
                            placement_id=first.id,
                            other_id=second.id,
                            message=(
                                f"Placements '{first.id}' and '{second.id}' "
                                "have overlapping clearance zones"
                            ),
                        )
                    )

        return violations
