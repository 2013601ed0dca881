"""Pytest configuration and shared fixtures for sticker sheet tests."""

from __future__ import annotations

import itertools

import pytest

from stickersheet.application import PlacementOrchestrator
from stickersheet.domain import SheetConfig, SheetState, StickerSpec


# =============================================================================
# Shared catalog and sheet fixtures
# =============================================================================


@pytest.fixture
def catalog() -> list[StickerSpec]:
    """A small sticker catalog covering the interesting size cases."""
    return [
        StickerSpec(id="square50", width_mm=50.0, height_mm=50.0, title="Square"),
        StickerSpec(id="small20", width_mm=20.0, height_mm=20.0, title="Small"),
        StickerSpec(id="banner", width_mm=60.0, height_mm=20.0, title="Banner"),
        StickerSpec(id="wide", width_mm=300.0, height_mm=10.0, title="Too wide"),
        StickerSpec(id="unsized", width_mm=None, height_mm=30.0, title="No size"),
    ]


@pytest.fixture
def state(catalog: list[StickerSpec]) -> SheetState:
    """Default A4 sheet (margin 7mm, gap 2mm) with the catalog registered."""
    sheet = SheetState()
    sheet.register_stickers(catalog)
    return sheet


@pytest.fixture
def zero_gap_state(catalog: list[StickerSpec]) -> SheetState:
    """A4 sheet with margin 7mm and no gap."""
    sheet = SheetState(config=SheetConfig(gap_mm=0.0))
    sheet.register_stickers(catalog)
    return sheet


def _counting_ids():
    counter = itertools.count(1)
    return lambda: f"placed_{next(counter)}"


@pytest.fixture
def orchestrator(state: SheetState) -> PlacementOrchestrator:
    """Orchestrator over the default sheet with predictable placement ids."""
    return PlacementOrchestrator(state, id_factory=_counting_ids())


@pytest.fixture
def zero_gap_orchestrator(zero_gap_state: SheetState) -> PlacementOrchestrator:
    """Orchestrator over the zero-gap sheet with predictable placement ids."""
    return PlacementOrchestrator(zero_gap_state, id_factory=_counting_ids())
