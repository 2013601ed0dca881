"""In-memory sheet sessions for the REST API.

Each session owns one PlacementOrchestrator. Endpoints run on the event
loop, so operations on a session are applied one at a time in the order
they arrive.
"""

from __future__ import annotations

import logging
import uuid
from typing import Iterable

from stickersheet.application import PlacementOrchestrator
from stickersheet.domain import PaperSize, SheetConfig, SheetState, StickerSpec

logger = logging.getLogger(__name__)


class SheetNotFoundError(Exception):
    """Raised when a sheet session id is unknown."""

    def __init__(self, sheet_id: str) -> None:
        self.sheet_id = sheet_id
        super().__init__(f"Sheet not found: {sheet_id}")


class SheetSessionStore:
    """Keyed store of open sheet sessions."""

    def __init__(self) -> None:
        self._sessions: dict[str, PlacementOrchestrator] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(
        self,
        config: SheetConfig,
        stickers: Iterable[StickerSpec] = (),
    ) -> tuple[str, PlacementOrchestrator]:
        """Open a new empty sheet.

        Returns:
            Tuple of (sheet id, orchestrator owning the sheet).
        """
        sheet_id = uuid.uuid4().hex
        orchestrator = PlacementOrchestrator(SheetState(config=config))
        orchestrator.register_stickers(stickers)
        self._sessions[sheet_id] = orchestrator
        logger.info("Opened %s sheet %s", PaperSize(config.paper_size).value, sheet_id)
        return sheet_id, orchestrator

    def get(self, sheet_id: str) -> PlacementOrchestrator:
        """Look up a session.

        Raises:
            SheetNotFoundError: If the id is unknown.
        """
        try:
            return self._sessions[sheet_id]
        except KeyError:
            raise SheetNotFoundError(sheet_id) from None

    def close(self, sheet_id: str) -> None:
        """Drop a session.

        Raises:
            SheetNotFoundError: If the id is unknown.
        """
        if self._sessions.pop(sheet_id, None) is None:
            raise SheetNotFoundError(sheet_id)
        logger.info("Closed sheet %s", sheet_id)
