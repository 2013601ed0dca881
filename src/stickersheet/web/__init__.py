"""FastAPI REST API for sticker sheet editing.

This module exposes in-memory sheet sessions to a browser editor: adding,
duplicating, moving, rotating and removing placements, changing the sheet
configuration, and sending finished sheets to the print service.

Usage:
    uvicorn stickersheet.web:app --reload
"""

from stickersheet.web.app import app, create_app

__all__ = ["app", "create_app"]
