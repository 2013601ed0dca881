"""API routers for the REST API."""

from stickersheet.web.routers.sheets import router as sheets_router

__all__ = ["sheets_router"]
