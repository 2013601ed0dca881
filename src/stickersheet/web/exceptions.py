"""Error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stickersheet.domain import (
    InvalidStickerMetadata,
    NoSpaceAvailable,
    PlacementNotFound,
    StickerNotFound,
)
from stickersheet.infrastructure import PrintServiceError
from stickersheet.web.sessions import SheetNotFoundError


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Offending inputs are left out; they may not be JSON encodable.
        errors = [
            {
                "loc": list(err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content={
                "error": "Request validation failed",
                "error_type": "validation",
                "details": {"errors": errors},
            },
        )

    @app.exception_handler(InvalidStickerMetadata)
    async def invalid_metadata_handler(
        request: Request, exc: InvalidStickerMetadata
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "invalid_sticker_metadata",
                "details": {"sticker_id": exc.sticker_id},
            },
        )

    @app.exception_handler(NoSpaceAvailable)
    async def no_space_handler(
        request: Request, exc: NoSpaceAvailable
    ) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "error": str(exc),
                "error_type": "no_space",
                "details": {"sticker_id": exc.sticker_id},
            },
        )

    @app.exception_handler(SheetNotFoundError)
    async def sheet_not_found_handler(
        request: Request, exc: SheetNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"sheet_id": exc.sheet_id},
            },
        )

    @app.exception_handler(PlacementNotFound)
    async def placement_not_found_handler(
        request: Request, exc: PlacementNotFound
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"placement_id": exc.placement_id},
            },
        )

    @app.exception_handler(StickerNotFound)
    async def sticker_not_found_handler(
        request: Request, exc: StickerNotFound
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"sticker_id": exc.sticker_id},
            },
        )

    @app.exception_handler(PrintServiceError)
    async def print_service_handler(
        request: Request, exc: PrintServiceError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={
                "error": exc.message,
                "error_type": "print_service",
                "details": {"status_code": exc.status_code},
            },
        )
