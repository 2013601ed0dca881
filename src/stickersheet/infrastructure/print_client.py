"""HTTP client for the sticker print service.

The print service owns the sticker catalog and renders finished sheets
to PDF. This module only moves data; the sheet it sends has already been
validated by the placement engine.

Classes:
    PrintServiceClient: Async client for the catalog and PDF endpoints
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from stickersheet.domain.value_objects import StickerSpec

from .serialization import (
    PayloadError,
    PrintedSheet,
    parse_print_response,
    parse_sticker_catalog,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
API_URL_ENVVAR = "STICKERSHEET_API_URL"
DEFAULT_TIMEOUT = 30.0


class PrintServiceError(Exception):
    """Raised when the print service cannot be reached or rejects a request.

    Attributes:
        message: Readable description of the failure.
        status_code: HTTP status returned by the service, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class PrintServiceClient:
    """Async client for the print service.

    Attributes:
        base_url: Base URL of the service (default: http://localhost:3000)
        timeout: Request timeout in seconds (default: 30.0)

    Example:
        >>> client = PrintServiceClient()
        >>> sheet = await client.generate_sheet_pdf(build_print_request(state))
        >>> print(sheet.pdf_url)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def generate_sheet_pdf(self, payload: dict[str, Any]) -> PrintedSheet:
        """Render a sheet to PDF.

        Args:
            payload: Request body from ``build_print_request``.

        Returns:
            The generated PDF reference.

        Raises:
            PrintServiceError: If the request fails or the response is malformed.
        """
        data = await self._request("POST", "/api/print/sheets", json=payload)
        try:
            sheet = parse_print_response(data)
        except PayloadError as e:
            raise PrintServiceError(str(e)) from e
        logger.info(
            "Generated PDF for %d placements: %s",
            len(payload.get("placements", [])),
            sheet.pdf_url,
        )
        return sheet

    async def list_stickers(self) -> list[StickerSpec]:
        """Fetch the sticker catalog.

        Raises:
            PrintServiceError: If the request fails or the response is malformed.
        """
        data = await self._request("GET", "/api/stickers")
        try:
            stickers = parse_sticker_catalog(data)
        except PayloadError as e:
            raise PrintServiceError(str(e)) from e
        missing = sum(1 for s in stickers if not s.has_print_size)
        if missing:
            logger.warning("%d stickers are missing print size metadata", missing)
        return stickers

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method, url, json=json, timeout=self.timeout
                )
        except httpx.TimeoutException as e:
            logger.debug("Timeout calling %s %s: %s", method, url, e)
            raise PrintServiceError(f"Timed out calling print service at {url}") from e
        except httpx.RequestError as e:
            logger.debug("Request error calling %s %s: %s", method, url, e)
            raise PrintServiceError(
                f"Could not reach print service at {self.base_url}: {e}"
            ) from e

        if response.status_code >= 400:
            raise PrintServiceError(
                _error_message(response),
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise PrintServiceError(
                f"Print service returned invalid JSON from {path}",
                status_code=response.status_code,
            ) from e


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return f"Print service error ({response.status_code}): {body['error']}"
    return f"Print service returned status {response.status_code}"


def generate_sheet_pdf_sync(
    payload: dict[str, Any],
    base_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> PrintedSheet:
    """Synchronous wrapper for ``PrintServiceClient.generate_sheet_pdf``.

    Convenience function for CLI usage where async is not needed.

    Raises:
        PrintServiceError: If the request fails.
    """
    import asyncio

    client = PrintServiceClient(base_url=base_url, timeout=timeout)
    return asyncio.run(client.generate_sheet_pdf(payload))


def list_stickers_sync(
    base_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[StickerSpec]:
    """Synchronous wrapper for ``PrintServiceClient.list_stickers``.

    Raises:
        PrintServiceError: If the request fails.
    """
    import asyncio

    client = PrintServiceClient(base_url=base_url, timeout=timeout)
    return asyncio.run(client.list_stickers())
