"""Infrastructure layer - print service access, wire format and previews."""

from .preview import SheetPreviewRenderer
from .print_client import (
    API_URL_ENVVAR,
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    PrintServiceClient,
    PrintServiceError,
    generate_sheet_pdf_sync,
    list_stickers_sync,
)
from .serialization import (
    PayloadError,
    PrintedSheet,
    build_print_request,
    parse_print_response,
    parse_sticker_catalog,
)

__all__ = [
    "API_URL_ENVVAR",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "PayloadError",
    "PrintServiceClient",
    "PrintServiceError",
    "PrintedSheet",
    "SheetPreviewRenderer",
    "build_print_request",
    "generate_sheet_pdf_sync",
    "list_stickers_sync",
    "parse_print_response",
    "parse_sticker_catalog",
]
