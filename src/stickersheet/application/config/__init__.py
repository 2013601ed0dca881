"""Sheet document schema, loading and conversion.

Public API:
    - SheetDocument: Root document model
    - SheetConfigSchema: Paper size, margin and gap section
    - StickerSchema: Sticker catalog entry
    - PlacementSchema: Committed placement entry
    - load_document: Load a document from a JSON file
    - load_document_from_dict: Load a document from a dictionary
    - save_document: Write a document as JSON
    - ConfigError: Exception for document errors
    - document_to_state: Convert a document to a SheetState
    - state_to_document: Convert a SheetState to a document

Example:
    >>> from pathlib import Path
    >>> from stickersheet.application.config import load_document, ConfigError
    >>>
    >>> try:
    ...     document = load_document(Path("sheet.json"))
    ...     print(f"{len(document.placements)} placements")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from stickersheet.application.config.adapter import (
    document_to_state,
    sheet_config_from_schema,
    state_to_document,
    sticker_from_schema,
)
from stickersheet.application.config.loader import (
    ConfigError,
    load_document,
    load_document_from_dict,
    save_document,
)
from stickersheet.application.config.schema import (
    SUPPORTED_VERSIONS,
    PlacementSchema,
    SheetConfigSchema,
    SheetDocument,
    StickerSchema,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "PlacementSchema",
    "SheetConfigSchema",
    "SheetDocument",
    "StickerSchema",
    "document_to_state",
    "load_document",
    "load_document_from_dict",
    "save_document",
    "sheet_config_from_schema",
    "state_to_document",
    "sticker_from_schema",
]
