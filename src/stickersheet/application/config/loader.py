"""Reading and writing sheet documents.

Every failure surfaces as a ConfigError whose ``error_type`` tells the CLI
how to present it: a missing file, an unreadable file, broken JSON, or a
document that parses but does not describe a valid sheet.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stickersheet.application.config.schema import SheetDocument


class ConfigError(Exception):
    """A sheet document could not be read, parsed, validated or written.

    Attributes:
        message: Human readable summary.
        error_type: file_not_found, permission_denied, file_read_error,
            json_parse, validation or file_write_error.
        path: Document path, when the error came from a file.
        details: Per-problem records. JSON errors carry line and column;
            validation errors carry path, message, value and error_type.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _field_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location, e.g. ``placements[2].x_mm``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path or "(root)"


def _validate(data: Any, path: Path | None = None) -> SheetDocument:
    try:
        return SheetDocument.model_validate(data)
    except PydanticValidationError as e:
        problems = [
            {
                "path": _field_path(err["loc"]),
                "message": err["msg"],
                # Root level model checks echo the whole document back.
                "value": err.get("input") if err["loc"] else None,
                "error_type": err["type"],
            }
            for err in e.errors()
        ]
        lines = ["Sheet document validation failed:"]
        for problem in problems:
            line = f"  - {problem['path']}: {problem['message']}"
            if problem["value"] is not None:
                line += f" (got: {problem['value']!r})"
            lines.append(line)
        raise ConfigError(
            message="\n".join(lines),
            error_type="validation",
            path=path,
            details=problems,
        ) from e


def load_document(path: Path) -> SheetDocument:
    """Read a sheet document from disk.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or not
            a valid sheet.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Sheet document not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading sheet document: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Could not read sheet document {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in {path} at line {e.lineno}, "
                f"column {e.colno}: {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    return _validate(data, path)


def load_document_from_dict(data: dict[str, Any]) -> SheetDocument:
    """Validate an already parsed sheet document."""
    return _validate(data)


def save_document(document: SheetDocument, path: Path) -> None:
    """Write a sheet document as indented JSON.

    Raises:
        ConfigError: If the file cannot be written.
    """
    try:
        path.write_text(document.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            message=f"Could not write sheet document {path}: {e}",
            error_type="file_write_error",
            path=path,
        ) from e
