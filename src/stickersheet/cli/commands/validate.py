"""Validate command for checking sheet documents.

This module provides the `validate` command that loads a JSON sheet
document and audits its placements against the sheet invariants.
"""

from pathlib import Path
from typing import Annotated

import typer

from stickersheet.application.config import (
    ConfigError,
    document_to_state,
    load_document,
)
from stickersheet.domain import LayoutViolation, PlacementValidator


def display_load_error(error: ConfigError) -> None:
    """Display a sheet document loading error.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def _display_violations(violations: list[LayoutViolation]) -> None:
    typer.echo("Violations:", err=True)
    for violation in violations:
        typer.echo(f"  [{violation.kind.value}] {violation.message}", err=True)
    typer.echo()
    typer.echo(f"Validation failed: {len(violations)} violation(s)", err=True)


def validate_command(
    document_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON sheet document to validate"),
    ],
) -> None:
    """Validate a sticker sheet document.

    Checks the document for:
    - JSON syntax errors
    - Schema errors (unknown fields, negative sizes, dangling sticker ids)
    - Placements outside the printable area or inside another sticker's gap

    Exit codes:
        0 - Document is valid
        1 - Document cannot be loaded or has placement violations

    Example:
        stickersheet validate my-sheet.json
    """
    typer.echo(f"Validating {document_file}...")
    typer.echo()

    try:
        document = load_document(document_file)
        state = document_to_state(document)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Errors:\n  sheet: {e}", err=True)
        raise typer.Exit(code=1)

    violations = PlacementValidator(state.stickers).find_violations(
        state.snapshot(),
        state.config.printable_rect,
        state.config.gap_mm,
    )
    if violations:
        _display_violations(violations)
        raise typer.Exit(code=1)

    typer.echo(
        f"Validation passed. {state.placement_count} placement(s) fit the sheet."
    )
