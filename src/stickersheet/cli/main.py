"""Typer CLI for editing sticker print sheets."""

from pathlib import Path
from typing import Annotated

import typer

from stickersheet.application import (
    MoveOutcome,
    MoveResult,
    PlacementOrchestrator,
    SheetViewport,
)
from stickersheet.application.config import (
    ConfigError,
    document_to_state,
    load_document,
    save_document,
    state_to_document,
)
from stickersheet.cli.commands import display_load_error, validate_command
from stickersheet.domain import (
    DEFAULT_GAP_MM,
    DEFAULT_MARGIN_MM,
    PaperSize,
    PlacementError,
    PlacementValidator,
    SheetConfig,
    SheetState,
)
from stickersheet.infrastructure import (
    API_URL_ENVVAR,
    DEFAULT_API_URL,
    PrintServiceError,
    SheetPreviewRenderer,
    build_print_request,
    generate_sheet_pdf_sync,
    list_stickers_sync,
)


app = typer.Typer(
    name="stickersheet",
    help="Lay out stickers on A4 and Letter print sheets.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _load_state(document_file: Path) -> SheetState:
    """Load a sheet document, exiting with code 1 on any error."""
    try:
        return document_to_state(load_document(document_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _save_state(state: SheetState, document_file: Path) -> None:
    try:
        save_document(state_to_document(state), document_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _orchestrator(document_file: Path, scale: float | None = None) -> PlacementOrchestrator:
    state = _load_state(document_file)
    viewport = SheetViewport(scale_px_per_mm=scale) if scale else SheetViewport()
    return PlacementOrchestrator(state, viewport=viewport)


def _report_move(result: MoveResult) -> None:
    p = result.placement
    if result.outcome is MoveOutcome.COMMITTED:
        typer.echo(f"Committed {p.id} at ({p.x_mm:.2f}, {p.y_mm:.2f}) {p.rotation_deg:g} deg")
    elif result.outcome is MoveOutcome.RESOLVED:
        typer.echo(
            f"Requested position is blocked; moved {p.id} to "
            f"({p.x_mm:.2f}, {p.y_mm:.2f}) {p.rotation_deg:g} deg"
        )
    else:
        typer.echo(
            f"No valid position near the request; {p.id} stays at "
            f"({p.x_mm:.2f}, {p.y_mm:.2f}) {p.rotation_deg:g} deg",
            err=True,
        )


ScaleOption = Annotated[
    float | None,
    typer.Option(
        "--scale",
        help="Canvas pixels per millimeter used to resolve blocked positions (default: 96 DPI)",
    ),
]


@app.command()
def new(
    document_file: Annotated[Path, typer.Argument(help="Path of the sheet document to create")],
    paper: Annotated[
        PaperSize,
        typer.Option("--paper", "-p", help="Paper size"),
    ] = PaperSize.A4,
    margin: Annotated[
        float,
        typer.Option("--margin", "-m", help="Margin in millimeters"),
    ] = DEFAULT_MARGIN_MM,
    gap: Annotated[
        float,
        typer.Option("--gap", "-g", help="Minimum gap between stickers in millimeters"),
    ] = DEFAULT_GAP_MM,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing document"),
    ] = False,
) -> None:
    """Create an empty sheet document."""
    if document_file.exists() and not force:
        typer.echo(f"Error: {document_file} already exists (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)
    try:
        state = SheetState(config=SheetConfig(paper_size=paper, margin_mm=margin, gap_mm=gap))
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _save_state(state, document_file)
    typer.echo(f"Created {paper.value} sheet {document_file}")


@app.command()
def stickers(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    api_url: Annotated[
        str,
        typer.Option("--api-url", envvar=API_URL_ENVVAR, help="Print service base URL"),
    ] = DEFAULT_API_URL,
) -> None:
    """Import the sticker catalog from the print service into a document."""
    state = _load_state(document_file)
    try:
        catalog = list_stickers_sync(base_url=api_url)
    except PrintServiceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    state.register_stickers(catalog)
    _save_state(state, document_file)
    typer.echo(f"Imported {len(catalog)} sticker(s)")
    for sticker in catalog:
        if not sticker.has_print_size:
            typer.echo(
                f"Warning: sticker '{sticker.id}' is missing print size metadata",
                err=True,
            )


@app.command()
def add(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    sticker_id: Annotated[str, typer.Argument(help="Catalog id of the sticker to place")],
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of copies to place"),
    ] = 1,
) -> None:
    """Place a sticker as close as possible to the top-left of the sheet."""
    orchestrator = _orchestrator(document_file)
    placed = 0
    try:
        for _ in range(count):
            placement = orchestrator.add(sticker_id)
            placed += 1
            typer.echo(
                f"Placed {placement.id} at ({placement.x_mm:.2f}, {placement.y_mm:.2f})"
            )
    except PlacementError as e:
        if placed:
            _save_state(orchestrator.state, document_file)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _save_state(orchestrator.state, document_file)


@app.command()
def duplicate(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    placement_id: Annotated[str, typer.Argument(help="Placement to copy")],
) -> None:
    """Copy a placement next to the original."""
    orchestrator = _orchestrator(document_file)
    try:
        placement = orchestrator.duplicate(placement_id)
    except PlacementError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _save_state(orchestrator.state, document_file)
    typer.echo(f"Placed {placement.id} at ({placement.x_mm:.2f}, {placement.y_mm:.2f})")


@app.command()
def move(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    placement_id: Annotated[str, typer.Argument(help="Placement to move")],
    x: Annotated[float, typer.Argument(help="New left edge in millimeters")],
    y: Annotated[float, typer.Argument(help="New top edge in millimeters")],
    scale: ScaleOption = None,
) -> None:
    """Move a placement, snapping to the nearest free spot if blocked."""
    orchestrator = _orchestrator(document_file, scale)
    try:
        result = orchestrator.move(placement_id, x, y)
    except PlacementError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _report_move(result)
    if result.reverted:
        raise typer.Exit(code=1)
    _save_state(orchestrator.state, document_file)


@app.command()
def rotate(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    placement_id: Annotated[str, typer.Argument(help="Placement to rotate")],
    degrees: Annotated[float, typer.Argument(help="Rotation in degrees")],
    scale: ScaleOption = None,
) -> None:
    """Rotate a placement about its center."""
    orchestrator = _orchestrator(document_file, scale)
    try:
        result = orchestrator.rotate(placement_id, degrees)
    except PlacementError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _report_move(result)
    if result.reverted:
        raise typer.Exit(code=1)
    _save_state(orchestrator.state, document_file)


@app.command()
def remove(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    placement_id: Annotated[str, typer.Argument(help="Placement to delete")],
) -> None:
    """Delete a placement from the sheet."""
    orchestrator = _orchestrator(document_file)
    try:
        orchestrator.remove(placement_id)
    except PlacementError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _save_state(orchestrator.state, document_file)
    typer.echo(f"Removed {placement_id}")


@app.command()
def clear(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
) -> None:
    """Remove every placement from the sheet."""
    orchestrator = _orchestrator(document_file)
    count = orchestrator.state.placement_count
    orchestrator.clear()
    _save_state(orchestrator.state, document_file)
    typer.echo(f"Removed {count} placement(s)")


@app.command()
def configure(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    paper: Annotated[
        PaperSize | None,
        typer.Option("--paper", "-p", help="Paper size (changing it clears the sheet)"),
    ] = None,
    margin: Annotated[
        float | None,
        typer.Option("--margin", "-m", help="Margin in millimeters"),
    ] = None,
    gap: Annotated[
        float | None,
        typer.Option("--gap", "-g", help="Minimum gap between stickers in millimeters"),
    ] = None,
) -> None:
    """Change paper size, margin or gap."""
    orchestrator = _orchestrator(document_file)
    current = orchestrator.config
    try:
        config = SheetConfig(
            paper_size=paper if paper is not None else current.paper_size,
            margin_mm=margin if margin is not None else current.margin_mm,
            gap_mm=gap if gap is not None else current.gap_mm,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if orchestrator.reconfigure(config):
        typer.echo("Paper size changed; all placements were removed")

    violations = PlacementValidator(orchestrator.state.stickers).find_violations(
        orchestrator.placements, config.printable_rect, config.gap_mm
    )
    for violation in violations:
        typer.echo(f"Warning: {violation.message}", err=True)
    _save_state(orchestrator.state, document_file)
    typer.echo(
        f"Sheet is {PaperSize(config.paper_size).value}, margin {config.margin_mm:g} mm, "
        f"gap {config.gap_mm:g} mm"
    )


@app.command()
def preview(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    output_file: Annotated[
        Path,
        typer.Option("--output", "-o", help="SVG file to write"),
    ],
    scale: Annotated[
        float,
        typer.Option("--scale", min=0.1, help="Pixels per millimeter"),
    ] = 3.0,
    show_bounds: Annotated[
        bool,
        typer.Option("--show-bounds", help="Draw each sticker's gap-expanded bounds"),
    ] = False,
) -> None:
    """Render the sheet to an SVG preview."""
    state = _load_state(document_file)
    renderer = SheetPreviewRenderer(scale=scale, show_bounds=show_bounds)
    try:
        renderer.render_to_file(state, output_file)
    except OSError as e:
        typer.echo(f"Error writing {output_file}: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Preview written to {output_file}")


@app.command(name="print")
def print_sheet(
    document_file: Annotated[Path, typer.Argument(help="Path to the sheet document")],
    api_url: Annotated[
        str,
        typer.Option("--api-url", envvar=API_URL_ENVVAR, help="Print service base URL"),
    ] = DEFAULT_API_URL,
) -> None:
    """Generate a printable PDF of the sheet."""
    state = _load_state(document_file)
    if not state.placement_count:
        typer.echo("Error: the sheet has no placements to print", err=True)
        raise typer.Exit(code=1)

    violations = PlacementValidator(state.stickers).find_violations(
        state.snapshot(), state.config.printable_rect, state.config.gap_mm
    )
    if violations:
        typer.echo("Errors:", err=True)
        for violation in violations:
            typer.echo(f"  {violation.message}", err=True)
        typer.echo("Fix the layout before printing.", err=True)
        raise typer.Exit(code=1)

    try:
        sheet = generate_sheet_pdf_sync(build_print_request(state), base_url=api_url)
    except PrintServiceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(sheet.pdf_url)


if __name__ == "__main__":
    app()
