"""CLI application entry point for beadstudio.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from beadstudio import __version__
from beadstudio.cli.output import (
    console,
    print_drawing_info,
    print_error,
    print_grid,
    print_header,
    print_pattern_summary,
    print_step,
)
from beadstudio.config import (
    BeadStudioSettings,
    GridTopology,
    LoggingConfig,
)
from beadstudio.core.loader import DrawingLoader, LoadedDrawing
from beadstudio.core.sampler import GridSampler
from beadstudio.exceptions import BeadStudioError, DocumentLoadError
from beadstudio.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="beadstudio",
    help="Turn SVG and DXF drawings into bead patterns.",
    add_completion=False,
    no_args_is_help=True,
)

InputDrawing = Annotated[
    Path,
    typer.Argument(
        help="Path to input SVG/DXF drawing",
        show_default=False,
    ),
]
LogFile = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevel = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Bead Studio[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Turn SVG and DXF drawings into bead patterns."""


@app.command()
def info(
    input_drawing: InputDrawing,
    log_file: LogFile = None,
    log_level: LogLevel = "WARNING",
) -> None:
    """Show what a drawing contains.

    Prints the detected format, the drawing size, primitive counts and
    where the outline came from.

    Example:
        beadstudio info heart.svg
    """
    _validate_input(input_drawing)
    settings = _build_settings(log_file, log_level)

    print_header(__version__)
    print_step("Loading drawing")
    drawing = _load(input_drawing, settings)
    print_drawing_info(str(input_drawing), drawing)


@app.command()
def pattern(
    input_drawing: InputDrawing,
    workspace_width: Annotated[
        float,
        typer.Option("--workspace-width", help="Workspace width (10-500)"),
    ] = 150.0,
    workspace_height: Annotated[
        float,
        typer.Option("--workspace-height", help="Workspace height (10-500)"),
    ] = 150.0,
    cell_width: Annotated[
        float,
        typer.Option("--cell-width", help="Bead width (0.1-50)"),
    ] = 3.1,
    cell_height: Annotated[
        float,
        typer.Option("--cell-height", help="Bead height (0.1-50)"),
    ] = 3.1,
    grid: Annotated[
        str,
        typer.Option("--grid", "-g", help="Grid topology (square|peyote|brick)"),
    ] = "square",
    offset_x: Annotated[
        float,
        typer.Option("--offset-x", help="Horizontal grid shift (-10 to 10)"),
    ] = 0.0,
    offset_y: Annotated[
        float,
        typer.Option("--offset-y", help="Vertical grid shift (-10 to 10)"),
    ] = 0.0,
    threshold: Annotated[
        float,
        typer.Option("--threshold", "-t", help="Fill threshold (0-1)"),
    ] = 0.25,
    scale: Annotated[
        float,
        typer.Option("--scale", "-s", help="Drawing scale factor (0.1-3)"),
    ] = 1.0,
    show_grid: Annotated[
        bool,
        typer.Option("--show-grid", help="Print the bead grid"),
    ] = False,
    log_file: LogFile = None,
    log_level: LogLevel = "WARNING",
) -> None:
    """Sample a drawing onto a bead grid.

    Out-of-range values are clamped into their allowed ranges rather than
    rejected.

    Example:
        beadstudio pattern heart.svg --grid peyote --threshold 0.5 --show-grid
    """
    _validate_input(input_drawing)

    try:
        topology = GridTopology(grid.lower())
    except ValueError:
        print_error(
            f"Invalid grid: {grid}",
            details="Valid values: square, peyote, brick",
        )
        raise typer.Exit(code=1)

    settings = _build_settings(log_file, log_level)
    limits = settings.limits
    grid_config = limits.clamp_grid_config(
        workspace_width=workspace_width,
        workspace_height=workspace_height,
        cell_width=cell_width,
        cell_height=cell_height,
        topology=topology,
        offset_x=offset_x,
        offset_y=offset_y,
        fill_threshold=threshold,
    )

    print_header(__version__)
    print_step("Loading drawing")
    drawing = _load(input_drawing, settings).scaled(limits.clamp_scale(scale))
    print_drawing_info(str(input_drawing), drawing)

    print_step("Sampling")
    result = drawing.sample(grid_config, GridSampler(settings.sampling))
    print_pattern_summary(grid_config, result)
    if show_grid:
        print_grid(result)


def _validate_input(path: Path) -> None:
    """Exit with an error unless the path is an existing file."""
    if not path.exists():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not path.is_file():
        print_error(
            f"Input path is not a file: {path}",
            details="Please provide a path to an SVG or DXF file.",
        )
        raise typer.Exit(code=1)


def _build_settings(log_file: Path | None, log_level: str) -> BeadStudioSettings:
    """Create settings from CLI arguments and configure logging."""
    settings = BeadStudioSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level,
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
    )
    return settings


def _load(path: Path, settings: BeadStudioSettings) -> LoadedDrawing:
    """Load a drawing, turning failures into a clean exit.

    Args:
        path: Drawing file
        settings: Pipeline settings

    Returns:
        The loaded drawing
    """
    try:
        return DrawingLoader(settings).load(path)
    except DocumentLoadError as e:
        print_error(f"Could not read drawing: {e.reason}")
        raise typer.Exit(code=1)
    except BeadStudioError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
