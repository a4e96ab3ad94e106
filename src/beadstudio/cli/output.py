"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from beadstudio.config import GridConfig
from beadstudio.core.loader import LoadedDrawing
from beadstudio.core.sampler import GridSample

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

BEAD_FILLED = "●"
BEAD_EMPTY = "·"


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Bead Studio[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_drawing_info(path: str, drawing: LoadedDrawing) -> None:
    """Print drawing information.

    Args:
        path: Path to the drawing file
        drawing: The loaded drawing
    """
    document = drawing.document
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" ({document.source_format.value.upper()})")
    console.print(line)
    console.print(
        f"  {drawing.width:g} {SYM_DOT} {drawing.height:g} units {SYM_DOT} "
        f"{len(document.primitives)} primitives {SYM_DOT} {document.skipped} skipped"
    )

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Primitive")
    table.add_column("Count", justify="right")
    for kind, count in sorted(document.count_by_kind().items()):
        table.add_row(kind, str(count))
    console.print(table)

    console.print(
        f"  Outline: {len(drawing.contour)} points {SYM_DOT} from {drawing.contour.source}"
    )


def print_pattern_summary(grid: GridConfig, result: GridSample) -> None:
    """Print the sampling result.

    Args:
        grid: Lattice layout that was sampled
        result: Sampled cells
    """
    total = grid.grid_width * grid.grid_height
    console.print(
        f"\n[bold green]{SYM_OK} Pattern[/bold green] "
        f"{grid.grid_width} × {grid.grid_height} {grid.topology.value}"
    )
    console.print(
        f"  [green]{result.count_filled()}[/green] of {total} beads filled "
        f"{SYM_DOT} threshold {grid.fill_threshold:g}"
    )


def print_grid(result: GridSample) -> None:
    """Print the bead grid, one console line per row."""
    console.print()
    for line in result.as_text(filled=BEAD_FILLED, empty=BEAD_EMPTY).splitlines():
        console.print(f"  {line}", highlight=False)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
