"""Sampling a fill predicate onto a bead lattice.

Each bead is multi-sampled on an S x S grid of interior points. The share
of samples that hit the drawing is the bead's fill percentage, and the
bead is filled when that share reaches the fill threshold.

Samples that land outside the drawing's unit box are left out of the
denominator, so beads straddling the drawing's edge are not diluted by
empty workspace. A bead with no sample inside the drawing has no
percentage at all and is never filled.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from beadstudio.config import GridConfig, GridTopology, SamplingConfig
from beadstudio.core.transform import WorkspaceTransform
from beadstudio.domain import Cell

Predicate = Callable[[float, float], bool]


def classify(fill_percentage: float | None, threshold: float) -> bool:
    """Decide whether a bead is filled.

    A zero threshold means "any coverage counts" and so needs a strictly
    positive percentage. Every other threshold is inclusive.

    Args:
        fill_percentage: Sampled coverage, or None if nothing was sampled
        threshold: Fill threshold in ``[0, 1]``

    Returns:
        True if the bead belongs to the pattern
    """
    if fill_percentage is None:
        return False
    if threshold == 0:
        return fill_percentage > 0
    return fill_percentage >= threshold


def cell_origin(row: int, col: int, config: GridConfig) -> tuple[float, float]:
    """Top-left corner of a bead in physical workspace units.

    The global offset moves the whole lattice. Peyote shifts odd columns
    down by half a bead, brick shifts odd rows right by half a bead.
    """
    x = col * config.cell_width + config.offset_x
    y = row * config.cell_height + config.offset_y

    if config.topology == GridTopology.PEYOTE and col % 2 == 1:
        y += config.cell_height / 2
    elif config.topology == GridTopology.BRICK and row % 2 == 1:
        x += config.cell_width / 2

    return x, y


@dataclass(frozen=True)
class GridSample:
    """Result of one sampling pass.

    Attributes:
        config: Lattice layout the cells were sampled with
        cells: Row-major cells, ``cells[row][col]``
    """

    config: GridConfig
    cells: tuple[tuple[Cell, ...], ...]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def count_filled(self) -> int:
        """Number of filled beads."""
        return sum(1 for cell in self if cell.filled)

    def count_in_row(self, index: int) -> int:
        """Filled beads along one working line of the pattern.

        Peyote patterns are worked in columns, so the index selects a
        column. Square and brick patterns are worked in rows.

        Args:
            index: Row index, or column index for peyote

        Returns:
            Number of filled beads on that line (0 for an out-of-range index)
        """
        if self.config.topology == GridTopology.PEYOTE:
            if not 0 <= index < self.config.grid_width:
                return 0
            return sum(1 for row in self.cells if row[index].filled)

        if not 0 <= index < self.config.grid_height:
            return 0
        return sum(1 for cell in self.cells[index] if cell.filled)

    def as_text(self, filled: str = "#", empty: str = ".") -> str:
        """Plain text picture of the pattern, one line per row."""
        return "\n".join(
            "".join(filled if cell.filled else empty for cell in row) for row in self.cells
        )


class GridSampler:
    """Samples a fill predicate onto a bead lattice.

    Example:
        sampler = GridSampler()
        result = sampler.sample(drawing.fill_predicate, GridConfig(), transform)
        print(result.count_filled())
    """

    def __init__(self, config: SamplingConfig | None = None) -> None:
        """Initialize the sampler.

        Args:
            config: Sub-sample grid size and margin
        """
        self.config = config or SamplingConfig()
        self._offsets = self.config.sample_offsets()

    def sample_cell(
        self,
        predicate: Predicate,
        grid: GridConfig,
        transform: WorkspaceTransform,
        row: int,
        col: int,
    ) -> Cell:
        """Sample a single bead.

        Args:
            predicate: Fill test over normalized document space
            grid: Lattice layout
            transform: Workspace to document mapping
            row: Bead row
            col: Bead column

        Returns:
            The sampled cell
        """
        x, y = cell_origin(row, col, grid)
        filled_samples = 0
        total_samples = 0

        for oy in self._offsets:
            workspace_y = (y + grid.cell_height * oy) / grid.workspace_height
            for ox in self._offsets:
                workspace_x = (x + grid.cell_width * ox) / grid.workspace_width
                file_x, file_y = transform.to_document(workspace_x, workspace_y)
                if not (0.0 <= file_x <= 1.0 and 0.0 <= file_y <= 1.0):
                    continue
                total_samples += 1
                if predicate(file_x, file_y):
                    filled_samples += 1

        fill_percentage = filled_samples / total_samples if total_samples else None
        return Cell(
            row=row,
            col=col,
            x=x,
            y=y,
            width=grid.cell_width,
            height=grid.cell_height,
            fill_percentage=fill_percentage,
            filled=classify(fill_percentage, grid.fill_threshold),
        )

    def sample(
        self,
        predicate: Predicate,
        grid: GridConfig,
        transform: WorkspaceTransform | None = None,
    ) -> GridSample:
        """Sample every bead of the lattice.

        Args:
            predicate: Fill test over normalized document space
            grid: Lattice layout and threshold
            transform: Workspace to document mapping (identity if None)

        Returns:
            Row-major grid of freshly sampled cells
        """
        transform = transform or WorkspaceTransform.identity()
        cells = tuple(
            tuple(
                self.sample_cell(predicate, grid, transform, row, col)
                for col in range(grid.grid_width)
            )
            for row in range(grid.grid_height)
        )
        return GridSample(config=grid, cells=cells)


def sample(
    predicate: Predicate,
    grid: GridConfig,
    transform: WorkspaceTransform | None = None,
    sampling: SamplingConfig | None = None,
) -> GridSample:
    """Sample a lattice with a one-off :class:`GridSampler`."""
    return GridSampler(sampling).sample(predicate, grid, transform)
