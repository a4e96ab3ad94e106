"""Unit tests for grid sampling."""

import pytest

from beadstudio.config import GridConfig, GridTopology, SamplingConfig
from beadstudio.core.sampler import GridSampler, cell_origin, classify, sample
from beadstudio.core.transform import WorkspaceTransform


def _always(_x: float, _y: float) -> bool:
    return True


def _never(_x: float, _y: float) -> bool:
    return False


def _left_half(x: float, _y: float) -> bool:
    return x < 0.5


def _grid(**overrides) -> GridConfig:
    values = dict(workspace_width=40.0, workspace_height=30.0, cell_width=10.0, cell_height=10.0)
    values.update(overrides)
    return GridConfig(**values)


class TestClassify:
    """Tests for the threshold rule."""

    @pytest.mark.parametrize(
        ("fill_percentage", "threshold", "expected"),
        [
            (0.0, 0.0, False),
            (0.04, 0.0, True),
            (0.25, 0.25, True),
            (0.24, 0.25, False),
            (1.0, 1.0, True),
            (0.96, 1.0, False),
            (None, 0.0, False),
            (None, 0.5, False),
        ],
    )
    def test_classify(self, fill_percentage, threshold, expected):
        """Test strict zero threshold and inclusive nonzero thresholds."""
        assert classify(fill_percentage, threshold) is expected


class TestCellOrigin:
    """Tests for lattice placement."""

    def test_square(self):
        """Test a square lattice has no stagger."""
        grid = _grid()
        assert cell_origin(0, 0, grid) == (0.0, 0.0)
        assert cell_origin(1, 1, grid) == (10.0, 10.0)

    def test_peyote_shifts_odd_columns_down(self):
        """Test peyote staggers columns by half a cell height."""
        grid = _grid(topology=GridTopology.PEYOTE)
        assert cell_origin(0, 1, grid) == (10.0, 5.0)
        assert cell_origin(0, 2, grid) == (20.0, 0.0)
        assert cell_origin(1, 0, grid) == (0.0, 10.0)

    def test_brick_shifts_odd_rows_right(self):
        """Test brick staggers rows by half a cell width."""
        grid = _grid(topology=GridTopology.BRICK)
        assert cell_origin(1, 0, grid) == (5.0, 10.0)
        assert cell_origin(2, 0, grid) == (0.0, 20.0)
        assert cell_origin(0, 1, grid) == (10.0, 0.0)

    def test_global_offset_applies_before_stagger(self):
        """Test the lattice offset moves every cell."""
        grid = _grid(topology=GridTopology.PEYOTE, offset_x=2.0, offset_y=-1.0)
        assert cell_origin(0, 0, grid) == (2.0, -1.0)
        assert cell_origin(0, 1, grid) == (12.0, 4.0)


class TestGridSampler:
    """Tests for GridSampler."""

    def test_grid_dimensions(self):
        """Test rows and columns follow the derived grid size."""
        result = GridSampler().sample(_always, _grid())
        assert len(result.cells) == 3
        assert all(len(row) == 4 for row in result.cells)
        assert result.count_filled() == 12

    def test_cells_carry_geometry(self):
        """Test cell position and size are reported."""
        result = GridSampler().sample(_always, _grid(topology=GridTopology.BRICK))
        cell = result.cell(1, 2)
        assert (cell.row, cell.col) == (1, 2)
        assert (cell.x, cell.y) == (25.0, 10.0)
        assert (cell.width, cell.height) == (10.0, 10.0)

    def test_nothing_filled(self):
        """Test an empty predicate fills no cell, even at threshold zero."""
        result = GridSampler().sample(_never, _grid(fill_threshold=0.0))
        assert result.count_filled() == 0
        assert all(cell.fill_percentage == 0.0 for cell in result)

    def test_single_sample_hit(self):
        """Test one of 25 samples filled is enough only at threshold zero."""
        def corner(x: float, y: float) -> bool:
            return x < 0.1 and y < 0.1

        grid = GridConfig(workspace_width=10.0, workspace_height=10.0, cell_width=10.0,
                          cell_height=10.0, fill_threshold=0.0)
        cell = GridSampler().sample(corner, grid).cell(0, 0)
        assert cell.fill_percentage == pytest.approx(0.04)
        assert cell.filled

        stricter = grid.model_copy(update={"fill_threshold": 0.05})
        assert not GridSampler().sample(corner, stricter).cell(0, 0).filled

    def test_partial_cells(self):
        """Test a half-plane splits the grid between columns 1 and 2."""
        result = GridSampler().sample(_left_half, _grid())
        assert result.count_filled() == 6
        assert [cell.filled for cell in result.cells[0]] == [True, True, False, False]

    def test_samples_outside_document_excluded(self):
        """Test cells past the drawing edge are not diluted."""
        # Drawing covers the middle half of the workspace
        transform = WorkspaceTransform.centered(20.0, 20.0, 40.0, 40.0)
        grid = GridConfig(workspace_width=40.0, workspace_height=40.0, cell_width=10.0,
                          cell_height=10.0)
        result = GridSampler().sample(_always, grid, transform)
        assert result.cell(1, 1).fill_percentage == 1.0
        assert result.cell(1, 1).filled

    def test_cells_entirely_outside_document(self):
        """Test cells with no sample in the drawing have no percentage."""
        transform = WorkspaceTransform.centered(20.0, 20.0, 40.0, 40.0)
        grid = GridConfig(workspace_width=40.0, workspace_height=40.0, cell_width=10.0,
                          cell_height=10.0, fill_threshold=0.0)
        cell = GridSampler().sample(_always, grid, transform).cell(0, 0)
        assert cell.fill_percentage is None
        assert not cell.sampled
        assert not cell.filled

    def test_threshold_does_not_change_percentage(self):
        """Test fill percentages are independent of the threshold."""
        low = GridSampler().sample(_left_half, _grid(fill_threshold=0.1))
        high = GridSampler().sample(_left_half, _grid(fill_threshold=0.9))
        assert [c.fill_percentage for c in low] == [c.fill_percentage for c in high]

    def test_custom_sample_grid(self):
        """Test a 2 x 2 sample grid gives quarter steps."""
        def left_quarter(x: float, _y: float) -> bool:
            return x < 0.25

        grid = GridConfig(workspace_width=10.0, workspace_height=10.0, cell_width=10.0,
                          cell_height=10.0)
        sampler = GridSampler(SamplingConfig(sample_grid_size=2, sample_margin=0.1))
        assert sampler.sample(left_quarter, grid).cell(0, 0).fill_percentage == 0.5

    def test_module_level_sample(self):
        """Test the one-off helper."""
        assert sample(_always, _grid()).count_filled() == 12


class TestGridSample:
    """Tests for aggregate queries on a sampled grid."""

    def test_count_in_row_square(self):
        """Test square counts run along rows."""
        result = GridSampler().sample(_left_half, _grid())
        assert result.count_in_row(0) == 2
        assert result.count_in_row(2) == 2

    def test_count_in_row_brick(self):
        """Test brick counts run along rows."""
        result = GridSampler().sample(_always, _grid(topology=GridTopology.BRICK))
        assert result.count_in_row(1) == 4

    def test_count_in_row_peyote(self):
        """Test peyote counts run down columns."""
        result = GridSampler().sample(_left_half, _grid(topology=GridTopology.PEYOTE))
        assert result.count_in_row(0) == 3
        assert result.count_in_row(1) == 3
        assert result.count_in_row(2) == 0

    def test_count_in_row_out_of_range(self):
        """Test out-of-range indices count nothing."""
        result = GridSampler().sample(_always, _grid())
        assert result.count_in_row(-1) == 0
        assert result.count_in_row(3) == 0
        peyote = GridSampler().sample(_always, _grid(topology=GridTopology.PEYOTE))
        assert peyote.count_in_row(3) == 3
        assert peyote.count_in_row(4) == 0

    def test_as_text(self):
        """Test the plain text picture."""
        result = GridSampler().sample(_left_half, _grid())
        assert result.as_text() == "##..\n##..\n##.."
        assert result.as_text(filled="X", empty="_").splitlines()[0] == "XX__"
