"""Configuration settings for Bead Studio."""

import math
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class GridTopology(str, Enum):
    """Stagger pattern of the bead lattice."""

    SQUARE = "square"
    PEYOTE = "peyote"
    BRICK = "brick"


class FillStrategy(str, Enum):
    """How the fill predicate answers point queries."""

    GEOMETRIC = "geometric"
    RASTER = "raster"


class TessellationConfig(BaseModel):
    """Configuration for turning curves into polylines."""

    bezier_steps: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Points emitted per Bezier segment (and per SVG elliptical arc)",
    )
    circle_steps: int = Field(
        default=100,
        ge=8,
        le=2000,
        description="Steps used to outline full circles and ellipses",
    )
    arc_steps_per_turn: int = Field(
        default=100,
        ge=4,
        le=2000,
        description="Steps for a full 360 degree sweep; partial arcs get a proportional share",
    )


class StitchConfig(BaseModel):
    """Configuration for joining loose DXF segments into one outline."""

    tolerance: float = Field(
        default=0.5,
        gt=0.0,
        le=100.0,
        description="Maximum endpoint gap (document units) for two segments to connect",
    )


class FillConfig(BaseModel):
    """Configuration for the fill predicate."""

    strategy: FillStrategy = Field(
        default=FillStrategy.GEOMETRIC,
        description="Exact point-in-shape tests or a pre-rendered bitmap",
    )
    resolution: int = Field(
        default=800,
        ge=16,
        le=4096,
        description="Side length of the bitmap used by the raster strategy",
    )
    solid_fallback_for_open_outlines: bool = Field(
        default=True,
        description="Fill the whole bounding box when only unclosed line/arc fragments exist",
    )


class SamplingConfig(BaseModel):
    """Configuration for per-cell multi-sampling."""

    sample_grid_size: int = Field(
        default=5,
        ge=2,
        le=20,
        description="Samples per cell axis (S x S samples per cell)",
    )
    sample_margin: float = Field(
        default=0.05,
        ge=0.0,
        lt=0.5,
        description="Inset of the outermost samples from the cell border (fraction of cell)",
    )

    def sample_offsets(self) -> list[float]:
        """Fractional offsets of the samples along one cell axis.

        Returns:
            S offsets spanning ``margin .. 1 - margin``
        """
        size = self.sample_grid_size
        span = 1.0 - 2.0 * self.sample_margin
        return [self.sample_margin + (k / (size - 1)) * span for k in range(size)]


class GridConfig(BaseModel):
    """Physical layout of the bead lattice.

    Sizes and offsets are in physical units (millimetres in the application,
    but nothing here depends on the unit).
    """

    workspace_width: float = Field(default=150.0, gt=0.0, description="Workspace width")
    workspace_height: float = Field(default=150.0, gt=0.0, description="Workspace height")
    cell_width: float = Field(default=3.1, gt=0.0, description="Bead width")
    cell_height: float = Field(default=3.1, gt=0.0, description="Bead height")
    topology: GridTopology = Field(default=GridTopology.SQUARE, description="Lattice stagger")
    offset_x: float = Field(default=0.0, description="Horizontal shift of the whole lattice")
    offset_y: float = Field(default=0.0, description="Vertical shift of the whole lattice")
    fill_threshold: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Minimum sampled coverage for a bead to count as filled",
    )

    @property
    def grid_width(self) -> int:
        """Number of bead columns."""
        return max(1, math.floor(self.workspace_width / self.cell_width))

    @property
    def grid_height(self) -> int:
        """Number of bead rows."""
        return max(1, math.floor(self.workspace_height / self.cell_height))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value into ``[low, high]``.

    Non-finite input (NaN, infinities) maps to ``low``.
    """
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return low
    return max(low, min(high, value))


class GridLimits(BaseModel):
    """Ranges that interactive input is clamped into."""

    min_workspace_size: float = 10.0
    max_workspace_size: float = 500.0
    min_cell_size: float = 0.1
    max_cell_size: float = 50.0
    min_scale: float = 0.1
    max_scale: float = 3.0
    min_grid_offset: float = -10.0
    max_grid_offset: float = 10.0

    def clamp_workspace_size(self, value: float) -> float:
        return clamp(value, self.min_workspace_size, self.max_workspace_size)

    def clamp_cell_size(self, value: float) -> float:
        return clamp(value, self.min_cell_size, self.max_cell_size)

    def clamp_scale(self, value: float) -> float:
        return clamp(value, self.min_scale, self.max_scale)

    def clamp_grid_offset(self, value: float) -> float:
        return clamp(value, self.min_grid_offset, self.max_grid_offset)

    def clamp_fill_threshold(self, value: float) -> float:
        return clamp(value, 0.0, 1.0)

    def clamp_grid_config(
        self,
        workspace_width: float,
        workspace_height: float,
        cell_width: float,
        cell_height: float,
        topology: GridTopology = GridTopology.SQUARE,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
        fill_threshold: float = 0.25,
    ) -> GridConfig:
        """Build a GridConfig from raw user input, clamping every field.

        Returns:
            A GridConfig that always passes validation
        """
        return GridConfig(
            workspace_width=self.clamp_workspace_size(workspace_width),
            workspace_height=self.clamp_workspace_size(workspace_height),
            cell_width=self.clamp_cell_size(cell_width),
            cell_height=self.clamp_cell_size(cell_height),
            topology=topology,
            offset_x=self.clamp_grid_offset(offset_x),
            offset_y=self.clamp_grid_offset(offset_y),
            fill_threshold=self.clamp_fill_threshold(fill_threshold),
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class BeadStudioSettings(BaseModel):
    """Main application settings."""

    tessellation: TessellationConfig = Field(default_factory=TessellationConfig)
    stitch: StitchConfig = Field(default_factory=StitchConfig)
    fill: FillConfig = Field(default_factory=FillConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    limits: GridLimits = Field(default_factory=GridLimits)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> BeadStudioSettings:
    """Get default application settings."""
    return BeadStudioSettings()
