"""Configuration management for beadstudio.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- TessellationConfig: Curve flattening step counts
- StitchConfig: Segment stitching tolerance
- FillConfig: Fill predicate strategy
- SamplingConfig: Per-cell sub-sampling
- GridConfig: Physical bead lattice layout
- GridLimits: Clamping ranges for interactive input
- BeadStudioSettings: Main application settings
"""

from beadstudio.config.settings import (
    BeadStudioSettings,
    FillConfig,
    FillStrategy,
    GridConfig,
    GridLimits,
    GridTopology,
    LoggingConfig,
    SamplingConfig,
    StitchConfig,
    TessellationConfig,
    clamp,
    get_default_settings,
)

__all__ = [
    "BeadStudioSettings",
    "FillConfig",
    "FillStrategy",
    "GridConfig",
    "GridLimits",
    "GridTopology",
    "LoggingConfig",
    "SamplingConfig",
    "StitchConfig",
    "TessellationConfig",
    "clamp",
    "get_default_settings",
]
