"""Utility functions for beadstudio.

This module provides utility functions including:

- Logging setup and configuration
- Load statistics tracking
"""

from beadstudio.utils.logging import (
    LoadLogger,
    LoadStats,
    configure_logging,
)

__all__ = [
    "LoadLogger",
    "LoadStats",
    "configure_logging",
]
