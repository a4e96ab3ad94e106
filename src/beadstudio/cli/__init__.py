"""Command-line interface for beadstudio.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Drawing inspection (format, size, primitive counts)
- Pattern sampling with clamped grid parameters
- Optional text rendering of the bead grid
- Detailed error reporting
"""

from beadstudio.cli.app import cli, main

__all__ = ["cli", "main"]
