"""Bead Studio - Turn vector drawings into bead patterns.

Bead Studio loads a drawing (a practical subset of SVG or DXF), turns it into
a "is this point filled" predicate plus a simplified outline, and samples it
onto a lattice of beads laid out as a square, peyote or brick grid.

Example:
    $ beadstudio pattern heart.svg --grid peyote --threshold 0.5

This prints the number of filled beads and, with --show-grid, the pattern.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
