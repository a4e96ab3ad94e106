"""Domain models for beadstudio.

This module contains the value types representing drawings, their
primitives, outlines and sampled beads. All models are designed to be:

- Immutable (frozen dataclasses)
- Free of parsing or rendering details

Key classes:
- Point, BoundingBox: Basic geometry
- Line, Circle, Arc, Polyline, Ellipse, Spline, PointEntity: Primitives
- Document: Parsed drawing
- Contour: Normalized closed outline
- Cell: One sampled bead
"""

from beadstudio.domain.document import Cell, Contour, Document, SourceFormat
from beadstudio.domain.primitives import (
    Arc,
    BoundingBox,
    Circle,
    Ellipse,
    Line,
    Point,
    PointEntity,
    Polyline,
    Primitive,
    Spline,
)

__all__: list[str] = [
    # Enums
    "SourceFormat",
    # Geometry
    "Point",
    "BoundingBox",
    # Primitives
    "Arc",
    "Circle",
    "Ellipse",
    "Line",
    "PointEntity",
    "Polyline",
    "Primitive",
    "Spline",
    # Documents
    "Document",
    "Contour",
    "Cell",
]
