"""Loaded drawings and the views derived from them.

This module defines:
- SourceFormat: Enum for the file format a document came from
- Document: Immutable result of parsing one file
- Contour: Closed outline in normalized unit-box space
- Cell: One sampled bead of the lattice
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from beadstudio.domain.primitives import BoundingBox, Point, Primitive
from beadstudio.exceptions import ContourError


class SourceFormat(str, Enum):
    """Drawing file format."""

    SVG = "svg"
    DXF = "dxf"


@dataclass(frozen=True)
class Document:
    """Primitives parsed from one drawing plus its extent.

    Created once per load and never modified afterwards.

    Attributes:
        primitives: Drawable primitives in file order
        bbox: Document extent in document units
        source_format: Format the document was parsed from
        skipped: Number of unsupported or invalid entities that were ignored
    """

    primitives: tuple[Primitive, ...]
    bbox: BoundingBox
    source_format: SourceFormat
    skipped: int = 0

    @property
    def width(self) -> float:
        return self.bbox.width

    @property
    def height(self) -> float:
        return self.bbox.height

    def of_type(self, *types: type) -> list[Primitive]:
        """Primitives that are instances of any of the given classes, in file order."""
        return [p for p in self.primitives if isinstance(p, types)]

    def count_by_kind(self) -> dict[str, int]:
        """Count primitives per kind (``"line"``, ``"circle"``, ...)."""
        return dict(Counter(p.kind for p in self.primitives))


@dataclass(frozen=True)
class Contour:
    """A closed outline in normalized ``[0, 1] x [0, 1]`` space.

    The closing edge from the last point back to the first is implicit and
    not stored. Y keeps the document's orientation.

    Attributes:
        points: Outline points, at least three
        source: Kind of primitive the outline came from
    """

    points: tuple[Point, ...]
    source: str = field(default="bbox", compare=False)

    def __post_init__(self) -> None:
        if len(self.points) < 3:
            raise ContourError(f"Contour needs at least 3 points, got {len(self.points)}")

    def __len__(self) -> int:
        return len(self.points)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_tuples(self) -> list[tuple[float, float]]:
        return [p.to_tuple() for p in self.points]


@dataclass(frozen=True, slots=True)
class Cell:
    """One bead of a sampled lattice.

    Attributes:
        row: Row index (top to bottom)
        col: Column index (left to right)
        x: Left edge in physical workspace units, after offsets and stagger
        y: Top edge in physical workspace units, after offsets and stagger
        width: Bead width
        height: Bead height
        fill_percentage: Fraction of in-document samples that hit the drawing,
            or None when every sample fell outside the document
        filled: Whether the bead is part of the pattern at the active threshold
    """

    row: int
    col: int
    x: float
    y: float
    width: float
    height: float
    fill_percentage: float | None
    filled: bool

    @property
    def sampled(self) -> bool:
        """True if at least one sample landed inside the document."""
        return self.fill_percentage is not None
