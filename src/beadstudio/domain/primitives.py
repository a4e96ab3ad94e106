"""Geometric primitives extracted from drawings.

This module defines the value types every parser produces:
- Point: A 2D point in document units
- BoundingBox: Axis-aligned document extent, validated on construction
- Line, Circle, Arc, Polyline, Ellipse, Spline, PointEntity: the primitive union

All primitives are frozen. ``bounds()`` returns ``None`` when a primitive
carries missing or non-finite fields so callers can skip it instead of
letting NaN leak into the document extent.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar, Union

from beadstudio.exceptions import DegenerateGeometryError

Bounds = tuple[float, float, float, float]

# Sweeps below this are treated as a full turn
ARC_SWEEP_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


def _bounds_of(points: Iterable[Point]) -> Bounds | None:
    pts = list(points)
    if not pts or not all(p.is_finite() for p in pts):
        return None
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return (min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned extent of a document in document units.

    Construction fails unless the box has a finite, strictly positive
    width and height.

    Raises:
        DegenerateGeometryError: If the extent is zero, negative or non-finite
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        values = (self.min_x, self.min_y, self.max_x, self.max_y)
        if not all(math.isfinite(v) for v in values):
            raise DegenerateGeometryError(f"non-finite bounding box {values}")
        if self.max_x <= self.min_x or self.max_y <= self.min_y:
            raise DegenerateGeometryError(
                f"bounding box has zero extent ({self.width:g} x {self.height:g})"
            )

    @classmethod
    def union(cls, bounds: Iterable[Bounds | None]) -> "BoundingBox":
        """Build the box enclosing every finite entry, skipping ``None``.

        Raises:
            DegenerateGeometryError: If nothing finite remains or the union is flat
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for b in bounds:
            if b is None:
                continue
            min_x = min(min_x, b[0])
            min_y = min(min_y, b[1])
            max_x = max(max_x, b[2])
            max_y = max(max_y, b[3])
        return cls(min_x, min_y, max_x, max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        """Check whether a document-space point lies inside (borders included)."""
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def normalize(self, point: Point) -> Point:
        """Map a document point into unit-box coordinates (no y flip)."""
        return Point(
            (point.x - self.min_x) / self.width,
            (point.y - self.min_y) / self.height,
        )

    def denormalize(self, nx: float, ny: float) -> Point:
        """Map unit-box coordinates back into document units."""
        return Point(self.min_x + nx * self.width, self.min_y + ny * self.height)


@dataclass(frozen=True, slots=True)
class Line:
    """Straight segment between two points."""

    kind: ClassVar[str] = "line"

    p1: Point
    p2: Point

    def bounds(self) -> Bounds | None:
        return _bounds_of((self.p1, self.p2))


@dataclass(frozen=True, slots=True)
class Circle:
    """Full circle; its interior is a filled region."""

    kind: ClassVar[str] = "circle"

    center: Point
    radius: float

    def bounds(self) -> Bounds | None:
        if not self.center.is_finite() or not math.isfinite(self.radius) or self.radius <= 0:
            return None
        r = self.radius
        return (self.center.x - r, self.center.y - r, self.center.x + r, self.center.y + r)

    def contains(self, x: float, y: float) -> bool:
        dx = x - self.center.x
        dy = y - self.center.y
        return dx * dx + dy * dy <= self.radius * self.radius


@dataclass(frozen=True, slots=True)
class Arc:
    """Circular arc sweeping counter-clockwise from start to end angle.

    Angles are in degrees. An arc whose sweep is numerically zero is a
    full circle, matching what malformed CAD exports mean by it.
    """

    kind: ClassVar[str] = "arc"

    center: Point
    radius: float
    start_angle: float
    end_angle: float

    @property
    def start_radians(self) -> float:
        """Start angle normalized into ``[0, 2*pi)``."""
        return math.radians(self.start_angle) % math.tau

    @property
    def sweep_radians(self) -> float:
        """Counter-clockwise distance from start to end, in ``(0, 2*pi]``."""
        end = math.radians(self.end_angle) % math.tau
        sweep = (end - self.start_radians) % math.tau
        if sweep < ARC_SWEEP_EPSILON or math.tau - sweep < ARC_SWEEP_EPSILON:
            return math.tau
        return sweep

    def point_at(self, angle: float) -> Point:
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    @property
    def start_point(self) -> Point:
        return self.point_at(self.start_radians)

    @property
    def end_point(self) -> Point:
        return self.point_at(self.start_radians + self.sweep_radians)

    def bounds(self) -> Bounds | None:
        values = (self.center.x, self.center.y, self.radius, self.start_angle, self.end_angle)
        if not all(math.isfinite(v) for v in values) or self.radius <= 0:
            return None
        start = self.start_radians
        sweep = self.sweep_radians
        extremes = [self.start_point, self.end_point]
        # Cardinal directions crossed by the sweep widen the box
        for quarter in range(4):
            angle = quarter * math.pi / 2
            if (angle - start) % math.tau <= sweep:
                extremes.append(self.point_at(angle))
        return _bounds_of(extremes)


@dataclass(frozen=True, slots=True)
class Polyline:
    """Ordered vertices, optionally closed back to the first vertex."""

    kind: ClassVar[str] = "polyline"

    vertices: tuple[Point, ...]
    closed: bool = False

    def bounds(self) -> Bounds | None:
        return _bounds_of(self.vertices)


@dataclass(frozen=True, slots=True)
class Ellipse:
    """Full ellipse.

    Attributes:
        center: Ellipse center
        semi_major: Half the major axis length
        semi_minor: Half the minor axis length
        rotation: Angle of the major axis from +x, in degrees
    """

    kind: ClassVar[str] = "ellipse"

    center: Point
    semi_major: float
    semi_minor: float
    rotation: float = 0.0

    def bounds(self) -> Bounds | None:
        values = (self.center.x, self.center.y, self.semi_major, self.semi_minor, self.rotation)
        if not all(math.isfinite(v) for v in values):
            return None
        if self.semi_major <= 0 or self.semi_minor <= 0:
            return None
        theta = math.radians(self.rotation)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        a, b = self.semi_major, self.semi_minor
        half_w = math.sqrt((a * cos_t) ** 2 + (b * sin_t) ** 2)
        half_h = math.sqrt((a * sin_t) ** 2 + (b * cos_t) ** 2)
        return (
            self.center.x - half_w,
            self.center.y - half_h,
            self.center.x + half_w,
            self.center.y + half_h,
        )

    def contains(self, x: float, y: float) -> bool:
        theta = math.radians(self.rotation)
        dx = x - self.center.x
        dy = y - self.center.y
        # Rotate into the ellipse's own frame
        u = dx * math.cos(theta) + dy * math.sin(theta)
        v = -dx * math.sin(theta) + dy * math.cos(theta)
        return (u / self.semi_major) ** 2 + (v / self.semi_minor) ** 2 <= 1.0

    def point_at(self, t: float) -> Point:
        theta = math.radians(self.rotation)
        u = self.semi_major * math.cos(t)
        v = self.semi_minor * math.sin(t)
        return Point(
            self.center.x + u * math.cos(theta) - v * math.sin(theta),
            self.center.y + u * math.sin(theta) + v * math.cos(theta),
        )


@dataclass(frozen=True, slots=True)
class Spline:
    """Spline approximated by its control polygon (no NURBS evaluation)."""

    kind: ClassVar[str] = "spline"

    control_points: tuple[Point, ...]
    closed: bool = False

    def bounds(self) -> Bounds | None:
        return _bounds_of(self.control_points)


@dataclass(frozen=True, slots=True)
class PointEntity:
    """Lone point; widens the document extent but never fills anything."""

    kind: ClassVar[str] = "point"

    location: Point

    def bounds(self) -> Bounds | None:
        return _bounds_of((self.location,))


Primitive = Union[Line, Circle, Arc, Polyline, Ellipse, Spline, PointEntity]
