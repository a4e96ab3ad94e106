"""Fill predicates: "is this normalized point part of the drawing".

A point is filled if it lies inside any closed region of the document
(union, not XOR). Regions are:

- circles and ellipses, tested in closed form
- polylines and splines with at least three vertices, filled as polygons
  (the closing edge is implied, as in SVG fill)
- loose lines and arcs, if they stitch into one closed loop
- the whole bounding box, when the drawing holds nothing but unclosed
  line/arc fragments and the legacy solid fallback is enabled

Two strategies answer queries. GeometricFillPredicate runs point-in-shape
tests directly. RasterFillPredicate scan-converts the regions once into a
square bitmap and answers every query with one lookup.
"""

import bisect
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

import structlog

from beadstudio.config import FillConfig, FillStrategy, StitchConfig, TessellationConfig
from beadstudio.core.geometry import drop_repeated_points, point_in_polygon
from beadstudio.core.stitcher import flatten, is_closed, segments_from_primitives, stitch
from beadstudio.domain import (
    Arc,
    BoundingBox,
    Circle,
    Document,
    Ellipse,
    Line,
    Point,
    Polyline,
    Spline,
)
from beadstudio.domain.primitives import Bounds

logger = structlog.get_logger(__name__)

Span = tuple[float, float]

# Memoized polygon rows per predicate before the memo is reset
ROW_CACHE_LIMIT = 65536


@dataclass(frozen=True)
class PolygonRegion:
    """Even-odd filled polygon in document units."""

    vertices: tuple[Point, ...]

    def bounds(self) -> Bounds:
        xs = [p.x for p in self.vertices]
        ys = [p.y for p in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def contains(self, x: float, y: float) -> bool:
        return point_in_polygon(x, y, self.vertices)

    def crossings(self, y: float) -> list[float]:
        """Sorted x positions where the boundary crosses the row at ``y``.

        Uses the same edge rule as ``point_in_polygon``, so a point is
        inside exactly when an odd number of crossings lie to its right.
        """
        crossings = []
        n = len(self.vertices)
        j = n - 1
        for i in range(n):
            xi, yi = self.vertices[i].x, self.vertices[i].y
            xj, yj = self.vertices[j].x, self.vertices[j].y
            if (yi > y) != (yj > y):
                crossings.append((xj - xi) * (y - yi) / (yj - yi) + xi)
            j = i
        crossings.sort()
        return crossings

    def spans(self, y: float) -> list[Span]:
        crossings = self.crossings(y)
        return [(crossings[k], crossings[k + 1]) for k in range(0, len(crossings) - 1, 2)]


@dataclass(frozen=True)
class CircleRegion:
    """Solid disc."""

    circle: Circle

    def bounds(self) -> Bounds:
        return self.circle.bounds()  # type: ignore[return-value]

    def contains(self, x: float, y: float) -> bool:
        return self.circle.contains(x, y)

    def spans(self, y: float) -> list[Span]:
        dy = y - self.circle.center.y
        remaining = self.circle.radius**2 - dy * dy
        if remaining < 0:
            return []
        half = math.sqrt(remaining)
        return [(self.circle.center.x - half, self.circle.center.x + half)]


@dataclass(frozen=True)
class EllipseRegion:
    """Solid (possibly rotated) ellipse."""

    ellipse: Ellipse

    def bounds(self) -> Bounds:
        return self.ellipse.bounds()  # type: ignore[return-value]

    def contains(self, x: float, y: float) -> bool:
        return self.ellipse.contains(x, y)

    def spans(self, y: float) -> list[Span]:
        # Solve the ellipse equation for dx at a fixed dy
        theta = math.radians(self.ellipse.rotation)
        c, s = math.cos(theta), math.sin(theta)
        inv_a2 = 1.0 / self.ellipse.semi_major**2
        inv_b2 = 1.0 / self.ellipse.semi_minor**2
        dy = y - self.ellipse.center.y
        qa = c * c * inv_a2 + s * s * inv_b2
        qb = 2.0 * dy * c * s * (inv_a2 - inv_b2)
        qc = dy * dy * (s * s * inv_a2 + c * c * inv_b2) - 1.0
        disc = qb * qb - 4.0 * qa * qc
        if disc < 0:
            return []
        root = math.sqrt(disc)
        cx = self.ellipse.center.x
        return [(cx + (-qb - root) / (2.0 * qa), cx + (-qb + root) / (2.0 * qa))]


@dataclass(frozen=True)
class BoxRegion:
    """The whole document extent."""

    bbox: BoundingBox

    def bounds(self) -> Bounds:
        return (self.bbox.min_x, self.bbox.min_y, self.bbox.max_x, self.bbox.max_y)

    def contains(self, x: float, y: float) -> bool:
        return self.bbox.contains(x, y)

    def spans(self, y: float) -> list[Span]:
        if self.bbox.min_y <= y <= self.bbox.max_y:
            return [(self.bbox.min_x, self.bbox.max_x)]
        return []


Region = Union[PolygonRegion, CircleRegion, EllipseRegion, BoxRegion]


def collect_regions(
    document: Document,
    tessellation: TessellationConfig | None = None,
    stitch_config: StitchConfig | None = None,
    solid_fallback: bool = True,
) -> list[Region]:
    """Gather the closed regions whose union is the filled area.

    Args:
        document: Parsed drawing
        tessellation: Step counts used for arcs
        stitch_config: Tolerance for joining loose fragments
        solid_fallback: Fill the whole box when only unclosed fragments exist

    Returns:
        Regions in document units
    """
    tessellation = tessellation or TessellationConfig()
    stitch_config = stitch_config or StitchConfig()
    regions: list[Region] = []

    for primitive in document.primitives:
        if isinstance(primitive, Circle):
            regions.append(CircleRegion(primitive))
        elif isinstance(primitive, Ellipse):
            regions.append(EllipseRegion(primitive))
        elif isinstance(primitive, (Polyline, Spline)):
            raw = primitive.vertices if isinstance(primitive, Polyline) else primitive.control_points
            vertices = drop_repeated_points(list(raw))
            if len(vertices) >= 3:
                regions.append(PolygonRegion(tuple(vertices)))

    fragments = document.of_type(Line, Arc)
    if fragments:
        tolerance = stitch_config.tolerance
        path = stitch(segments_from_primitives(fragments, tessellation.arc_steps_per_turn), tolerance)
        outline = flatten(path, tolerance)
        if is_closed(path, tolerance) and len(outline) >= 3:
            regions.append(PolygonRegion(tuple(outline)))
        elif not regions and solid_fallback:
            logger.debug(
                "Open outline fragments only, filling bounding box",
                fragments=len(fragments),
            )
            regions.append(BoxRegion(document.bbox))
        else:
            logger.debug("Ignoring unclosed outline fragments", fragments=len(fragments))

    return regions


class FillPredicate(ABC):
    """Membership test over normalized document space.

    Calling the predicate with ``(nx, ny)`` returns True if the point is
    filled. Points outside ``[0, 1] x [0, 1]`` are never filled.
    """

    @abstractmethod
    def __call__(self, nx: float, ny: float) -> bool:
        """Test a normalized point."""


class GeometricFillPredicate(FillPredicate):
    """Direct point-in-shape tests against immutable regions.

    Polygon tests go through the boundary crossings of the queried row.
    Grid sampling asks many points on the same few rows, so crossings are
    memoized per (polygon, row): the first query on a row costs O(vertices),
    later ones O(log vertices).
    """

    def __init__(self, bbox: BoundingBox, regions: list[Region]) -> None:
        self._bbox = bbox
        self._regions = tuple(regions)
        self._bounds = tuple(region.bounds() for region in self._regions)
        self._row_crossings: dict[tuple[int, float], list[float]] = {}

    def __call__(self, nx: float, ny: float) -> bool:
        if not (0.0 <= nx <= 1.0 and 0.0 <= ny <= 1.0):
            return False
        x = self._bbox.min_x + nx * self._bbox.width
        y = self._bbox.min_y + ny * self._bbox.height
        for index, (region, (min_x, min_y, max_x, max_y)) in enumerate(
            zip(self._regions, self._bounds)
        ):
            if not (min_x <= x <= max_x and min_y <= y <= max_y):
                continue
            if isinstance(region, PolygonRegion):
                crossings = self._crossings(index, region, y)
                if (len(crossings) - bisect.bisect_right(crossings, x)) % 2 == 1:
                    return True
            elif region.contains(x, y):
                return True
        return False

    def _crossings(self, index: int, region: PolygonRegion, y: float) -> list[float]:
        key = (index, y)
        crossings = self._row_crossings.get(key)
        if crossings is None:
            if len(self._row_crossings) >= ROW_CACHE_LIMIT:
                self._row_crossings.clear()
            crossings = region.crossings(y)
            self._row_crossings[key] = crossings
        return crossings


class RasterFillPredicate(FillPredicate):
    """Lookup into a square bitmap rendered once from the regions.

    Pixel ``(i, j)`` is set when its center lies inside any region.
    """

    def __init__(self, bbox: BoundingBox, regions: list[Region], resolution: int = 800) -> None:
        if resolution < 1:
            raise ValueError(f"resolution must be positive, got {resolution}")
        self._resolution = resolution
        self._bitmap = self._render(bbox, regions, resolution)

    @property
    def resolution(self) -> int:
        return self._resolution

    @staticmethod
    def _render(bbox: BoundingBox, regions: list[Region], resolution: int) -> bytes:
        bitmap = bytearray(resolution * resolution)
        for row in range(resolution):
            y = bbox.min_y + (row + 0.5) / resolution * bbox.height
            offset = row * resolution
            for region in regions:
                for x0, x1 in region.spans(y):
                    # Pixel centers sit at (i + 0.5) / resolution
                    first = max(0, math.ceil((x0 - bbox.min_x) / bbox.width * resolution - 0.5))
                    last = min(
                        resolution - 1,
                        math.floor((x1 - bbox.min_x) / bbox.width * resolution - 0.5),
                    )
                    if last >= first:
                        bitmap[offset + first : offset + last + 1] = b"\x01" * (last - first + 1)
        return bytes(bitmap)

    def filled_fraction(self) -> float:
        """Share of set pixels, handy for diagnostics."""
        return sum(self._bitmap) / len(self._bitmap)

    def __call__(self, nx: float, ny: float) -> bool:
        if not (0.0 <= nx <= 1.0 and 0.0 <= ny <= 1.0):
            return False
        col = math.floor(nx * self._resolution)
        row = math.floor(ny * self._resolution)
        if col >= self._resolution or row >= self._resolution:
            return False
        return self._bitmap[row * self._resolution + col] == 1


def build_fill_predicate(
    document: Document,
    fill: FillConfig | None = None,
    tessellation: TessellationConfig | None = None,
    stitch_config: StitchConfig | None = None,
) -> FillPredicate:
    """Build the fill predicate of a document.

    Args:
        document: Parsed drawing
        fill: Strategy, raster resolution and fallback behavior
        tessellation: Step counts used for arcs
        stitch_config: Tolerance for joining loose fragments

    Returns:
        Predicate over normalized document coordinates
    """
    fill = fill or FillConfig()
    regions = collect_regions(
        document,
        tessellation=tessellation,
        stitch_config=stitch_config,
        solid_fallback=fill.solid_fallback_for_open_outlines,
    )
    logger.debug("Fill regions collected", regions=len(regions), strategy=fill.strategy.value)

    if fill.strategy == FillStrategy.RASTER:
        return RasterFillPredicate(document.bbox, regions, fill.resolution)
    return GeometricFillPredicate(document.bbox, regions)
