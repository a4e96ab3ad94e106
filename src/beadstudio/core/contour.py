"""Outline extraction for loaded documents.

The outline is what gets drawn over the bead grid; it is independent of
the fill predicate used to classify beads.
"""

import structlog

from beadstudio.config import StitchConfig, TessellationConfig
from beadstudio.core.geometry import drop_repeated_points
from beadstudio.core.stitcher import flatten, segments_from_primitives, stitch
from beadstudio.core.tessellation import tessellate_circle, tessellate_ellipse
from beadstudio.domain import (
    Arc,
    Circle,
    Contour,
    Document,
    Ellipse,
    Line,
    Point,
    Polyline,
    Spline,
)

logger = structlog.get_logger(__name__)

UNIT_SQUARE = (Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0))


class ContourExtractor:
    """Picks the authoritative outline of a document.

    Priority order:
    1. The first circle, tessellated
    2. The first polyline, ellipse or spline with an area
    3. Loose lines and arcs, stitched into one path
    4. The corners of the bounding box

    Example:
        extractor = ContourExtractor()
        contour = extractor.extract(document)
    """

    def __init__(
        self,
        tessellation: TessellationConfig | None = None,
        stitch_config: StitchConfig | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            tessellation: Step counts for circles and arcs
            stitch_config: Tolerance for joining loose fragments
        """
        self.tessellation = tessellation or TessellationConfig()
        self.stitch_config = stitch_config or StitchConfig()

    def extract(self, document: Document) -> Contour:
        """Extract the normalized outline of a document.

        Args:
            document: Parsed drawing

        Returns:
            Contour in unit-box coordinates, y keeping the document orientation
        """
        points, source = self._document_points(document)
        bbox = document.bbox
        normalized = tuple(bbox.normalize(p) for p in points)
        if source == "bbox":
            normalized = UNIT_SQUARE
        return Contour(points=normalized, source=source)

    def _document_points(self, document: Document) -> tuple[list[Point], str]:
        circles = document.of_type(Circle)
        if circles:
            return tessellate_circle(circles[0], self.tessellation.circle_steps), "circle"

        for shape in document.of_type(Polyline, Ellipse, Spline):
            points = self._shape_points(shape)
            if len(points) >= 3:
                return points, shape.kind

        fragments = document.of_type(Line, Arc)
        if fragments:
            segments = segments_from_primitives(fragments, self.tessellation.arc_steps_per_turn)
            tolerance = self.stitch_config.tolerance
            points = flatten(stitch(segments, tolerance), tolerance)
            if len(points) >= 3:
                return points, "stitched"
            logger.debug("Stitched outline too short, using bounding box", points=len(points))

        return [], "bbox"

    def _shape_points(self, shape: Polyline | Ellipse | Spline) -> list[Point]:
        if isinstance(shape, Ellipse):
            return tessellate_ellipse(shape, self.tessellation.circle_steps)
        if isinstance(shape, Polyline):
            return drop_repeated_points(list(shape.vertices))
        return drop_repeated_points(list(shape.control_points))
