"""Core processing algorithms for beadstudio.

This module contains the core algorithms for:

- Geometry operations (signed area, point-in-polygon, centroid)
- Curve tessellation (Bezier, arcs, circles, ellipses)
- Segment stitching (loose DXF lines/arcs into one path)
- Outline extraction and fill predicates
- Workspace/document transform and grid sampling

All services are designed to be:
- Stateless (results depend only on their inputs)
- Pure (no side effects beyond logging)

The load pipeline lives in ``beadstudio.core.loader`` and is not
re-exported here, since it depends on the I/O layer.

Key functions:
- point_in_polygon: Test if point is inside polygon
- tessellate_cubic_bezier / tessellate_quadratic_bezier / tessellate_arc
- stitch: Order loose segments into one path
- build_fill_predicate: Membership test for a document
- sample: Sample a predicate onto a bead lattice

Key classes:
- ContourExtractor: Picks the outline of a document
- GridSampler: Samples beads and classifies them
- WorkspaceTransform: Centers a drawing in the workspace
"""

from beadstudio.core.contour import ContourExtractor
from beadstudio.core.fill import (
    FillPredicate,
    GeometricFillPredicate,
    RasterFillPredicate,
    build_fill_predicate,
)
from beadstudio.core.geometry import (
    drop_repeated_points,
    point_in_polygon,
    polygon_centroid,
    signed_area,
)
from beadstudio.core.sampler import GridSample, GridSampler, cell_origin, classify, sample
from beadstudio.core.stitcher import Segment, stitch
from beadstudio.core.tessellation import (
    tessellate_arc,
    tessellate_cubic_bezier,
    tessellate_quadratic_bezier,
)
from beadstudio.core.transform import WorkspaceTransform

__all__ = [
    # Outline
    "ContourExtractor",
    # Fill predicates
    "FillPredicate",
    "GeometricFillPredicate",
    "RasterFillPredicate",
    "build_fill_predicate",
    # Sampling
    "GridSample",
    "GridSampler",
    "WorkspaceTransform",
    "cell_origin",
    "classify",
    "sample",
    # Stitching
    "Segment",
    "stitch",
    # Geometry functions
    "drop_repeated_points",
    "point_in_polygon",
    "polygon_centroid",
    "signed_area",
    "tessellate_arc",
    "tessellate_cubic_bezier",
    "tessellate_quadratic_bezier",
]
