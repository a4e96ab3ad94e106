"""Reassembly of loose line and arc fragments into one path.

DXF files often describe a closed outline as independent LINE/ARC
entities with no polyline around them. The stitcher walks them by
nearest-endpoint matching, reversing fragments that were drawn the other
way round.

The search is O(n^2) in the number of fragments. That is fine for the tens
to low hundreds of entities a bead drawing holds, but it does not scale to
large CAD exports.
"""

from dataclasses import dataclass

import structlog

from beadstudio.core.geometry import drop_repeated_points
from beadstudio.core.tessellation import DEFAULT_ARC_STEPS_PER_TURN, tessellate_arc_primitive
from beadstudio.domain import Arc, Line, Point, Primitive

logger = structlog.get_logger(__name__)

DEFAULT_STITCH_TOLERANCE = 0.5

# Above this many fragments the quadratic search gets noticeably slow
LARGE_POOL_WARNING = 1000


@dataclass(frozen=True)
class Segment:
    """An open fragment with its ordered points.

    Attributes:
        points: Ordered points, at least two; first is the start, last the end
    """

    points: tuple[Point, ...]

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    def reversed(self) -> "Segment":
        """Same fragment traversed end to start."""
        return Segment(points=tuple(reversed(self.points)))


def segments_from_primitives(
    primitives: list[Primitive],
    arc_steps_per_turn: int = DEFAULT_ARC_STEPS_PER_TURN,
) -> list[Segment]:
    """Build stitchable segments from the Line and Arc primitives, in order.

    Other primitive kinds are ignored.
    """
    segments: list[Segment] = []
    for primitive in primitives:
        if isinstance(primitive, Line):
            segments.append(Segment(points=(primitive.p1, primitive.p2)))
        elif isinstance(primitive, Arc):
            points = tessellate_arc_primitive(primitive, arc_steps_per_turn)
            segments.append(Segment(points=tuple(points)))
    return segments


def stitch(
    segments: list[Segment],
    tolerance: float = DEFAULT_STITCH_TOLERANCE,
) -> list[Segment]:
    """Order segments into one path by nearest-endpoint matching.

    Starts from the first segment and repeatedly picks, among the remaining
    segments whose start or end lies within ``tolerance`` of the path's
    current end, the nearest one (reversed when it matched on its end).
    When nothing connects, the leftovers are appended in their original
    order so disconnected input still yields some path.

    Args:
        segments: Fragments in file order
        tolerance: Maximum endpoint gap that counts as connected

    Returns:
        Every input segment exactly once, ordered (and possibly reversed)
        along the path
    """
    if not segments:
        return []

    if len(segments) > LARGE_POOL_WARNING:
        logger.warning("Stitching a large fragment pool", segments=len(segments))

    path = [segments[0]]
    pool = list(segments[1:])

    while pool:
        tail = path[-1].end
        best_index = -1
        best_distance = tolerance
        best_reversed = False

        for index, candidate in enumerate(pool):
            start_gap = tail.distance_to(candidate.start)
            if start_gap <= best_distance and (best_index < 0 or start_gap < best_distance):
                best_index, best_distance, best_reversed = index, start_gap, False
            end_gap = tail.distance_to(candidate.end)
            if end_gap <= best_distance and (best_index < 0 or end_gap < best_distance):
                best_index, best_distance, best_reversed = index, end_gap, True

        if best_index < 0:
            logger.debug(
                "Fragments do not connect, appending leftovers",
                connected=len(path),
                leftover=len(pool),
            )
            path.extend(pool)
            break

        matched = pool.pop(best_index)
        path.append(matched.reversed() if best_reversed else matched)

    return path


def flatten(path: list[Segment], tolerance: float = DEFAULT_STITCH_TOLERANCE) -> list[Point]:
    """Concatenate a stitched path into one point list.

    Joints closer than ``tolerance`` are merged, and a final point that
    returns to the start is dropped (the closing edge is implicit). Points
    inside a segment are kept as they are, however dense.
    """
    points: list[Point] = []
    for segment in path:
        segment_points = list(segment.points)
        if points and points[-1].distance_to(segment_points[0]) <= tolerance:
            segment_points = segment_points[1:]
        points.extend(segment_points)

    points = drop_repeated_points(points)
    if len(points) > 1 and points[-1].distance_to(points[0]) <= tolerance:
        points.pop()
    return points


def is_closed(path: list[Segment], tolerance: float = DEFAULT_STITCH_TOLERANCE) -> bool:
    """True if every joint connects and the path returns to its start."""
    if not path:
        return False
    for previous, current in zip(path, path[1:]):
        if previous.end.distance_to(current.start) > tolerance:
            return False
    if len(path) == 1:
        # A lone fragment only closes if it is a full loop on its own (full-circle arc)
        return len(path[0].points) > 2 and path[0].end.distance_to(path[0].start) <= tolerance
    return path[-1].end.distance_to(path[0].start) <= tolerance
