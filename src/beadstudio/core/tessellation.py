"""Curve tessellation into ordered point sequences.

Bezier segments are sampled at a fixed number of evenly spaced parameter
steps rather than adaptively, so the output size is predictable.
Circular arcs get a step count proportional to their sweep.
"""

import math

from beadstudio.domain import Arc, Circle, Ellipse, Point

DEFAULT_BEZIER_STEPS = 20
DEFAULT_ARC_STEPS_PER_TURN = 100


def _cubic(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    mt = 1.0 - t
    return mt * mt * mt * p0 + 3 * mt * mt * t * p1 + 3 * mt * t * t * p2 + t * t * t * p3


def _quadratic(p0: float, p1: float, p2: float, t: float) -> float:
    mt = 1.0 - t
    return mt * mt * p0 + 2 * mt * t * p1 + t * t * p2


def tessellate_cubic_bezier(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    steps: int = DEFAULT_BEZIER_STEPS,
    include_start: bool = False,
) -> list[Point]:
    """Sample a cubic Bezier curve at evenly spaced parameters.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        steps: Number of parameter steps
        include_start: Also emit ``p0`` (t = 0)

    Returns:
        Points for t = 1/steps .. 1 (ending exactly at ``p3``), preceded by
        ``p0`` when include_start is set

    Raises:
        ValueError: If steps is less than 1
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    first = 0 if include_start else 1
    points = []
    for i in range(first, steps + 1):
        t = i / steps
        points.append(
            Point(_cubic(p0.x, p1.x, p2.x, p3.x, t), _cubic(p0.y, p1.y, p2.y, p3.y, t))
        )
    return points


def tessellate_quadratic_bezier(
    p0: Point,
    p1: Point,
    p2: Point,
    steps: int = DEFAULT_BEZIER_STEPS,
    include_start: bool = False,
) -> list[Point]:
    """Sample a quadratic Bezier curve at evenly spaced parameters.

    Same conventions as :func:`tessellate_cubic_bezier`.
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    first = 0 if include_start else 1
    points = []
    for i in range(first, steps + 1):
        t = i / steps
        points.append(Point(_quadratic(p0.x, p1.x, p2.x, t), _quadratic(p0.y, p1.y, p2.y, t)))
    return points


def interpolate_line(
    start: Point,
    end: Point,
    steps: int = DEFAULT_BEZIER_STEPS,
) -> list[Point]:
    """Evenly spaced points from just after ``start`` up to ``end``.

    Used for SVG elliptical arc commands, which are approximated by the
    straight line between their endpoints.
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    return [
        Point(start.x + (end.x - start.x) * i / steps, start.y + (end.y - start.y) * i / steps)
        for i in range(1, steps + 1)
    ]


def arc_step_count(sweep: float, steps_per_turn: int = DEFAULT_ARC_STEPS_PER_TURN) -> int:
    """Number of points for an arc of ``sweep`` radians (at least 2)."""
    return max(2, math.ceil(sweep / math.tau * steps_per_turn) + 1)


def tessellate_arc(
    center: Point,
    radius: float,
    start_angle: float,
    end_angle: float,
    steps_per_turn: int = DEFAULT_ARC_STEPS_PER_TURN,
) -> list[Point]:
    """Sample a counter-clockwise circular arc.

    Both angles (degrees) are normalized into ``[0, 2*pi)``. A sweep that is
    numerically zero is treated as a full circle.

    Args:
        center: Arc center
        radius: Arc radius
        start_angle: Start angle in degrees
        end_angle: End angle in degrees
        steps_per_turn: Step count for a full turn; partial arcs get a share

    Returns:
        Points from the start point to the end point inclusive
    """
    arc = Arc(center=center, radius=radius, start_angle=start_angle, end_angle=end_angle)
    return tessellate_arc_primitive(arc, steps_per_turn)


def tessellate_arc_primitive(
    arc: Arc, steps_per_turn: int = DEFAULT_ARC_STEPS_PER_TURN
) -> list[Point]:
    """Sample an :class:`Arc` primitive (see :func:`tessellate_arc`)."""
    start = arc.start_radians
    sweep = arc.sweep_radians
    count = arc_step_count(sweep, steps_per_turn)
    return [arc.point_at(start + sweep * i / (count - 1)) for i in range(count)]


def tessellate_circle(circle: Circle, steps: int = DEFAULT_ARC_STEPS_PER_TURN) -> list[Point]:
    """Outline of a circle, starting at angle 0, without a repeated closing point."""
    return [
        Point(
            circle.center.x + circle.radius * math.cos(math.tau * i / steps),
            circle.center.y + circle.radius * math.sin(math.tau * i / steps),
        )
        for i in range(steps)
    ]


def tessellate_ellipse(ellipse: Ellipse, steps: int = DEFAULT_ARC_STEPS_PER_TURN) -> list[Point]:
    """Outline of an ellipse, without a repeated closing point."""
    return [ellipse.point_at(math.tau * i / steps) for i in range(steps)]
