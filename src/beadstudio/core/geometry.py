"""Geometric operations on point sequences.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting, even-odd rule)
- Polygon centroid
- Removing repeated points from a path

All functions are pure and stateless.
"""

from collections.abc import Sequence

from beadstudio.domain import Point


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding (in y-up space)
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])
        1.0
        >>> signed_area([p1, p4, p3, p2])
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(x: float, y: float, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.
    The closing edge from the last vertex to the first is implied.

    Args:
        x: X coordinate of the point to test
        y: Y coordinate of the point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(1.0, 1.0, square)
        True
        >>> point_in_polygon(3.0, 3.0, square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def polygon_centroid(points: list[Point]) -> Point:
    """Area-weighted centroid of a simple polygon.

    Falls back to the vertex average when the polygon has no area.

    Args:
        points: Polygon vertices (closing edge implied)

    Returns:
        Centroid point

    Raises:
        ValueError: If points is empty
    """
    if not points:
        raise ValueError("Cannot compute centroid of an empty polygon")

    area = signed_area(points)
    if abs(area) < 1e-12:
        return Point(
            sum(p.x for p in points) / len(points),
            sum(p.y for p in points) / len(points),
        )

    cx = 0.0
    cy = 0.0
    n = len(points)
    for i in range(n):
        j = (i + 1) % n
        cross = points[i].x * points[j].y - points[j].x * points[i].y
        cx += (points[i].x + points[j].x) * cross
        cy += (points[i].y + points[j].y) * cross

    return Point(cx / (6.0 * area), cy / (6.0 * area))


def drop_repeated_points(points: list[Point], tolerance: float = 1e-9) -> list[Point]:
    """Remove consecutive duplicates, including a last point equal to the first.

    Args:
        points: Path points
        tolerance: Distance below which two points are the same

    Returns:
        New list without repeated points
    """
    result: list[Point] = []
    for p in points:
        if result and result[-1].distance_to(p) <= tolerance:
            continue
        result.append(p)

    if len(result) > 1 and result[-1].distance_to(result[0]) <= tolerance:
        result.pop()

    return result
