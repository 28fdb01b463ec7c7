"""Douglas-Peucker point reduction for captured strokes."""

from collections.abc import Sequence

from penscript.core.geometry import perpendicular_distance
from penscript.domain import Point, Stroke

DEFAULT_TOLERANCE = 1.0


def simplify_points(points: Sequence[Point], tolerance: float = DEFAULT_TOLERANCE) -> list[Point]:
    """Reduce point density while keeping the stroke's shape.

    The farthest interior point from the chord joining the first and last
    points is kept if it deviates by more than ``tolerance``; the two halves
    on either side of it are then simplified the same way. Otherwise the
    whole span collapses to its endpoints.

    Args:
        points: Points in drawing order
        tolerance: Maximum deviation that may be dropped

    Returns:
        Simplified points. Never longer than the input; the first and last
        points are always the input's first and last points.

    Examples:
        >>> pts = [Point(0, 0), Point(10, 0), Point(10, 10), Point(20, 10)]
        >>> len(simplify_points(pts, 0.5))
        4
        >>> [p.to_tuple() for p in simplify_points(pts, 50)]
        [(0, 0), (20, 10)]
    """
    if len(points) <= 2:
        return list(points)

    return _simplify(list(points), 0, len(points) - 1, tolerance)


def _simplify(points: list[Point], first: int, last: int, tolerance: float) -> list[Point]:
    if last - first < 2:
        return points[first : last + 1]

    start, end = points[first], points[last]
    max_dist = 0.0
    max_index = first
    for i in range(first + 1, last):
        dist = perpendicular_distance(points[i], start, end)
        if dist > max_dist:
            max_dist = dist
            max_index = i

    if max_dist > tolerance:
        left = _simplify(points, first, max_index, tolerance)
        right = _simplify(points, max_index, last, tolerance)
        return left[:-1] + right

    return [start, end]


def simplify_stroke(stroke: Stroke, tolerance: float = DEFAULT_TOLERANCE) -> Stroke:
    """Simplify a stroke's points, returning a new stroke."""
    return Stroke.of(simplify_points(stroke.points, tolerance))
