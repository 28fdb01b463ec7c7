"""Geometric operations on captured strokes.

This module provides the small mathematical utilities the stroke pipeline
builds on:
- Distance from a point to a chord (with zero-length fallback)
- Stroke length, duration and speed
- Baseline detection for freshly drawn strokes
- Moving-average smoothing

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from penscript.domain import Point, Stroke


def nearest_point_on_segment(
    point: Point, seg_start: Point, seg_end: Point
) -> tuple[tuple[float, float], float]:
    """Find the closest point on a line segment to a given point.

    Args:
        point: The point to measure from
        seg_start: First endpoint of the segment
        seg_end: Second endpoint of the segment

    Returns:
        Tuple of ((x, y), distance). A zero-length segment returns the
        shared endpoint and the Euclidean distance to it.
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        distance = math.hypot(point.x - seg_start.x, point.y - seg_start.y)
        return (seg_start.x, seg_start.y), distance

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy
    distance = math.hypot(point.x - nearest_x, point.y - nearest_y)

    return (nearest_x, nearest_y), distance


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """Distance from a point to the chord between two points.

    Examples:
        >>> perpendicular_distance(Point(5, 3), Point(0, 0), Point(10, 0))
        3.0
        >>> perpendicular_distance(Point(3, 4), Point(0, 0), Point(0, 0))
        5.0
    """
    _, distance = nearest_point_on_segment(point, line_start, line_end)
    return distance


@dataclass(frozen=True)
class StrokeMetrics:
    """Length and timing of a single stroke."""

    length: float
    duration: float
    avg_speed: float


def stroke_metrics(stroke: Stroke) -> StrokeMetrics:
    """Measure path length, duration and average speed of a stroke.

    Strokes with fewer than two points measure as zero.
    """
    points = stroke.points
    if len(points) < 2:
        return StrokeMetrics(0.0, 0.0, 0.0)

    length = sum(
        math.hypot(b.x - a.x, b.y - a.y) for a, b in zip(points, points[1:])
    )
    duration = points[-1].timestamp - points[0].timestamp
    avg_speed = length / duration if duration > 0 else 0.0

    return StrokeMetrics(length, duration, avg_speed)


def detect_baseline(strokes: Sequence[Stroke]) -> float:
    """Estimate the writing baseline of a drawn glyph.

    The baseline is the mean of each stroke's lowest point (largest y).

    Args:
        strokes: Strokes in capture units

    Returns:
        Baseline y coordinate, 0 for an empty stroke set
    """
    lows = [max(p.y for p in stroke.points) for stroke in strokes if stroke.points]
    if not lows:
        return 0.0
    return sum(lows) / len(lows)


def smooth_stroke(points: Sequence[Point], window_size: int = 3) -> list[Point]:
    """Smooth a stroke with a centered moving average.

    Each point's pressure and timestamp are kept; only positions move.

    Args:
        points: Points to smooth
        window_size: Odd window width in points

    Returns:
        Smoothed points, or the input unchanged if shorter than the window
    """
    if len(points) < window_size:
        return list(points)

    half = window_size // 2
    smoothed: list[Point] = []
    for i, point in enumerate(points):
        window = points[max(0, i - half) : min(len(points), i + half + 1)]
        smoothed.append(
            Point(
                sum(p.x for p in window) / len(window),
                sum(p.y for p in window) / len(window),
                point.pressure,
                point.timestamp,
            )
        )
    return smoothed
