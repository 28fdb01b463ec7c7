"""Map captured strokes from capture units into em-relative units."""

from collections.abc import Sequence

from penscript.domain import Bounds, Metrics, Stroke


def normalization_scale(bounds: Bounds, metrics: Metrics | None = None) -> float:
    """Scale factor shared by both axes.

    The capture em height is preferred so that glyphs captured on the same
    guidelines keep their relative sizes. Falls back to the glyph's own
    height, then to 1.
    """
    if metrics is not None and metrics.em_height:
        return metrics.em_height
    if bounds.height:
        return bounds.height
    return 1.0


def normalize_strokes(
    strokes: Sequence[Stroke],
    bounds: Bounds,
    metrics: Metrics | None = None,
) -> list[Stroke]:
    """Rescale strokes into em-relative coordinates.

    The horizontal origin is the left edge of the glyph; the vertical origin
    is the capture ascender line when metrics are known, else the top of the
    glyph. Pressure and timestamp pass through unchanged.

    Args:
        strokes: Strokes in capture units
        bounds: Bounding box the strokes were captured with
        metrics: Capture guideline metrics, if recorded

    Returns:
        New strokes in normalized units
    """
    origin_x = bounds.min_x
    origin_y = metrics.ascender if metrics is not None else bounds.min_y
    scale = normalization_scale(bounds, metrics)

    return [
        Stroke.of(
            p.moved((p.x - origin_x) / scale, (p.y - origin_y) / scale)
            for p in stroke.points
        )
        for stroke in strokes
    ]
