"""Entry and exit anchors for cursive joins."""

from collections.abc import Sequence

from penscript.domain import Bounds, Connector, Stroke


def extract_connectors(strokes: Sequence[Stroke]) -> Connector | None:
    """Find where a glyph's pen path starts and ends.

    Call this on strokes that are already normalized and varied so the
    anchors share the drawn path's coordinate space.

    Args:
        strokes: Strokes of one glyph instance

    Returns:
        Connector, or None if there are no strokes or the first or last
        stroke is empty
    """
    if not strokes:
        return None

    first, last = strokes[0], strokes[-1]
    if not first.points or not last.points:
        return None

    return Connector(
        entry=first.points[0].to_tuple(),
        exit=last.points[-1].to_tuple(),
        width=Bounds.from_strokes(strokes).width,
    )
