"""Smoothed curve geometry and pressure-mapped widths for strokes.

Path geometry is recorded in the fontTools pen protocol (``moveTo``,
``qCurveTo``, ``lineTo``) so it can be replayed on any pen. SVG path data is
produced by replaying onto fontTools' SVGPathPen.
"""

from collections.abc import Callable, Sequence
from typing import Any

from fontTools.pens.recordingPen import RecordingPen, replayRecording
from fontTools.pens.svgPathPen import SVGPathPen

from penscript.config import RenderConfig
from penscript.domain import Point, Stroke

# (operator, operands) as recorded by fontTools' RecordingPen
PathCommand = tuple[str, tuple[tuple[float, float], ...]]


def map_pressure_to_width(pressure: float, min_width: float, max_width: float) -> float:
    """Linearly map pressure onto a width range, clamping pressure to [0, 1].

    Examples:
        >>> map_pressure_to_width(0.5, 1.0, 3.0)
        2.0
        >>> map_pressure_to_width(2.0, 1.0, 3.0)
        3.0
    """
    clamped = max(0.0, min(1.0, pressure))
    return min_width + (max_width - min_width) * clamped


def number_formatter(precision: int) -> Callable[[float], str]:
    """Build a compact number formatter for path data."""

    def ntos(value: float) -> str:
        text = f"{value:.{precision}f}"
        if precision:
            text = text.rstrip("0").rstrip(".")
        return "0" if text in ("-0", "") else text

    return ntos


class PathEncoder:
    """Turns strokes into smoothed curve commands and stroke widths.

    Interior points become quadratic control points whose curves end at the
    midpoint to the next point, so consecutive segments join smoothly.

    Example:
        encoder = PathEncoder(min_width=1.5, max_width=3.0)
        commands = encoder.path_for(stroke.points, scale=60)
        d = encoder.to_svg(commands)
    """

    def __init__(self, min_width: float = 1.5, max_width: float = 3.0, precision: int = 2) -> None:
        if min_width > max_width:
            raise ValueError("min_width must not exceed max_width")
        self.min_width = min_width
        self.max_width = max_width
        self._ntos = number_formatter(precision)

    @classmethod
    def from_config(cls, config: RenderConfig) -> "PathEncoder":
        return cls(
            min_width=config.min_stroke_width,
            max_width=config.max_stroke_width,
            precision=config.precision,
        )

    def draw(self, points: Sequence[Point], pen: Any, scale: float = 1.0) -> None:
        """Draw a stroke's smoothed path onto a fontTools pen.

        One-point and empty strokes draw nothing.
        """
        if len(points) < 2:
            return

        scaled = [(p.x * scale, p.y * scale) for p in points]
        pen.moveTo(scaled[0])

        if len(scaled) > 2:
            for (cx, cy), (nx, ny) in zip(scaled[1:-1], scaled[2:]):
                pen.qCurveTo((cx, cy), ((cx + nx) / 2, (cy + ny) / 2))

        pen.lineTo(scaled[-1])
        pen.endPath()

    def path_for(self, points: Sequence[Point], scale: float = 1.0) -> list[PathCommand]:
        """Curve commands for a stroke.

        Args:
            points: Stroke points in normalized units
            scale: Multiplier applied to every coordinate

        Returns:
            Recorded pen commands; empty for fewer than two points
        """
        pen = RecordingPen()
        self.draw(points, pen, scale)
        return list(pen.value)

    def to_svg(self, commands: Sequence[PathCommand]) -> str:
        """Render recorded commands as SVG path data."""
        pen = SVGPathPen(None, ntos=self._ntos)
        replayRecording(commands, pen)
        return pen.getCommands()

    def width_for(self, stroke: Stroke) -> float:
        """Stroke width from the stroke's mean pressure.

        Always within ``[min_width, max_width]``.
        """
        return map_pressure_to_width(stroke.mean_pressure(), self.min_width, self.max_width)

    def format_number(self, value: float) -> str:
        return self._ntos(value)
