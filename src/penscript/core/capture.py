"""Headless capture session for recording glyphs.

A CaptureSession holds everything a drawing surface needs between pointer
events: the glyph being captured, the finished strokes and the stroke in
progress. The host UI forwards pen-down, pen-move and pen-up events and calls
``commit`` to store the glyph in a font document.
"""

from dataclasses import dataclass, field

import structlog

from penscript.config import CaptureConfig
from penscript.core.connectors import extract_connectors
from penscript.core.geometry import detect_baseline
from penscript.core.normalizer import normalize_strokes
from penscript.core.simplifier import simplify_stroke
from penscript.domain import (
    DEFAULT_PRESSURE,
    Bounds,
    Character,
    FontDocument,
    Metrics,
    Point,
    Stroke,
    standard_character_set,
)
from penscript.exceptions import CaptureError, EmptyCaptureError, InvalidGlyphKeyError

logger = structlog.get_logger(__name__)

LIGATURE_PAIRS = ("th", "ch", "sh", "wh", "ph", "qu", "oo", "ee", "ll", "tt", "or", "br", "st")


def capture_character_set() -> list[str]:
    """Glyph keys offered for capture: standard characters then ligature pairs."""
    return [*standard_character_set(), *LIGATURE_PAIRS]


def capture_metrics(config: CaptureConfig) -> Metrics:
    """Guideline metrics in capture units for the configured surface."""
    guides = config.guidelines
    height = config.canvas_height
    return Metrics(
        ascender=guides.ascender * height,
        cap_height=guides.cap_height * height,
        x_height=guides.x_height * height,
        baseline=guides.baseline * height,
        descender=guides.descender * height,
        em_height=(guides.descender - guides.ascender) * height,
        capture_width=config.canvas_width,
    )


def pressure_from_speed(speed: float, config: CaptureConfig) -> float:
    """Simulate pen pressure from drawing speed: slower strokes press harder.

    Speed 0 maps to ``max_pressure`` and ``max_speed`` to ``min_pressure``;
    the result is clamped to that range.
    """
    span = config.max_pressure - config.min_pressure
    pressure = config.max_pressure - span * (speed / config.max_speed)
    return max(config.min_pressure, min(config.max_pressure, pressure))


def _validate_key(key: str) -> str:
    if not 1 <= len(key) <= 2:
        raise InvalidGlyphKeyError(key)
    return key


@dataclass
class _StrokeInProgress:
    start_time: float
    points: list[Point] = field(default_factory=list)


class CaptureSession:
    """Records strokes for one glyph at a time.

    Example:
        session = CaptureSession(document)
        session.select("a")
        session.begin_stroke(120, 200, timestamp=0)
        session.add_point(125, 204, timestamp=16)
        session.end_stroke()
        session.commit()
    """

    def __init__(self, document: FontDocument, config: CaptureConfig | None = None) -> None:
        self.document = document
        self.config = config or CaptureConfig()
        self._key = "a"
        self._strokes: list[Stroke] = []
        self._current: _StrokeInProgress | None = None

    @property
    def key(self) -> str:
        return self._key

    @property
    def strokes(self) -> list[Stroke]:
        """Finished strokes of the glyph being captured."""
        return list(self._strokes)

    @property
    def is_drawing(self) -> bool:
        return self._current is not None

    def select(self, key: str) -> None:
        """Start capturing a different glyph, discarding unsaved strokes."""
        self._key = _validate_key(key)
        self._strokes = []
        self._current = None

    def next_key(self) -> str:
        """Select and return the glyph after the current one in the capture set."""
        keys = capture_character_set()
        index = keys.index(self._key) + 1 if self._key in keys else 0
        self.select(keys[index % len(keys)])
        return self._key

    def begin_stroke(self, x: float, y: float, timestamp: float = 0.0) -> None:
        """Pen down."""
        if self._current is not None:
            self.end_stroke()
        self._current = _StrokeInProgress(start_time=timestamp)
        self._current.points.append(Point(x, y, DEFAULT_PRESSURE, 0.0))

    def add_point(self, x: float, y: float, timestamp: float) -> Point:
        """Pen move. Pressure is derived from the speed since the last point.

        Raises:
            CaptureError: If no stroke is in progress
        """
        if self._current is None:
            raise CaptureError("add_point called without begin_stroke")

        elapsed = timestamp - self._current.start_time
        last = self._current.points[-1]
        dt = elapsed - last.timestamp
        distance = ((x - last.x) ** 2 + (y - last.y) ** 2) ** 0.5
        speed = distance / dt if dt > 0 else 0.0

        point = Point(x, y, pressure_from_speed(speed, self.config), max(0.0, elapsed))
        self._current.points.append(point)
        return point

    def end_stroke(self) -> None:
        """Pen up."""
        if self._current is None:
            return
        if self._current.points:
            self._strokes.append(Stroke.of(self._current.points))
        self._current = None

    def undo(self) -> bool:
        """Drop the most recent finished stroke.

        Returns:
            True if a stroke was removed
        """
        if not self._strokes:
            return False
        self._strokes.pop()
        return True

    def clear(self) -> None:
        """Drop every stroke of the glyph being captured."""
        self._strokes = []
        self._current = None

    def commit(self) -> Character:
        """Store the drawn glyph in the document.

        Strokes are simplified, bounds and baseline are measured on the raw
        strokes, and connectors are precomputed in normalized space.

        Returns:
            The stored Character

        Raises:
            EmptyCaptureError: If nothing has been drawn
        """
        self.end_stroke()
        if not self._strokes:
            raise EmptyCaptureError(self._key)

        bounds = Bounds.from_strokes(self._strokes)
        baseline = detect_baseline(self._strokes)
        metrics = capture_metrics(self.config)
        simplified = [simplify_stroke(s, self.config.simplify_tolerance) for s in self._strokes]
        connectors = extract_connectors(normalize_strokes(simplified, bounds, metrics))

        character = self.document.set_character(
            self._key, simplified, bounds, baseline, metrics, connectors
        )
        logger.info(
            "Glyph captured",
            glyph=self._key,
            strokes=len(simplified),
            points_before=sum(len(s) for s in self._strokes),
            points_after=sum(len(s) for s in simplified),
        )
        self._strokes = []
        return character
