"""Single-line glyph layout.

The layout engine walks a line of text, looks each glyph up in a snapshot of
the font document (longest key first, so captured ligature pairs win over
single letters), and places a freshly varied copy of every glyph along a
cursor. Cursive joins between consecutive glyphs are computed in absolute
output coordinates.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

import structlog

from penscript.config import RenderConfig
from penscript.core.connectors import extract_connectors
from penscript.core.normalizer import normalize_strokes
from penscript.core.path_encoder import PathEncoder
from penscript.core.variation import RandomSource, VariationParams, apply_variation
from penscript.domain import Bounds, Character, Connector, Stroke
from penscript.utils.logging import RenderLogger

logger = structlog.get_logger(__name__)

SPACE_ADVANCE = 0.3
MISSING_ADVANCE = 0.5
FALLBACK_GLYPH_WIDTH = 0.6

# Baseline position, in ems below the glyph top, for glyphs captured without
# metrics. Does not follow GuidelineMetrics: the current defaults put the
# baseline at 0.75.
FALLBACK_BASELINE_RATIO = 0.7


def baseline_ratio(character: Character) -> float:
    """Distance from the normalization origin down to the baseline, in ems."""
    metrics = character.metrics
    if metrics is not None and metrics.em_height and metrics.baseline is not None:
        return (metrics.baseline - metrics.ascender) / metrics.em_height
    return FALLBACK_BASELINE_RATIO


class GlyphTokenizer:
    """Longest-match glyph key lookup over the keys a document holds.

    Example:
        tokenizer = GlyphTokenizer({"t", "h", "th"})
        list(tokenizer.tokenize("the"))  # ["th", "e"]
    """

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = frozenset(keys)
        self.max_length = max((len(k) for k in self._keys), default=1)

    def tokenize(self, line: str) -> Iterator[str]:
        """Yield glyph keys in order.

        Keys that are not in the document still come out one character at a
        time so callers can report them as missing.
        """
        i = 0
        while i < len(line):
            for length in range(min(self.max_length, len(line) - i), 1, -1):
                candidate = line[i : i + length]
                if candidate in self._keys:
                    yield candidate
                    i += length
                    break
            else:
                yield line[i]
                i += 1


@dataclass(frozen=True)
class GlyphPlacement:
    """One varied glyph instance at its position on the line.

    Attributes:
        key: Glyph key that was drawn
        x: Left edge of the glyph in output units
        y: Vertical offset of the normalization origin in output units
        strokes: Varied strokes in normalized units
        connector: Entry/exit anchors of this instance
        advance: Cursor advance consumed by the glyph
    """

    key: str
    x: float
    y: float
    strokes: tuple[Stroke, ...]
    connector: Connector | None
    advance: float

    def absolute(self, point: tuple[float, float], font_size: float) -> tuple[float, float]:
        """Map a normalized point of this glyph into output units."""
        return (self.x + point[0] * font_size, self.y + point[1] * font_size)


@dataclass(frozen=True)
class JoinSegment:
    """Straight cursive connector between two glyphs, in output units."""

    start: tuple[float, float]
    end: tuple[float, float]
    width: float


@dataclass
class LineLayout:
    """Geometry for one line in drawing order."""

    elements: list[GlyphPlacement | JoinSegment] = field(default_factory=list)
    width: float = 0.0
    missing: set[str] = field(default_factory=set)

    @property
    def placements(self) -> list[GlyphPlacement]:
        return [e for e in self.elements if isinstance(e, GlyphPlacement)]

    @property
    def joins(self) -> list[JoinSegment]:
        return [e for e in self.elements if isinstance(e, JoinSegment)]

    def is_empty(self) -> bool:
        return not self.elements


@dataclass(frozen=True)
class _Exit:
    key: str
    point: tuple[float, float]
    width: float


class LineLayoutEngine:
    """Places glyphs for lines of text.

    The engine reads glyphs from a document snapshot and never modifies
    them: each placement works on a normalized, varied copy.

    Example:
        engine = LineLayoutEngine(document.snapshot(), RenderConfig(), random.Random(7))
        line = engine.layout("hello", origin_x=50, baseline_y=90)
    """

    def __init__(
        self,
        characters: Mapping[str, Character],
        config: RenderConfig,
        rng: RandomSource,
        encoder: PathEncoder | None = None,
        render_logger: RenderLogger | None = None,
    ) -> None:
        self._characters = characters
        self._config = config
        self._rng = rng
        self._encoder = encoder or PathEncoder.from_config(config)
        self._render_logger = render_logger
        self._variation = VariationParams.from_level(config.variation)
        self._tokenizer = GlyphTokenizer(characters.keys())

    @property
    def tokenizer(self) -> GlyphTokenizer:
        return self._tokenizer

    def layout(self, line: str, origin_x: float, baseline_y: float) -> LineLayout:
        """Lay out one line of text.

        Args:
            line: Text without line breaks
            origin_x: Cursor start in output units
            baseline_y: Writing baseline of the line in output units

        Returns:
            LineLayout with placements, joins, advanced width and missing keys
        """
        font_size = self._config.font_size
        result = LineLayout()
        x = origin_x
        previous: _Exit | None = None

        for key in self._tokenizer.tokenize(line):
            if key == " ":
                x += font_size * SPACE_ADVANCE
                continue

            character = self._characters.get(key)
            if character is None:
                result.missing.add(key)
                if self._render_logger:
                    self._render_logger.log_missing(key)
                x += font_size * MISSING_ADVANCE
                continue

            placement = self._place(key, character, x, baseline_y)

            if self._config.connect_cursive and previous and placement.connector:
                entry = placement.absolute(placement.connector.entry, font_size)
                result.elements.append(JoinSegment(previous.point, entry, previous.width))
                if self._render_logger:
                    self._render_logger.log_join(previous.key, key)

            result.elements.append(placement)
            if self._render_logger:
                self._render_logger.log_glyph_placed(key, placement.x, placement.y)

            if placement.connector:
                previous = _Exit(
                    key=key,
                    point=placement.absolute(placement.connector.exit, font_size),
                    width=self._encoder.width_for(placement.strokes[0]),
                )
            else:
                previous = None

            x += placement.advance

        result.width = x - origin_x
        return result

    def _place(self, key: str, character: Character, x: float, baseline_y: float) -> GlyphPlacement:
        font_size = self._config.font_size

        normalized = normalize_strokes(character.strokes, character.bounds, character.metrics)
        varied = apply_variation(normalized, self._variation, self._rng)
        connector = extract_connectors(varied)

        y = baseline_y - baseline_ratio(character) * font_size
        width = Bounds.from_strokes(varied).width or FALLBACK_GLYPH_WIDTH
        advance = width * font_size + self._config.letter_spacing

        logger.debug("Glyph varied", glyph=key, strokes=len(varied), width=round(width, 4))
        return GlyphPlacement(
            key=key,
            x=x,
            y=y,
            strokes=tuple(varied),
            connector=connector,
            advance=advance,
        )
