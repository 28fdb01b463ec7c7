"""Multi-line text rendering orchestration.

This module coordinates the full render workflow: precondition checks, line
splitting, canvas sizing, per-line layout and SVG assembly.

Key components:
- DocumentAssembler: Renders text against a font document
- render_text: Convenience wrapper with default collaborators
"""

import random
import re
import time
from dataclasses import dataclass, field

import structlog

from penscript.config import RenderConfig
from penscript.core.layout import LineLayout, LineLayoutEngine
from penscript.core.path_encoder import PathEncoder
from penscript.core.svg_document import SvgWriter
from penscript.core.variation import RandomSource
from penscript.domain import FontDocument
from penscript.exceptions import EmptyTextError, NoFontDataError
from penscript.utils.logging import RenderLogger, RenderStats

CANVAS_PADDING = 100.0
LINE_MARGIN_X = 50.0
ESTIMATED_GLYPH_WIDTH = 0.6

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split text on any line break, keeping empty lines."""
    return _LINE_BREAK.split(text)


def estimate_canvas(lines: list[str], config: RenderConfig) -> tuple[float, float]:
    """Estimate the output canvas size for a block of text.

    This is a layout estimate: wide glyphs can advance past the estimated
    width.

    Returns:
        Tuple of (width, height)
    """
    longest = max((len(line) for line in lines), default=0)
    width = longest * (config.font_size * ESTIMATED_GLYPH_WIDTH + config.letter_spacing)
    height = len(lines) * config.font_size * config.line_height
    return width + CANVAS_PADDING, height + CANVAS_PADDING


@dataclass
class RenderResult:
    """Output of a render request."""

    svg: str
    width: float
    height: float
    lines: list[LineLayout] = field(default_factory=list)
    missing: set[str] = field(default_factory=set)
    stats: RenderStats | None = None


class DocumentAssembler:
    """Renders multi-line text into an SVG document.

    The assembler reads the font document through a snapshot taken once at
    the start of each render, so replacing or editing the document while a
    render runs has no effect on its output.

    Example:
        assembler = DocumentAssembler(RenderConfig(font_size=48))
        result = assembler.assemble(document, "Hello\\nWorld", random.Random(1))
        Path("hello.svg").write_text(result.svg)
    """

    def __init__(
        self,
        config: RenderConfig,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            config: Validated render configuration
            logger: Bound logger (module logger if None)
        """
        self.config = config
        self.logger = logger or structlog.get_logger(__name__)
        self.encoder = PathEncoder.from_config(config)
        self.writer = SvgWriter(config, self.encoder)

    def assemble(
        self,
        document: FontDocument | None,
        text: str,
        rng: RandomSource | None = None,
        created: str | None = None,
    ) -> RenderResult:
        """Render text with the glyphs of a font document.

        Args:
            document: Font document to draw glyphs from
            text: Text to render; line breaks start new lines
            rng: Random source for glyph variation (fresh if None)
            created: Creation time for the metadata block

        Returns:
            RenderResult with SVG markup, canvas size, line layouts and the
            glyph keys that were not found

        Raises:
            EmptyTextError: If text is empty
            NoFontDataError: If there is no document or it has no glyphs
        """
        if not text:
            raise EmptyTextError()
        if document is None or len(document) == 0:
            raise NoFontDataError()

        start_time = time.time()
        characters = document.snapshot()
        render_logger = RenderLogger(self.logger)
        render_logger.stats.start_time = start_time

        engine = LineLayoutEngine(
            characters,
            self.config,
            rng or random.Random(),
            encoder=self.encoder,
            render_logger=render_logger,
        )

        lines = split_lines(text)
        width, height = estimate_canvas(lines, self.config)
        line_pitch = self.config.font_size * self.config.line_height

        layouts: list[LineLayout] = []
        missing: set[str] = set()
        for index, line in enumerate(lines):
            baseline_y = line_pitch * (index + 1)
            layout = engine.layout(line, LINE_MARGIN_X, baseline_y)
            render_logger.log_line(index, line, layout.width, layout.missing)
            layouts.append(layout)
            missing |= layout.missing

        svg = self.writer.build(layouts, width, height, created=created)

        end_time = time.time()
        render_logger.stats.end_time = end_time
        render_logger.log_render_complete(width, height, (end_time - start_time) * 1000)
        if missing:
            self.logger.warning("Missing glyphs", glyphs=sorted(missing))

        return RenderResult(
            svg=svg,
            width=width,
            height=height,
            lines=layouts,
            missing=missing,
            stats=render_logger.stats,
        )


def render_text(
    document: FontDocument | None,
    text: str,
    config: RenderConfig | None = None,
    rng: RandomSource | None = None,
) -> RenderResult:
    """Render text with default collaborators.

    Args:
        document: Font document to draw glyphs from
        text: Text to render
        config: Render configuration (defaults if None)
        rng: Random source (fresh if None)

    Returns:
        RenderResult
    """
    return DocumentAssembler(config or RenderConfig()).assemble(document, text, rng)
