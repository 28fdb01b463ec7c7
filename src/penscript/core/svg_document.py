"""SVG markup for laid out text.

This module provides the SvgWriter class which turns line layouts into an
SVG document using svgwrite. Path data comes from the PathEncoder.
"""

import io
from collections.abc import Sequence
from pathlib import Path

import svgwrite
from svgwrite.container import Group
from svgwrite.etree import etree
from svgwrite.path import Path as SvgPath

from penscript import __version__
from penscript.config import RenderConfig
from penscript.core.layout import GlyphPlacement, JoinSegment, LineLayout
from penscript.core.path_encoder import PathEncoder
from penscript.domain.glyph import utc_timestamp

GENERATOR_NAME = "Penscript Handwriting Renderer"


class SvgWriter:
    """Builds SVG markup from line layouts.

    Every path carries its own stroke width and the shared stroke color.
    One-point strokes are drawn as filled dots.

    Example:
        writer = SvgWriter(config)
        markup = writer.build(lines, width=800, height=300)
    """

    def __init__(self, config: RenderConfig, encoder: PathEncoder | None = None) -> None:
        """Initialize the SVG writer.

        Args:
            config: Render configuration (font size, colors, line style)
            encoder: Path encoder (built from config if None)
        """
        self._config = config
        self._encoder = encoder or PathEncoder.from_config(config)
        self._num = self._encoder.format_number

    def build(
        self,
        lines: Sequence[LineLayout],
        width: float,
        height: float,
        created: str | None = None,
    ) -> str:
        """Build a complete SVG document.

        Args:
            lines: Laid out lines, top to bottom
            width: Canvas width
            height: Canvas height
            created: Creation time for the metadata block (now if None)

        Returns:
            SVG markup with XML declaration
        """
        w, h = self._num(width), self._num(height)
        drawing = svgwrite.Drawing(size=(w, h), viewBox=f"0 0 {w} {h}", debug=False)

        if self._config.background_color:
            drawing.add(
                drawing.rect(
                    insert=(0, 0), size=("100%", "100%"), fill=self._config.background_color
                )
            )

        for index, line in enumerate(lines):
            group = drawing.g(class_="line", id=f"line-{index + 1}")
            for element in line.elements:
                if isinstance(element, JoinSegment):
                    group.add(self._join_path(drawing, element))
                else:
                    group.add(self._glyph_group(drawing, element))
            drawing.add(group)

        self._add_metadata(drawing, created or utc_timestamp())
        buffer = io.StringIO()
        drawing.write(buffer)
        return buffer.getvalue()

    def save(self, markup: str, output_path: Path) -> None:
        """Write markup to a file.

        Raises:
            OSError: If the file cannot be written
        """
        output_path.write_text(markup, encoding="utf-8")

    def _stroke_style(self, width: float) -> dict[str, str]:
        cap = self._config.line_cap.value
        return {
            "fill": "none",
            "stroke": self._config.stroke_color,
            "stroke_width": self._num(width),
            "stroke_linecap": cap,
            "stroke_linejoin": "round" if cap == "round" else "miter",
        }

    def _join_path(self, drawing: svgwrite.Drawing, join: JoinSegment) -> SvgPath:
        d = (
            f"M{self._num(join.start[0])} {self._num(join.start[1])}"
            f"L{self._num(join.end[0])} {self._num(join.end[1])}"
        )
        return drawing.path(d=d, class_="join", **self._stroke_style(join.width))

    def _glyph_group(self, drawing: svgwrite.Drawing, placement: GlyphPlacement) -> Group:
        font_size = self._config.font_size
        group = drawing.g(
            class_="glyph",
            transform=f"translate({self._num(placement.x)}, {self._num(placement.y)})",
        )
        group["data-glyph"] = placement.key

        for stroke in placement.strokes:
            if not stroke.points:
                continue
            width = self._encoder.width_for(stroke)
            if stroke.is_dot():
                point = stroke.points[0]
                group.add(
                    drawing.circle(
                        center=(self._num(point.x * font_size), self._num(point.y * font_size)),
                        r=self._num(width / 2),
                        fill=self._config.stroke_color,
                        stroke="none",
                    )
                )
                continue
            d = self._encoder.to_svg(self._encoder.path_for(stroke.points, font_size))
            group.add(drawing.path(d=d, **self._stroke_style(width)))

        return group

    def _add_metadata(self, drawing: svgwrite.Drawing, created: str) -> None:
        generator = etree.Element("generator")
        generator.text = f"{GENERATOR_NAME} {__version__}"
        stamp = etree.Element("created")
        stamp.text = created
        # svgwrite merges both into a single <metadata> block
        drawing.set_metadata(generator)
        drawing.set_metadata(stamp)
