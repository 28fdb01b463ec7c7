"""End-to-end test: capture glyphs, save them, load them and render text."""

import math
import random
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from penscript.config import CaptureConfig, RenderConfig
from penscript.core import CaptureSession, DocumentAssembler, GlyphTokenizer
from penscript.domain import FontDocument
from penscript.exceptions import NoFontDataError
from penscript.io import FontStore

SVG_NS = "{http://www.w3.org/2000/svg}"


def pen_stroke(session: CaptureSession, coords: list[tuple[float, float]]) -> None:
    """Replay a stroke sampled every 16 ms, interpolating 4 points per segment."""
    t = 0.0
    session.begin_stroke(*coords[0], timestamp=t)
    for (x0, y0), (x1, y1) in zip(coords, coords[1:]):
        for step in range(1, 5):
            t += 16
            f = step / 4
            session.add_point(x0 + (x1 - x0) * f, y0 + (y1 - y0) * f, timestamp=t)
    session.end_stroke()


def circle(cx: float, cy: float, r: float, n: int = 24) -> list[tuple[float, float]]:
    return [
        (cx + r * math.cos(2 * math.pi * i / n), cy + r * math.sin(2 * math.pi * i / n))
        for i in range(n + 1)
    ]


@pytest.fixture
def captured_document() -> FontDocument:
    """Document built the way a user would capture it."""
    document = FontDocument()
    session = CaptureSession(document, CaptureConfig())

    session.select("o")
    pen_stroke(session, circle(150, 196, 35))
    session.commit()

    session.select("l")
    pen_stroke(session, [(150, 63), (148, 150), (152, 231)])
    session.commit()

    session.select("i")
    pen_stroke(session, [(150, 161), (151, 231)])
    session.begin_stroke(150, 130)
    session.end_stroke()
    session.commit()

    session.select("ll")
    pen_stroke(session, [(120, 63), (120, 231)])
    pen_stroke(session, [(170, 63), (170, 231)])
    session.commit()

    return document


class TestRenderPipeline:
    """Capture, persist and render round trip."""

    def test_capture_simplifies(self, captured_document: FontDocument) -> None:
        """Test committed strokes have far fewer points than were sampled."""
        line = captured_document.get_character("l")
        assert line is not None
        assert len(line.strokes[0]) < 9
        dot = captured_document.get_character("i").strokes[1]
        assert dot.is_dot()

    def test_persist_and_render(self, captured_document: FontDocument, tmp_path: Path) -> None:
        """Test a stored document renders the same as the in-memory one."""
        store = FontStore(tmp_path / "handwriting.json")
        assert store.save(captured_document)
        loaded = store.load()
        assert loaded is not None

        config = RenderConfig(font_size=48, variation=3)
        created = "2024-05-01T12:00:00.000Z"
        from_memory = DocumentAssembler(config).assemble(
            captured_document, "olio\nlloll", random.Random(5), created=created
        )
        from_disk = DocumentAssembler(config).assemble(
            loaded, "olio\nlloll", random.Random(5), created=created
        )
        assert from_memory.svg == from_disk.svg

    def test_rendered_structure(self, captured_document: FontDocument) -> None:
        """Test line groups, ligatures, dots and joins in the output."""
        result = DocumentAssembler(RenderConfig()).assemble(
            captured_document, "lol li\nollo", random.Random(8)
        )
        root = ET.fromstring(result.svg.encode("utf-8"))

        glyph_keys = [
            g.get("data-glyph") for g in root.iter(f"{SVG_NS}g") if g.get("class") == "glyph"
        ]
        assert glyph_keys == ["l", "o", "l", "l", "i", "o", "ll", "o"]
        assert len(list(root.iter(f"{SVG_NS}circle"))) == 1

        joins = [p for p in root.iter(f"{SVG_NS}path") if p.get("class") == "join"]
        # lol: 2, l to l across the space, li: 1, ollo: 2
        assert len(joins) == 6
        assert result.missing == set()

    def test_every_path_is_drawable(self, captured_document: FontDocument) -> None:
        """Test each glyph path has data, a color and a positive width."""
        result = DocumentAssembler(RenderConfig(stroke_color="darkblue")).assemble(
            captured_document, "oil", random.Random(2)
        )
        root = ET.fromstring(result.svg.encode("utf-8"))
        for path in root.iter(f"{SVG_NS}path"):
            assert path.get("d").startswith("M")
            assert path.get("stroke") == "darkblue"
            assert 1.5 <= float(path.get("stroke-width")) <= 3.0

    def test_glyphs_stay_near_baseline(self, captured_document: FontDocument) -> None:
        """Test varied glyphs land around their line's baseline."""
        config = RenderConfig(font_size=60, line_height=1.5, variation=10)
        result = DocumentAssembler(config).assemble(
            captured_document, "lll\nooo", random.Random(4)
        )
        for index, layout in enumerate(result.lines):
            baseline = 90 * (index + 1)
            for placement in layout.placements:
                bottom = max(
                    placement.absolute(p.to_tuple(), 60)[1]
                    for s in placement.strokes
                    for p in s.points
                )
                assert abs(bottom - baseline) < 20

    def test_tokenizer_prefers_ligature(self, captured_document: FontDocument) -> None:
        """Test the captured pair is used once inside a word."""
        tokenizer = GlyphTokenizer(captured_document.snapshot().keys())
        assert list(tokenizer.tokenize("hello")) == ["h", "e", "ll", "o"]

    def test_cleared_document_cannot_render(self, captured_document: FontDocument) -> None:
        """Test clearing every glyph makes rendering fail before layout."""
        captured_document.clear()
        with pytest.raises(NoFontDataError):
            DocumentAssembler(RenderConfig()).assemble(captured_document, "lol")
