"""Unit tests for the command-line interface."""

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from penscript import __version__
from penscript.cli.app import app
from penscript.domain import Bounds, FontDocument, Metrics, Point, Stroke
from penscript.io import FontStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """Drop handlers the render command installs on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def font_file(tmp_path: Path) -> Path:
    """Font data file with glyphs for 'h', 'i' and the ligature 'th'."""
    document = FontDocument()
    metrics = Metrics(ascender=63, baseline=231, descender=287, em_height=224)
    shapes = {
        "h": [[(100, 63), (100, 231)], [(100, 160), (140, 140), (150, 231)]],
        "i": [[(120, 161), (122, 231)], [(121, 120)]],
        "th": [[(100, 80), (110, 231)], [(90, 150), (200, 150)], [(150, 63), (160, 231)]],
    }
    for key, coords in shapes.items():
        strokes = [Stroke.of(Point(x, y) for x, y in stroke) for stroke in coords]
        document.set_character(key, strokes, Bounds.from_strokes(strokes), 231, metrics)

    path = tmp_path / "handwriting.json"
    FontStore(path).write(document)
    return path


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """Test version flag prints and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestRenderCommand:
    """Tests for the render command."""

    def test_render_to_stdout(self, font_file: Path) -> None:
        """Test SVG is printed when no output path is given."""
        result = runner.invoke(app, ["render", str(font_file), "hi", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert "<svg" in result.stdout
        assert 'data-glyph="h"' in result.stdout

    def test_render_to_file(self, font_file: Path, tmp_path: Path) -> None:
        """Test SVG is written to the output path with a summary."""
        output = tmp_path / "out.svg"
        result = runner.invoke(
            app, ["render", str(font_file), "this", "-o", str(output), "--seed", "3"]
        )
        assert result.exit_code == 0, result.output
        assert output.exists()
        markup = output.read_text(encoding="utf-8")
        assert 'data-glyph="th"' in markup
        assert "Rendered" in result.output
        assert "missing" in result.output

    def test_seed_reproducible(self, font_file: Path, tmp_path: Path) -> None:
        """Test the same seed gives the same drawing."""
        outputs = []
        for name in ("a.svg", "b.svg"):
            output = tmp_path / name
            runner.invoke(
                app, ["render", str(font_file), "hihi", "-o", str(output), "--seed", "9", "-q"]
            )
            text = output.read_text(encoding="utf-8")
            # drop the creation time
            outputs.append(text.split("</metadata>", 1)[1])
        assert outputs[0] == outputs[1]

    def test_newline_escape(self, font_file: Path) -> None:
        """Test a literal backslash-n starts a new line."""
        result = runner.invoke(app, ["render", str(font_file), "hi\\nih", "--seed", "1"])
        assert result.exit_code == 0
        assert 'id="line-2"' in result.stdout

    def test_no_cursive(self, font_file: Path) -> None:
        """Test joins can be turned off."""
        result = runner.invoke(app, ["render", str(font_file), "hih", "--no-cursive"])
        assert result.exit_code == 0
        assert 'class="join"' not in result.stdout

    def test_missing_font_file(self, tmp_path: Path) -> None:
        """Test a nonexistent font file fails with exit code 1."""
        result = runner.invoke(app, ["render", str(tmp_path / "none.json"), "hi"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_font_file(self, tmp_path: Path) -> None:
        """Test a malformed font file fails with exit code 1."""
        path = tmp_path / "bad.json"
        path.write_text('{"characters": []}', encoding="utf-8")
        result = runner.invoke(app, ["render", str(path), "hi"])
        assert result.exit_code == 1
        assert "Invalid font data" in result.output

    def test_empty_text(self, font_file: Path) -> None:
        """Test empty text fails with exit code 1."""
        result = runner.invoke(app, ["render", str(font_file), ""])
        assert result.exit_code == 1
        assert "No text" in result.output

    def test_invalid_color(self, font_file: Path) -> None:
        """Test an invalid color fails with exit code 1."""
        result = runner.invoke(app, ["render", str(font_file), "hi", "--color", "not a color"])
        assert result.exit_code == 1

    def test_font_size_range(self, font_file: Path) -> None:
        """Test out-of-range options are rejected by the parser."""
        result = runner.invoke(app, ["render", str(font_file), "hi", "--font-size", "500"])
        assert result.exit_code != 0

    def test_log_file(self, font_file: Path, tmp_path: Path) -> None:
        """Test detailed logs go to the log file."""
        log_file = tmp_path / "render.log"
        output = tmp_path / "out.svg"
        result = runner.invoke(
            app,
            ["render", str(font_file), "hi", "-o", str(output), "--log-file", str(log_file), "-q"],
        )
        assert result.exit_code == 0
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "Render complete" in log_file.read_text(encoding="utf-8")


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self, font_file: Path) -> None:
        """Test glyph counts are shown."""
        result = runner.invoke(app, ["info", str(font_file)])
        assert result.exit_code == 0, result.output
        assert "Captured" in result.output
        assert "Ligatures" in result.output
        assert "3 glyphs" in result.output

    def test_info_verbose(self, font_file: Path) -> None:
        """Test verbose mode lists every glyph."""
        result = runner.invoke(app, ["info", str(font_file), "--verbose"])
        assert result.exit_code == 0
        assert "'th'" in result.output

    def test_info_missing_file(self, tmp_path: Path) -> None:
        """Test a nonexistent file fails with exit code 1."""
        result = runner.invoke(app, ["info", str(tmp_path / "none.json")])
        assert result.exit_code == 1
