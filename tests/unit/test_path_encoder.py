"""Unit tests for path encoding and pressure-mapped widths."""

import pytest
from fontTools.pens.recordingPen import RecordingPen

from penscript.config import RenderConfig
from penscript.core.path_encoder import PathEncoder, map_pressure_to_width, number_formatter
from penscript.domain import Point, Stroke


@pytest.fixture
def encoder() -> PathEncoder:
    """Encoder with default widths."""
    return PathEncoder(min_width=1.5, max_width=3.0, precision=2)


class TestMapPressureToWidth:
    """Tests for map_pressure_to_width."""

    @pytest.mark.parametrize(
        ("pressure", "expected"),
        [(0.0, 1.5), (0.5, 2.25), (1.0, 3.0), (-1.0, 1.5), (4.0, 3.0)],
    )
    def test_linear_and_clamped(self, pressure: float, expected: float) -> None:
        """Test linear mapping with pressure clamped to [0, 1]."""
        assert map_pressure_to_width(pressure, 1.5, 3.0) == pytest.approx(expected)


class TestNumberFormatter:
    """Tests for number_formatter."""

    def test_trims_trailing_zeros(self) -> None:
        """Test compact output."""
        ntos = number_formatter(2)
        assert ntos(1.0) == "1"
        assert ntos(1.5) == "1.5"
        assert ntos(1.23456) == "1.23"
        assert ntos(-0.001) == "0"

    def test_zero_precision(self) -> None:
        """Test integer output."""
        assert number_formatter(0)(12.6) == "13"


class TestPathEncoder:
    """Tests for PathEncoder class."""

    def test_invalid_width_range(self) -> None:
        """Test min width above max width is rejected."""
        with pytest.raises(ValueError):
            PathEncoder(min_width=4.0, max_width=2.0)

    def test_from_config(self) -> None:
        """Test widths come from the render config."""
        encoder = PathEncoder.from_config(RenderConfig(min_stroke_width=1.0, max_stroke_width=5.0))
        assert encoder.min_width == 1.0
        assert encoder.max_width == 5.0

    @pytest.mark.parametrize("count", [0, 1])
    def test_short_strokes_draw_nothing(self, encoder: PathEncoder, count: int) -> None:
        """Test zero or one point produces no commands."""
        points = [Point(1, 1)] * count
        assert encoder.path_for(points) == []

    def test_two_points_straight_line(self, encoder: PathEncoder) -> None:
        """Test two points give a move and a line."""
        commands = encoder.path_for([Point(0, 0), Point(1, 2)], scale=10)
        assert commands == [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((10, 20),)),
            ("endPath", ()),
        ]

    def test_curves_through_midpoints(self, encoder: PathEncoder) -> None:
        """Test interior points become controls ending at the next midpoint."""
        points = [Point(0, 0), Point(10, 0), Point(10, 10), Point(20, 10)]
        commands = encoder.path_for(points)
        assert commands[0] == ("moveTo", ((0, 0),))
        assert commands[1] == ("qCurveTo", ((10, 0), (10, 5)))
        assert commands[2] == ("qCurveTo", ((10, 10), (15, 10)))
        assert commands[3] == ("lineTo", ((20, 10),))

    def test_curve_count(self, encoder: PathEncoder) -> None:
        """Test n points give n - 2 curve segments."""
        points = [Point(i, i % 2) for i in range(7)]
        commands = encoder.path_for(points)
        assert sum(1 for op, _ in commands if op == "qCurveTo") == 5

    def test_draw_on_any_pen(self, encoder: PathEncoder) -> None:
        """Test drawing onto a fontTools pen."""
        pen = RecordingPen()
        encoder.draw([Point(0, 0), Point(1, 1), Point(2, 0)], pen)
        assert [op for op, _ in pen.value] == ["moveTo", "qCurveTo", "lineTo", "endPath"]

    def test_to_svg(self, encoder: PathEncoder) -> None:
        """Test SVG path data for a smoothed stroke."""
        points = [Point(0, 0), Point(10, 0), Point(10, 10), Point(20, 10)]
        d = encoder.to_svg(encoder.path_for(points))
        assert d.startswith("M0 0")
        assert d.count("Q") == 2
        assert "15 10" in d

    def test_to_svg_precision(self) -> None:
        """Test coordinates are rounded to the configured precision."""
        encoder = PathEncoder(precision=1)
        d = encoder.to_svg(encoder.path_for([Point(0.123, 0.456), Point(1.987, 2.333)]))
        assert "0.1" in d
        assert "0.123" not in d

    def test_width_for_stroke(self, encoder: PathEncoder) -> None:
        """Test width follows mean pressure and stays in range."""
        light = Stroke.of([Point(0, 0, 0.0), Point(1, 1, 0.0)])
        heavy = Stroke.of([Point(0, 0, 1.0), Point(1, 1, 1.0)])
        middle = Stroke.of([Point(0, 0, 0.2), Point(1, 1, 0.8)])
        assert encoder.width_for(light) == pytest.approx(1.5)
        assert encoder.width_for(heavy) == pytest.approx(3.0)
        assert encoder.width_for(middle) == pytest.approx(2.25)
