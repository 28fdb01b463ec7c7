"""Unit tests for cursive connector extraction."""

import pytest

from penscript.core.connectors import extract_connectors
from penscript.domain import Point, Stroke


class TestExtractConnectors:
    """Tests for extract_connectors."""

    def test_entry_and_exit(self) -> None:
        """Test entry is the first point of the first stroke and exit the last of the last."""
        strokes = [
            Stroke.of([Point(0.1, 0.5), Point(0.3, 0.2)]),
            Stroke.of([Point(0.2, 0.1)]),
            Stroke.of([Point(0.3, 0.2), Point(0.6, 0.55)]),
        ]
        connector = extract_connectors(strokes)
        assert connector is not None
        assert connector.entry == (0.1, 0.5)
        assert connector.exit == (0.6, 0.55)
        assert connector.width == pytest.approx(0.5)

    def test_single_dot(self) -> None:
        """Test a lone dot enters and exits at the same point."""
        connector = extract_connectors([Stroke.of([Point(0.2, 0.3)])])
        assert connector is not None
        assert connector.entry == connector.exit == (0.2, 0.3)
        assert connector.width == 0

    def test_no_strokes(self) -> None:
        """Test no strokes give no connector."""
        assert extract_connectors([]) is None

    @pytest.mark.parametrize("empty_index", [0, -1])
    def test_empty_end_stroke(self, empty_index: int) -> None:
        """Test an empty first or last stroke gives no connector."""
        strokes = [Stroke.of([Point(0, 0), Point(1, 1)]), Stroke.of([Point(2, 2)])]
        strokes[empty_index] = Stroke()
        assert extract_connectors(strokes) is None
