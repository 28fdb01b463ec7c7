"""Core geometric types for captured pen strokes.

This module defines the fundamental types used throughout penscript:
- Point: A sampled pen position with pressure and timestamp
- Stroke: An ordered run of points from pen-down to pen-up
- Bounds: Axis-aligned bounding box of a stroke set
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from fontTools.misc.arrayTools import calcBounds

DEFAULT_PRESSURE = 0.5


def finite_float(value: Any) -> float:
    """Parse a stored number, rejecting infinities and NaN.

    Raises:
        ValueError: If the value is not a finite number
        OverflowError: If an integer is too large for a float
    """
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


@dataclass(frozen=True, slots=True)
class Point:
    """A sampled pen position.

    Immutable and hashable. Coordinates are in capture units until the
    stroke set is normalized, after which they are em-relative.

    Attributes:
        x: X coordinate
        y: Y coordinate (grows downwards, as on the capture surface)
        pressure: Simulated pen pressure in [0, 1]
        timestamp: Milliseconds since the stroke started
    """

    x: float
    y: float
    pressure: float = DEFAULT_PRESSURE
    timestamp: float = 0.0

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def moved(self, x: float, y: float) -> "Point":
        """Return a copy at a new position keeping pressure and timestamp."""
        return Point(x, y, self.pressure, self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the font document point layout.

        Returns:
            Dictionary with x, y, pressure and timestamp fields
        """
        return {
            "x": self.x,
            "y": self.y,
            "pressure": self.pressure,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Missing pressure defaults to 0.5 and missing timestamp to 0.

        Args:
            data: Dictionary with at least x and y fields

        Returns:
            Point instance
        """
        pressure = data.get("pressure")
        timestamp = data.get("timestamp")
        return cls(
            x=finite_float(data["x"]),
            y=finite_float(data["y"]),
            pressure=DEFAULT_PRESSURE if pressure is None else finite_float(pressure),
            timestamp=0.0 if timestamp is None else finite_float(timestamp),
        )


@dataclass(frozen=True, slots=True)
class Stroke:
    """An ordered run of points from pen-down to pen-up.

    A single-point stroke is a dot. Empty strokes are tolerated when read
    from foreign documents and skipped when drawn.

    Attributes:
        points: Points in drawing order
    """

    points: tuple[Point, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, points: Iterable[Point]) -> "Stroke":
        """Build a stroke from any iterable of points."""
        return cls(points=tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def is_dot(self) -> bool:
        """Check if stroke is a single tap."""
        return len(self.points) == 1

    def mean_pressure(self) -> float:
        """Average pressure over the stroke's points.

        Returns:
            Mean pressure, or the default pressure for an empty stroke
        """
        if not self.points:
            return DEFAULT_PRESSURE
        return sum(p.pressure for p in self.points) / len(self.points)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with a points list
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stroke":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with a points list

        Returns:
            Stroke instance
        """
        return cls(points=tuple(Point.from_dict(p) for p in data["points"]))


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box of a stroke set.

    Width and height are derived, so ``width == max_x - min_x`` and
    ``height == max_y - min_y`` always hold.
    """

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"Inverted bounds: ({self.min_x}, {self.min_y}, {self.max_x}, {self.max_y})"
            )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        """Center of the box."""
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @classmethod
    def from_strokes(cls, strokes: Sequence[Stroke]) -> "Bounds":
        """Compute bounds of every point in a stroke set.

        Args:
            strokes: Strokes to measure

        Returns:
            Bounds, all zero when there are no points
        """
        coords = [p.to_tuple() for stroke in strokes for p in stroke.points]
        if not coords:
            return cls()
        min_x, min_y, max_x, max_y = calcBounds(coords)
        return cls(min_x, min_y, max_x, max_y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the font document bounds layout."""
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bounds":
        """Deserialize from dictionary.

        Stored width and height are ignored and recomputed from the extremes.
        """
        return cls(
            min_x=finite_float(data["minX"]),
            min_y=finite_float(data["minY"]),
            max_x=finite_float(data["maxX"]),
            max_y=finite_float(data["maxY"]),
        )
