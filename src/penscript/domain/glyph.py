"""Captured character records and their metadata.

This module defines the stored form of a captured glyph: its strokes, the
capture metrics that place it relative to the writing baseline, and the
precomputed cursive connectors.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from penscript.domain.stroke import Bounds, Stroke, finite_float


def utc_timestamp() -> str:
    """Current time as an ISO 8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _optional_float(data: dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    return None if value is None else finite_float(value)


@dataclass(frozen=True, slots=True)
class Metrics:
    """Capture guideline positions in capture units.

    Attributes:
        ascender: Top of ascenders (normalization origin)
        cap_height: Top of capital letters
        x_height: Top of lowercase letters
        baseline: Writing baseline
        descender: Bottom of descenders
        em_height: Reference vertical span, ``descender - ascender``
        capture_width: Width of the capture surface
    """

    ascender: float = 0.0
    cap_height: float | None = None
    x_height: float | None = None
    baseline: float | None = None
    descender: float | None = None
    em_height: float = 0.0
    capture_width: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ascender": self.ascender,
            "capHeight": self.cap_height,
            "xHeight": self.x_height,
            "baseline": self.baseline,
            "descender": self.descender,
            "emHeight": self.em_height,
            "captureWidth": self.capture_width,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Metrics":
        """Deserialize from dictionary.

        Older documents omit ``capHeight``; ``emHeight`` is derived from the
        ascender and descender when it is missing.
        """
        ascender = finite_float(data.get("ascender") or 0.0)
        descender = _optional_float(data, "descender")
        em_height = _optional_float(data, "emHeight")
        if em_height is None:
            em_height = descender - ascender if descender is not None else 0.0
        return cls(
            ascender=ascender,
            cap_height=_optional_float(data, "capHeight"),
            x_height=_optional_float(data, "xHeight"),
            baseline=_optional_float(data, "baseline"),
            descender=descender,
            em_height=em_height,
            capture_width=_optional_float(data, "captureWidth"),
        )


@dataclass(frozen=True, slots=True)
class Connector:
    """Entry and exit anchors for cursive joins, in normalized space.

    Attributes:
        entry: First point of the glyph's first stroke
        exit: Last point of the glyph's last stroke
        width: Normalized bounding width of the glyph
    """

    entry: tuple[float, float]
    exit: tuple[float, float]
    width: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry": {"x": self.entry[0], "y": self.entry[1]},
            "exit": {"x": self.exit[0], "y": self.exit[1]},
            "width": self.width,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Connector":
        entry = data["entry"]
        exit_ = data["exit"]
        return cls(
            entry=(finite_float(entry["x"]), finite_float(entry["y"])),
            exit=(finite_float(exit_["x"]), finite_float(exit_["y"])),
            width=finite_float(data.get("width") or 0.0),
        )


@dataclass(frozen=True, slots=True)
class Character:
    """A captured glyph as stored in a font document.

    Characters are immutable. Updating a glyph means replacing the whole
    record through ``FontDocument.set_character``.

    Attributes:
        strokes: Simplified strokes in capture units
        bounds: Bounding box of the strokes in capture units
        baseline: Detected baseline of the drawn strokes
        metrics: Capture guideline metrics (None for legacy captures)
        connectors: Precomputed normalized connectors
        timestamp: ISO time the glyph was captured
    """

    strokes: tuple[Stroke, ...]
    bounds: Bounds
    baseline: float = 0.0
    metrics: Metrics | None = None
    connectors: Connector | None = None
    timestamp: str = ""

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    def is_empty(self) -> bool:
        """Check if the glyph has no drawable points."""
        return all(len(stroke) == 0 for stroke in self.strokes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the font document character layout.

        Returns:
            Dictionary representation of the character
        """
        return {
            "strokes": [s.to_dict() for s in self.strokes],
            "bounds": self.bounds.to_dict(),
            "baseline": self.baseline,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "connectors": self.connectors.to_dict() if self.connectors else None,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Character":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a character

        Returns:
            Character instance

        Raises:
            KeyError: If strokes or bounds are missing
            TypeError: If a field has the wrong shape
            ValueError: If a number is not a finite float or bounds are inverted
            OverflowError: If an integer is too large for a float
        """
        metrics = data.get("metrics")
        connectors = data.get("connectors")
        return cls(
            strokes=tuple(Stroke.from_dict(s) for s in data["strokes"]),
            bounds=Bounds.from_dict(data["bounds"]),
            baseline=finite_float(data.get("baseline") or 0.0),
            metrics=Metrics.from_dict(metrics) if metrics else None,
            connectors=Connector.from_dict(connectors) if connectors else None,
            timestamp=str(data.get("timestamp") or ""),
        )
