"""Domain models for penscript.

This module contains the core domain models representing captured pen
strokes, stored glyphs and the font data document. Models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to the JSON exchange schema
- Independent of rendering details

Key classes:
- Point: A sampled pen position with pressure and timestamp
- Stroke: An ordered run of points
- Bounds: Bounding box of a stroke set
- Metrics: Capture guideline metrics
- Connector: Entry/exit anchors for cursive joins
- Character: A stored glyph
- FontDocument: Glyph key to Character mapping plus metadata
"""

from penscript.domain.document import (
    DocumentMetadata,
    DocumentStatistics,
    FontDocument,
    standard_character_set,
)
from penscript.domain.glyph import Character, Connector, Metrics
from penscript.domain.stroke import DEFAULT_PRESSURE, Bounds, Point, Stroke

__all__: list[str] = [
    "DEFAULT_PRESSURE",
    # Geometry
    "Point",
    "Stroke",
    "Bounds",
    # Glyphs
    "Metrics",
    "Connector",
    "Character",
    # Document
    "DocumentMetadata",
    "DocumentStatistics",
    "FontDocument",
    "standard_character_set",
]
