"""Core stroke processing and rendering for penscript.

This module contains the algorithms for:

- Geometry helpers (chord distance, stroke metrics, baseline, smoothing)
- Douglas-Peucker simplification of captured strokes
- Normalization into em-relative units
- Per-instance natural variation
- Cursive connector extraction
- Smoothed path encoding and pressure-mapped widths
- Line layout with longest-match ligature lookup
- SVG document assembly
- Headless stroke capture sessions

All render services are:
- Free of module-level mutable state
- Pure functions of (document, text, config, random source)

Key functions:
- simplify_points: Douglas-Peucker point reduction
- normalize_strokes: Map capture units to em units
- apply_variation: Random rigid transform per glyph instance
- extract_connectors: Entry/exit anchors for cursive joins
- render_text: Render text to SVG with default collaborators

Key classes:
- PathEncoder: Curve commands and stroke widths
- LineLayoutEngine: Places glyphs along a line
- DocumentAssembler: Renders multi-line text to SVG
- CaptureSession: Records strokes and commits glyphs
"""

from penscript.core.assembler import (
    DocumentAssembler,
    RenderResult,
    estimate_canvas,
    render_text,
    split_lines,
)
from penscript.core.capture import (
    LIGATURE_PAIRS,
    CaptureSession,
    capture_character_set,
    capture_metrics,
    pressure_from_speed,
)
from penscript.core.connectors import extract_connectors
from penscript.core.geometry import (
    StrokeMetrics,
    detect_baseline,
    nearest_point_on_segment,
    perpendicular_distance,
    smooth_stroke,
    stroke_metrics,
)
from penscript.core.layout import (
    FALLBACK_BASELINE_RATIO,
    GlyphPlacement,
    GlyphTokenizer,
    JoinSegment,
    LineLayout,
    LineLayoutEngine,
    baseline_ratio,
)
from penscript.core.normalizer import normalization_scale, normalize_strokes
from penscript.core.path_encoder import PathCommand, PathEncoder, map_pressure_to_width
from penscript.core.simplifier import simplify_points, simplify_stroke
from penscript.core.svg_document import SvgWriter
from penscript.core.variation import (
    IDENTITY,
    RandomSource,
    VariationParams,
    apply_variation,
    variation_transform,
)

__all__ = [
    "FALLBACK_BASELINE_RATIO",
    "IDENTITY",
    "LIGATURE_PAIRS",
    # Capture
    "CaptureSession",
    # Rendering
    "DocumentAssembler",
    "GlyphPlacement",
    "GlyphTokenizer",
    "JoinSegment",
    "LineLayout",
    "LineLayoutEngine",
    "PathCommand",
    "PathEncoder",
    "RandomSource",
    "RenderResult",
    "StrokeMetrics",
    "SvgWriter",
    "VariationParams",
    # Functions
    "apply_variation",
    "baseline_ratio",
    "capture_character_set",
    "capture_metrics",
    "detect_baseline",
    "estimate_canvas",
    "extract_connectors",
    "map_pressure_to_width",
    "nearest_point_on_segment",
    "normalization_scale",
    "normalize_strokes",
    "perpendicular_distance",
    "pressure_from_speed",
    "render_text",
    "simplify_points",
    "simplify_stroke",
    "smooth_stroke",
    "split_lines",
    "stroke_metrics",
    "variation_transform",
]
