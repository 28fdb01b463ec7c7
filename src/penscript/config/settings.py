"""Configuration settings for Penscript."""

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_NAMED_COLOR = re.compile(r"^[a-zA-Z]+$")


class LineCap(str, Enum):
    """SVG stroke line cap."""

    ROUND = "round"
    BUTT = "butt"
    SQUARE = "square"


class RenderConfig(BaseModel):
    """Configuration for a text render request.

    Ranges mirror the controls exposed by the renderer UI. Values outside
    them are rejected at construction.
    """

    font_size: float = Field(
        default=60.0,
        ge=20.0,
        le=200.0,
        description="Glyph em size in output units",
    )
    letter_spacing: float = Field(
        default=5.0,
        ge=-10.0,
        le=50.0,
        description="Extra advance added after every glyph",
    )
    line_height: float = Field(
        default=1.5,
        ge=1.0,
        le=3.0,
        description="Line pitch as a multiple of font size",
    )
    variation: float = Field(
        default=2.0,
        ge=0.0,
        le=10.0,
        description="Natural variation level (0 = identical repeats)",
    )
    connect_cursive: bool = Field(
        default=True,
        description="Join consecutive glyphs with connector strokes",
    )
    stroke_color: str = Field(
        default="#000000",
        description="Stroke color shared by every path",
    )
    background_color: str | None = Field(
        default=None,
        description="Optional background fill (None = transparent)",
    )
    min_stroke_width: float = Field(
        default=1.5,
        gt=0.0,
        le=20.0,
        description="Stroke width at zero pressure",
    )
    max_stroke_width: float = Field(
        default=3.0,
        gt=0.0,
        le=20.0,
        description="Stroke width at full pressure",
    )
    line_cap: LineCap = Field(
        default=LineCap.ROUND,
        description="Stroke line cap and join style",
    )
    precision: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places kept in path coordinates",
    )

    @field_validator("stroke_color", "background_color")
    @classmethod
    def _check_color(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if _HEX_COLOR.match(value) or _NAMED_COLOR.match(value):
            return value
        raise ValueError(f"not a color: {value!r}")

    @model_validator(mode="after")
    def _check_width_range(self) -> "RenderConfig":
        if self.min_stroke_width > self.max_stroke_width:
            raise ValueError("min_stroke_width must not exceed max_stroke_width")
        return self


class GuidelineMetrics(BaseModel):
    """Capture guideline positions as fractions of the canvas height."""

    ascender: float = Field(default=0.18, ge=0.0, le=1.0)
    cap_height: float = Field(default=0.24, ge=0.0, le=1.0)
    x_height: float = Field(default=0.46, ge=0.0, le=1.0)
    baseline: float = Field(default=0.66, ge=0.0, le=1.0)
    descender: float = Field(default=0.82, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_order(self) -> "GuidelineMetrics":
        if not self.ascender < self.baseline < self.descender:
            raise ValueError("guidelines must satisfy ascender < baseline < descender")
        return self


class CaptureConfig(BaseModel):
    """Configuration for stroke capture sessions."""

    canvas_width: float = Field(default=450.0, gt=0.0, description="Capture surface width")
    canvas_height: float = Field(default=350.0, gt=0.0, description="Capture surface height")
    guidelines: GuidelineMetrics = Field(default_factory=GuidelineMetrics)
    simplify_tolerance: float = Field(
        default=2.0,
        gt=0.0,
        le=20.0,
        description="Douglas-Peucker tolerance applied on commit (capture units)",
    )
    max_speed: float = Field(
        default=2.0,
        gt=0.0,
        description="Pen speed (units/ms) that maps to the lightest pressure",
    )
    min_pressure: float = Field(default=0.3, ge=0.0, le=1.0)
    max_pressure: float = Field(default=0.8, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_pressure_range(self) -> "CaptureConfig":
        if self.min_pressure > self.max_pressure:
            raise ValueError("min_pressure must not exceed max_pressure")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file (None = console only)",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PenscriptSettings(BaseModel):
    """Main application settings."""

    render: RenderConfig = Field(default_factory=RenderConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PenscriptSettings:
    """Get default application settings."""
    return PenscriptSettings()
