"""Configuration management for penscript.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RenderConfig: Text render settings (size, spacing, variation, style)
- CaptureConfig: Capture surface geometry and stroke processing settings
- LoggingConfig: Logging settings
- PenscriptSettings: Main application settings
"""

from penscript.config.settings import (
    CaptureConfig,
    GuidelineMetrics,
    LineCap,
    LoggingConfig,
    PenscriptSettings,
    RenderConfig,
    get_default_settings,
)

__all__ = [
    "CaptureConfig",
    "GuidelineMetrics",
    "LineCap",
    "LoggingConfig",
    "PenscriptSettings",
    "RenderConfig",
    "get_default_settings",
]
