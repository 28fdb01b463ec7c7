"""Utility functions for penscript.

This module provides utility functions including:

- Logging setup and configuration
- Render statistics tracking
"""

from penscript.utils.logging import (
    RenderLogger,
    RenderStats,
    configure_logging,
)

__all__ = [
    "RenderLogger",
    "RenderStats",
    "configure_logging",
]
