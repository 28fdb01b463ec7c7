"""Command-line interface for penscript.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Render text to an SVG file or stdout
- Inspect which glyphs a font data file contains
- Reproducible output with --seed
- Detailed error reporting
"""

from penscript.cli.app import cli, main

__all__ = ["cli", "main"]
