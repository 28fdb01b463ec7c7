"""Penscript - Render text in your own handwriting.

Penscript turns hand-captured pen strokes into reusable glyph geometry and
composes that geometry into SVG text documents. Each rendered instance of a
character gets a small random variation so repeated letters do not look
stamped, and consecutive glyphs can be joined with cursive connectors.

Example:
    $ penscript render handwriting.json "Hello there" -o hello.svg

This will lay out the text with the captured glyphs in handwriting.json and
write the resulting SVG to hello.svg.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
