"""Font data I/O layer for penscript.

This module handles reading and writing font documents in the JSON
exchange format. It provides a clean abstraction layer between the file
system and the domain models.

Key responsibilities:
- Load and validate font documents
- Save documents with an all-or-nothing file replace
- Import a file into an existing document without partial application

Key classes:
- FontStore: Load and save a font document at a path
"""

from penscript.io.store import FontStore

__all__ = [
    "FontStore",
]
