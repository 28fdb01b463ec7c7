"""Font data document: the set of captured glyphs keyed by glyph string.

A document maps glyph keys (a single character or a two-character
ligature) to Character records. Writes replace the underlying mapping
instead of mutating it, so a snapshot taken at the start of a render stays
consistent even if the document is edited or re-imported meanwhile.
"""

import json
import string
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import structlog

from penscript.domain.glyph import Character, Connector, Metrics, utc_timestamp
from penscript.domain.stroke import Bounds, Stroke
from penscript.exceptions import FontDataFormatError

logger = structlog.get_logger(__name__)

DOCUMENT_VERSION = "1.0"

STANDARD_PUNCTUATION = (" ", ".", ",", "!", "?", ";", ":", "-", "(", ")", '"', "'")


def standard_character_set() -> list[str]:
    """Characters every complete handwriting set should contain.

    Returns:
        a-z, A-Z, 0-9 and common punctuation, in capture order
    """
    return [
        *string.ascii_lowercase,
        *string.ascii_uppercase,
        *string.digits,
        *STANDARD_PUNCTUATION,
    ]


@dataclass
class DocumentMetadata:
    """Creation and modification stamps of a font document."""

    created: str = field(default_factory=utc_timestamp)
    modified: str = field(default_factory=utc_timestamp)
    version: str = DOCUMENT_VERSION

    def touch(self) -> None:
        self.modified = utc_timestamp()

    def to_dict(self) -> dict[str, Any]:
        return {"created": self.created, "modified": self.modified, "version": self.version}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentMetadata":
        now = utc_timestamp()
        return cls(
            created=str(data.get("created") or now),
            modified=str(data.get("modified") or now),
            version=str(data.get("version") or DOCUMENT_VERSION),
        )


@dataclass(frozen=True)
class DocumentStatistics:
    """Summary of a document's contents."""

    captured_count: int
    total_strokes: int
    characters: list[str]
    modified: str


class FontDocument:
    """Captured glyphs plus document metadata.

    Example:
        document = FontDocument()
        document.set_character("a", strokes, bounds, baseline=231.0)
        glyphs = document.snapshot()
    """

    def __init__(
        self,
        characters: Mapping[str, Character] | None = None,
        metadata: DocumentMetadata | None = None,
    ) -> None:
        self._characters: dict[str, Character] = dict(characters or {})
        self.metadata = metadata or DocumentMetadata()

    def __len__(self) -> int:
        return len(self._characters)

    def __contains__(self, key: object) -> bool:
        return key in self._characters

    def __iter__(self) -> Iterator[str]:
        return iter(self._characters)

    def snapshot(self) -> Mapping[str, Character]:
        """Read-only view of the glyphs as they are right now.

        Later writes to the document never show up in a snapshot.
        """
        return MappingProxyType(self._characters)

    def set_character(
        self,
        key: str,
        strokes: Sequence[Stroke],
        bounds: Bounds,
        baseline: float = 0.0,
        metrics: Metrics | None = None,
        connectors: Connector | None = None,
    ) -> Character:
        """Add or replace the glyph stored under a key.

        Args:
            key: Glyph key (single character or ligature pair)
            strokes: Simplified strokes in capture units
            bounds: Bounding box of the strokes
            baseline: Detected baseline
            metrics: Capture metrics
            connectors: Precomputed normalized connectors

        Returns:
            The stored Character
        """
        if not key:
            raise ValueError("Glyph key must not be empty")

        character = Character(
            strokes=tuple(strokes),
            bounds=bounds,
            baseline=baseline,
            metrics=metrics,
            connectors=connectors,
            timestamp=utc_timestamp(),
        )
        self._characters = {**self._characters, key: character}
        self.metadata.touch()
        return character

    def get_character(self, key: str) -> Character | None:
        return self._characters.get(key)

    def has_character(self, key: str) -> bool:
        return key in self._characters

    def remove_character(self, key: str) -> bool:
        """Remove a glyph.

        Returns:
            True if the glyph existed
        """
        if key not in self._characters:
            return False
        self._characters = {k: v for k, v in self._characters.items() if k != key}
        self.metadata.touch()
        return True

    def clear(self) -> None:
        """Remove every glyph."""
        self._characters = {}
        self.metadata.touch()

    def captured_keys(self) -> list[str]:
        return list(self._characters)

    def statistics(self) -> DocumentStatistics:
        """Summarize captured glyphs."""
        return DocumentStatistics(
            captured_count=len(self._characters),
            total_strokes=sum(c.stroke_count for c in self._characters.values()),
            characters=self.captured_keys(),
            modified=self.metadata.modified,
        )

    def missing_characters(self) -> list[str]:
        """Standard characters that have not been captured yet."""
        return [c for c in standard_character_set() if c not in self._characters]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the exchange schema.

        Returns:
            Dictionary with metadata and characters
        """
        return {
            "metadata": self.metadata.to_dict(),
            "characters": {k: c.to_dict() for k, c in self._characters.items()},
        }

    @classmethod
    def from_dict(cls, data: Any) -> "FontDocument":
        """Build a document from the exchange schema.

        Args:
            data: Parsed document

        Returns:
            FontDocument instance

        Raises:
            FontDataFormatError: If the document or any glyph is malformed
        """
        if not isinstance(data, dict):
            raise FontDataFormatError("document is not an object")

        raw_characters = data.get("characters")
        if not isinstance(raw_characters, dict):
            raise FontDataFormatError("missing characters object")

        characters: dict[str, Character] = {}
        for key, raw in raw_characters.items():
            try:
                characters[key] = Character.from_dict(raw)
            except (KeyError, TypeError, ValueError, OverflowError, AttributeError) as e:
                raise FontDataFormatError(f"glyph {key!r}: {e}") from e

        raw_metadata = data.get("metadata")
        metadata = (
            DocumentMetadata.from_dict(raw_metadata)
            if isinstance(raw_metadata, dict)
            else DocumentMetadata()
        )
        return cls(characters, metadata)

    def export_json(self) -> str:
        """Serialize to an indented JSON string."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> bool:
        """Replace this document's contents from a JSON string.

        The import is all-or-nothing: on any error the current glyphs and
        metadata are left untouched.

        Args:
            text: JSON document

        Returns:
            True if the document was replaced
        """
        try:
            imported = FontDocument.from_dict(json.loads(text))
        except (ValueError, FontDataFormatError) as e:
            logger.error("Font data import failed", error=str(e), error_type=type(e).__name__)
            return False

        self._characters = imported._characters
        self.metadata = imported.metadata
        logger.debug("Font data imported", glyphs=len(self._characters))
        return True
