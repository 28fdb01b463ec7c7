"""JSON file persistence for font documents.

This module provides the FontStore class for loading and saving font
documents in the JSON exchange format.
"""

import json
import os
from pathlib import Path

import structlog

from penscript.domain import FontDocument
from penscript.exceptions import FontDataFormatError, FontDataLoadError, FontDataSaveError

logger = structlog.get_logger(__name__)


class FontStore:
    """Loads and saves a font document at a fixed path.

    ``load`` and ``save`` never raise: they report failure as None / False
    and log the reason. ``read`` and ``write`` raise typed errors for callers
    that want the details.

    Example:
        store = FontStore(Path("handwriting.json"))
        document = store.load() or FontDocument()
        ...
        store.save(document)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> FontDocument:
        """Read and validate the document.

        Returns:
            FontDocument

        Raises:
            FileNotFoundError: If the file does not exist
            FontDataLoadError: If the file cannot be read or parsed
            FontDataFormatError: If the document does not match the schema
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Font data file not found: {self._path}")

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise FontDataLoadError(str(self._path), str(e)) from e

        return FontDocument.from_dict(data)

    def load(self) -> FontDocument | None:
        """Load the document.

        Returns:
            FontDocument, or None if the file is missing or invalid
        """
        try:
            document = self.read()
        except FileNotFoundError:
            logger.debug("No font data file", path=str(self._path))
            return None
        except (FontDataLoadError, FontDataFormatError) as e:
            logger.error(
                "Font data load failed",
                path=str(self._path),
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        logger.debug("Font data loaded", path=str(self._path), glyphs=len(document))
        return document

    def import_into(self, document: FontDocument) -> bool:
        """Replace a document's contents with this file's contents.

        The target document is left untouched if the file is missing or
        invalid.

        Returns:
            True if the document was replaced
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Font data import failed", path=str(self._path), error=str(e))
            return False
        return document.import_json(text)

    def write(self, document: FontDocument) -> None:
        """Write the document, replacing any existing file in one step.

        Raises:
            FontDataSaveError: If the file cannot be written
        """
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(document.export_json(), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise FontDataSaveError(str(self._path), str(e)) from e

    def save(self, document: FontDocument) -> bool:
        """Save the document.

        Returns:
            True on success
        """
        try:
            self.write(document)
        except FontDataSaveError as e:
            logger.error("Font data save failed", path=str(self._path), error=e.reason)
            return False

        logger.debug("Font data saved", path=str(self._path), glyphs=len(document))
        return True
