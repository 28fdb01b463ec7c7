"""Exception hierarchy for Penscript."""


class PenscriptError(Exception):
    """Base exception for all Penscript errors."""

    pass


class FontDataError(PenscriptError):
    """Errors related to font data loading or saving."""

    pass


class FontDataLoadError(FontDataError):
    """Error loading a font data file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font data '{path}': {reason}")


class FontDataSaveError(FontDataError):
    """Error saving a font data file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font data '{path}': {reason}")


class FontDataFormatError(FontDataError):
    """Font data document does not match the expected schema."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid font data: {details}")


class CaptureError(PenscriptError):
    """Errors raised by a capture session."""

    pass


class InvalidGlyphKeyError(CaptureError):
    """Glyph key is not a single character or a two-character ligature."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Invalid glyph key {key!r}: expected 1 or 2 characters")


class EmptyCaptureError(CaptureError):
    """Commit attempted with no strokes drawn."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Nothing drawn for glyph {key!r}")


class RenderPreconditionError(PenscriptError):
    """A render request was rejected before any layout work began."""

    pass


class EmptyTextError(RenderPreconditionError):
    """Render requested with no text."""

    def __init__(self) -> None:
        super().__init__("No text to render")


class NoFontDataError(RenderPreconditionError):
    """Render requested without any captured glyphs."""

    def __init__(self) -> None:
        super().__init__("No handwriting data loaded")
