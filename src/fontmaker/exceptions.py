"""Exception hierarchy for FontMaker."""


class FontMakerError(Exception):
    """Base exception for all FontMaker errors."""

    pass


class FontError(FontMakerError):
    """Errors related to font loading or saving."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontSaveError(FontError):
    """Error saving a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")


class GlyphError(FontMakerError):
    """Errors related to glyph processing."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested character is not part of the session."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Glyph '{char}' not found")


class GlyphExportError(GlyphError):
    """A glyph could not be exported, aborting the whole font."""

    def __init__(self, char: str, reason: str) -> None:
        self.char = char
        self.reason = reason
        super().__init__(f"Cannot export glyph '{char}': {reason}")


class GeometryError(FontMakerError):
    """Errors in geometric data or calculations."""

    pass


class OutlineError(GeometryError):
    """Malformed outline data."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ArtworkError(FontMakerError):
    """Errors related to glyph artwork input."""

    pass


class ArtworkLoadError(ArtworkError):
    """Artwork file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load artwork '{path}': {reason}")


class StateError(FontMakerError):
    """Errors related to persisted session state."""

    pass


class StateLoadError(StateError):
    """Session state file could not be read at all."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load session '{path}': {reason}")


class StateSaveError(StateError):
    """Session state file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save session '{path}': {reason}")


class TraceCancelledError(FontMakerError):
    """Batch tracing was cancelled by the caller."""

    def __init__(self, completed: int, pending: int) -> None:
        self.completed = completed
        self.pending = pending
        super().__init__(f"Tracing cancelled: {completed} completed, {pending} pending")
