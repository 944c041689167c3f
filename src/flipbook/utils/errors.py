"""Typed exceptions for document loading and page rendering."""


class FlipbookError(Exception):
    """Base class for errors raised by the rendering pipeline."""


class LoadFailure(FlipbookError):
    """Raised when a document cannot be opened or parsed."""


class UnsupportedFormatError(LoadFailure):
    """Raised when no reader is registered for a file format."""


class RenderFailure(FlipbookError):
    """Raised when a specific page cannot be rasterized."""

    def __init__(self, ordinal: int, reason: str) -> None:
        super().__init__(f"page {ordinal}: {reason}")
        self.ordinal = ordinal
        self.reason = reason
