"""
Custom exceptions for Meme Generator
"""


class FontLoadError(Exception):
    """
    Raised when the caption font cannot be loaded.

    There is no fallback font: callers treat this as a startup failure
    and stop instead of rendering with a different face.
    """

    def __init__(self, font_path, message: str = None):
        self.font_path = font_path
        self.message = message or f"Could not load font file: {font_path}"
        super().__init__(self.message)


class ImageLoadError(Exception):
    """Raised when the base image cannot be read, fetched or decoded."""

    def __init__(self, source, message: str = None):
        self.source = source
        self.message = message or f"Could not load image: {source}"
        super().__init__(self.message)


class ImageSaveError(Exception):
    """Raised when the meme cannot be encoded or written."""

    def __init__(self, destination, message: str = None):
        self.destination = destination
        self.message = message or f"Could not save image: {destination}"
        super().__init__(self.message)
