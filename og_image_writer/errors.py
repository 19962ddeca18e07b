"""Exceptions raised while building and rendering images.

Every failure in the package surfaces as a subclass of `OGImageWriterError`
so callers can catch the whole family at the top-level image generation call.
None of these errors are recovered from internally: a character that no font
can cover, or a text range that cannot be located, aborts the operation.
"""


class OGImageWriterError(Exception):
    """Base class for all errors raised by `og_image_writer`."""
    pass


class InvalidFontData(OGImageWriterError):
    """Raised when caller-supplied font bytes cannot be parsed."""
    pass


class NoMatchingFontFamily(OGImageWriterError):
    """Raised when no font at any tier supports a character.

    Attributes:
        char (str): The character that could not be covered.
    """

    def __init__(self, char):
        self.char = char
        super().__init__(f"No font supports character {char!r} (U+{ord(char):04X})")


class OutOfRangeText(OGImageWriterError):
    """Raised when a byte range is not contained in any fragment or glyph run."""
    pass


class TextRangeOutOfBounds(OutOfRangeText):
    """Raised by the compositor when a character of a line has no owning fragment.

    This aborts the whole paint pass. Draw calls already issued for earlier
    lines stay on the surface.
    """
    pass


class FontResolutionMissing(OGImageWriterError):
    """Raised when a glyph run is closed without a resolved font tier.

    This cannot happen when runs are resolved through `resolve_glyph_runs`;
    it guards the run bookkeeping against future changes.
    """
    pass


class FontNotFound(OGImageWriterError):
    """Raised when a resolved tier points at a font that is not available."""
    pass


class RenderTargetFailure(OGImageWriterError):
    """Raised when drawing to or encoding the surface fails."""
    pass


class InvalidImageData(OGImageWriterError):
    """Raised when image bytes cannot be decoded."""
    pass
