"""Compose styled text and images into Open Graph style PNG images.

Text can be split into fragments with their own style and font. Every
character is rendered with the first font that covers it: the fragment's own
font, then the paragraph font, then the fallback fonts of a `FontContext`.

Example:
    >>> from og_image_writer import OGImageWriter, Style, TextArea, WindowStyle
    >>> writer = OGImageWriter(WindowStyle(width=1200, height=630))
    >>> textarea = TextArea()
    >>> textarea.append_plain("Hello, ")
    >>> textarea.append_styled("world", Style(color=(255, 0, 0, 255)))
    >>> writer.set_textarea(textarea, Style(font_size=64), font_bytes)
    >>> writer.generate("og.png")
"""

from ._version import __version__ as __version__
from og_image_writer.errors import (
    FontNotFound as FontNotFound,
    FontResolutionMissing as FontResolutionMissing,
    InvalidFontData as InvalidFontData,
    InvalidImageData as InvalidImageData,
    NoMatchingFontFamily as NoMatchingFontFamily,
    OGImageWriterError as OGImageWriterError,
    OutOfRangeText as OutOfRangeText,
    RenderTargetFailure as RenderTargetFailure,
    TextRangeOutOfBounds as TextRangeOutOfBounds,
)
from og_image_writer.font import Font as Font, FontContext as FontContext
from og_image_writer.layout import TextArea as TextArea
from og_image_writer.style import Margin as Margin, Position as Position, Style as Style, WindowStyle as WindowStyle
from og_image_writer.writer import OGImageWriter as OGImageWriter
