"""The top-level image writer.

`OGImageWriter` lays elements out from top to bottom inside the window
padding and paints them onto a Pillow surface. Text is resolved against the
element font and the fallback table when it is set, laid out into lines, and
drawn line by line by the `RenderCompositor` when the image is painted.

Example:
    >>> writer = OGImageWriter(WindowStyle(width=1200, height=630))
    >>> writer.set_text("Hello 😀", Style(font_size=64), font_bytes)
    >>> writer.generate("og.png")
"""

from pathlib import Path

from PIL import Image
from loguru import logger

from og_image_writer.compositor import RenderCompositor
from og_image_writer.context import Context, decode_image
from og_image_writer.element import ImgElement, TextElement
from og_image_writer.errors import InvalidImageData
from og_image_writer.font import Font, FontContext
from og_image_writer.layout.lines import Rect, break_lines
from og_image_writer.layout.textarea import TextArea


class OGImageWriter:
    """Composes text and images into a PNG.

    Attributes:
        window (WindowStyle): The image size, background and padding.
        context (Context): The drawing surface.
        font_context (FontContext): The fallback font table shared by all
            text elements of this writer.
        tree (list): Elements waiting to be painted, in insertion order.
    """

    def __init__(self, window, font_context=None, context=None):
        """Creates a writer.

        Without `context`, a new canvas filled with the window background is
        created. A given context must match the window size.
        """
        self.window = window
        if context is None:
            context = Context(window.width, window.height, window.background_color)
        self.context = context
        self.font_context = font_context if font_context is not None else FontContext()
        self.tree = []
        self.content_height = 0.0

    @classmethod
    def from_data(cls, window, data, font_context=None):
        """Creates a writer that draws on top of an existing image.

        The window size is taken from the image.

        Raises:
            InvalidImageData: If `data` is not a readable image.
        """
        context = Context.from_data(data)
        window = window.model_copy(update={"width": context.width, "height": context.height})
        return cls(window, font_context, context)

    def _content_box(self, style):
        padding = self.window.padding
        x = padding.left + style.margin.left
        if style.position is not None:
            y = style.position.top + style.margin.top
            x = style.position.left + style.margin.left
        else:
            y = padding.top + self.content_height + style.margin.top
        width = self.window.width - x - padding.right - style.margin.right
        return x, y, width

    def _advance(self, style, height):
        if style.position is None:
            self.content_height += style.margin.top + height + style.margin.bottom

    def set_text(self, text, style, font_bytes):
        """Adds a single-style text element.

        Raises:
            InvalidFontData: If `font_bytes` is not a valid font.
            NoMatchingFontFamily: If a character cannot be covered by any font.
        """
        font = Font(font_bytes)
        textarea = TextArea()
        textarea.append_with_resolution(text, font, self.font_context)
        self._process_text(textarea, style, font)

    def set_textarea(self, textarea, style, font_bytes):
        """Adds a text element made of several styled fragments.

        Fragments without their own style or font use `style` and the font
        loaded from `font_bytes`.

        Raises:
            InvalidFontData: If `font_bytes` is not a valid font.
            NoMatchingFontFamily: If a character cannot be covered by any font.
        """
        font = Font(font_bytes)
        textarea.resolve_all(font, self.font_context)
        self._process_text(textarea, style, font)

    def _process_text(self, textarea, style, font):
        x, y, width = self._content_box(style)
        if style.max_width is not None:
            width = min(width, style.max_width)
        element = TextElement(textarea, style, font)
        element.lines = break_lines(textarea, style, font, self.context, self.font_context, x, y, width)
        height = sum(line.rect.height for line in element.lines)
        self._advance(style, height)
        self.tree.append(element)
        logger.debug(f"Laid out {len(textarea)} fragments into {len(element.lines)} lines at y={y}")

    def set_img(self, src, width, height, style):
        """Adds an image read from a file, resized to `width` x `height`.

        Raises:
            InvalidImageData: If the file cannot be read or decoded.
        """
        try:
            data = Path(src).read_bytes()
        except OSError as e:
            raise InvalidImageData(f"Could not read image {src}: {e}") from e
        self.set_img_with_data(data, width, height, style)

    def set_img_with_data(self, data, width, height, style):
        """Adds an image from encoded bytes, resized to `width` x `height`."""
        image = decode_image(data)
        self._process_img(image, width, height, style)

    def set_container(self, writer, style):
        """Paints another writer and embeds its surface as an image element."""
        writer.paint()
        image = writer.context.image
        self._process_img(image, image.width, image.height, style)

    def _process_img(self, image, width, height, style):
        if image.size != (width, height):
            image = image.resize((width, height), Image.Resampling.LANCZOS)
        x, y, _ = self._content_box(style)
        self.tree.append(ImgElement(image, Rect(x, y, width, height)))
        self._advance(style, height)

    def paint(self):
        """Draws every pending element onto the surface, in insertion order.

        Raises:
            TextRangeOutOfBounds: If a laid-out character cannot be located.
                Elements drawn before the failure stay on the surface.
            RenderTargetFailure: If drawing fails.
        """
        compositor = RenderCompositor(self.context, self.font_context)
        while self.tree:
            element = self.tree.pop(0)
            if isinstance(element, ImgElement):
                self.context.draw_image(element.image, element.rect.x, element.rect.y)
            else:
                for line in element.lines:
                    compositor.draw_line(line, element)

    def generate(self, dest):
        """Paints the image and writes it to `dest` as PNG.

        Nothing is written if painting or encoding fails.
        """
        self.paint()
        self.context.save(dest)
        logger.info(f"Wrote {self.context.width}x{self.context.height} image to {dest}")

    def into_bytes(self):
        """Returns the surface encoded as PNG."""
        return self.context.into_bytes()
