"""The Pillow-backed drawing surface.

`Context` owns the RGBA image that is being generated and provides the
measurement and drawing primitives used by layout and rendering. Pillow errors
are re-raised as `RenderTargetFailure`, image decoding errors as
`InvalidImageData`.
"""

import io
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, UnidentifiedImageError

from og_image_writer.errors import InvalidImageData, RenderTargetFailure
from og_image_writer.glyph import is_control


@dataclass(frozen=True)
class FontMetrics:
    """The horizontal advance and line height of some text."""

    width: float
    height: float


def decode_image(data):
    """Decodes image bytes into an RGBA Pillow image.

    Raises:
        InvalidImageData: If Pillow cannot identify or read the data.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageData(f"Could not decode image: {e}") from e
    return image.convert("RGBA")


class Context:
    """A drawing surface with text measurement.

    Attributes:
        image (Image.Image): The RGBA image being drawn on.
    """

    def __init__(self, width=0, height=0, background_color=(255, 255, 255, 255), image=None):
        """Creates a surface filled with `background_color`, or wraps `image`.

        When `image` is given, `width`, `height` and `background_color` are
        ignored and the image is drawn on directly.
        """
        if image is None:
            image = Image.new("RGBA", (width, height), tuple(background_color))
        elif image.mode != "RGBA":
            image = image.convert("RGBA")
        self.image = image
        self.draw = ImageDraw.Draw(self.image)

    @classmethod
    def from_data(cls, data):
        """Creates a context that draws on top of an existing image."""
        return cls(image=decode_image(data))

    @property
    def width(self):
        return self.image.width

    @property
    def height(self):
        return self.image.height

    def measure(self, text, font_size, font):
        """Returns the advance width of `text` in pixels."""
        return font.sized(font_size).getlength(text)

    def text_extents(self, text, font_size, font):
        sized = font.sized(font_size)
        ascent, descent = sized.getmetrics()
        return FontMetrics(sized.getlength(text), ascent + descent)

    def char_extents(self, ch, font_size, font):
        """Measures one character. Control characters have no width."""
        if is_control(ch):
            ascent, descent = font.sized(font_size).getmetrics()
            return FontMetrics(0, ascent + descent)
        return self.text_extents(ch, font_size, font)

    def draw_text(self, color, x, y, font_size, font, text):
        """Draws `text` with its top-left corner at `(x, y)`.

        Raises:
            RenderTargetFailure: If Pillow fails to draw the text.
        """
        try:
            self.draw.text((x, y), text, fill=tuple(color), font=font.sized(font_size))
        except (OSError, ValueError) as e:
            raise RenderTargetFailure(f"Could not draw text {text!r}: {e}") from e

    def draw_image(self, image, x, y):
        """Alpha-composites an image onto the surface at `(x, y)`.

        Parts of the image outside the surface are cropped away.

        Args:
            image (Image.Image | bytes): A decoded image or encoded image data.
        """
        if isinstance(image, (bytes, bytearray)):
            image = decode_image(image)
        x, y = int(x), int(y)
        box = (max(0, -x), max(0, -y), min(image.width, self.width - x), min(image.height, self.height - y))
        left, top, right, bottom = box
        if left >= right or top >= bottom:
            return
        if box != (0, 0) + image.size:
            image = image.crop(box)
        try:
            self.image.alpha_composite(image.convert("RGBA"), dest=(x + left, y + top))
        except (OSError, ValueError) as e:
            raise RenderTargetFailure(f"Could not draw image at ({x}, {y}): {e}") from e

    def into_bytes(self):
        """Encodes the surface as PNG."""
        buffer = io.BytesIO()
        try:
            self.image.save(buffer, format="PNG")
        except (OSError, ValueError) as e:
            raise RenderTargetFailure(f"Could not encode PNG: {e}") from e
        return buffer.getvalue()

    def save(self, dest):
        """Writes the surface to `dest` as PNG.

        The image is fully encoded before the file is opened, so an encoding
        failure leaves no partial file behind.
        """
        data = self.into_bytes()
        try:
            Path(dest).write_bytes(data)
        except OSError as e:
            raise RenderTargetFailure(f"Could not write {dest}: {e}") from e
