"""Laid-out elements waiting to be painted.

Elements are created by `OGImageWriter` once their position is known. A
`TextElement` carries its resolved text area and lines. An `ImgElement` is an
opaque drawable: a decoded image, which is also how a finished child writer's
surface is embedded in a parent.
"""

from dataclasses import dataclass, field
from typing import List

from PIL import Image

from og_image_writer.font import Font
from og_image_writer.layout.lines import Line, Rect
from og_image_writer.layout.textarea import TextArea
from og_image_writer.style import Style


@dataclass
class TextElement:
    textarea: TextArea
    style: Style
    font: Font
    lines: List[Line] = field(default_factory=list)

    def __post_init__(self):
        self.text = self.textarea.concatenated_text()
        self.data = self.text.encode("utf-8")


@dataclass
class ImgElement:
    image: Image.Image
    rect: Rect
