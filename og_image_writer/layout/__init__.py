"""Paragraph modelling and line layout."""

from og_image_writer.layout.lines import Line as Line, Rect as Rect, break_lines as break_lines
from og_image_writer.layout.textarea import TextArea as TextArea, TextFragment as TextFragment
