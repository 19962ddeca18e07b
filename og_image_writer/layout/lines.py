"""Greedy line breaking for resolved text areas.

This is a deliberately small layout pass: lines end after a `\\n`, and
otherwise wrap at the last space that fits, or mid-word when a single word is
wider than the box. Every character is measured with the font it was
resolved to, so fallback glyphs are accounted for.
"""

from dataclasses import dataclass
from typing import List

from og_image_writer.glyph import is_control
from og_image_writer.text_range import ByteRange, char_indices, utf8_len


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Line:
    """One rendered row: a paragraph byte range and where to draw it."""

    range: ByteRange
    rect: Rect


@dataclass
class _Measured:
    range: ByteRange
    ch: str
    width: float
    height: float


def _visible_width(chars):
    end = len(chars)
    while end > 0 and (chars[end - 1].ch == " " or is_control(chars[end - 1].ch)):
        end -= 1
    return sum(c.width for c in chars[:end])


def _align(style, x, max_width, width):
    if style.text_align == "center":
        return x + (max_width - width) / 2
    if style.text_align == "right":
        return x + max_width - width
    return x


def break_lines(textarea, style, font, context, font_context, x, y, max_width) -> List[Line]:
    """Splits a resolved text area into lines that fit `max_width`.

    Args:
        textarea (TextArea): A text area on which `resolve_all` has run.
        style (Style): The paragraph style.
        font (Font): The paragraph's default font.
        context (Context): The drawing context used for measurement.
        font_context (FontContext): The fallback font table.
        x (float): The left edge of the text box.
        y (float): The top edge of the text box.
        max_width (float): The width of the text box.

    Returns:
        list[Line]: Lines in top-to-bottom order. Together they cover every
        byte of the paragraph exactly once.
    """
    default_height = style.font_size * style.line_height
    lines = []
    current: List[_Measured] = []
    line_start = 0

    def emit(end, chars):
        nonlocal y, line_start
        height = max((c.height for c in chars), default=default_height)
        width = _visible_width(chars)
        rect = Rect(_align(style, x, max_width, width), y, width, height)
        lines.append(Line(ByteRange(line_start, end), rect))
        y += height
        line_start = end

    for offset, ch in char_indices(textarea.concatenated_text()):
        char_range = ByteRange(offset, offset + utf8_len(ch))
        fragment, _ = textarea.lookup(char_range)
        font_size = fragment.style.font_size if fragment.style is not None else style.font_size
        extents = textarea.character_extents(ch, font, char_range, style, context, font_context)
        measured = _Measured(char_range, ch, extents.width, font_size * style.line_height)

        if ch == "\n":
            current.append(measured)
            emit(char_range.end, current)
            current = []
            continue

        if current and _visible_width(current) + measured.width > max_width and ch != " ":
            spaces = [i for i, c in enumerate(current) if c.ch == " "]
            if spaces:
                split = spaces[-1] + 1
                emit(current[split - 1].range.end, current[:split])
                current = current[split:]
            else:
                emit(offset, current)
                current = []

        current.append(measured)

    if current:
        emit(current[-1].range.end, current)

    return lines
