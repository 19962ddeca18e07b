"""Draws laid-out text lines with as few draw calls as possible.

For each line, characters are grouped into maximal runs that share one style
and one font, and each group is drawn with a single `draw_text` call. The
style comes from the owning fragment (or the paragraph when the fragment has
none); the font comes from the glyph run's resolution tier. Adjacent
fragments that end up with the same style and font are drawn together.
"""

from typing import NamedTuple

from loguru import logger

from og_image_writer.errors import OutOfRangeText, TextRangeOutOfBounds
from og_image_writer.font import Font
from og_image_writer.glyph import is_control
from og_image_writer.style import Style
from og_image_writer.text_range import ByteRange, char_indices, slice_bytes, utf8_len


class DrawRun(NamedTuple):
    style: Style
    font: Font


class RenderCompositor:
    """Issues draw calls for the lines of text elements.

    Attributes:
        context (Context): The surface to draw on.
        font_context (FontContext): The fallback font table that `Global`
            runs refer to.
    """

    def __init__(self, context, font_context):
        self.context = context
        self.font_context = font_context

    def resolve_draw_run(self, element, byte_range):
        """Returns the style and font that draw the character at `byte_range`.

        Raises:
            TextRangeOutOfBounds: If no fragment owns the character.
        """
        textarea = element.textarea
        try:
            fragment, run = textarea.lookup(byte_range)
        except OutOfRangeText as e:
            raise TextRangeOutOfBounds(f"Character at bytes {byte_range.start}..{byte_range.end} has no fragment") from e
        style = fragment.style if fragment.style is not None else element.style
        font = textarea.run_font(fragment, run, element.font, self.font_context)
        return DrawRun(style, font)

    def draw_line(self, line, element):
        """Draws one line of a text element.

        Args:
            line (Line): The byte range and rectangle of the line.
            element (TextElement): The text element the line belongs to.

        Returns:
            int: The number of draw calls issued.

        Raises:
            TextRangeOutOfBounds: If the line range lies outside the paragraph
                or splits a character, or if a character cannot be located. Draws
                already issued for the line stay on the surface.
            RenderTargetFailure: If drawing fails.
        """
        current = None
        pending_start = line.range.start
        pending_end = line.range.start
        x = 0.0
        calls = 0

        text = self._line_text(line, element)
        for offset, ch in char_indices(text, base=line.range.start):
            char_range = ByteRange(offset, offset + utf8_len(ch))
            if is_control(ch):
                # Control characters are never drawn and end the pending run
                if current is not None:
                    x += self._flush(line, element, current, ByteRange(pending_start, pending_end), x)
                    calls += 1
                    current = None
                continue
            draw_run = self.resolve_draw_run(element, char_range)
            if current is None:
                current = draw_run
                pending_start = offset
            elif draw_run != current:
                x += self._flush(line, element, current, ByteRange(pending_start, pending_end), x)
                calls += 1
                current = draw_run
                pending_start = offset
            pending_end = char_range.end

        if current is not None and pending_end > pending_start:
            self._flush(line, element, current, ByteRange(pending_start, pending_end), x)
            calls += 1

        logger.debug(f"Drew bytes {line.range.start}..{line.range.end} in {calls} calls")
        return calls

    def _line_text(self, line, element):
        start, end = line.range.start, line.range.end
        if not 0 <= start <= end <= len(element.data):
            raise TextRangeOutOfBounds(f"Line bytes {start}..{end} are outside the paragraph of {len(element.data)} bytes")
        try:
            return slice_bytes(element.data, line.range)
        except UnicodeDecodeError as e:
            raise TextRangeOutOfBounds(f"Line bytes {start}..{end} do not fall on character boundaries") from e

    def _flush(self, line, element, draw_run, byte_range, x):
        text = slice_bytes(element.data, byte_range)
        style, font = draw_run
        self.context.draw_text(style.color, line.rect.x + x, line.rect.y, style.font_size, font, text)
        return self.context.measure(text, style.font_size, font)
