"""Paragraphs made of independently styled text fragments.

A `TextArea` is an ordered list of `TextFragment`s. Fragments are addressed by
paragraph-global UTF-8 byte ranges: the first fragment starts at byte 0 and
every following fragment starts where the previous one ends. After
resolution, each fragment also holds the glyph runs that say which font
renders which part of its text.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from og_image_writer.errors import FontNotFound, OutOfRangeText
from og_image_writer.font import Font
from og_image_writer.glyph import Child, Global, GlyphRun, Parent, resolve_glyph_runs
from og_image_writer.style import Style
from og_image_writer.text_range import ByteRange, utf8_len


@dataclass
class TextFragment:
    """One logical run of text with an optional style and font override.

    Attributes:
        text (str): The fragment text.
        style (Style | None): Overrides the paragraph style when set.
        font (Font | None): A dedicated font, tried before the paragraph font.
        range (ByteRange): The fragment's byte range within the paragraph.
        glyph_runs (list[GlyphRun]): Filled in by resolution.
    """

    text: str
    style: Optional[Style]
    font: Optional[Font]
    range: ByteRange
    glyph_runs: List[GlyphRun] = field(default_factory=list)

    def resolve(self, parent_font, cursor, font_context):
        """Resolves the fragment's glyph runs, starting at `cursor`.

        Returns:
            int: The cursor for the next fragment.
        """
        self.glyph_runs, cursor = resolve_glyph_runs(self.text, self.font, parent_font, cursor, font_context)
        return cursor

    def find_run(self, byte_range):
        """Returns the glyph run fully containing `byte_range`, or None."""
        for run in self.glyph_runs:
            if run.range.contains(byte_range):
                return run
        return None


class TextArea:
    """A paragraph built from styled text fragments.

    Fragments are appended first, then resolved once with `resolve_all`
    before any lookup or rendering.

    Example:
        >>> textarea = TextArea()
        >>> textarea.append_plain("Hello, ")
        >>> textarea.append_styled("world", Style(color=(255, 0, 0, 255)))
    """

    def __init__(self):
        self.fragments: List[TextFragment] = []

    def __len__(self):
        return len(self.fragments)

    def __iter__(self):
        return iter(self.fragments)

    def _next_range(self, text):
        start = self.fragments[-1].range.end if self.fragments else 0
        return ByteRange(start, start + utf8_len(text))

    def append_styled(self, text, style, font_bytes=None):
        """Appends text with its own style and, optionally, its own font.

        Args:
            text (str): The text to append.
            style (Style): The style of this fragment.
            font_bytes (bytes, optional): Font file contents used for this
                fragment before the paragraph font.

        Raises:
            InvalidFontData: If `font_bytes` is not a valid font.
        """
        font = Font(font_bytes) if font_bytes is not None else None
        self.fragments.append(TextFragment(text, style, font, self._next_range(text)))

    def append_plain(self, text):
        """Appends text that inherits the paragraph style and font."""
        self.fragments.append(TextFragment(text, None, None, self._next_range(text)))

    def append_with_resolution(self, text, font, font_context):
        """Appends plain text and resolves it against `font` right away.

        This is the path for single-fragment paragraphs, where there is no
        later `resolve_all` call.
        """
        fragment = TextFragment(text, None, None, self._next_range(text))
        fragment.resolve(font, fragment.range.start, font_context)
        self.fragments.append(fragment)

    def resolve_all(self, parent_font, font_context):
        """Resolves the glyph runs of every fragment, in order.

        One cursor is threaded across fragment boundaries, so run ranges are
        consistent with fragment ranges. Resolving again recomputes the same
        runs.

        Raises:
            NoMatchingFontFamily: If any character cannot be covered.
        """
        cursor = 0
        for fragment in self.fragments:
            cursor = fragment.resolve(parent_font, cursor, font_context)

    def concatenated_text(self):
        """Returns the full paragraph text."""
        return "".join(fragment.text for fragment in self.fragments)

    def lookup(self, byte_range):
        """Finds the fragment and glyph run that fully contain `byte_range`.

        Args:
            byte_range (ByteRange): A paragraph byte range.

        Returns:
            tuple[TextFragment, GlyphRun]: The owning fragment and run.

        Raises:
            OutOfRangeText: If the range straddles a run or fragment boundary,
                or lies outside the paragraph.
        """
        for fragment in self.fragments:
            run = fragment.find_run(byte_range)
            if run is not None:
                return fragment, run
        raise OutOfRangeText(f"Bytes {byte_range.start}..{byte_range.end} are not within a single glyph run")

    def run_font(self, fragment, run, parent_font, font_context):
        """Returns the font that renders `run` of `fragment`.

        Raises:
            FontNotFound: If the run is `Child` tier but the fragment has no
                font, or its fallback handle is unknown.
        """
        tier = run.tier
        if isinstance(tier, Global):
            return font_context.fetch(tier.handle)
        if isinstance(tier, Parent):
            return parent_font
        if isinstance(tier, Child):
            if fragment.font is None:
                raise FontNotFound("Fragment resolved to its own font but has none")
            return fragment.font
        raise FontNotFound(f"Unknown font tier {tier!r}")

    def character_extents(self, ch, parent_font, byte_range, style, context, font_context):
        """Measures a single character with the font it was resolved to.

        Args:
            ch (str): The character to measure.
            parent_font (Font): The paragraph's default font.
            byte_range (ByteRange): The character's paragraph byte range.
            style (Style): The paragraph style, used for the font size when
                the fragment has no style of its own.
            context (Context): The drawing context used for measurement.
            font_context (FontContext): The fallback font table.

        Returns:
            FontMetrics: The character's width and height.

        Raises:
            OutOfRangeText: If `byte_range` is not within a single run.
            FontNotFound: If the resolved font is not available.
        """
        fragment, run = self.lookup(byte_range)
        font_size = fragment.style.font_size if fragment.style is not None else style.font_size
        font = self.run_font(fragment, run, parent_font, font_context)
        return context.char_extents(ch, font_size, font)
