"""Per-character font resolution.

Each character of a fragment is assigned the font source that covers it, in
strict priority order: the fragment's own font (`Child`), the paragraph's
default font (`Parent`), and finally a font from the fallback table
(`Global`). Consecutive characters with the same source are bundled into a
single `GlyphRun`, so a fragment rendered entirely in one font has exactly one
run.
"""

import unicodedata
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from og_image_writer.errors import FontResolutionMissing, NoMatchingFontFamily
from og_image_writer.text_range import ByteRange, utf8_len


@dataclass(frozen=True)
class Child:
    """The fragment's own font covers the character."""

    index: int = 0


@dataclass(frozen=True)
class Parent:
    """The paragraph's default font covers the character."""

    index: int = 0


@dataclass(frozen=True)
class Global:
    """A fallback font, identified by its handle in the `FontContext`."""

    handle: int


FontResolutionTier = Union[Child, Parent, Global]


@dataclass(frozen=True)
class GlyphRun:
    """A maximal byte range of a fragment resolved to one font tier."""

    range: ByteRange
    tier: FontResolutionTier


def is_control(ch):
    """Returns True for characters that never produce a glyph, such as `\\n`."""
    return unicodedata.category(ch) == "Cc"


def resolve_tier(ch, own_font, parent_font, font_context):
    """Resolves the font tier for a single character.

    Args:
        ch (str): The character to resolve.
        own_font (Font | None): The fragment's dedicated font, if any.
        parent_font (Font): The paragraph's default font.
        font_context (FontContext): The fallback font table.

    Returns:
        FontResolutionTier: `Child` if the fragment font covers `ch`, else
        `Parent` if the default font does, else `Global` with the handle of
        the first fallback font that does.

    Raises:
        NoMatchingFontFamily: If no font covers the character.
    """
    if own_font is not None and font_context.supports(ch, own_font):
        return Child(0)
    if font_context.supports(ch, parent_font):
        return Parent(0)
    return Global(font_context.select_font_family(ch))


def _close_run(start, end, tier):
    if tier is None:
        raise FontResolutionMissing(f"No font tier recorded for bytes {start}..{end}")
    return GlyphRun(ByteRange(start, end), tier)


def resolve_glyph_runs(
    text: str,
    own_font,
    parent_font,
    cursor: int,
    font_context,
) -> Tuple[List[GlyphRun], int]:
    """Partitions a fragment's text into maximal same-tier glyph runs.

    This is a pure function of its inputs: the caller threads `cursor`
    through successive fragments so that run ranges are paragraph-global.

    Control characters are resolved like any other character. Only when no
    font covers one does it inherit the tier of the character before it (or
    `Parent` at the start of a fragment), since it is never drawn.

    Args:
        text (str): The fragment text.
        own_font (Font | None): The fragment's dedicated font, if any.
        parent_font (Font): The paragraph's default font.
        cursor (int): The paragraph byte offset where `text` starts.
        font_context (FontContext): The fallback font table.

    Returns:
        A tuple containing:
            - list[GlyphRun]: The runs, in order, exactly covering
              `[cursor, cursor + utf8_len(text))`. Empty for empty text.
            - int: The cursor for the next fragment.

    Raises:
        NoMatchingFontFamily: If a character cannot be covered by any font.
    """
    runs = []
    run_start = cursor
    offset = cursor
    open_tier: Optional[FontResolutionTier] = None

    for ch in text:
        try:
            tier = resolve_tier(ch, own_font, parent_font, font_context)
        except NoMatchingFontFamily:
            if not is_control(ch):
                raise
            tier = open_tier if open_tier is not None else Parent(0)

        if tier != open_tier:
            # The first character only opens a run
            if offset > run_start:
                runs.append(_close_run(run_start, offset, open_tier))
            run_start = offset
            open_tier = tier

        offset += utf8_len(ch)

    if offset > run_start:
        runs.append(_close_run(run_start, offset, open_tier))

    return runs, offset
