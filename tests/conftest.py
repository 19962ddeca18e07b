"""Shared fixtures for the og_image_writer tests.

Real fonts are built at test time with `fontTools.fontBuilder`, so the tests
do not depend on fonts installed on the machine. Every glyph is a filled
rectangle with a fixed advance width, which makes coverage fully controlled
and measurements predictable.
"""

import io

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from og_image_writer.font import Font, FontContext

UNITS_PER_EM = 1000
ADVANCE = 600


def _glyph_name(codepoint):
    if codepoint > 0xFFFF:
        return f"u{codepoint:05X}"
    return f"uni{codepoint:04X}"


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((550, 700))
    pen.lineTo((550, 0))
    pen.closePath()
    return pen.glyph()


def build_font_bytes(chars, family="TestFont"):
    """Builds a TrueType font whose only glyphs are the given characters.

    Args:
        chars (str): The characters the font should support.
        family (str): The family name stored in the `name` table.

    Returns:
        bytes: The font file contents.
    """
    codepoints = sorted({ord(c) for c in chars})
    glyph_order = [".notdef"] + [_glyph_name(cp) for cp in codepoints]

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({cp: _glyph_name(cp) for cp in codepoints})
    fb.setupGlyf({name: _box_glyph() for name in glyph_order})
    fb.setupHorizontalMetrics({name: (ADVANCE, 50) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    buffer = io.BytesIO()
    fb.font.save(buffer)
    return buffer.getvalue()


class FakeFont:
    """A stand-in for `Font` that only knows which characters it covers."""

    def __init__(self, chars, name="fake"):
        self.chars = set(chars)
        self.name = name

    def supports(self, ch):
        return ch in self.chars

    def __repr__(self):
        return f"FakeFont({self.name!r})"


ASCII = "".join(chr(cp) for cp in range(0x20, 0x7F))


@pytest.fixture(scope="session")
def ascii_font_bytes():
    """Font bytes covering printable ASCII."""
    return build_font_bytes(ASCII, family="AsciiTest")


@pytest.fixture(scope="session")
def emoji_font_bytes():
    """Font bytes covering a handful of emoji."""
    return build_font_bytes("😀😃✨", family="EmojiTest")


@pytest.fixture
def ascii_font(ascii_font_bytes):
    return Font(ascii_font_bytes)


@pytest.fixture
def emoji_font(emoji_font_bytes):
    return Font(emoji_font_bytes)


@pytest.fixture
def font_context(emoji_font):
    """A fallback table whose only font covers the test emoji."""
    return FontContext([emoji_font])
