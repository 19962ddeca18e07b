"""Font loading, glyph coverage and the fallback font table.

A `Font` wraps raw font bytes. fontTools is used to read the character maps
so coverage checks are exact code point lookups, and Pillow is used to obtain
sized FreeType fonts for measuring and drawing.

`FontContext` is the session-wide fallback table. It is consulted for
characters that neither a fragment's own font nor the paragraph's default font
can render, and is passed explicitly to every operation that needs it.
"""

import io
from pathlib import Path

from PIL import ImageFont
from fontTools.ttLib import TTFont
from loguru import logger

from og_image_writer.errors import FontNotFound, InvalidFontData, NoMatchingFontFamily

FONT_SUFFIXES = {".ttf", ".otf", ".ttc", ".TTF", ".OTF", ".TTC"}


def read_codepoints(ttfont):
    """Collects the code points mapped by a font.

    Every Unicode character map (cmap) subtable of the font is read, so a
    character counts as supported if any subtable maps it to a glyph. This is
    the same check as looking up `ord(ch)` in each table, done once up front.

    Args:
        ttfont (TTFont): An instance of a `fontTools.ttLib.TTFont` object.

    Returns:
        frozenset[int]: The supported code points.
    """
    codepoints = set()
    for table in ttfont["cmap"].tables:
        if table.isUnicode():
            codepoints.update(table.cmap.keys())
    return frozenset(codepoints)


class Font:
    """An immutable, parsed font.

    Attributes:
        data (bytes): The raw font file contents.
        index (int): The face index inside a font collection.
        name (str): A human readable name, used in log messages.
        codepoints (frozenset[int]): Every code point mapped by the font.
    """

    def __init__(self, data, index=0, name=None):
        """Parses font bytes.

        Args:
            data (bytes): The contents of a TrueType/OpenType font file.
            index (int, optional): The face to load from a collection.
            name (str, optional): A display name. Defaults to the font's
                full name from its `name` table.

        Raises:
            InvalidFontData: If fontTools or FreeType cannot load the bytes.
        """
        self.data = bytes(data)
        self.index = index
        try:
            ttfont = TTFont(io.BytesIO(self.data), fontNumber=index, lazy=True)
            self.codepoints = read_codepoints(ttfont)
            if name is None:
                name = ttfont["name"].getDebugName(4) or ttfont["name"].getDebugName(1)
            # FreeType must also accept the bytes, or drawing fails much later
            ImageFont.truetype(io.BytesIO(self.data), 12, index=index)
        except Exception as e:
            raise InvalidFontData(f"Could not load font data: {e}") from e
        self.name = name or "<unnamed font>"
        self._sized = {}

    @classmethod
    def from_path(cls, path, index=0):
        """Loads a font from a file on disk."""
        path = Path(path)
        return cls(path.read_bytes(), index=index, name=path.name)

    def supports(self, ch):
        """Returns True if the font maps `ch` to a glyph."""
        return ord(ch) in self.codepoints

    def sized(self, font_size):
        """Returns a Pillow FreeType font for `font_size`, cached per size."""
        font = self._sized.get(font_size)
        if font is None:
            font = ImageFont.truetype(io.BytesIO(self.data), font_size, index=self.index)
            self._sized[font_size] = font
        return font

    def __repr__(self):
        return f"Font({self.name!r})"


def match_font_family(ch, font):
    """Returns True if `font` can render the character `ch`."""
    return font.supports(ch)


class FontContext:
    """The ordered table of fallback fonts.

    A handle is the position of a font in the table. Fonts are tried in the
    order they were added, so the first font able to render a character wins.
    The table is only read during resolution and rendering.
    """

    def __init__(self, fonts=None):
        self._fonts = list(fonts or [])
        self._selected = {}

    def __len__(self):
        return len(self._fonts)

    def add(self, font):
        """Appends a font to the table and returns its handle."""
        self._fonts.append(font)
        self._selected.clear()
        return len(self._fonts) - 1

    def supports(self, ch, font):
        return match_font_family(ch, font)

    def select_font_family(self, ch):
        """Selects the first fallback font that supports `ch`.

        Args:
            ch (str): A single character.

        Returns:
            int: The handle of the selected font.

        Raises:
            NoMatchingFontFamily: If no font in the table supports `ch`.
        """
        handle = self._selected.get(ch)
        if handle is not None:
            return handle
        for handle, font in enumerate(self._fonts):
            if font.supports(ch):
                self._selected[ch] = handle
                return handle
        raise NoMatchingFontFamily(ch)

    def fetch(self, handle):
        """Returns the font stored under `handle`.

        Raises:
            FontNotFound: If the handle is not part of this table.
        """
        if not 0 <= handle < len(self._fonts):
            raise FontNotFound(f"No fallback font with handle {handle}")
        return self._fonts[handle]

    @classmethod
    def from_paths(cls, paths):
        """Builds a table from font files, in the given order.

        Unlike directory scanning, an explicitly listed file that cannot be
        loaded is an error.
        """
        context = cls()
        for path in paths:
            context.add(Font.from_path(path))
        logger.info(f"Loaded {len(context)} fallback fonts")
        return context

    @classmethod
    def from_directory(cls, font_dir):
        """Builds a table from every font file found under `font_dir`.

        Files are sorted by path so the fallback order is stable between runs.
        Files that cannot be parsed are skipped with a warning.
        """
        context = cls()
        context.add_directory(font_dir)
        return context

    def add_directory(self, font_dir):
        font_paths = sorted(path for path in Path(font_dir).glob("**/*") if path.suffix in FONT_SUFFIXES)
        for path in font_paths:
            try:
                self.add(Font.from_path(path))
            except (InvalidFontData, OSError) as e:
                logger.warning(f"Skipping font {path}: {e}")
        logger.info(f"Scanned {font_dir}: {len(self)} fallback fonts available")

    @classmethod
    def from_settings(cls, settings):
        """Builds a table from `WriterSettings`.

        Explicit `fallback_fonts` come first, followed by fonts found in
        `fallback_font_dirs`.
        """
        context = cls.from_paths(settings.fallback_fonts)
        for font_dir in settings.fallback_font_dirs:
            context.add_directory(font_dir)
        return context
