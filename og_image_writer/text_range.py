"""UTF-8 byte range helpers.

Fragments, glyph runs and layout lines all address the paragraph by UTF-8
byte offsets rather than by Python string indices, so that ranges produced by
one component can be handed to another without re-counting characters.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ByteRange:
    """A half-open `[start, end)` range of UTF-8 byte offsets."""

    start: int
    end: int

    def __len__(self):
        return self.end - self.start

    @property
    def is_empty(self):
        return self.end <= self.start

    def contains(self, other):
        """Returns True if `other` lies entirely within this range."""
        return self.start <= other.start and other.end <= self.end


def utf8_len(text):
    """Returns the UTF-8 encoded length of `text` in bytes."""
    return len(text.encode("utf-8"))


def char_indices(text, base=0):
    """Yields `(byte_offset, char)` pairs for each character of `text`.

    Args:
        text (str): The text to walk.
        base (int, optional): The byte offset of the first character.

    Yields:
        tuple[int, str]: The absolute byte offset and the character.
    """
    offset = base
    for ch in text:
        yield offset, ch
        offset += utf8_len(ch)


def slice_bytes(data, byte_range):
    """Decodes the characters of UTF-8 `data` covered by `byte_range`.

    Raises:
        UnicodeDecodeError: If the range does not fall on character boundaries.
    """
    return data[byte_range.start:byte_range.end].decode("utf-8")
