import unittest

from og_image_writer.errors import (
    FontNotFound,
    FontResolutionMissing,
    InvalidFontData,
    InvalidImageData,
    NoMatchingFontFamily,
    OGImageWriterError,
    OutOfRangeText,
    RenderTargetFailure,
    TextRangeOutOfBounds,
)


class TestExceptions(unittest.TestCase):
    def test_all_errors_share_a_base(self):
        for error in (
            FontNotFound,
            FontResolutionMissing,
            InvalidFontData,
            InvalidImageData,
            OutOfRangeText,
            RenderTargetFailure,
            TextRangeOutOfBounds,
        ):
            with self.assertRaises(OGImageWriterError):
                raise error("Test message")

    def test_text_range_out_of_bounds_is_out_of_range_text(self):
        with self.assertRaises(OutOfRangeText) as cm:
            raise TextRangeOutOfBounds("Another test message")
        self.assertEqual(str(cm.exception), "Another test message")

    def test_no_matching_font_family_names_the_character(self):
        error = NoMatchingFontFamily("😀")
        self.assertEqual(error.char, "😀")
        self.assertIn("U+1F600", str(error))
