"""Tests for `RenderCompositor`.

The drawing context is a mock whose `measure` returns 10 pixels per character,
so the x position of every draw call can be checked exactly.
"""

from unittest.mock import MagicMock, call

import pytest

from og_image_writer.compositor import DrawRun, RenderCompositor
from og_image_writer.element import TextElement
from og_image_writer.errors import TextRangeOutOfBounds
from og_image_writer.font import FontContext
from og_image_writer.layout.lines import Line, Rect
from og_image_writer.layout.textarea import TextArea
from og_image_writer.style import Style
from og_image_writer.text_range import ByteRange
from tests.conftest import FakeFont

PARENT = FakeFont("ABCDHeé ", name="parent")
FALLBACK = FakeFont("😀", name="fallback")
STYLE = Style(font_size=10)
RED = Style(font_size=10, color=(255, 0, 0, 255))


@pytest.fixture
def context():
    context = MagicMock()
    context.measure.side_effect = lambda text, size, font: 10 * len(text)
    return context


@pytest.fixture
def compositor(context):
    return RenderCompositor(context, FontContext([FALLBACK]))


def _element(*fragments, resolve=True):
    textarea = TextArea()
    for fragment in fragments:
        if isinstance(fragment, tuple):
            textarea.append_styled(*fragment)
        else:
            textarea.append_plain(fragment)
    if resolve:
        textarea.resolve_all(PARENT, FontContext([FALLBACK]))
    return TextElement(textarea, STYLE, PARENT)


def _line(element, start=0, end=None):
    end = len(element.data) if end is None else end
    return Line(ByteRange(start, end), Rect(5, 7, 0, 15))


def test_plain_fragments_are_drawn_together(context, compositor):
    """Tests that fragments sharing style and font make one draw call."""
    element = _element("AB", "", "C")
    assert compositor.draw_line(_line(element), element) == 1
    context.draw_text.assert_called_once_with(STYLE.color, 5, 7, 10, PARENT, "ABC")


def test_equal_fragment_style_merges_with_paragraph_style(context, compositor):
    element = _element("AB", ("C", Style(font_size=10)))
    assert compositor.draw_line(_line(element), element) == 1


def test_style_change_splits_draw_calls(context, compositor):
    element = _element("AB", ("C", RED), "D")
    assert compositor.draw_line(_line(element), element) == 3
    assert context.draw_text.call_args_list == [
        call(STYLE.color, 5, 7, 10, PARENT, "AB"),
        call(RED.color, 25, 7, 10, PARENT, "C"),
        call(STYLE.color, 35, 7, 10, PARENT, "D"),
    ]


def test_fallback_glyphs_use_fallback_font(context, compositor):
    element = _element("A😀B")
    assert compositor.draw_line(_line(element), element) == 3
    assert context.draw_text.call_args_list == [
        call(STYLE.color, 5, 7, 10, PARENT, "A"),
        call(STYLE.color, 15, 7, 10, FALLBACK, "😀"),
        call(STYLE.color, 25, 7, 10, PARENT, "B"),
    ]


def test_control_characters_are_not_drawn(context, compositor):
    element = _element("AB\tC\n")
    assert compositor.draw_line(_line(element), element) == 2
    assert context.draw_text.call_args_list == [
        call(STYLE.color, 5, 7, 10, PARENT, "AB"),
        call(STYLE.color, 25, 7, 10, PARENT, "C"),
    ]


def test_draws_only_the_line_range(context, compositor):
    element = _element("AB ", "CD")
    assert compositor.draw_line(_line(element, 3, 5), element) == 1
    context.draw_text.assert_called_once_with(STYLE.color, 5, 7, 10, PARENT, "CD")


def test_empty_line_issues_no_calls(context, compositor):
    element = _element("AB")
    assert compositor.draw_line(_line(element, 2, 2), element) == 0
    context.draw_text.assert_not_called()


def test_resolve_draw_run(compositor):
    element = _element("A", ("B", RED), "😀")
    assert compositor.resolve_draw_run(element, ByteRange(0, 1)) == DrawRun(STYLE, PARENT)
    assert compositor.resolve_draw_run(element, ByteRange(1, 2)) == DrawRun(RED, PARENT)
    assert compositor.resolve_draw_run(element, ByteRange(2, 6)) == DrawRun(STYLE, FALLBACK)


def test_unresolved_text_is_out_of_bounds(context, compositor):
    """Tests that a character without a glyph run cannot be drawn."""
    element = _element("AB", resolve=False)
    with pytest.raises(TextRangeOutOfBounds):
        compositor.draw_line(_line(element), element)
    context.draw_text.assert_not_called()


def test_failure_keeps_earlier_draws(context, compositor):
    element = _element("AB\t", resolve=False)
    element.textarea.fragments[0].resolve(PARENT, 0, FontContext())
    element.textarea.append_plain("C")
    element = TextElement(element.textarea, STYLE, PARENT)
    with pytest.raises(TextRangeOutOfBounds):
        compositor.draw_line(_line(element), element)
    context.draw_text.assert_called_once_with(STYLE.color, 5, 7, 10, PARENT, "AB")


@pytest.mark.parametrize("start, end", [(0, 2), (2, 3)])
def test_line_splitting_a_character_is_out_of_bounds(context, compositor, start, end):
    """Tests that a line boundary inside a multi-byte character is rejected."""
    element = _element("Aé")
    with pytest.raises(TextRangeOutOfBounds):
        compositor.draw_line(_line(element, start, end), element)
    context.draw_text.assert_not_called()


@pytest.mark.parametrize("start, end", [(0, 9), (3, 4), (2, 1)])
def test_line_outside_the_paragraph_is_out_of_bounds(context, compositor, start, end):
    element = _element("AB")
    with pytest.raises(TextRangeOutOfBounds):
        compositor.draw_line(_line(element, start, end), element)
    context.draw_text.assert_not_called()
