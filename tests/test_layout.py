"""
Tests for banner placement, word wrapping and font fitting
"""

import pytest

from config import Settings
from modules.layout import LayoutEngine


def test_top_banner_placement(layout_engine):
    banner = layout_engine.top_banner(600, "hello")

    assert (banner.anchor.x, banner.anchor.y) == (300, 18)
    assert (banner.ax, banner.ay) == (0.5, 0.0)
    assert layout_engine.text_box(600, 300, banner) == (564, 60)


def test_bottom_banner_placement(layout_engine):
    banner = layout_engine.bottom_banner(600, 300, "hello")

    assert (banner.anchor.x, banner.anchor.y) == (300, 282)
    assert (banner.ax, banner.ay) == (0.5, 1.0)
    assert layout_engine.text_box(600, 300, banner) == (564, 80)


def test_wrap_text_keeps_short_text_on_one_line(layout_engine):
    font = layout_engine.font_provider.load(30)

    assert layout_engine.wrap_text("ONE TWO THREE", font, 10000) == ["ONE TWO THREE"]


def test_wrap_text_never_splits_words(layout_engine):
    font = layout_engine.font_provider.load(30)

    assert layout_engine.wrap_text("ONE TWO THREE", font, 1) == ["ONE", "TWO", "THREE"]


def test_wrap_text_respects_width(layout_engine):
    font = layout_engine.font_provider.load(40)
    text = "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG"

    lines = layout_engine.wrap_text(text, font, 300)

    assert len(lines) > 1
    assert " ".join(lines) == text
    for line in lines:
        assert font.getlength(line) <= 300


def test_wrap_text_honours_newlines(layout_engine):
    font = layout_engine.font_provider.load(20)

    assert layout_engine.wrap_text("TOP\nBOTTOM", font, 10000) == ["TOP", "BOTTOM"]


def test_wrap_text_blank_input(layout_engine):
    font = layout_engine.font_provider.load(20)

    assert layout_engine.wrap_text("   ", font, 100) == []


def test_wrap_text_stops_after_max_lines(layout_engine):
    font = layout_engine.font_provider.load(30)

    assert layout_engine.wrap_text("ONE TWO THREE FOUR", font, 1, max_lines=1) == ["ONE", "TWO"]
    assert layout_engine.wrap_text("ONE\nTWO\nTHREE", font, 10000, max_lines=1) == ["ONE", "TWO"]


def test_measure_stops_once_box_overflows(layout_engine):
    text = "WORD " * 2000

    full = layout_engine.measure(text, 50, 464)
    capped = layout_engine.measure(text, 50, 464, max_height=133)
    max_lines = int(133 // (capped.line_height * 1.4))

    assert len(capped.lines) == max_lines + 1
    assert capped.lines == full.lines[:max_lines + 1]
    assert len(full.lines) > 100
    assert not capped.fits(464, 133)


def test_fit_uses_largest_size_when_text_fits(layout_engine):
    fit = layout_engine.fit_font_size("hi", 2000, 2000)

    assert fit.size == 75
    assert fit.lines == ["HI"]


def test_fit_stops_at_minimum_size(layout_engine):
    fit = layout_engine.fit_font_size("word " * 200, 200, 30)

    assert fit.size == 21
    # Overflow is accepted at the floor
    assert fit.height > 30
    # The floor size always carries the whole caption
    assert " ".join(fit.lines) == ("word " * 200).strip().upper()


def test_fit_upper_cases_text(layout_engine):
    fit = layout_engine.fit_font_size("hello world", 2000, 2000)

    assert " ".join(fit.lines) == "HELLO WORLD"


@pytest.mark.parametrize("caption", [
    "a",
    "one does not simply walk into mordor",
    "this is a very long caption that will not fit at large sizes",
    "x " * 50,
])
def test_fit_size_in_range_and_within_margins(layout_engine, caption):
    max_width = 500 - 2 * 18
    fit = layout_engine.fit_font_size(caption, max_width, 500 / 3.75)

    assert 21 <= fit.size <= 75
    assert fit.width <= max_width
    for line in fit.lines:
        assert fit.font.getlength(line) <= max_width


def test_fit_prefers_largest_fitting_size(layout_engine):
    caption = "one does not simply walk into mordor"
    fit = layout_engine.fit_font_size(caption, 464, 100)

    assert fit.fits(464, 100)
    if fit.size < 75:
        assert not layout_engine.measure(caption.upper(), fit.size + 1, 464).fits(464, 100)


def test_fit_grows_with_box(layout_engine):
    caption = "one does not simply walk into mordor"

    small = layout_engine.fit_font_size(caption, 300, 80)
    large = layout_engine.fit_font_size(caption, 900, 300)

    assert large.size >= small.size


def test_fit_height_uses_leading(layout_engine):
    fit = layout_engine.fit_font_size("one\ntwo", 2000, 2000)

    assert fit.height == pytest.approx(fit.line_height * 1.4 * 2)


def test_fit_uses_configured_range():
    engine = LayoutEngine(Settings(MAX_FONT_SIZE=30, MIN_FONT_SIZE=10))

    assert engine.fit_font_size("hi", 2000, 2000).size == 30
    assert engine.fit_font_size("word " * 200, 100, 5).size == 10
