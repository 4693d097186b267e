import pygame
import pytest

from vermada.draw import Renderer
from vermada.text import (
    Font,
    GlyphSpaceError,
    TextAlign,
    layout_glyphs,
    load_font,
    to_hex,
)

RED = (255, 0, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


def make_font():
    surface = pygame.Surface((40, 10), pygame.SRCALPHA)
    surface.fill((255, 255, 255, 255))
    glyphs = {"a": (0, 0, 10, 10), "b": (10, 0, 10, 10), "c": (20, 0, 10, 10), " ": (30, 0, 10, 10)}
    return Font(glyphs, surface)


def make_renderer():
    surface = pygame.Surface((100, 50))
    surface.fill(BLUE)
    return Renderer(surface)


def test_to_hex_fixed_values():
    assert to_hex("0") == 0
    assert to_hex("f") == 255
    assert to_hex("z") == 0


def test_to_hex_is_monotonic_over_digits():
    values = [to_hex(c) for c in "0123456789"]
    assert values == sorted(values)


def test_layout_wraps_rows_and_overflows():
    rects = layout_glyphs({"a": (6, 4), "b": (6, 4)}, texture_size=10)
    assert rects["a"] == (0, 0, 6, 4)
    assert rects["b"] == (0, 5, 6, 4)
    with pytest.raises(GlyphSpaceError):
        layout_glyphs({"a": (6, 4), "b": (6, 4), "c": (6, 4)}, texture_size=10)


def test_measure_basic_and_scaling():
    font = make_font()
    assert font.measure("ab", 32) == (20, 10)
    w32, h32 = font.measure("abc", 32)
    assert font.measure("abc", 64) == (w32 * 2, h32 * 2)


def test_measure_is_additive_and_ignores_unknown():
    font = make_font()
    assert font.measure("ab c", 32)[0] == font.measure("ab", 32)[0] + font.measure(" c", 32)[0]
    assert font.measure("~", 32) == (0, 0)


def test_wrap_breaks_at_words():
    font = make_font()
    assert font.wrap("aa bb cc", 32, 50) == ["aa ", "bb cc"]


def test_wrap_keeps_all_text():
    font = make_font()
    text = "a bb ccc a b c"
    lines = font.wrap(text, 32, 45)
    assert "".join(lines) == text
    assert len(lines) > 1


def test_draw_with_shadow():
    renderer = make_renderer()
    make_font().draw(renderer, 0, 0, 32, TextAlign.LEFT, RED, "a")
    assert rgb(renderer.surface, (5, 5)) == RED
    assert rgb(renderer.surface, (11, 11)) == BLACK
    assert rgb(renderer.surface, (30, 30)) == BLUE


def test_draw_right_aligned():
    renderer = make_renderer()
    make_font().draw(renderer, 20, 0, 32, TextAlign.RIGHT, RED, "a")
    assert rgb(renderer.surface, (15, 5)) == RED
    assert rgb(renderer.surface, (5, 5)) == BLUE


def test_colour_code_changes_colour():
    renderer = make_renderer()
    make_font().draw(renderer, 0, 0, 32, TextAlign.LEFT, WHITE, "#f00 a")
    assert rgb(renderer.surface, (5, 5)) == RED


def test_colour_code_restore():
    renderer = make_renderer()
    make_font().draw(renderer, 0, 0, 32, TextAlign.LEFT, WHITE, "#0f0 #! a")
    assert rgb(renderer.surface, (5, 5)) == WHITE


def test_draw_wrapped_moves_down():
    renderer = make_renderer()
    font = make_font()
    font.draw(renderer, 0, 0, 32, TextAlign.LEFT, RED, "a a", wrap=25)
    assert rgb(renderer.surface, (5, 5)) == RED
    assert rgb(renderer.surface, (5, 17)) == RED


def test_load_font_default():
    font = load_font(None)
    width, height = font.measure("z", 32)
    assert width > 0 and height > 0
    assert font.measure("zz", 32)[0] == 2 * width
    assert font.surface.get_size() == (512, 512)