"""Bitmap font built from a TrueType font, with colour codes and word wrap."""

from __future__ import annotations

import enum
import re
from typing import Any, Mapping, Sequence

import pygame

FONT_SIZE = 32
FONT_TEXTURE_SIZE = 512
FIRST_GLYPH = " "
LAST_GLYPH = "z"
LINE_SPACING = 1.2

Rect = tuple[int, int, int, int]

_NO_GLYPH: Rect = (0, 0, 0, 0)
_WORDS = re.compile(r"[^ ]* |[^ ]+")
_TINT_CACHE_LIMIT = 64


class TextAlign(enum.IntEnum):
    LEFT = 0
    RIGHT = 1
    CENTER = 2


class GlyphSpaceError(RuntimeError):
    """Raised when the glyphs do not fit in the font texture."""


def to_hex(c: str) -> int:
    """Return the colour channel value for one colour-code character."""
    if len(c) == 1 and "0" <= c <= "9":
        result = ord(c) - ord("0")
    elif len(c) == 1 and "a" <= c <= "f":
        result = 11 + (ord(c) - ord("a"))
    else:
        result = 0
    return min(result * 16, 255)


def layout_glyphs(sizes: Mapping[str, tuple[int, int]],
                  texture_size: int = FONT_TEXTURE_SIZE) -> dict[str, Rect]:
    """Pack glyphs of the given sizes left to right, row by row, into a square texture."""
    rects: dict[str, Rect] = {}
    x = y = 0
    for char, (w, h) in sizes.items():
        if x + w >= texture_size:
            x = 0
            y += h + 1
            if y + h >= texture_size:
                raise GlyphSpaceError(
                    f"Out of glyph space in {texture_size}x{texture_size} font atlas texture map."
                )
        rects[char] = (x, y, w, h)
        x += w
    return rects


class Font:
    """Glyph rectangles within a white glyph texture."""

    def __init__(self, glyphs: Mapping[str, Rect], surface: pygame.Surface) -> None:
        self.glyphs = dict(glyphs)
        self.surface = surface
        self._tinted: dict[tuple[int, int, int, int], pygame.Surface] = {}
        self._color: tuple[int, int, int] = (255, 255, 255)
        self._alpha = 255
        self._prev_color: tuple[int, int, int] = (0, 0, 0)
        self._ignore_colors = False

    def measure(self, text: str, size: int) -> tuple[int, int]:
        """Return the (width, height) of ``text`` drawn at ``size``."""
        scale = size / FONT_SIZE
        w = h = 0
        for char in text:
            _, _, gw, gh = self.glyphs.get(char, _NO_GLYPH)
            w = int(w + gw * scale)
            h = int(max(gh * scale, h))
        return w, h

    def wrap(self, text: str, size: int, width: int) -> list[str]:
        """Split ``text`` into lines no wider than ``width`` where words allow."""
        return [line for line, _ in self._wrap_lines(text, size, width, 0)]

    def _wrap_lines(self, text: str, size: int, width: int, y: int) -> list[tuple[str, int]]:
        lines: list[tuple[str, int]] = []
        line = ""
        current = 0
        for token in _WORDS.findall(text):
            w, h = self.measure(token, size)
            if current + w > width:
                lines.append((line, y))
                current = 0
                y = int(y + h * LINE_SPACING)
                line = ""
            line += token
            current += w
        lines.append((line, y))
        return lines

    def draw(self, renderer: Any, x: int, y: int, size: int, align: TextAlign,
             color: Sequence[int], text: str, wrap: int = 0) -> None:
        """Draw ``text`` with a two-pixel drop shadow onto ``renderer.surface``."""
        alpha = color[3] if len(color) > 3 else 255
        passes = (
            (x + 2, y + 2, (0, 0, 0), 255, True),
            (x + 1, y + 1, (0, 0, 0), 255, True),
            (x, y, (color[0], color[1], color[2]), alpha, False),
        )
        surface = renderer.surface
        for px, py, rgb, pass_alpha, ignore in passes:
            self._color = rgb
            self._alpha = pass_alpha
            self._ignore_colors = ignore
            if wrap:
                for line, line_y in self._wrap_lines(text, size, wrap, py):
                    self._draw_line(surface, px, line_y, size, align, line)
            else:
                self._draw_line(surface, px, py, size, align, text)
        self._ignore_colors = False

    def _draw_line(self, surface: pygame.Surface, x: int, y: int, size: int,
                   align: TextAlign, line: str) -> None:
        scale = size / FONT_SIZE
        w, _ = self.measure(line, size)
        if align == TextAlign.RIGHT:
            x -= w
        elif align == TextAlign.CENTER:
            x -= w // 2
        for word in _WORDS.findall(line):
            x = self._draw_word(surface, word, x, y, scale)

    def _draw_word(self, surface: pygame.Surface, word: str, x: int, y: int,
                   scale: float) -> int:
        if word.startswith("#"):
            if not self._ignore_colors:
                if word[1:2] == "!":
                    self._color = self._prev_color
                else:
                    self._prev_color = self._color
                    self._color = (to_hex(word[1:2]), to_hex(word[2:3]), to_hex(word[3:4]))
            return x

        texture = self._texture()
        for char in word:
            gx, gy, gw, gh = self.glyphs.get(char, _NO_GLYPH)
            dw, dh = int(gw * scale), int(gh * scale)
            if dw > 0 and dh > 0:
                piece = texture.subsurface(pygame.Rect(gx, gy, gw, gh))
                if (dw, dh) != (gw, gh):
                    piece = pygame.transform.scale(piece, (dw, dh))
                surface.blit(piece, (x, y))
            x = int(x + gw * scale)
        return x

    def _texture(self) -> pygame.Surface:
        key = (*self._color, self._alpha)
        tinted = self._tinted.get(key)
        if tinted is None:
            if len(self._tinted) >= _TINT_CACHE_LIMIT:
                self._tinted.clear()
            tinted = self.surface.copy()
            if key != (255, 255, 255, 255):
                tinted.fill(key, special_flags=pygame.BLEND_RGBA_MULT)
            self._tinted[key] = tinted
        return tinted


def load_font(filename: str | None) -> Font:
    """Render the printable ASCII range of a TrueType font into a glyph texture."""
    pygame.font.init()
    ttf = pygame.font.Font(filename, FONT_SIZE)
    chars = [chr(code) for code in range(ord(FIRST_GLYPH), ord(LAST_GLYPH) + 1)]
    rects = layout_glyphs({char: ttf.size(char) for char in chars})
    surface = pygame.Surface((FONT_TEXTURE_SIZE, FONT_TEXTURE_SIZE), pygame.SRCALPHA)
    for char in chars:
        surface.blit(ttf.render(char, True, (255, 255, 255)), rects[char][:2])
    return Font(rects, surface)