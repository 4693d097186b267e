"""Drawing primitives on the back buffer and presentation to the window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pygame

from vermada.text import TextAlign

Color = tuple[int, int, int, int]

BACKGROUND: Color = (93, 148, 251, 255)
DEBUG_TEXT_SIZE = 32


@dataclass(frozen=True)
class Palette:
    """The named colours used by the game."""

    red: Color = (255, 0, 0, 255)
    orange: Color = (255, 128, 0, 255)
    yellow: Color = (255, 255, 0, 255)
    green: Color = (0, 255, 0, 255)
    blue: Color = (0, 0, 255, 255)
    cyan: Color = (0, 255, 255, 255)
    purple: Color = (255, 0, 255, 255)
    white: Color = (255, 255, 255, 255)
    black: Color = (0, 0, 0, 255)
    light_grey: Color = (192, 192, 192, 255)
    dark_grey: Color = (128, 128, 128, 255)


class Renderer:
    """Draws onto a back-buffer surface and copies it to the window."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.window: pygame.Surface | None = None
        self.font: Any = None
        self.palette = Palette()

    def prepare_scene(self) -> None:
        """Clear the back buffer to the sky colour."""
        self.surface.fill(BACKGROUND)

    def present_scene(self, debug_text: str | None = None) -> None:
        """Draw optional debug text, then copy the back buffer to the window."""
        width, height = self.surface.get_size()
        if debug_text and self.font is not None:
            self.font.draw(self, width - 5, height - 30, DEBUG_TEXT_SIZE,
                           TextAlign.RIGHT, self.palette.white, debug_text)
        if self.window is None:
            return
        if self.window.get_size() == (width, height):
            self.window.blit(self.surface, (0, 0))
        else:
            self.window.blit(pygame.transform.scale(self.surface, self.window.get_size()), (0, 0))
        if pygame.display.get_init() and self.window is pygame.display.get_surface():
            pygame.display.flip()

    def blit(self, image: pygame.Surface, x: int, y: int,
             center: bool = False, flip: bool = False) -> None:
        """Draw a whole image, optionally centred on (x, y) and mirrored."""
        w, h = image.get_size()
        if center:
            x -= w // 2
            y -= h // 2
        if flip:
            image = pygame.transform.flip(image, True, False)
        self.surface.blit(image, (int(x), int(y)))

    def blit_atlas_image(self, image: Any, x: int, y: int, center: bool = False,
                         flip: bool = False, tint: tuple[int, ...] | None = None,
                         alpha: int = 255) -> None:
        """Draw one atlas region, optionally tinted, faded and mirrored."""
        rx, ry, w, h = image.rect
        if center:
            x -= w // 2
            y -= h // 2
        piece = image.texture.subsurface(pygame.Rect(rx, ry, w, h))
        if flip:
            piece = pygame.transform.flip(piece, True, False)
        else:
            piece = piece.copy()
        if tint is not None and tuple(tint[:3]) != (255, 255, 255):
            piece.fill((tint[0], tint[1], tint[2], 255), special_flags=pygame.BLEND_RGB_MULT)
        if alpha < 255:
            piece.set_alpha(alpha)
        self.surface.blit(piece, (int(x), int(y)))

    def draw_rect(self, x: int, y: int, w: int, h: int,
                  r: int, g: int, b: int, a: int) -> None:
        """Fill a rectangle, blending when ``a`` is below 255."""
        w, h = int(w), int(h)
        if w <= 0 or h <= 0:
            return
        if a < 255:
            overlay = pygame.Surface((w, h), pygame.SRCALPHA)
            overlay.fill((r, g, b, a))
            self.surface.blit(overlay, (int(x), int(y)))
        else:
            self.surface.fill((r, g, b, a), pygame.Rect(int(x), int(y), w, h))

    def draw_outline_rect(self, x: int, y: int, w: int, h: int,
                          r: int, g: int, b: int, a: int) -> None:
        """Draw a one-pixel rectangle outline, blending when ``a`` is below 255."""
        w, h = int(w), int(h)
        if w <= 0 or h <= 0:
            return
        if a < 255:
            overlay = pygame.Surface((w, h), pygame.SRCALPHA)
            pygame.draw.rect(overlay, (r, g, b, a), overlay.get_rect(), 1)
            self.surface.blit(overlay, (int(x), int(y)))
        else:
            pygame.draw.rect(self.surface, (r, g, b, a), pygame.Rect(int(x), int(y), w, h), 1)