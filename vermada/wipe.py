"""Screen transitions: fade in, wipe in and wipe out."""

from __future__ import annotations

import enum
from typing import Any, NamedTuple

FADE_START = 255
FADE_FRAMES = 20
WIPE_FRAMES = 30


class WipeType(enum.IntEnum):
    NONE = 0
    FADE = 1
    IN = 2
    OUT = 3


class Overlay(NamedTuple):
    """A filled rectangle covering part of the screen."""

    x: int
    y: int
    w: int
    h: int
    r: int
    g: int
    b: int
    a: int


class Wipe:
    """The state of the current screen transition."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.type = WipeType.NONE
        self.value = 0

    def start(self, wipe_type: WipeType) -> None:
        """Begin a transition of the given kind."""
        self.type = WipeType(wipe_type)
        if self.type == WipeType.FADE:
            self.value = FADE_START
        elif self.type in (WipeType.IN, WipeType.OUT):
            self.value = 0

    def step(self) -> bool:
        """Advance one frame; return True once the transition has finished."""
        if self.type == WipeType.FADE:
            self.value = max(0, self.value - FADE_START // FADE_FRAMES)
            return self.value == 0
        if self.type in (WipeType.IN, WipeType.OUT):
            self.value = min(self.screen_width, self.value + self.screen_width // WIPE_FRAMES)
            return self.value == self.screen_width
        return True

    def overlay(self) -> Overlay | None:
        """Return the rectangle to draw over the scene, or None."""
        width, height = self.screen_width, self.screen_height
        if self.type == WipeType.FADE:
            return Overlay(0, 0, width, height, 0, 0, 0, self.value)
        if self.type == WipeType.IN:
            return Overlay(self.value, 0, width - self.value, height, 0, 0, 0, 255)
        if self.type == WipeType.OUT:
            return Overlay(0, 0, self.value, height, 0, 0, 0, 255)
        return None

    def draw(self, renderer: Any) -> None:
        """Draw the overlay with ``renderer.draw_rect``."""
        overlay = self.overlay()
        if overlay is not None:
            renderer.draw_rect(*overlay)