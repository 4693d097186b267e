"""Start-up and shut-down of the game: display, subsystems and loading bar."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable

import pygame

from vermada.atlas import Atlas, load_atlas
from vermada.controls import ControlConfig, InputState
from vermada.draw import Palette, Renderer
from vermada.files import DEFAULT_DATA_DIR, get_file_location, read_file
from vermada.lookup import LookupTable, create_default_lookups
from vermada.sound import CHANNEL_COUNT, SoundPlayer
from vermada.text import Font, load_font
from vermada.textures import TextureCache
from vermada.widgets import WidgetSet

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
WINDOW_TITLE = "Sa Vermada Retro"
LOADING_BAR_WIDTH = 600
LOADING_BAR_HEIGHT = 6
LOADING_TRACK_COLOR = (64, 96, 128, 255)
LOADING_FILL_COLOR = (128, 192, 255, 255)
LOADING_STEP_DELAY = 0.001

ATLAS_IMAGE = "gfx/atlas/atlas.png"
ATLAS_DATA = "data/atlas/atlas.json"
FONT_FILE = "fonts/EnterCommand.ttf"
WIDGET_DIR = "data/widgets"

log = logging.getLogger(__name__)

Rect = tuple[int, int, int, int]


def loading_bar_rect(step: float, total: float, screen_width: int,
                     screen_height: int) -> tuple[Rect, Rect]:
    """Return the (track, fill) rectangles of the loading bar at ``step`` of ``total``."""
    x = (screen_width - LOADING_BAR_WIDTH) // 2
    y = (screen_height - LOADING_BAR_HEIGHT) // 2
    filled = int(LOADING_BAR_WIDTH * (step / total))
    return ((x, y, LOADING_BAR_WIDTH, LOADING_BAR_HEIGHT),
            (x, y, filled, LOADING_BAR_HEIGHT))


class App:
    """The game's long-lived state: display, input, and loaded resources."""

    def __init__(self, data_dir: str = DEFAULT_DATA_DIR, config: ControlConfig | None = None,
                 width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        self.data_dir = data_dir
        self.config = config if config is not None else ControlConfig()
        self.width = width
        self.height = height
        self.inputs = InputState(self.config)
        self.palette = Palette()
        self.rng = random.Random()
        self.window: pygame.Surface | None = None
        self.renderer: Renderer | None = None
        self.textures = TextureCache()
        self.lookups: LookupTable | None = None
        self.atlas: Atlas | None = None
        self.font: Font | None = None
        self.sounds: SoundPlayer | None = None
        self.widgets: WidgetSet | None = None
        self.joypad: pygame.joystick.JoystickType | None = None

    def _locate(self, filename: str) -> str:
        return get_file_location(filename, self.data_dir)

    def init_display(self, fullscreen: bool = False) -> pygame.Surface:
        """Open the window, the mixer and the font system; return the window."""
        pygame.init()
        if not pygame.display.get_init():
            raise RuntimeError(f"Couldn't initialize SDL: {pygame.get_error()}")
        try:
            pygame.mixer.init(44100, -16, 2, 1024)
        except pygame.error as exc:
            raise RuntimeError("Couldn't initialize SDL Mixer") from exc
        pygame.mixer.set_num_channels(CHANNEL_COUNT)

        flags = pygame.FULLSCREEN if fullscreen else 0
        self.window = pygame.display.set_mode((self.width, self.height), flags)
        pygame.display.set_caption(WINDOW_TITLE)

        try:
            pygame.font.init()
        except pygame.error as exc:
            raise RuntimeError(f"Couldn't initialize SDL TTF: {exc}") from exc

        pygame.mouse.set_visible(False)
        self.renderer = Renderer(pygame.Surface((self.width, self.height)))
        self.renderer.window = self.window
        return self.window

    def _default_steps(self) -> list[Callable[[], None]]:
        return [
            self._init_lookups,
            self._init_atlas,
            self._init_fonts,
            self._init_sounds,
            self._init_joypad,
            self._init_widgets,
        ]

    def init_game(self, steps: Iterable[Callable[[], None]] | None = None) -> None:
        """Run each start-up step in turn, advancing the loading bar before each."""
        self.rng.seed()
        if self.renderer is None:
            self.renderer = Renderer(pygame.Surface((self.width, self.height)))
        self.renderer.palette = self.palette

        step_list = list(steps) if steps is not None else self._default_steps()
        total = len(step_list)
        for number, step in enumerate(step_list, start=1):
            self.show_loading_step(number, total)
            step()

    def show_loading_step(self, step: float, total: float) -> None:
        """Draw and present the loading bar at ``step`` of ``total``."""
        renderer = self.renderer
        renderer.prepare_scene()
        track, fill = loading_bar_rect(step, total, self.width, self.height)
        renderer.draw_rect(*track, *LOADING_TRACK_COLOR)
        renderer.draw_rect(*fill, *LOADING_FILL_COLOR)
        renderer.present_scene()
        time.sleep(LOADING_STEP_DELAY)

    def _init_lookups(self) -> None:
        self.lookups = create_default_lookups()

    def _init_atlas(self) -> None:
        texture = self.textures.load(self._locate(ATLAS_IMAGE))
        self.atlas = load_atlas(read_file(self._locate(ATLAS_DATA)), texture)

    def _init_fonts(self) -> None:
        self.font = load_font(self._locate(FONT_FILE))
        if self.renderer is not None:
            self.renderer.font = self.font

    def _init_sounds(self) -> None:
        self.sounds = SoundPlayer(None, self.width)
        if pygame.mixer.get_init():
            self.sounds.load_sounds(self._locate)

    def _init_joypad(self) -> None:
        pygame.joystick.init()
        count = pygame.joystick.get_count()
        log.debug("%d joysticks available", count)
        for index in range(count):
            try:
                joypad = pygame.joystick.Joystick(index)
            except pygame.error:
                continue
            self.joypad = joypad
            log.debug("Joystick [name='%s', Axes=%d, Buttons=%d]",
                      joypad.get_name(), joypad.get_numaxes(), joypad.get_numbuttons())
            return

    def _init_widgets(self) -> None:
        lookups = self.lookups if self.lookups is not None else create_default_lookups()
        measure = self.font.measure if self.font is not None else None
        self.widgets = WidgetSet(lookups, self.inputs, self.sounds, measure, self.width)
        self.widgets.load_directory(WIDGET_DIR, self.data_dir)

    def cleanup(self) -> None:
        """Release the joypad, textures, sounds and the display."""
        if self.joypad is not None:
            self.joypad.quit()
            self.joypad = None
        self.textures.destroy()
        if self.sounds is not None:
            self.sounds.destroy()
        if self.renderer is not None:
            self.renderer.window = None
        self.window = None
        if pygame.get_init():
            pygame.quit()