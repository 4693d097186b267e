"""One playable stage: its map, entities, timer, tips, HUD and pause menu."""

from __future__ import annotations

import enum
import json
import math
import random
from typing import Any, Callable, Optional

import pygame

from vermada.camera import Camera
from vermada.controls import Control
from vermada.draw import Palette
from vermada.entities import Entity, World
from vermada.entity_factory import EntityFactory
from vermada.files import get_file_location, read_file
from vermada.particles import ParticleSystem
from vermada.quadtree import Quadtree
from vermada.sound import Channel, SoundId
from vermada.text import TextAlign
from vermada.tilemap import TileMap
from vermada.widgets import Widget, _scancode_name
from vermada.wipe import Wipe, WipeType

FPS = 60
TILE_SIZE = 64
MAP_WIDTH = 100
MAP_HEIGHT = 24
MAX_TILES = 20
HUD_TEXT_SIZE = 32
HUD_HEIGHT = 30
LEVEL_LABEL = "060"
CLOCK_WARNING_SECONDS = 11
CLOUD_MIN_Y = 50
CLOUD_MAX_Y = 200
TIPS_WIDTH = 500
TIPS_HEIGHT = 300

SCANCODE_RETURN = 40
SCANCODE_ESCAPE = 41
SCANCODE_F1 = 58
SCANCODE_F10 = 67

BACKGROUND_TILE = "gfx/tilesets/cloud.png"
TIPS_PROMPT = "gfx/main/tips.png"
BRICK_TILE = "gfx/tilesets/brick.png"
SPARKLE = "gfx/particles/basic.png"
WIDGET_GROUP = "stage"

Color = tuple[int, int, int, int]


class StageStatus(enum.IntEnum):
    INCOMPLETE = 0
    COMPLETE = 1
    FAILED = 2
    GAME_COMPLETE = 3


def cloud_pattern(width: int, height: int) -> list[list[int]]:
    """Return the parallax cloud layout, indexed ``grid[x][y]``; 1 marks a cloud."""
    return [[1 if ((x ^ y) // 3) % 4 == 3 else 0 for y in range(height)]
            for x in range(width)]


def split_time(frames: int) -> tuple[int, int]:
    """Return (minutes, seconds) for a frame count at the game's frame rate."""
    return frames // (FPS * 60), (frames // FPS) % 60


def item_color(current: int, total: int, palette: Palette | None = None) -> Color:
    """Colour of a collected/total counter: orange when complete, grey when empty."""
    palette = palette if palette is not None else Palette()
    if total > 0:
        return palette.orange if current == total else palette.white
    return palette.dark_grey


def _trunc_div(a: float, b: int) -> int:
    return int(a / b)


def _trunc_mod(a: int, b: int) -> int:
    return int(math.fmod(a, b))


class StageScreen:
    """Runs a stage: game logic each frame, drawing, the pause menu and stage changes."""

    def __init__(self, app: Any, on_title: Callable[[], None] | None = None,
                 on_ending: Callable[[], None] | None = None,
                 on_options: Callable[[Callable[[], None]], None] | None = None) -> None:
        self.app = app
        self.on_title = on_title
        self.on_ending = on_ending
        self.on_options = on_options
        self.width = app.width
        self.height = app.height
        self.render_width = self.width // TILE_SIZE
        self.render_height = self.height // TILE_SIZE + 1
        self.rng = random.Random()
        self.debug = False
        self.background = cloud_pattern(MAP_WIDTH, MAP_HEIGHT)
        self.wipe = Wipe(self.width, self.height)
        self.world = World(TileMap(MAP_WIDTH, MAP_HEIGHT, TILE_SIZE), Camera(), self._new_quadtree())
        self.factory = EntityFactory(self.world)
        self.previous_widget: Optional[Widget] = None
        self._init_stage()

    # -- set-up -------------------------------------------------------------

    @staticmethod
    def _new_quadtree() -> Quadtree:
        return Quadtree(0, 0, MAP_WIDTH * TILE_SIZE, MAP_HEIGHT * TILE_SIZE)

    def _image(self, filename: str, required: bool) -> Any:
        atlas = self.app.atlas
        return atlas.get(filename, required) if atlas is not None else None

    def _init_stage(self) -> None:
        self.number = 0
        self.status = StageStatus.INCOMPLETE
        self.reset_requested = False
        self.time_limit = 0
        self.time = 0
        self.frame = 0
        self.next_stage_timer = 0
        self.coins = self.total_coins = 0
        self.items = self.total_items = 0
        self.tips: list[str] = []
        self.tip_index = 0
        self.show_tips = False
        self.menu_open = False
        self.stage_json: Optional[dict[str, Any]] = None
        self.player: Optional[Entity] = None

        self.tile_map = TileMap(MAP_WIDTH, MAP_HEIGHT, TILE_SIZE)
        self.camera = Camera()
        self.world = World(self.tile_map, self.camera, self._new_quadtree())
        self.factory.world = self.world
        self.sparkle = None
        self.particles = ParticleSystem(self.rng, None)

        widgets = self.app.widgets
        self.resume_widget = widgets.get("resume", WIDGET_GROUP)
        self.resume_widget.action = self.resume
        self.restart_widget = widgets.get("restart", WIDGET_GROUP)
        self.restart_widget.action = self.restart
        self.options_widget = widgets.get("options", WIDGET_GROUP)
        self.options_widget.action = self._options
        self.quit_widget = widgets.get("quit", WIDGET_GROUP)
        self.quit_widget.action = self.quit

        self.background_tile = self._image(BACKGROUND_TILE, True)
        self.tips_prompt = self._image(TIPS_PROMPT, True)
        brick = self._image(BRICK_TILE, False)
        self.tiles = {n: brick for n in range(1, MAX_TILES + 1)} if brick is not None else {}

        self.wipe.start(WipeType.IN)
        self._play(SoundId.WIPE, Channel.PLAYER)

    def load(self, number: int, random_tiles: bool = True) -> None:
        """Load stage ``number`` from its data file and populate the world."""
        self.number = number
        self.rng.seed(256 * number)
        path = get_file_location(f"data/stages/{number:03d}.json", self.app.data_dir)
        root = json.loads(read_file(path))

        self.time_limit = int(root["timeLimit"])
        self.time = self.time_limit * FPS
        self.menu_open = False

        self.tile_map.load(root["map"])
        self.camera.min_x, self.camera.max_x = self.tile_map.horizontal_bounds()

        self.world.quadtree = self._new_quadtree()
        self._init_entities(root)

        self.tips = [str(tip) for tip in root["tips"]]
        self.tip_index = 0
        self.show_tips = bool(self.tips) and bool(getattr(self.app.config, "tips", True))

        if random_tiles:
            self.tile_map.randomize(self.rng)
            self.world.drop_to_floor()

        self.stage_json = root

    def _init_entities(self, root: dict[str, Any]) -> None:
        nodes = list(root["entities"])
        created = self.factory.create_all(nodes)
        if self.player is None:
            self.player = next((entity for entity, node in zip(created, nodes)
                                if node["type"] == "player"), None)
        self.sparkle = self._image(SPARKLE, True)
        self.particles.image = self.sparkle

    # -- helpers -------------------------------------------------------------

    def _play(self, sound_id: SoundId, channel: Channel) -> None:
        if self.app.sounds is not None:
            self.app.sounds.play(sound_id, channel)

    def _pressed(self, scancode: int) -> bool:
        return scancode in self.app.inputs.keyboard

    # -- logic ---------------------------------------------------------------

    def logic(self) -> None:
        """Advance one frame."""
        if self.wipe.step():
            if self.menu_open:
                self._do_menu()
            else:
                self._do_game()

        if self.player is not None:
            self.camera.follow(self.player, self.width, self.height, MAP_HEIGHT, TILE_SIZE)

        if self.status == StageStatus.GAME_COMPLETE:
            self.destroy()
            if self.on_ending is not None:
                self.on_ending()

    def _do_game(self) -> None:
        if self.show_tips:
            self.advance_tips()
            return

        self._do_controls()
        self.world.step()
        self.particles.step()
        self.frame += 1

        if self.status == StageStatus.COMPLETE:
            self.next_stage_timer -= 1
            if self.next_stage_timer == 0:
                self.wipe.start(WipeType.OUT)
                self._play(SoundId.WIPE, Channel.PLAYER)
            elif self.next_stage_timer < 0:
                self._next_stage(self.number + 1)

        if self.reset_requested:
            self._reset_stage()
            self.wipe.start(WipeType.FADE)

        if self.status == StageStatus.INCOMPLETE and self.time > 0:
            self.tick_time_limit()

    def _do_menu(self) -> None:
        inputs = self.app.inputs
        self.app.widgets.handle(WIDGET_GROUP)
        if self._pressed(SCANCODE_ESCAPE) or inputs.is_control(Control.PAUSE):
            if self.app.sounds is not None:
                self.app.sounds.resume()
            inputs.keyboard.discard(SCANCODE_ESCAPE)
            inputs.clear_control(Control.PAUSE)
            self.menu_open = False

    def tick_time_limit(self) -> int:
        """Count one frame off the clock, ticking in the last seconds; return the time left."""
        then = self.time
        self.time -= 1
        if self.time <= FPS * CLOCK_WARNING_SECONDS and then // FPS != self.time // FPS:
            self._play(SoundId.CLOCK, Channel.CLOCK)
            if self.time // FPS == 0:
                self._play(SoundId.EXPIRED, Channel.CLOCK)
                self.status = StageStatus.FAILED
        return self.time

    def _do_controls(self) -> None:
        inputs = self.app.inputs
        keys = inputs.keyboard

        if self.status == StageStatus.INCOMPLETE and SCANCODE_F1 in keys:
            keys.discard(SCANCODE_F1)
            self.show_tips = True
            self.tip_index = 0
            self._play(SoundId.TIP, Channel.PLAYER)

        if self.status != StageStatus.COMPLETE and inputs.is_control(Control.RESTART):
            inputs.clear_control(Control.RESTART)
            self._next_stage(self.number)

        if SCANCODE_ESCAPE in keys or inputs.is_control(Control.PAUSE):
            keys.discard(SCANCODE_ESCAPE)
            inputs.clear_control(Control.PAUSE)
            self.menu_open = True
            widgets = self.app.widgets
            widgets.show(WIDGET_GROUP, True)
            widgets.calculate_frame(WIDGET_GROUP, self.height)
            widgets.selected = self.resume_widget
            if self.app.sounds is not None:
                self.app.sounds.pause()
            self._play(SoundId.TIP, Channel.WIDGET)

        if self.debug and SCANCODE_F10 in keys:
            keys.discard(SCANCODE_F10)
            self.status = StageStatus.COMPLETE
            self.next_stage_timer -= 1

    def advance_tips(self) -> None:
        """Move to the next tip when accept is pressed, closing after the last."""
        inputs = self.app.inputs
        if inputs.is_accept_control():
            inputs.clear_accept_controls()
            self.tip_index += 1
            self.show_tips = self.tip_index < len(self.tips)
            self._play(SoundId.TIP, Channel.PLAYER)

    def _reset_stage(self) -> None:
        self.reset_requested = False
        self.items = self.total_items = 0
        self.coins = self.total_coins = 0
        self.rng.seed(256 * self.number)
        self.world.reset()
        self.player = None
        if self.stage_json is not None:
            self._init_entities(self.stage_json)
        self.world.drop_to_floor()

    def _next_stage(self, number: int) -> None:
        same_stage = self.number == number
        self.destroy()
        self._init_stage()
        self.load(number, True)
        if same_stage:
            self.show_tips = False

    # -- menu actions --------------------------------------------------------

    def resume(self) -> None:
        self.menu_open = False

    def restart(self) -> None:
        self.menu_open = False
        self._next_stage(self.number)

    def _options(self) -> None:
        self.previous_widget = self.options_widget
        self.app.widgets.show(WIDGET_GROUP, False)
        if self.on_options is not None:
            self.on_options(self._return_from_options)

    def _return_from_options(self) -> None:
        widgets = self.app.widgets
        widgets.show(WIDGET_GROUP, True)
        widgets.calculate_frame(WIDGET_GROUP, self.height)
        widgets.selected = self.previous_widget

    def quit(self) -> None:
        self.destroy()
        if self.on_title is not None:
            self.on_title()

    def destroy(self) -> None:
        """Release the stage's entities, particles and index."""
        self.world.quadtree.clear()
        self.world.clear()
        self.particles.clear()
        self.stage_json = None

    # -- drawing -------------------------------------------------------------

    def draw(self) -> None:
        """Draw the stage, or the pause menu over it, then any wipe."""
        if self.menu_open:
            self._draw_menu()
        else:
            self._draw_game()
        self.wipe.draw(self.app.renderer)

    def _text(self, x: int, y: int, align: TextAlign, color: Color, text: str,
              wrap: int | None = None) -> None:
        font = self.app.font
        if font is None:
            return
        if wrap is None:
            font.draw(self.app.renderer, x, y, HUD_TEXT_SIZE, align, color, text)
        else:
            font.draw(self.app.renderer, x, y, HUD_TEXT_SIZE, align, color, text, wrap)

    def _draw_game(self) -> None:
        renderer = self.app.renderer
        self.world.drawing = 0
        renderer.draw_rect(0, 0, self.width, self.height, 64, 64, 64, 64)
        self._draw_background()
        if self.sparkle is not None:
            self.world.draw(renderer, 1, self.sparkle, self.width, self.height)
        self.tile_map.draw(renderer, self.tiles, self.camera.x, self.camera.y,
                           self.render_width, self.render_height)
        if self.sparkle is not None:
            self.world.draw(renderer, 0, self.sparkle, self.width, self.height)
        if self.particles.image is not None:
            self.particles.draw(renderer, self.camera.x, self.camera.y)
        self._draw_hud()
        if self.show_tips:
            self._draw_tips()

    def _draw_menu(self) -> None:
        self._draw_game()
        renderer = self.app.renderer
        renderer.draw_rect(0, 0, self.width, self.height, 0, 0, 0, 96)
        widgets = self.app.widgets
        widgets.draw_frame(renderer)
        if self.app.font is not None:
            widgets.draw(renderer, self.app.font, self.app.palette, WIDGET_GROUP,
                         pygame.time.get_ticks())

    def _draw_background(self) -> None:
        """Draw the parallax cloud layer, scrolling at half the camera speed."""
        if self.background_tile is None:
            return
        renderer = self.app.renderer
        cam_x = int(self.camera.x * 0.5)
        cam_y = int(self.camera.y)

        x1 = -_trunc_mod(cam_x, TILE_SIZE)
        x2 = x1 + self.render_width * TILE_SIZE + (0 if x1 == 0 else TILE_SIZE)
        y1 = -_trunc_mod(cam_y, TILE_SIZE)
        y2 = y1 + self.render_height * TILE_SIZE + (0 if y1 == 0 else TILE_SIZE)

        my = _trunc_div(cam_y, TILE_SIZE)
        for y in range(y1, y2, TILE_SIZE):
            if CLOUD_MIN_Y <= y <= CLOUD_MAX_Y:
                mx = _trunc_div(cam_x, TILE_SIZE)
                for x in range(x1, x2, TILE_SIZE):
                    if (0 <= mx < MAP_WIDTH and 0 <= my < MAP_HEIGHT
                            and self.background[mx][my] == 1):
                        renderer.blit_atlas_image(self.background_tile, x, y, False, False)
                    mx += 1
            my += 1

    def _draw_tips(self) -> None:
        renderer = self.app.renderer
        palette = self.app.palette
        x = (self.width - TIPS_WIDTH) // 2
        y = (self.height - TIPS_HEIGHT) // 2
        wrap = TIPS_WIDTH - 25

        renderer.draw_rect(0, 0, self.width, self.height, 0, 0, 0, 64)
        renderer.draw_rect(x, y, TIPS_WIDTH, TIPS_HEIGHT, 0, 0, 0, 192)
        renderer.draw_outline_rect(x, y, TIPS_WIDTH, TIPS_HEIGHT, 192, 192, 192, 255)

        if self.tip_index < len(self.tips):
            self._text(x + 10, y, TextAlign.LEFT, palette.white, self.tips[self.tip_index], wrap)
        self._text(x + 10, y + TIPS_HEIGHT - 32, TextAlign.LEFT, palette.white,
                   "Press [Return] to continue", wrap)
        self._text(x + TIPS_WIDTH - 10, y + TIPS_HEIGHT - 32, TextAlign.RIGHT, palette.white,
                   f"Tip {self.tip_index + 1} / {len(self.tips)}", wrap)

    def _draw_hud(self) -> None:
        renderer = self.app.renderer
        palette = self.app.palette

        renderer.draw_rect(0, 0, self.width, HUD_HEIGHT, 0, 0, 0, 192)
        self._text(10, 0, TextAlign.LEFT, palette.white, f"Nivell: {LEVEL_LABEL}")

        if self.tips and self.tips_prompt is not None:
            renderer.blit_atlas_image(self.tips_prompt, 135, 16, True, False)

        self._text(512, 0, TextAlign.CENTER, item_color(self.coins, self.total_coins, palette),
                   f"Raims: {self.coins} / {self.total_coins}")
        self._text(768, 0, TextAlign.CENTER, item_color(self.items, self.total_items, palette),
                   f"Botelles: {self.items} / {self.total_items}")

        minutes, seconds = split_time(self.time)
        steady = minutes > 0 or seconds > 10 or self.time % 30 < 15
        self._text(self.width - 10, 0, TextAlign.RIGHT,
                   palette.white if steady else palette.red,
                   f"Temps: {minutes:02d}:{seconds:02d}")

        if self.status == StageStatus.FAILED:
            renderer.draw_rect(0, self.height - HUD_HEIGHT, self.width, HUD_HEIGHT, 0, 0, 0, 192)
            key = self.app.config.key_controls.get(Control.RESTART, 0)
            self._text(self.width // 2, self.height - 32, TextAlign.CENTER, palette.white,
                       f"Prem [{_scancode_name(key)}] per reintentar")