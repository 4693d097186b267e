"""Game entities and the world that moves, collides and draws them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from vermada.camera import Camera
from vermada.quadtree import MAX_CANDIDATES, Quadtree
from vermada.tilemap import TileMap
from vermada.util import collision

GRAVITY = 1.5
MAX_FALL_SPEED = 18
MAX_RISE_SPEED = -999
MAP_BOUNDS_MARGIN = 16
DROP_STEP = 8


class EntityFlag(enum.IntFlag):
    NONE = 0
    WEIGHTLESS = 1 << 0
    SOLID = 1 << 1
    STATIC = 1 << 2
    NO_ENT_CLIP = 1 << 3
    NO_WORLD_CLIP = 1 << 4
    NO_MAP_BOUNDS = 1 << 5
    INVISIBLE = 1 << 6


class Facing(enum.IntEnum):
    RIGHT = 0
    LEFT = 1


@dataclass
class Light:
    """A coloured glow drawn around an entity; invisible while ``a`` is 0."""

    x: int = 0
    y: int = 0
    r: int = 255
    g: int = 255
    b: int = 255
    a: int = 0
    foreground: bool = False


@dataclass(eq=False)
class Entity:
    """Anything that lives in a stage.

    Behaviour hooks receive the entity itself as their first argument.
    """

    id: int = 0
    name: str = ""
    x: float = 0.0
    y: float = 0.0
    w: int = 0
    h: int = 0
    dx: float = 0.0
    dy: float = 0.0
    health: int = 1
    flags: EntityFlag = EntityFlag.NONE
    facing: Facing = Facing.RIGHT
    background: int = 0
    is_on_ground: bool = False
    image: Any = None
    light: Light = field(default_factory=Light)
    data: Any = None
    tick: Optional[Callable[[Entity], None]] = None
    touch: Optional[Callable[[Entity, Optional[Entity]], None]] = None
    die: Optional[Callable[[Entity], None]] = None
    activate: Optional[Callable[[Entity, bool], None]] = None
    load: Optional[Callable[[Entity, Any], None]] = None


class World:
    """The live and dead entities of a stage, with their physics."""

    def __init__(self, tile_map: TileMap, camera: Camera, quadtree: Quadtree,
                 max_candidates: int = MAX_CANDIDATES) -> None:
        self.tile_map = tile_map
        self.camera = camera
        self.quadtree = quadtree
        self.max_candidates = max_candidates
        self.entities: list[Entity] = []
        self.dead: list[Entity] = []
        self.ents = 0
        self.collisions = 0
        self.drawing = 0

    def append(self, entity: Entity) -> Entity:
        """Add ``entity`` to the end of the live list."""
        self.entities.append(entity)
        return entity

    def step(self) -> None:
        """Run one frame: tick, move, retire the dead and keep entities in bounds."""
        self.collisions = 0
        self.ents = 0
        died: list[Entity] = []

        # Entities spawned while ticking are appended and handled this frame too.
        for entity in self.entities:
            self.quadtree.remove(entity)
            self.ents += 1

            if entity.tick:
                entity.tick(entity)

            if not entity.flags & EntityFlag.STATIC:
                self._move(entity)

            if entity.health > 0:
                self.quadtree.add(entity)
            else:
                if entity.die:
                    entity.die(entity)
                died.append(entity)

        if died:
            gone = {id(entity) for entity in died}
            self.entities = [e for e in self.entities if id(e) not in gone]
            self.dead.extend(died)

        limit_y = self.tile_map.height * self.tile_map.tile_size
        for entity in self.entities:
            self.quadtree.remove(entity)
            if not entity.flags & (EntityFlag.NO_WORLD_CLIP | EntityFlag.NO_MAP_BOUNDS):
                right = self.camera.max_x - (entity.w + MAP_BOUNDS_MARGIN)
                entity.x = min(max(entity.x, self.camera.min_x), right)
                entity.y = min(max(entity.y, 0), limit_y)
            self.quadtree.add(entity)

    def _move(self, entity: Entity) -> None:
        if not entity.flags & EntityFlag.WEIGHTLESS:
            entity.dy += GRAVITY
            entity.dy = max(min(entity.dy, MAX_FALL_SPEED), MAX_RISE_SPEED)

        entity.is_on_ground = False
        self._push(entity, entity.dx, 0)
        self._push(entity, 0, entity.dy)

    def _push(self, entity: Entity, dx: float, dy: float) -> bool:
        target_x = entity.x + dx
        target_y = entity.y + dy
        entity.x += dx
        entity.y += dy

        self._move_to_entities(entity, dx, dy)

        if not entity.flags & EntityFlag.NO_WORLD_CLIP:
            self._move_to_world(entity, dx, dy)

        return entity.x == target_x and entity.y == target_y

    def _blocked(self, mx: int, my: int) -> bool:
        return not self.tile_map.is_inside(mx, my) or self.tile_map.cells[mx][my] != 0

    def _move_to_world(self, entity: Entity, dx: float, dy: float) -> None:
        ts = self.tile_map.tile_size
        hit = False

        if dx != 0:
            edge = entity.x + entity.w if dx > 0 else entity.x
            mx = int(int(edge) / ts)
            hit = (self._blocked(mx, int(entity.y / ts))
                   or self._blocked(mx, int((entity.y + entity.h - 1) / ts)))
            if hit:
                adj = -entity.w if dx > 0 else ts
                entity.x = mx * ts + adj
                entity.dx = 0

        if dy != 0:
            edge = entity.y + entity.h if dy > 0 else entity.y
            my = int(int(edge) / ts)
            hit = (self._blocked(int(entity.x / ts), my)
                   or self._blocked(int((entity.x + entity.w - 1) / ts), my))
            if hit:
                adj = -entity.h if dy > 0 else ts
                entity.y = my * ts + adj
                entity.dy = 0
                entity.is_on_ground = dy > 0

        if hit and entity.touch:
            entity.touch(entity, None)

    def _move_to_entities(self, entity: Entity, dx: float, dy: float) -> None:
        candidates = self.quadtree.query(entity.x, entity.y, entity.w, entity.h,
                                         entity, self.max_candidates)
        for other in candidates:
            self.collisions += 1

            if not collision(entity.x, entity.y, entity.w, entity.h,
                             other.x, other.y, other.w, other.h):
                continue

            clipping = not (entity.flags & EntityFlag.NO_ENT_CLIP) and not (
                other.flags & EntityFlag.NO_ENT_CLIP)
            if clipping and other.flags & EntityFlag.SOLID:
                if dy != 0:
                    adj = -entity.h if dy > 0 else other.h
                    entity.y = other.y + adj
                    entity.dy = 0
                    if dy > 0:
                        entity.is_on_ground = True
                if dx != 0:
                    adj = -entity.w if dx > 0 else other.w
                    entity.x = other.x + adj
                    entity.dx = 0

            if entity.touch:
                entity.touch(entity, other)

            if other.flags & EntityFlag.STATIC and other.touch:
                other.touch(other, entity)

    def drop_to_floor(self) -> None:
        """Index every entity, then let the weighted ones fall until all have landed."""
        for entity in self.entities:
            self.quadtree.add(entity)

        settled = False
        while not settled:
            settled = True
            for entity in self.entities:
                if not entity.flags & EntityFlag.WEIGHTLESS and not entity.is_on_ground:
                    self.quadtree.remove(entity)
                    self._push(entity, 0, DROP_STEP)
                    self.quadtree.add(entity)
                    settled = False

    def activate(self, target_name: str, active: bool) -> None:
        """Call the activate hook of every entity named ``target_name``."""
        for entity in list(self.entities):
            if entity.activate and entity.name == target_name:
                entity.activate(entity, active)

    def reset(self) -> None:
        """Remove every live and dead entity, taking the live ones out of the index."""
        self.entities.extend(self.dead)
        self.dead = []
        for entity in self.entities:
            if entity.health > 0:
                self.quadtree.remove(entity)
        self.entities = []

    def clear(self) -> None:
        """Forget every live and dead entity."""
        self.entities = []
        self.dead = []

    def draw(self, renderer: Any, background: int, sparkle: Any,
             screen_width: int, screen_height: int) -> None:
        """Draw the on-screen entities of one layer, with their lights."""
        camera = self.camera
        candidates = self.quadtree.query(camera.x, camera.y, screen_width, screen_height,
                                         None, self.max_candidates)
        for entity in candidates:
            if entity.background != background or entity.flags & EntityFlag.INVISIBLE:
                continue

            self.drawing += 1
            glowing = entity.light.a > 0

            if glowing and not entity.light.foreground:
                self._draw_light(renderer, entity, sparkle)

            renderer.blit_atlas_image(entity.image, int(entity.x - camera.x),
                                      int(entity.y - camera.y), False,
                                      entity.facing == Facing.LEFT)

            if glowing and entity.light.foreground:
                self._draw_light(renderer, entity, sparkle)

    def _draw_light(self, renderer: Any, entity: Entity, sparkle: Any) -> None:
        light = entity.light
        x = int(entity.x + entity.w // 2 + light.x - self.camera.x)
        y = int(entity.y + entity.h // 2 + light.y - self.camera.y)
        renderer.blit_atlas_image(sparkle, x, y, True, False,
                                  (light.r, light.g, light.b), light.a)