import pytest

from vermada.camera import Camera
from vermada.entities import GRAVITY, Entity, EntityFlag, Facing, Light, World
from vermada.quadtree import Quadtree
from vermada.tilemap import TileMap

WIDTH = 20
HEIGHT = 10
TILE = 64


class FakeRenderer:
    def __init__(self):
        self.calls = []

    def blit_atlas_image(self, image, x, y, center=False, flip=False, tint=None, alpha=255):
        self.calls.append((image, x, y, center, flip, tint, alpha))


@pytest.fixture
def world():
    tile_map = TileMap(WIDTH, HEIGHT, TILE)
    for x in range(WIDTH):
        tile_map.cells[x][HEIGHT - 1] = 1
    min_x, max_x = tile_map.horizontal_bounds()
    camera = Camera(min_x=min_x, max_x=max_x)
    quadtree = Quadtree(0, 0, WIDTH * TILE, HEIGHT * TILE)
    return World(tile_map, camera, quadtree)


def test_gravity_pulls_entity_down(world):
    entity = world.append(Entity(x=100, y=100, w=32, h=32))
    world.step()
    assert entity.dy == GRAVITY
    assert entity.y == 100 + GRAVITY
    assert entity.is_on_ground is False


def test_drop_to_floor_lands_on_tiles(world):
    entity = world.append(Entity(x=100, y=100, w=32, h=32))
    world.drop_to_floor()
    assert entity.is_on_ground is True
    assert entity.y == (HEIGHT - 1) * TILE - entity.h
    assert entity.dy == 0


def test_touch_called_with_none_on_world_hit(world):
    touched = []
    entity = world.append(Entity(x=100, y=100, w=32, h=32,
                                 touch=lambda e, other: touched.append(other)))
    world.drop_to_floor()
    assert None in touched
    assert entity.is_on_ground


def test_dead_entity_moves_to_dead_list(world):
    died = []

    def kill(entity):
        entity.health = 0

    victim = world.append(Entity(x=100, y=100, w=32, h=32, tick=kill,
                                 die=lambda e: died.append(e),
                                 flags=EntityFlag.WEIGHTLESS))
    survivor = world.append(Entity(x=300, y=100, w=32, h=32, flags=EntityFlag.WEIGHTLESS))
    world.step()
    assert world.entities == [survivor]
    assert world.dead == [victim]
    assert died == [victim]
    assert world.ents == 2


def test_entity_spawned_during_tick_is_processed(world):
    ticked = []
    spawned = Entity(x=400, y=100, w=32, h=32, flags=EntityFlag.WEIGHTLESS,
                     tick=lambda e: ticked.append(e))

    def spawn(entity):
        if spawned not in world.entities:
            world.append(spawned)

    world.append(Entity(x=100, y=100, w=32, h=32, flags=EntityFlag.WEIGHTLESS, tick=spawn))
    world.step()
    assert ticked == [spawned]
    assert world.ents == 2


def test_solid_entity_blocks_horizontal_movement(world):
    touched = []
    mover = world.append(Entity(x=100, y=100, w=32, h=32, dx=10,
                                flags=EntityFlag.WEIGHTLESS,
                                touch=lambda e, other: touched.append(other)))
    wall = world.append(Entity(x=140, y=100, w=32, h=32,
                               flags=EntityFlag.SOLID | EntityFlag.STATIC | EntityFlag.WEIGHTLESS))
    world.drop_to_floor()
    world.step()
    assert mover.x == wall.x - mover.w
    assert mover.dx == 0
    assert wall in touched


def test_static_entity_touch_receives_mover(world):
    hits = []
    mover = world.append(Entity(x=100, y=100, w=32, h=32, dx=10, flags=EntityFlag.WEIGHTLESS))
    pickup = world.append(Entity(x=120, y=100, w=16, h=16,
                                 flags=EntityFlag.STATIC | EntityFlag.WEIGHTLESS,
                                 touch=lambda e, other: hits.append((e, other))))
    world.drop_to_floor()
    world.step()
    assert hits[0] == (pickup, mover)
    assert mover.dx == 10


def test_entities_clamped_to_map_bounds(world):
    entity = world.append(Entity(x=-50, y=100, w=32, h=32, flags=EntityFlag.WEIGHTLESS))
    world.step()
    assert entity.x == world.camera.min_x


def test_no_map_bounds_flag_skips_clamp(world):
    entity = world.append(Entity(x=-50, y=100, w=32, h=32,
                                 flags=EntityFlag.WEIGHTLESS | EntityFlag.NO_MAP_BOUNDS))
    world.step()
    assert entity.x == -50


def test_activate_only_matching_names(world):
    calls = []
    door = world.append(Entity(name="door", activate=lambda e, a: calls.append((e, a))))
    world.append(Entity(name="other", activate=lambda e, a: calls.append((e, a))))
    world.activate("door", True)
    assert calls == [(door, True)]


def test_reset_empties_everything(world):
    world.append(Entity(x=100, y=100, w=32, h=32, flags=EntityFlag.WEIGHTLESS,
                        tick=lambda e: setattr(e, "health", 0)))
    world.append(Entity(x=300, y=100, w=32, h=32, flags=EntityFlag.WEIGHTLESS))
    world.step()
    world.reset()
    assert world.entities == []
    assert world.dead == []
    assert world.quadtree.query(0, 0, WIDTH * TILE, HEIGHT * TILE) == []


def test_clear_forgets_entities(world):
    world.append(Entity())
    world.dead.append(Entity())
    world.clear()
    assert (world.entities, world.dead) == ([], [])


def test_draw_layers_invisibility_and_light(world):
    renderer = FakeRenderer()
    lit = world.append(Entity(x=100, y=100, w=32, h=32, image="lit",
                              flags=EntityFlag.WEIGHTLESS, facing=Facing.LEFT,
                              light=Light(r=10, g=20, b=30, a=200)))
    world.append(Entity(x=300, y=100, w=32, h=32, image="hidden",
                        flags=EntityFlag.WEIGHTLESS | EntityFlag.INVISIBLE))
    world.append(Entity(x=500, y=100, w=32, h=32, image="back",
                        flags=EntityFlag.WEIGHTLESS, background=1))
    world.drop_to_floor()
    world.draw(renderer, 0, "sparkle", WIDTH * TILE, HEIGHT * TILE)

    images = [call[0] for call in renderer.calls]
    assert images == ["sparkle", "lit"]
    sparkle_call, entity_call = renderer.calls
    assert sparkle_call[3] is True
    assert sparkle_call[5] == (10, 20, 30)
    assert sparkle_call[6] == 200
    assert entity_call[1:3] == (int(lit.x), int(lit.y))
    assert entity_call[4] is True
    assert world.drawing == 1