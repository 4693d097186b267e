# vermada

Building blocks for a small tile-based side-scrolling platform game: a
player runs through stages collecting grapes and bottles against the clock,
with a pause menu, rebindable controls and on-screen tips. Everything is
built on pygame and split into small parts that can be used and tested on
their own.

| Module | What it holds |
| --- | --- |
| `vermada.util` | `collision`, `calc_slope`, `get_angle`, `get_distance`, `hashcode`, `get_json_int` |
| `vermada.files` | `file_exists`, `get_file_location`, `read_file`, `write_file`, `get_file_list`, `MissingFileError` |
| `vermada.controls` | `Control`, `ControlConfig` (key and joypad bindings, dead zone), `InputState` (live input fed from pygame events), `QuitRequested` |
| `vermada.lookup` | `LookupTable`, `WidgetType`, `create_default_lookups`, `LookupError_` |
| `vermada.wipe` | Screen transitions: `Wipe` and `WipeType` (fade in, wipe in, wipe out) |
| `vermada.atlas` | `AtlasImage`, `Atlas` and `load_atlas` for a JSON atlas index; `MissingImageError` |
| `vermada.textures` | `TextureCache`, loading each image file once |
| `vermada.draw` | `Renderer` (fills, outlines, image and atlas blits onto a back-buffer surface) and `Palette` |
| `vermada.text` | `Font` (measuring, word wrap, drop shadow, `#rgb` colour codes), `TextAlign`, `load_font`, `layout_glyphs`, `to_hex` |
| `vermada.quadtree` | `Quadtree` spatial index and `CandidateOverflowError` |
| `vermada.tilemap` | `TileMap` and `parse_map_data` |
| `vermada.camera` | `Camera`, following a target within the stage bounds |
| `vermada.particles` | `Particle` and `ParticleSystem` (coin, power-up, splash and death effects) |
| `vermada.entities` | `Entity`, `EntityFlag`, `Facing`, `Light` and `World` (gravity, tile and entity collisions, drawing) |
| `vermada.entity_factory` | `EntityFactory` (entities created by type name) and `UnknownEntityTypeError` |
| `vermada.sound` | `SoundPlayer`, `SoundId`, `Channel`, `positional_params` |
| `vermada.widgets` | `Widget`, `WidgetSet` (buttons, selectors, control-binding inputs), `WidgetNotFoundError` |
| `vermada.bootstrap` | `App` (window, mixer, loading bar, resource loading, shutdown) and `loading_bar_rect` |
| `vermada.stage` | `StageScreen` (time limit, tips, HUD, pause menu, stage changes), `StageStatus`, `cloud_pattern`, `split_time`, `item_color` |

## Installation

Install the package with your usual Python packaging tool; it depends on
pygame. The `test` extra adds pytest.

## Examples

Geometry helpers:

```python
from vermada.util import collision, get_distance

collision(0, 0, 10, 10, 5, 5, 10, 10)   # True: the rectangles overlap
get_distance(0, 0, 3, 4)                # 5
```

Name lookups used by widget data files:

```python
from vermada.lookup import create_default_lookups

lookups = create_default_lookups()
jump = lookups.value_of("jump")
lookups.name_of("WT_", lookups.value_of("WT_BUTTON"))   # "WT_BUTTON"
```

Screen transitions advance one frame per `step()` and return `True` once
they have finished:

```python
from vermada.wipe import Wipe, WipeType

wipe = Wipe(1280, 720)
wipe.start(WipeType.FADE)
while not wipe.step():
    pass
```

A quadtree holds any objects with `x`, `y`, `w` and `h` attributes, so that
collision checks only look at nearby ones:

```python
from vermada.quadtree import Quadtree

tree = Quadtree(0, 0, 4096, 1024, 128, 0)
tree.add(entity)
nearby = tree.query(entity.x, entity.y, entity.w, entity.h, entity, 1024)
tree.remove(entity)
```

Tile maps are filled from the space-separated tile numbers of a stage file:

```python
from vermada.tilemap import TileMap

tile_map = TileMap(width, height, 64)
tile_map.load(stage_json["map"])
min_x, max_x = tile_map.horizontal_bounds()
```

Entity kinds are registered with an `EntityFactory` as functions that set
up a new `Entity`:

```python
from vermada.entity_factory import EntityFactory

factory = EntityFactory(world)
factory.register("coin", set_up_coin)
coin = factory.create({"type": "coin", "x": 320, "y": 128})
```

## Data files

`vermada.files.get_file_location` looks a file up first as given and then
under a data directory (the current directory by default); when neither
exists it raises `MissingFileError`. `App` and `StageScreen` use this to find
`gfx/atlas/atlas.png`, `data/atlas/atlas.json`, `fonts/EnterCommand.ttf`,
the sound files, every file in `data/widgets` and the stage files
`data/stages/NNN.json`. `StageScreen` expects the widget group `stage` to
contain widgets named `resume`, `restart`, `options` and `quit`.

## What the package does not do

- It has no command and no main loop: nothing here opens the game by
  itself. A program has to create an `App`, call `init_display` and
  `init_game`, feed events to `InputState.handle_event`, and call
  `StageScreen.logic` and `StageScreen.draw` each frame.
- No entity kinds are built in. The player, coins, items, platforms,
  churches and spikes must be registered with `EntityFactory.register`
  before a stage is loaded.
- There is no title screen, options screen or ending screen. `StageScreen`
  takes callbacks (`on_title`, `on_options`, `on_ending`) for them.
- Settings are not read from or saved to a file; `ControlConfig` starts with
  no keys or buttons bound.
- No game data (images, fonts, sounds, widget or stage files) ships with
  the package.

## Running the tests

The tests live in `tests/` and run with pytest.