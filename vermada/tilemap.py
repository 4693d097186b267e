"""The tile grid of a stage: loading, bounds and drawing of visible tiles."""

from __future__ import annotations

import random
from typing import Any, Iterator, Mapping

RANDOM_TILE_VARIANTS = 4


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _trunc_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def parse_map_data(data: str, width: int, height: int) -> list[list[int]]:
    """Parse space-separated tile numbers, row by row, into columns ``grid[x][y]``."""
    tokens = data.split()
    if len(tokens) < width * height:
        raise ValueError(
            f"map data holds {len(tokens)} tiles, {width * height} needed"
        )
    values = iter(tokens)
    rows = [[int(next(values)) for _ in range(width)] for _ in range(height)]
    return [[rows[y][x] for y in range(height)] for x in range(width)]


class TileMap:
    """A grid of tile numbers indexed ``cells[x][y]``; zero means empty."""

    def __init__(self, width: int, height: int, tile_size: int) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.cells = [[0] * height for _ in range(width)]

    def load(self, data: str | None) -> None:
        """Reset the grid and fill it from map data, if any is given."""
        if data:
            self.cells = parse_map_data(data, self.width, self.height)
        else:
            self.cells = [[0] * self.height for _ in range(self.width)]

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def randomize(self, rng: random.Random | None = None) -> None:
        """Turn each plain tile (1) into one of its random variants."""
        rng = rng if rng is not None else random.Random()
        for y in range(self.height):
            for x in range(self.width):
                if self.cells[x][y] == 1:
                    self.cells[x][y] += rng.randrange(RANDOM_TILE_VARIANTS)

    def horizontal_bounds(self) -> tuple[int, int]:
        """Return the pixel span (min_x, max_x) of the columns holding tiles."""
        min_x = self.width
        max_x = 0
        for x, column in enumerate(self.cells):
            if any(column):
                max_x = max(max_x, x + 1)
                min_x = min(min_x, x)
        return min_x * self.tile_size, max_x * self.tile_size

    def visible_tiles(self, camera_x: int, camera_y: int, render_width: int,
                      render_height: int) -> Iterator[tuple[int, int, int]]:
        """Yield (screen_x, screen_y, tile) for each non-empty tile on screen."""
        ts = self.tile_size
        camera_x = int(camera_x)
        camera_y = int(camera_y)

        x1 = -_trunc_mod(camera_x, ts)
        x2 = x1 + render_width * ts + (0 if x1 == 0 else ts)
        y1 = -_trunc_mod(camera_y, ts)
        y2 = y1 + render_height * ts + (0 if y1 == 0 else ts)

        my = _trunc_div(camera_y, ts)
        for screen_y in range(y1, y2, ts):
            mx = _trunc_div(camera_x, ts)
            for screen_x in range(x1, x2, ts):
                if self.is_inside(mx, my):
                    tile = self.cells[mx][my]
                    if tile > 0:
                        yield screen_x, screen_y, tile
                mx += 1
            my += 1

    def draw(self, renderer: Any, tiles: Mapping[int, Any], camera_x: int,
             camera_y: int, render_width: int, render_height: int) -> None:
        """Blit the atlas image for each visible tile number."""
        for x, y, tile in self.visible_tiles(camera_x, camera_y, render_width, render_height):
            image = tiles.get(tile)
            if image is not None:
                renderer.blit_atlas_image(image, x, y, False, False)