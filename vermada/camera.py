"""Camera that follows the player within the stage bounds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

CAMERA_TILE_ALLOWANCE = 64


@dataclass
class Camera:
    """Top-left corner of the view plus the horizontal limits of the stage."""

    x: int = 0
    y: int = 0
    min_x: int = 0
    max_x: int = 0

    def follow(self, target: Any, screen_width: int, screen_height: int,
               map_height: int, tile_size: int) -> tuple[int, int]:
        """Centre the view on ``target``, clamped to the stage; return (x, y)."""
        x = int(target.x) + int(target.w) // 2 - screen_width // 2
        y = int(target.y) + int(target.h) // 2 - screen_height // 2

        right = self.max_x - screen_width + (tile_size - CAMERA_TILE_ALLOWANCE)
        bottom = map_height * tile_size - screen_height

        self.x = min(max(x, self.min_x), right)
        self.y = min(max(y, 0), bottom)
        return self.x, self.y