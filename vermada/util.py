"""Small geometry, hashing and JSON helpers shared across the game."""

from __future__ import annotations

import math
from typing import Any, Mapping

_HASH_SEED = 5381
_HASH_MASK = (1 << 64) - 1


def collision(x1: float, y1: float, w1: float, h1: float,
              x2: float, y2: float, w2: float, h2: float) -> bool:
    """Return True when the two rectangles overlap (touching edges do not count)."""
    return (max(x1, x2) < min(x1 + w1, x2 + w2)) and (max(y1, y2) < min(y1 + h1, y2 + h2))


def calc_slope(x1: int, y1: int, x2: int, y2: int) -> tuple[float, float]:
    """Return the per-step (dx, dy) that moves from (x2, y2) towards (x1, y1)."""
    steps = max(abs(x1 - x2), abs(y1 - y2))
    if steps == 0:
        return 0.0, 0.0
    return (x1 - x2) / steps, (y1 - y2) / steps


def get_angle(x1: int, y1: int, x2: int, y2: int) -> float:
    """Return the bearing in degrees, in the range [0, 360)."""
    angle = -90 + math.atan2(y1 - y2, x1 - x2) * (180 / math.pi)
    return angle if angle >= 0 else 360 + angle


def get_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Return the Euclidean distance between two points, truncated to an int."""
    x = x2 - x1
    y = y2 - y1
    return int(math.sqrt(x * x + y * y))


def _signed_byte(value: int) -> int:
    return value - 256 if value > 127 else value


def hashcode(text: str) -> int:
    """Return the 64-bit bucket hash used for atlas lookups.

    The first character is mixed in twice and the result gets one extra
    multiplication, exactly as the game's lookup tables expect.
    """
    data = text.encode("utf-8")
    sequence = data[:1] + data if data else b""
    value = _HASH_SEED
    for byte in sequence:
        value = (value * 33 + _signed_byte(byte)) & _HASH_MASK
    return (value * 33) & _HASH_MASK


def get_json_int(node: Mapping[str, Any] | None, name: str, default: int) -> int:
    """Return the integer stored under ``name``, or ``default`` when absent."""
    if node is None or name not in node:
        return default
    value = node[name]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)