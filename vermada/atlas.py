"""Sprite atlas: named rectangles within one shared texture."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable


class MissingImageError(LookupError):
    """Raised when a required atlas image does not exist."""


@dataclass(frozen=True)
class AtlasImage:
    """One named region of an atlas texture."""

    filename: str
    rect: tuple[int, int, int, int]
    texture: Any = None

    @property
    def w(self) -> int:
        return self.rect[2]

    @property
    def h(self) -> int:
        return self.rect[3]


class Atlas:
    """Atlas images looked up by file name; the first entry for a name wins."""

    def __init__(self, images: Iterable[AtlasImage] = ()) -> None:
        self._images: dict[str, AtlasImage] = {}
        for image in images:
            self._images.setdefault(image.filename, image)

    def get(self, filename: str, required: bool = False) -> AtlasImage | None:
        """Return the named image, or None; raise if it is required but missing."""
        image = self._images.get(filename)
        if image is None and required:
            raise MissingImageError(f"No such atlas image '{filename}'")
        return image


def load_atlas(json_text: str, texture: Any = None) -> Atlas:
    """Build an atlas from its JSON description, all regions sharing ``texture``."""
    root = json.loads(json_text)
    nodes = root.values() if isinstance(root, dict) else root
    return Atlas(
        AtlasImage(
            filename=node["filename"],
            rect=(int(node["x"]), int(node["y"]), int(node["w"]), int(node["h"])),
            texture=texture,
        )
        for node in nodes
    )