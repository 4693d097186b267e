"""Cache of loaded textures keyed by file name."""

from __future__ import annotations

from typing import Any, Callable

import pygame


class TextureCache:
    """Loads each texture file once and hands back the cached result."""

    def __init__(self, loader: Callable[[str], Any] | None = None) -> None:
        self._loader = loader if loader is not None else pygame.image.load
        self._textures: dict[str, Any] = {}

    def load(self, filename: str) -> Any:
        """Return the texture for ``filename``, loading it on first use."""
        texture = self._textures.get(filename)
        if texture is None:
            texture = self._loader(filename)
            if texture is not None:
                self._textures[filename] = texture
        return texture

    def destroy(self) -> None:
        """Forget every cached texture."""
        self._textures.clear()

    def __len__(self) -> int:
        return len(self._textures)