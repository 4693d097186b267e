"""Spatial index that narrows collision and drawing queries to nearby entities."""

from __future__ import annotations

from typing import Any

QT_CELL_SIZE = 128
MAX_CANDIDATES = 1024


class CandidateOverflowError(RuntimeError):
    """Raised when a query finds more entities than the candidate limit allows."""


class Quadtree:
    """A node covering one rectangle, split into four quadrants while large enough.

    Entities are objects with ``x``, ``y``, ``w`` and ``h`` attributes. An
    entity lives in the deepest node whose quadrant wholly contains it.
    """

    def __init__(self, x: int = 0, y: int = 0, w: int = 0, h: int = 0,
                 cell_size: int = QT_CELL_SIZE, depth: int = 0) -> None:
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self.depth = depth
        self.entities: list[Any] = []
        self.added_to = False
        self.nodes: tuple[Quadtree, ...] = ()

        half_w = w // 2
        half_h = h // 2
        if half_w > cell_size or half_h > cell_size:
            corners = (
                (x, y),
                (x + half_w, y),
                (x, y + half_h),
                (x + half_w, y + half_h),
            )
            self.nodes = tuple(
                Quadtree(nx, ny, half_w, half_h, cell_size, depth + 1)
                for nx, ny in corners
            )

    def _index(self, x: int, y: int, w: int, h: int) -> int:
        """Return the quadrant that wholly holds the rectangle, or -1."""
        vertical_mid = self.x + self.w // 2
        horizontal_mid = self.y + self.h // 2
        top = y < horizontal_mid and y + h < horizontal_mid
        bottom = y > horizontal_mid

        if x < vertical_mid and x + w < vertical_mid:
            if top:
                return 0
            if bottom:
                return 2
        elif x > vertical_mid:
            if top:
                return 1
            if bottom:
                return 3
        return -1

    @staticmethod
    def _bounds(entity: Any) -> tuple[int, int, int, int]:
        return int(entity.x), int(entity.y), int(entity.w), int(entity.h)

    def add(self, entity: Any) -> None:
        """Insert ``entity`` at its current position."""
        self.added_to = True
        if self.nodes:
            index = self._index(*self._bounds(entity))
            if index != -1:
                self.nodes[index].add(entity)
                return
        self.entities.append(entity)

    def remove(self, entity: Any) -> None:
        """Remove ``entity``, looking for it where its current position puts it."""
        if not self.added_to:
            return
        if self.nodes:
            index = self._index(*self._bounds(entity))
            if index != -1:
                self.nodes[index].remove(entity)
                return

        self.entities = [e for e in self.entities if e is not entity]

        if not self.entities:
            self.added_to = any(node.added_to for node in self.nodes)

    def query(self, x: int, y: int, w: int, h: int, ignore: Any = None,
              max_candidates: int = MAX_CANDIDATES) -> list[Any]:
        """Return the entities that may overlap the rectangle, except ``ignore``."""
        found: list[Any] = []
        self._collect(int(x), int(y), int(w), int(h), ignore, max_candidates, found)
        return found

    def _collect(self, x: int, y: int, w: int, h: int, ignore: Any,
                 max_candidates: int, found: list[Any]) -> None:
        if not self.added_to:
            return
        if self.nodes:
            index = self._index(x, y, w, h)
            targets = (self.nodes[index],) if index != -1 else self.nodes
            for node in targets:
                node._collect(x, y, w, h, ignore, max_candidates, found)
        for entity in self.entities:
            if len(found) >= max_candidates:
                raise CandidateOverflowError(
                    f"Out of quadtree candidate space ({max_candidates})"
                )
            if entity is not ignore:
                found.append(entity)

    def clear(self) -> None:
        """Drop every entity from this node and all nodes below it."""
        self.entities = []
        self.added_to = False
        for node in self.nodes:
            node.clear()

    def depth_and_cells(self) -> tuple[int, int]:
        """Return the deepest node depth and the number of nodes below this one."""
        depth = self.depth
        cells = 0
        for node in self.nodes:
            child_depth, child_cells = node.depth_and_cells()
            depth = max(depth, child_depth)
            cells += 1 + child_cells
        return depth, cells