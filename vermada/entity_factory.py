"""Creation of entities by type name from stage data."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from vermada.entities import Entity, EntityFlag, World

InitFunc = Callable[[Entity], None]


class UnknownEntityTypeError(LookupError):
    """Raised when no initialiser is registered for an entity type."""


class EntityFactory:
    """Registered entity initialisers, and the id counter for spawned entities."""

    def __init__(self, world: World) -> None:
        self.world = world
        self._inits: list[tuple[str, InitFunc]] = []
        self._next_id = 0

    def register(self, type_name: str, init: InitFunc) -> None:
        """Register ``init`` for ``type_name``; the earliest registration wins."""
        self._inits.append((type_name, init))

    def _find(self, type_name: str) -> InitFunc:
        for name, init in self._inits:
            if name == type_name:
                return init
        raise UnknownEntityTypeError(f"Unknown entity type '{type_name}'")

    def spawn(self) -> Entity:
        """Create a blank entity with a fresh id and add it to the world."""
        self._next_id += 1
        return self.world.append(Entity(id=self._next_id, health=1))

    def create(self, node: Mapping[str, Any]) -> Entity:
        """Create an entity from its stage data description."""
        init = self._find(node["type"])
        entity = self.spawn()
        entity.x = int(node["x"])
        entity.y = int(node["y"])
        if "name" in node:
            entity.name = node["name"]

        init(entity)

        if entity.load:
            entity.load(entity, node)
        return entity

    def create_all(self, nodes: Iterable[Mapping[str, Any]]) -> list[Entity]:
        """Create one entity for each description, in order."""
        return [self.create(node) for node in nodes]

    def templates(self) -> list[Entity]:
        """Return one initialised entity per registration, outside the world."""
        entities = []
        for _, init in self._inits:
            entity = Entity()
            init(entity)
            entities.append(entity)
        return entities

    def spawn_editor_entity(self, type_name: str, x: int, y: int) -> Entity:
        """Spawn a visible entity of the given type at (x, y) for editing."""
        init = self._find(type_name)
        entity = self.spawn()
        entity.x = x
        entity.y = y
        init(entity)
        entity.flags &= ~EntityFlag.INVISIBLE
        return entity