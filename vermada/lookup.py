"""Name-to-value lookup table used when reading data files."""

from __future__ import annotations

import enum

from vermada.controls import Control


class WidgetType(enum.IntEnum):
    """Kinds of menu widget."""

    BUTTON = 0
    SELECT = 1
    INPUT = 2


class LookupError_(LookupError):
    """Raised when a name or value has no entry in a lookup table."""


class LookupTable:
    """Ordered pairs of names and values; the first match wins."""

    def __init__(self) -> None:
        self._entries: list[tuple[str, int]] = []

    def add(self, name: str, value: int) -> None:
        self._entries.append((name, value))

    def value_of(self, name: str) -> int:
        """Return the value registered under exactly ``name``."""
        for entry_name, value in self._entries:
            if entry_name == name:
                return value
        raise LookupError_(f"No such lookup value '{name}'")

    def name_of(self, prefix: str, num: int) -> str:
        """Return the first name starting with ``prefix`` whose value is ``num``."""
        for entry_name, value in self._entries:
            if value == num and entry_name.startswith(prefix):
                return entry_name
        raise LookupError_(f"No such lookup value {num}, prefix={prefix}")


def create_default_lookups() -> LookupTable:
    """Return the table of widget types and control names used by data files."""
    table = LookupTable()
    table.add("WT_BUTTON", WidgetType.BUTTON)
    table.add("WT_SELECT", WidgetType.SELECT)
    table.add("WT_INPUT", WidgetType.INPUT)
    table.add("left", Control.LEFT)
    table.add("right", Control.RIGHT)
    table.add("jump", Control.JUMP)
    table.add("restart", Control.RESTART)
    table.add("pause", Control.PAUSE)
    return table