"""Control bindings and the live state of keyboard, mouse and joypad."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

import pygame

MAX_KEYBOARD_KEYS = 350
MAX_MOUSE_BUTTONS = 6
JOYPAD_AXIS_X = 0
JOYPAD_AXIS_Y = 1
JOYPAD_AXIS_MAX = 2
MOUSE_BUTTON_X1 = 4
MOUSE_BUTTON_X2 = 5
SCANCODE_RETURN = 40
SCANCODE_SPACE = 44
AXIS_RANGE = 32767
UNBOUND_KEY = 0
UNBOUND_BUTTON = -1


class Control(enum.IntEnum):
    """Logical game controls that keys and buttons can be bound to."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    JUMP = 4
    RESTART = 5
    PAUSE = 6


class QuitRequested(Exception):
    """Raised when the window system asks the game to quit."""


def _unbound_keys() -> dict[Control, int]:
    return {control: UNBOUND_KEY for control in Control}


def _unbound_buttons() -> dict[Control, int]:
    return {control: UNBOUND_BUTTON for control in Control}


@dataclass
class ControlConfig:
    """Key and joypad bindings plus the analogue stick dead zone."""

    key_controls: dict[Control, int] = field(default_factory=_unbound_keys)
    joypad_controls: dict[Control, int] = field(default_factory=_unbound_buttons)
    deadzone: int = 8000


class InputState:
    """Pressed keys and buttons, fed by input events and queried by the game."""

    def __init__(self, config: ControlConfig | None = None) -> None:
        self.config = config if config is not None else ControlConfig()
        self.keyboard: set[int] = set()
        self.mouse_buttons: set[int] = set()
        self.joypad_buttons: set[int] = set()
        self.joypad_axis: list[int] = [0] * JOYPAD_AXIS_MAX
        self.mouse_position: tuple[int, int] = (0, 0)
        self.last_key_pressed = -1
        self.last_button_pressed = -1

    def is_control(self, control: Control) -> bool:
        """Return True while the given control is held."""
        key = self.config.key_controls.get(control, UNBOUND_KEY)
        button = self.config.joypad_controls.get(control, UNBOUND_BUTTON)
        deadzone = self.config.deadzone
        axis_x = self.joypad_axis[JOYPAD_AXIS_X]
        axis_y = self.joypad_axis[JOYPAD_AXIS_Y]

        if control == Control.LEFT and axis_x < -deadzone:
            return True
        if control == Control.RIGHT and axis_x > deadzone:
            return True
        if control == Control.UP and axis_y < -deadzone:
            return True
        if control == Control.DOWN and axis_y > deadzone:
            return True

        return (key != UNBOUND_KEY and key in self.keyboard) or (
            button != UNBOUND_BUTTON and button in self.joypad_buttons
        )

    def is_accept_control(self) -> bool:
        """Return True while space, return or the jump control is held."""
        return (
            SCANCODE_SPACE in self.keyboard
            or SCANCODE_RETURN in self.keyboard
            or self.is_control(Control.JUMP)
        )

    def clear_control(self, control: Control) -> None:
        """Release the inputs bound to ``control`` so it fires only once."""
        key = self.config.key_controls.get(control, UNBOUND_KEY)
        button = self.config.joypad_controls.get(control, UNBOUND_BUTTON)

        if key != 0:
            self.keyboard.discard(key)
        if button != 0:
            self.joypad_buttons.discard(button)

        if control in (Control.LEFT, Control.RIGHT):
            self.joypad_axis[JOYPAD_AXIS_X] = 0
        if control in (Control.UP, Control.DOWN):
            self.joypad_axis[JOYPAD_AXIS_Y] = 0

    def clear_accept_controls(self) -> None:
        """Release jump, space and return."""
        self.clear_control(Control.JUMP)
        self.keyboard.discard(SCANCODE_SPACE)
        self.keyboard.discard(SCANCODE_RETURN)

    def key_down(self, scancode: int, repeat: int = 0) -> None:
        if repeat == 0 and 0 <= scancode < MAX_KEYBOARD_KEYS:
            self.keyboard.add(scancode)
            self.last_key_pressed = scancode

    def key_up(self, scancode: int, repeat: int = 0) -> None:
        if repeat == 0 and 0 <= scancode < MAX_KEYBOARD_KEYS:
            self.keyboard.discard(scancode)

    def mouse_down(self, button: int) -> None:
        if 0 <= button < MAX_MOUSE_BUTTONS:
            self.mouse_buttons.add(button)

    def mouse_up(self, button: int) -> None:
        if 0 <= button < MAX_MOUSE_BUTTONS:
            self.mouse_buttons.discard(button)

    def mouse_wheel(self, y: int) -> None:
        """Record wheel movement as presses of the two extra mouse buttons."""
        if y == -1:
            self.mouse_buttons.add(MOUSE_BUTTON_X1)
        if y == 1:
            self.mouse_buttons.add(MOUSE_BUTTON_X2)

    def joy_button_down(self, button: int) -> None:
        self.joypad_buttons.add(button)
        self.last_button_pressed = button

    def joy_button_up(self, button: int) -> None:
        self.joypad_buttons.discard(button)

    def joy_axis(self, axis: int, value: int) -> None:
        if 0 <= axis < JOYPAD_AXIS_MAX:
            self.joypad_axis[axis] = value

    def handle_event(self, event: Any) -> None:
        """Apply one pygame event; raise QuitRequested on a quit event."""
        kind = event.type
        if kind == pygame.MOUSEWHEEL:
            self.mouse_wheel(event.y)
        elif kind == pygame.MOUSEBUTTONDOWN:
            self.mouse_down(event.button)
        elif kind == pygame.MOUSEBUTTONUP:
            self.mouse_up(event.button)
        elif kind == pygame.MOUSEMOTION:
            self.mouse_position = tuple(event.pos)
        elif kind == pygame.KEYDOWN:
            self.key_down(event.scancode, getattr(event, "repeat", 0))
        elif kind == pygame.KEYUP:
            self.key_up(event.scancode, getattr(event, "repeat", 0))
        elif kind == pygame.JOYBUTTONDOWN:
            self.joy_button_down(event.button)
        elif kind == pygame.JOYBUTTONUP:
            self.joy_button_up(event.button)
        elif kind == pygame.JOYAXISMOTION:
            value = event.value
            if isinstance(value, float):
                value = int(value * AXIS_RANGE)
            self.joy_axis(event.axis, value)
        elif kind == pygame.QUIT:
            raise QuitRequested()