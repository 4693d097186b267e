"""Menu widgets: buttons, option selectors and control-binding inputs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from vermada.controls import Control, InputState, UNBOUND_BUTTON
from vermada.draw import Palette
from vermada.files import DEFAULT_DATA_DIR, get_file_list, get_file_location, read_file
from vermada.lookup import LookupTable, WidgetType
from vermada.sound import Channel, SoundId
from vermada.text import TextAlign

WIDGET_TEXT_SIZE = 64
DEFAULT_SCREEN_WIDTH = 1280

SCANCODE_W = 26
SCANCODE_S = 22
SCANCODE_RIGHT = 79
SCANCODE_LEFT = 80
SCANCODE_DOWN = 81
SCANCODE_UP = 82

MARKER_SIZE = 24
MARKER_COLOR = (255, 128, 0)
MARKER_DIM_ALPHA = 192
BLINK_PERIOD = 1000

_SCANCODE_NAMES: dict[int, str] = {4 + i: chr(ord("A") + i) for i in range(26)}
_SCANCODE_NAMES.update({30 + i: str((i + 1) % 10) for i in range(10)})
_SCANCODE_NAMES.update({58 + i: f"F{i + 1}" for i in range(12)})
_SCANCODE_NAMES.update({
    40: "Return", 41: "Escape", 42: "Backspace", 43: "Tab", 44: "Space",
    45: "-", 46: "=", 47: "[", 48: "]", 49: "\\", 51: ";", 52: "'", 53: "`",
    54: ",", 55: ".", 56: "/",
    79: "Right", 80: "Left", 81: "Down", 82: "Up",
    224: "Left Ctrl", 225: "Left Shift", 226: "Left Alt",
    228: "Right Ctrl", 229: "Right Shift", 230: "Right Alt",
})


def _scancode_name(scancode: int) -> str:
    return _SCANCODE_NAMES.get(scancode, "")


class WidgetNotFoundError(LookupError):
    """Raised when no widget matches a name and group, or none can be selected."""


@dataclass(eq=False)
class Widget:
    """One menu entry."""

    type: WidgetType
    name: str
    group_name: str
    x: int
    y: int
    text: str
    w: int = 0
    h: int = 0
    options: list[str] = field(default_factory=list)
    value: int = 0
    visible: bool = False
    disabled: bool = False
    action: Optional[Callable[[], None]] = None

    @property
    def num_options(self) -> int:
        return len(self.options)


class WidgetSet:
    """All loaded widgets, the current selection and the menu frame."""

    def __init__(self, lookups: LookupTable, inputs: InputState, sounds: Any = None,
                 measure: Callable[[str, int], tuple[int, int]] | None = None,
                 screen_width: int = DEFAULT_SCREEN_WIDTH) -> None:
        self.lookups = lookups
        self.inputs = inputs
        self.sounds = sounds
        self._measure = measure if measure is not None else (lambda text, size: (0, 0))
        self.screen_width = screen_width
        self.widgets: list[Widget] = []
        self.selected: Widget | None = None
        self.awaiting_input = False
        self.frame: tuple[int, int, int, int] = (0, 0, 0, 0)

    def _play(self, sound_id: SoundId) -> None:
        if self.sounds is not None:
            self.sounds.play(sound_id, Channel.WIDGET)

    def load(self, json_text: str) -> list[Widget]:
        """Add the widgets described by a JSON document; return them."""
        root = json.loads(json_text)
        nodes = root.values() if isinstance(root, dict) else root
        loaded = []
        for node in nodes:
            widget = Widget(
                type=WidgetType(self.lookups.value_of(node["type"])),
                name=node["name"],
                group_name=node["groupName"],
                x=int(node["x"]),
                y=int(node["y"]),
                text=node["text"],
            )
            widget.w, widget.h = self._measure(widget.text, WIDGET_TEXT_SIZE)
            if widget.type == WidgetType.SELECT:
                widget.w = self.screen_width - widget.x * 2
                widget.options = [str(option) for option in node["options"]]
            elif widget.type == WidgetType.INPUT:
                widget.w = self.screen_width - widget.x * 2
                widget.options = ["", ""]
                widget.action = self._await_input

            if widget.x == -1:
                widget.x = int((self.screen_width - widget.w) / 2)

            self.widgets.append(widget)
            loaded.append(widget)
        return loaded

    def load_directory(self, directory: str = "data/widgets",
                       data_dir: str = DEFAULT_DATA_DIR) -> list[Widget]:
        """Load every widget file in ``directory``, in name order."""
        loaded = []
        for name in get_file_list(directory, data_dir):
            path = get_file_location(f"{directory}/{name}", data_dir)
            loaded.extend(self.load(read_file(path)))
        return loaded

    def _await_input(self) -> None:
        self.awaiting_input = True
        self.inputs.last_key_pressed = -1
        self.inputs.last_button_pressed = -1

    def handle(self, group_name: str) -> None:
        """Process menu navigation, value changes, activation and rebinding."""
        selected = self.selected
        if selected is None:
            return
        inputs = self.inputs
        keys = inputs.keyboard

        if self.awaiting_input:
            self._take_binding(selected)
            return

        if keys & {SCANCODE_UP, SCANCODE_W} or inputs.is_control(Control.UP):
            inputs.clear_control(Control.UP)
            keys.discard(SCANCODE_UP)
            keys.discard(SCANCODE_W)
            self._play(SoundId.TIP)
            self._find_next(group_name, -1)

        if keys & {SCANCODE_DOWN, SCANCODE_S} or inputs.is_control(Control.DOWN):
            inputs.clear_control(Control.DOWN)
            keys.discard(SCANCODE_DOWN)
            keys.discard(SCANCODE_S)
            self._play(SoundId.TIP)
            self._find_next(group_name, 1)

        selected = self.selected
        if ((SCANCODE_LEFT in keys or inputs.is_control(Control.LEFT))
                and selected.type == WidgetType.SELECT):
            inputs.clear_control(Control.LEFT)
            keys.discard(SCANCODE_LEFT)
            self._change_value(-1)

        if ((SCANCODE_RIGHT in keys or inputs.is_control(Control.RIGHT))
                and selected.type == WidgetType.SELECT):
            inputs.clear_control(Control.RIGHT)
            keys.discard(SCANCODE_RIGHT)
            self._change_value(1)

        if inputs.is_accept_control():
            inputs.clear_accept_controls()
            if not selected.disabled:
                self._play(SoundId.TIP)
                if selected.action:
                    selected.action()
            else:
                self._play(SoundId.NEGATIVE)

    def _take_binding(self, selected: Widget) -> None:
        inputs = self.inputs
        if inputs.last_key_pressed != -1:
            self.awaiting_input = False
            control = Control(self.lookups.value_of(selected.name))
            inputs.config.key_controls[control] = inputs.last_key_pressed
            self.update_control_widget(selected, control)
            inputs.keyboard.discard(inputs.last_key_pressed)

        if inputs.last_button_pressed != -1:
            self.awaiting_input = False
            control = Control(self.lookups.value_of(selected.name))
            inputs.config.joypad_controls[control] = inputs.last_button_pressed
            self.update_control_widget(selected, control)
            inputs.joypad_buttons.discard(inputs.last_button_pressed)

    def _change_value(self, direction: int) -> None:
        selected = self.selected
        selected.value = max(min(selected.value + direction, selected.num_options - 1), 0)
        if selected.action:
            selected.action()
        self._play(SoundId.NUDGE)

    def _find_next(self, group_name: str, direction: int) -> None:
        count = len(self.widgets)
        try:
            index = self.widgets.index(self.selected)
        except ValueError:
            index = -1 if direction > 0 else 0
        for _ in range(count):
            index = (index + direction) % count
            widget = self.widgets[index]
            if widget.visible and widget.group_name == group_name:
                self.selected = widget
                return
        raise WidgetNotFoundError(f"No visible widget in group '{group_name}'")

    def _color(self, widget: Widget, palette: Palette) -> tuple[int, int, int, int]:
        if widget.disabled:
            return palette.dark_grey
        if widget is self.selected:
            return palette.orange
        return palette.white

    def _control_text(self, widget: Widget) -> str:
        if self.awaiting_input and widget is self.selected:
            return "..."
        if widget.options[1] != "":
            return f"{widget.options[0]} or {widget.options[1]}"
        return widget.options[0]

    def draw(self, renderer: Any, font: Any, palette: Palette | None, group_name: str,
             ticks: int) -> None:
        """Draw the visible widgets of a group and the blinking selection marker."""
        palette = palette if palette is not None else Palette()
        for widget in self.widgets:
            if not widget.visible or widget.group_name != group_name:
                continue
            color = self._color(widget, palette)
            right = self.screen_width - widget.x
            font.draw(renderer, widget.x, widget.y, WIDGET_TEXT_SIZE, TextAlign.LEFT,
                      color, widget.text)
            if widget.type == WidgetType.SELECT:
                font.draw(renderer, right, widget.y, WIDGET_TEXT_SIZE, TextAlign.RIGHT,
                          color, widget.options[widget.value])
            elif widget.type == WidgetType.INPUT:
                font.draw(renderer, right, widget.y, WIDGET_TEXT_SIZE, TextAlign.RIGHT,
                          color, self._control_text(widget))

            if widget is self.selected:
                mx, my = widget.x - 40, widget.y + 18
                renderer.draw_rect(mx, my, MARKER_SIZE, MARKER_SIZE, *MARKER_COLOR,
                                   MARKER_DIM_ALPHA)
                if ticks % BLINK_PERIOD < BLINK_PERIOD // 2:
                    renderer.draw_rect(mx, my, MARKER_SIZE, MARKER_SIZE, *MARKER_COLOR, 255)

    def calculate_frame(self, group_name: str, screen_height: int) -> tuple[int, int, int, int]:
        """Compute and store the backdrop rectangle around a group's widgets."""
        x, y, w, h = self.screen_width, screen_height, 0, 0
        for widget in self.widgets:
            if widget.group_name == group_name:
                x = min(widget.x - 50, x)
                y = min(widget.y - 25, y)
                w = max(widget.w + 100, w)
                h = max(widget.y + widget.h + 25, h)
        self.frame = (x, y, w, h - y)
        return self.frame

    def draw_frame(self, renderer: Any) -> None:
        """Draw the translucent backdrop and its white outline."""
        renderer.draw_rect(*self.frame, 0, 0, 0, 192)
        renderer.draw_outline_rect(*self.frame, 255, 255, 255, 255)

    def show(self, group_name: str, visible: bool) -> None:
        for widget in self.widgets:
            if widget.group_name == group_name:
                widget.visible = visible

    def get(self, name: str, group_name: str) -> Widget:
        for widget in self.widgets:
            if widget.name == name and widget.group_name == group_name:
                return widget
        raise WidgetNotFoundError(f"No such widget name='{name}', groupName='{group_name}'")

    def update_control_widget(self, widget: Widget, control: Control,
                              key_name: str | None = None) -> None:
        """Show the key and joypad button bound to ``control`` on ``widget``."""
        config = self.inputs.config
        if key_name is None:
            key_name = _scancode_name(config.key_controls.get(control, 0))
        button = config.joypad_controls.get(control, UNBOUND_BUTTON)
        second = f"Btn {button}" if button != UNBOUND_BUTTON else ""
        widget.options = [key_name, second]