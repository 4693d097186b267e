import pygame
import pytest

from vermada.controls import (
    JOYPAD_AXIS_X,
    JOYPAD_AXIS_Y,
    MAX_KEYBOARD_KEYS,
    MOUSE_BUTTON_X1,
    MOUSE_BUTTON_X2,
    SCANCODE_RETURN,
    SCANCODE_SPACE,
    Control,
    ControlConfig,
    InputState,
    QuitRequested,
)

KEY_LEFT = 80
KEY_JUMP = 82


@pytest.fixture
def state():
    config = ControlConfig()
    config.key_controls[Control.LEFT] = KEY_LEFT
    config.key_controls[Control.JUMP] = KEY_JUMP
    config.joypad_controls[Control.JUMP] = 2
    config.joypad_controls[Control.PAUSE] = 0
    return InputState(config)


def test_default_config_has_nothing_active():
    inputs = InputState()
    assert not any(inputs.is_control(control) for control in Control)
    assert inputs.is_accept_control() is False


def test_key_binding_activates_and_clears(state):
    state.key_down(KEY_LEFT)
    assert state.is_control(Control.LEFT) is True
    assert state.last_key_pressed == KEY_LEFT
    state.clear_control(Control.LEFT)
    assert state.is_control(Control.LEFT) is False


def test_key_up_releases(state):
    state.key_down(KEY_LEFT)
    state.key_up(KEY_LEFT)
    assert KEY_LEFT not in state.keyboard


def test_repeated_key_events_are_ignored(state):
    state.key_down(KEY_LEFT, repeat=1)
    assert state.is_control(Control.LEFT) is False
    state.key_down(KEY_LEFT)
    state.key_up(KEY_LEFT, repeat=1)
    assert state.is_control(Control.LEFT) is True


def test_out_of_range_scancode_ignored(state):
    state.key_down(MAX_KEYBOARD_KEYS)
    assert state.keyboard == set()
    assert state.last_key_pressed == -1


def test_axis_beyond_deadzone_counts_as_direction(state):
    dz = state.config.deadzone
    state.joy_axis(JOYPAD_AXIS_X, -dz - 1)
    assert state.is_control(Control.LEFT) is True
    assert state.is_control(Control.RIGHT) is False
    state.joy_axis(JOYPAD_AXIS_X, dz)
    assert state.is_control(Control.RIGHT) is False
    state.joy_axis(JOYPAD_AXIS_Y, dz + 1)
    assert state.is_control(Control.DOWN) is True
    state.clear_control(Control.DOWN)
    assert state.joypad_axis[JOYPAD_AXIS_Y] == 0


def test_joy_axis_ignores_unknown_axis(state):
    state.joy_axis(5, 30000)
    assert state.joypad_axis == [0, 0]


def test_joypad_button_binding(state):
    state.joy_button_down(2)
    assert state.last_button_pressed == 2
    assert state.is_control(Control.JUMP) is True
    assert state.is_accept_control() is True
    state.joy_button_up(2)
    assert state.is_control(Control.JUMP) is False


def test_clear_control_leaves_button_zero_held(state):
    state.joy_button_down(0)
    assert state.is_control(Control.PAUSE) is True
    state.clear_control(Control.PAUSE)
    assert state.is_control(Control.PAUSE) is True


@pytest.mark.parametrize("scancode", [SCANCODE_SPACE, SCANCODE_RETURN, KEY_JUMP])
def test_accept_control_and_clear(state, scancode):
    state.key_down(scancode)
    assert state.is_accept_control() is True
    state.clear_accept_controls()
    assert state.is_accept_control() is False


def test_mouse_buttons(state):
    state.mouse_down(1)
    assert 1 in state.mouse_buttons
    state.mouse_up(1)
    assert state.mouse_buttons == set()
    state.mouse_down(99)
    assert state.mouse_buttons == set()


def test_mouse_wheel_maps_to_extra_buttons(state):
    state.mouse_wheel(-1)
    assert state.mouse_buttons == {MOUSE_BUTTON_X1}
    state.mouse_wheel(1)
    assert state.mouse_buttons == {MOUSE_BUTTON_X1, MOUSE_BUTTON_X2}


def test_handle_key_events(state):
    state.handle_event(pygame.event.Event(pygame.KEYDOWN, scancode=KEY_LEFT, key=0, mod=0, unicode=""))
    assert state.is_control(Control.LEFT) is True
    state.handle_event(pygame.event.Event(pygame.KEYUP, scancode=KEY_LEFT, key=0, mod=0, unicode=""))
    assert state.is_control(Control.LEFT) is False


def test_handle_joystick_events(state):
    state.handle_event(pygame.event.Event(pygame.JOYBUTTONDOWN, button=2, joy=0, instance_id=0))
    assert state.is_control(Control.JUMP) is True
    state.handle_event(pygame.event.Event(pygame.JOYAXISMOTION, axis=JOYPAD_AXIS_X, value=-1.0, joy=0, instance_id=0))
    assert state.is_control(Control.LEFT) is True


def test_handle_mouse_motion(state):
    state.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(12, 34), rel=(0, 0), buttons=(0, 0, 0)))
    assert state.mouse_position == (12, 34)


def test_handle_quit_raises(state):
    with pytest.raises(QuitRequested):
        state.handle_event(pygame.event.Event(pygame.QUIT))