import pytest

from rsdkit.input import (
    AXIS_MAX,
    AXIS_MIN,
    Button,
    ControllerButton,
    ControllerState,
    Deadzones,
    HapticID,
    InputButton,
    InputData,
    InputState,
    axis_delta,
    controller_pressed,
)

KEYS = [10, 11, 12, 13, 20, 21, 22, 30, 40]
PADS = [
    ControllerButton.DPAD_UP,
    ControllerButton.DPAD_DOWN,
    ControllerButton.DPAD_LEFT,
    ControllerButton.DPAD_RIGHT,
    ControllerButton.A,
    ControllerButton.B,
    ControllerButton.X,
    ControllerButton.START,
    ControllerButton.GUIDE,
]


def make_state():
    return InputState(KEYS, PADS)


def test_axis_delta_extremes():
    assert axis_delta(AXIS_MAX) == 1.0
    assert axis_delta(AXIS_MIN) == -1.0
    assert axis_delta(0) == 0.0


def test_axis_delta_is_monotonic():
    values = [axis_delta(v) for v in range(AXIS_MIN, AXIS_MAX + 1, 997)]
    assert values == sorted(values)


def test_input_button_held_and_released():
    button = InputButton()
    button.set_held()
    assert button.press and button.hold
    button.set_held()
    assert not button.press and button.hold and button.down
    button.set_released()
    assert not button.press and not button.hold and not button.down


def test_controller_raw_button():
    pad = ControllerState(buttons={ControllerButton.A})
    assert controller_pressed(pad, ControllerButton.A)
    assert not controller_pressed(pad, ControllerButton.B)


def test_dpad_from_left_stick():
    pad = ControllerState(left_y=AXIS_MIN)
    assert controller_pressed(pad, ControllerButton.DPAD_UP)
    assert not controller_pressed(pad, ControllerButton.DPAD_DOWN)


def test_stick_within_deadzone_not_pressed():
    pad = ControllerState(left_x=AXIS_MAX // 10)
    assert not controller_pressed(pad, ControllerButton.DPAD_RIGHT)
    pad = ControllerState(left_x=AXIS_MAX)
    assert controller_pressed(pad, ControllerButton.DPAD_RIGHT)


def test_lstick_left_reads_positive_axis():
    pad = ControllerState(left_x=AXIS_MAX)
    assert controller_pressed(pad, ControllerButton.LSTICK_LEFT)
    assert not controller_pressed(pad, ControllerButton.LSTICK_RIGHT)


def test_triggers_use_deadzones():
    pad = ControllerState(trigger_left=AXIS_MAX)
    assert controller_pressed(pad, ControllerButton.ZL)
    assert not controller_pressed(pad, ControllerButton.ZR)
    assert not controller_pressed(pad, ControllerButton.ZL, Deadzones(left_trigger=1.0))


def test_virtual_button_not_raw():
    pad = ControllerState(buttons={ControllerButton.ZL})
    assert not controller_pressed(pad, ControllerButton.ZL)


def test_keyboard_press_then_hold():
    state = make_state()
    state.process({KEYS[Button.UP]})
    assert state[Button.UP].press and state[Button.UP].hold
    assert state[Button.ANY].press
    state.process({KEYS[Button.UP]})
    assert not state[Button.UP].press and state[Button.UP].hold
    state.process(set())
    assert not state[Button.UP].hold
    assert not state[Button.ANY].hold


def test_controller_switches_mode():
    state = make_state()
    pad = ControllerState(buttons={ControllerButton.A})
    state.process(set(), [pad])
    assert state.using_controller
    state.process(set(), [pad])
    assert state[Button.A].hold
    state.process({KEYS[Button.B]}, [])
    assert not state.using_controller


def test_check_key_press_and_down_flags():
    state = make_state()
    state.process({KEYS[Button.LEFT], KEYS[Button.START]})
    data = state.check_key_press(InputData(), 0xFF)
    assert data.left and data.start and not data.right
    assert state.any_press
    held = state.check_key_down(InputData(), 0x04)
    assert held.left and not held.start


def test_check_key_press_respects_mask():
    state = make_state()
    state.process({KEYS[Button.A]})
    data = InputData(up=True)
    state.check_key_press(data, 0x10)
    assert data.A and data.up


def test_touch_counts_as_any_press():
    state = make_state()
    state.touch_down = [False, True]
    state.check_key_press(InputData(), 0x80)
    assert state.any_press


def test_mapping_length_validated():
    with pytest.raises(ValueError):
        InputState([1, 2, 3], PADS)


def test_haptic_queue():
    state = make_state()
    assert state.take_haptic_effect() == HapticID.NONE
    state.queue_haptic_effect(HapticID.ALERT1)
    assert state.take_haptic_effect() == 63
    assert state.take_haptic_effect() == HapticID.NONE


def test_haptics_disabled():
    state = make_state()
    state.haptics_enabled = False
    state.queue_haptic_effect(HapticID.WEAPON1)
    assert state.take_haptic_effect() == HapticID.NONE