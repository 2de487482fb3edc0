"""Button state tracking for keyboard and game controllers, with haptic queueing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional, Sequence

AXIS_MAX = 32767
AXIS_MIN = -32768


class Button(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    A = 4
    B = 5
    C = 6
    START = 7
    ANY = 8


BUTTON_COUNT = len(Button)


class ControllerButton(IntEnum):
    A = 0
    B = 1
    X = 2
    Y = 3
    BACK = 4
    GUIDE = 5
    START = 6
    LEFT_STICK = 7
    RIGHT_STICK = 8
    LEFT_SHOULDER = 9
    RIGHT_SHOULDER = 10
    DPAD_UP = 11
    DPAD_DOWN = 12
    DPAD_LEFT = 13
    DPAD_RIGHT = 14
    MAX = 15
    ZL = 16
    ZR = 17
    LSTICK_UP = 18
    LSTICK_DOWN = 19
    LSTICK_LEFT = 20
    LSTICK_RIGHT = 21
    RSTICK_UP = 22
    RSTICK_DOWN = 23
    RSTICK_LEFT = 24
    RSTICK_RIGHT = 25
    MAX_EXTRA = 26


class HapticID(IntEnum):
    NONE = -2
    STOP = -1
    SHARP_CLICK_100 = 0
    SHARP_CLICK_66 = 1
    SHARP_CLICK_33 = 2
    STRONG_CLICK_100 = 3
    STRONG_CLICK_66 = 4
    STRONG_CLICK_33 = 5
    BUMP_100 = 6
    BUMP_66 = 7
    BUMP_33 = 8
    BOUNCE_100 = 9
    BOUNCE_66 = 10
    BOUNCE_33 = 11
    DOUBLE_SHARP_CLICK_100 = 12
    DOUBLE_SHARP_CLICK_66 = 13
    DOUBLE_SHARP_CLICK_33 = 14
    DOUBLE_STRONG_CLICK_100 = 15
    DOUBLE_STRONG_CLICK_66 = 16
    DOUBLE_STRONG_CLICK_33 = 17
    DOUBLE_BUMP_100 = 18
    DOUBLE_BUMP_66 = 19
    DOUBLE_BUMP_33 = 20
    TRIPLE_STRONG_CLICK_100 = 21
    TRIPLE_STRONG_CLICK_66 = 22
    TRIPLE_STRONG_CLICK_33 = 23
    TICK_100 = 24
    TICK_66 = 25
    TICK_33 = 26
    LONG_BUZZ_100 = 27
    LONG_BUZZ_66 = 28
    LONG_BUZZ_33 = 29
    SHORT_BUZZ_100 = 30
    SHORT_BUZZ_66 = 31
    SHORT_BUZZ_33 = 32
    LONG_TRANSITION_RAMP_UP_100 = 33
    LONG_TRANSITION_RAMP_UP_66 = 34
    LONG_TRANSITION_RAMP_UP_33 = 35
    SHORT_TRANSITION_RAMP_UP_100 = 36
    SHORT_TRANSITION_RAMP_UP_66 = 37
    SHORT_TRANSITION_RAMP_UP_33 = 38
    LONG_TRANSITION_RAMP_DOWN_100 = 39
    LONG_TRANSITION_RAMP_DOWN_66 = 40
    LONG_TRANSITION_RAMP_DOWN_33 = 41
    SHORT_TRANSITION_RAMP_DOWN_100 = 42
    SHORT_TRANSITION_RAMP_DOWN_66 = 43
    SHORT_TRANSITION_RAMP_DOWN_33 = 44
    FAST_PULSE_100 = 45
    FAST_PULSE_66 = 46
    FAST_PULSE_33 = 47
    FAST_PULSING_100 = 48
    FAST_PULSING_66 = 49
    FAST_PULSING_33 = 50
    SLOW_PULSE_100 = 51
    SLOW_PULSE_66 = 52
    SLOW_PULSE_33 = 53
    SLOW_PULSING_100 = 54
    SLOW_PULSING_66 = 55
    SLOW_PULSING_33 = 56
    TRANSITION_BUMP_100 = 57
    TRANSITION_BUMP_66 = 58
    TRANSITION_BUMP_33 = 59
    TRANSITION_BOUNCE_100 = 60
    TRANSITION_BOUNCE_66 = 61
    TRANSITION_BOUNCE_33 = 62
    ALERT1 = 63
    ALERT2 = 64
    ALERT3 = 65
    ALERT4 = 66
    ALERT5 = 67
    ALERT6 = 68
    ALERT7 = 69
    ALERT8 = 70
    ALERT9 = 71
    ALERT10 = 72
    EXPLOSION1 = 73
    EXPLOSION2 = 74
    EXPLOSION3 = 75
    EXPLOSION4 = 76
    EXPLOSION5 = 77
    EXPLOSION6 = 78
    EXPLOSION7 = 79
    EXPLOSION8 = 80
    EXPLOSION9 = 81
    EXPLOSION10 = 82
    WEAPON1 = 83
    WEAPON2 = 84
    WEAPON3 = 85
    WEAPON4 = 86
    WEAPON5 = 87
    WEAPON6 = 88
    WEAPON7 = 89
    WEAPON8 = 90
    WEAPON9 = 91
    WEAPON10 = 92
    IMPACT_WOOD_100 = 93
    IMPACT_WOOD_66 = 94
    IMPACT_WOOD_33 = 95
    IMPACT_METAL_100 = 96
    IMPACT_METAL_66 = 97
    IMPACT_METAL_33 = 98
    IMPACT_RUBBER_100 = 99
    IMPACT_RUBBER_66 = 100
    IMPACT_RUBBER_33 = 101
    TEXTURE1 = 102
    TEXTURE2 = 103
    TEXTURE3 = 104
    TEXTURE4 = 105
    TEXTURE5 = 106
    TEXTURE6 = 107
    TEXTURE7 = 108
    TEXTURE8 = 109
    TEXTURE9 = 110
    TEXTURE10 = 111
    ENGINE1_100 = 112
    ENGINE1_66 = 113
    ENGINE1_33 = 114
    ENGINE2_100 = 115
    ENGINE2_66 = 116
    ENGINE2_33 = 117
    ENGINE3_100 = 118
    ENGINE3_66 = 119
    ENGINE3_33 = 120
    ENGINE4_100 = 121
    ENGINE4_66 = 122
    ENGINE4_33 = 123


@dataclass
class InputData:
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    A: bool = False
    B: bool = False
    C: bool = False
    start: bool = False


@dataclass
class InputButton:
    press: bool = False
    hold: bool = False
    key_mapping: int = -1
    controller_mapping: int = -1

    def set_held(self) -> None:
        self.press = not self.hold
        self.hold = True

    def set_released(self) -> None:
        self.press = False
        self.hold = False

    @property
    def down(self) -> bool:
        return self.press or self.hold


@dataclass
class Deadzones:
    left_stick: float = 0.3
    right_stick: float = 0.3
    left_trigger: float = 0.3
    right_trigger: float = 0.3


@dataclass
class ControllerState:
    """A snapshot of one controller: held buttons and raw axis values."""

    buttons: set = field(default_factory=set)
    left_x: int = 0
    left_y: int = 0
    right_x: int = 0
    right_y: int = 0
    trigger_left: int = 0
    trigger_right: int = 0


def axis_delta(value: int) -> float:
    """Map a raw stick axis value to the range -1.0..1.0."""
    if value < 0:
        return -((-value - 1) / (AXIS_MAX + 1 - 1))
    return value / AXIS_MAX


# button -> (axis attribute, direction, deadzone attribute); direction -1 means "below -dz"
_STICK_RULES = {
    ControllerButton.DPAD_UP: ("left_y", -1, "left_stick"),
    ControllerButton.DPAD_DOWN: ("left_y", 1, "left_stick"),
    ControllerButton.DPAD_LEFT: ("left_x", -1, "left_stick"),
    ControllerButton.DPAD_RIGHT: ("left_x", 1, "left_stick"),
    ControllerButton.LSTICK_UP: ("left_y", -1, "left_stick"),
    ControllerButton.LSTICK_DOWN: ("left_y", 1, "left_stick"),
    ControllerButton.LSTICK_LEFT: ("left_x", 1, "left_stick"),
    ControllerButton.LSTICK_RIGHT: ("left_x", -1, "left_stick"),
    ControllerButton.RSTICK_UP: ("right_y", -1, "right_stick"),
    ControllerButton.RSTICK_DOWN: ("right_y", 1, "right_stick"),
    ControllerButton.RSTICK_LEFT: ("right_x", 1, "right_stick"),
    ControllerButton.RSTICK_RIGHT: ("right_x", -1, "right_stick"),
}

_TRIGGER_RULES = {
    ControllerButton.ZL: ("trigger_left", "left_trigger"),
    ControllerButton.ZR: ("trigger_right", "right_trigger"),
}


def controller_pressed(controller: ControllerState, button: int,
                       deadzones: Optional[Deadzones] = None) -> bool:
    """Whether a physical or virtual (stick/trigger) button reads as pressed."""
    zones = deadzones if deadzones is not None else Deadzones()
    if 0 <= button < ControllerButton.MAX and button in controller.buttons:
        return True
    stick = _STICK_RULES.get(button)
    if stick is not None:
        axis, direction, zone = stick
        delta = axis_delta(getattr(controller, axis))
        limit = getattr(zones, zone)
        return delta < -limit if direction < 0 else delta > limit
    trigger = _TRIGGER_RULES.get(button)
    if trigger is not None:
        axis, zone = trigger
        return getattr(controller, axis) / AXIS_MAX > getattr(zones, zone)
    return False


_FLAG_FIELDS = (
    (0x01, "up", Button.UP),
    (0x02, "down", Button.DOWN),
    (0x04, "left", Button.LEFT),
    (0x08, "right", Button.RIGHT),
    (0x10, "A", Button.A),
    (0x20, "B", Button.B),
    (0x40, "C", Button.C),
    (0x80, "start", Button.START),
)


def _mappings(values: Optional[Sequence[int]], name: str) -> list[int]:
    if values is None:
        return [-1] * BUTTON_COUNT
    values = list(values)
    if len(values) != BUTTON_COUNT:
        raise ValueError(f"{name} needs {BUTTON_COUNT} entries, got {len(values)}")
    return values


class InputState:
    """The engine's input devices: mapped buttons, touches and haptics."""

    def __init__(self, key_mappings: Optional[Sequence[int]] = None,
                 controller_mappings: Optional[Sequence[int]] = None):
        keys = _mappings(key_mappings, "key_mappings")
        pads = _mappings(controller_mappings, "controller_mappings")
        self.buttons = [InputButton(key_mapping=k, controller_mapping=c) for k, c in zip(keys, pads)]
        self.using_controller = False
        self.deadzones = Deadzones()
        self.touch_down: list[bool] = []
        self.any_press = False
        self.haptics_enabled = True
        self.haptic_effect = HapticID.NONE

    def __getitem__(self, button: Button) -> InputButton:
        return self.buttons[button]

    def process(self, keyboard: Iterable[int] = (),
                controllers: Iterable[ControllerState] = ()) -> None:
        """Update button states from the held keys and controller snapshots."""
        keys = set(keyboard)
        pads = list(controllers)
        any_button = self.buttons[Button.ANY]

        def pad_pressed(button: int) -> bool:
            return any(controller_pressed(pad, button, self.deadzones) for pad in pads)

        for button in self.buttons[:Button.ANY]:
            if self.using_controller:
                held = pad_pressed(button.controller_mapping)
            else:
                held = button.key_mapping in keys
            if held:
                button.set_held()
                if not any_button.hold:
                    any_button.set_held()
            elif button.hold:
                button.set_released()

        if any(button.key_mapping in keys for button in self.buttons):
            self.using_controller = False
        elif not self.using_controller:
            any_button.set_released()

        if any(pad_pressed(code) for code in range(ControllerButton.MAX)):
            self.using_controller = True
        elif self.using_controller:
            any_button.set_released()

    def check_key_press(self, data: InputData, flags: int = 0xFF) -> InputData:
        """Copy the press state of the flagged buttons into ``data``."""
        for mask, name, button in _FLAG_FIELDS:
            if flags & mask:
                setattr(data, name, self.buttons[button].press)
        if flags & 0x80:
            self.any_press = self.buttons[Button.ANY].press or any(self.touch_down)
        return data

    def check_key_down(self, data: InputData, flags: int = 0xFF) -> InputData:
        """Copy the hold state of the flagged buttons into ``data``."""
        for mask, name, button in _FLAG_FIELDS:
            if flags & mask:
                setattr(data, name, self.buttons[button].hold)
        return data

    def queue_haptic_effect(self, haptic_id: int) -> None:
        if self.haptics_enabled:
            self.haptic_effect = haptic_id

    def take_haptic_effect(self) -> int:
        """Return the queued effect and clear the queue."""
        effect = self.haptic_effect
        self.haptic_effect = HapticID.NONE
        return effect