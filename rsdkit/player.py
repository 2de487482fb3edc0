"""Player control state and the delayed input buffer used by a following sidekick."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional

from rsdkit.input import InputData

PLAYER_COUNT = 2
_BUFFER_MASK = 0xFFFF


class ControlMode(IntEnum):
    NONE = -1
    NORMAL = 0
    SIDEKICK = 1


@dataclass
class Player:
    entity_no: int = 0
    x_pos: int = 0
    y_pos: int = 0
    x_velocity: int = 0
    y_velocity: int = 0
    speed: int = 0
    screen_x_pos: int = 0
    screen_y_pos: int = 0
    angle: int = 0
    timer: int = 0
    look_pos: int = 0
    values: list[int] = field(default_factory=lambda: [0] * 8)
    collision_mode: int = 0
    skidding: int = 0
    pushing: int = 0
    collision_plane: int = 0
    control_mode: int = ControlMode.NORMAL
    control_lock: int = 0
    top_speed: int = 0
    acceleration: int = 0
    deceleration: int = 0
    air_acceleration: int = 0
    air_deceleration: int = 0
    gravity_strength: int = 0
    jump_strength: int = 0
    jump_cap: int = 0
    rolling_acceleration: int = 0
    rolling_deceleration: int = 0
    visible: bool = False
    tile_collisions: bool = False
    object_interactions: bool = False
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    jump_press: bool = False
    jump_hold: bool = False
    follow_player1: bool = False
    track_scroll: bool = False
    gravity: int = 0
    water: bool = False
    flailing: list[int] = field(default_factory=lambda: [0] * 3)
    animation_file: Optional[Any] = None
    bound_entity: Optional[Any] = None


_BUFFERED = ("up", "down", "left", "right", "jump_press", "jump_hold")


class PlayerControl:
    """Applies input to players and keeps 16 frames of history for sidekicks."""

    def __init__(self):
        self.buffers: dict[str, int] = dict.fromkeys(_BUFFERED, 0)

    def _record(self, player: Player) -> None:
        for name in _BUFFERED:
            bit = 1 if getattr(player, name) else 0
            self.buffers[name] = ((self.buffers[name] << 1) | bit) & _BUFFER_MASK

    def process(self, player: Player, key_down: InputData, key_press: InputData) -> Player:
        """Update the player's control flags for one frame according to its mode."""
        mode = player.control_mode
        if mode == ControlMode.SIDEKICK:
            for name in _BUFFERED:
                setattr(player, name, bool(self.buffers[name] >> 15))
        elif mode == ControlMode.NONE:
            self._record(player)
        else:
            player.up = key_down.up
            player.down = key_down.down
            if not key_down.left or not key_down.right:
                player.left = key_down.left
                player.right = key_down.right
            else:
                player.left = False
                player.right = False
            player.jump_hold = bool(key_down.C or key_down.B or key_down.A)
            player.jump_press = bool(key_press.C or key_press.B or key_press.A)
            self._record(player)
        return player