"""Fixed-point trigonometry lookup tables and angle helpers."""

from __future__ import annotations

import math
from array import array

_ANGLES = [i / 256.0 * math.pi for i in range(0x200)]


def _fixed_table(func, scale, exact):
    table = [int(func(angle) * scale) for angle in _ANGLES]
    for index, value in exact.items():
        table[index] = value
    return table


def _single_precision_table(func, scale, exact):
    arguments = array("f", _ANGLES)
    results = array("f", (func(angle) for angle in arguments))
    table = [int(value * scale) for value in results]
    for index, value in exact.items():
        table[index] = value
    return table


SIN_M_TABLE = tuple(
    _fixed_table(math.sin, 4096.0, {0x00: 0, 0x80: 0x1000, 0x100: 0, 0x180: -0x1000})
)
COS_M_TABLE = tuple(
    _fixed_table(math.cos, 4096.0, {0x00: 0x1000, 0x80: 0, 0x100: -0x1000, 0x180: 0})
)

SIN512_TABLE = tuple(
    _single_precision_table(math.sin, 512.0, {0x00: 0, 0x80: 0x200, 0x100: 0, 0x180: -0x200})
)
COS512_TABLE = tuple(
    _single_precision_table(math.cos, 512.0, {0x00: 0x200, 0x80: 0, 0x100: -0x200, 0x180: 0})
)

SIN256_TABLE = tuple(value >> 1 for value in SIN512_TABLE[::2])
COS256_TABLE = tuple(value >> 1 for value in COS512_TABLE[::2])


def _build_arctan_table() -> bytes:
    angles = array("f", (math.atan2(y, x) for x in range(0x100) for y in range(0x100)))
    factor = array("f", [40.743664])[0]
    scaled = array("f", (angle * factor for angle in angles))
    return bytes(int(value) for value in scaled)


ARCTAN256_TABLE = _build_arctan_table()


def _wrap(angle: int, period: int) -> int:
    if angle < 0:
        angle = period - angle
    return angle & (period - 1)


def sin512(angle: int) -> int:
    return SIN512_TABLE[_wrap(angle, 0x200)]


def cos512(angle: int) -> int:
    return COS512_TABLE[_wrap(angle, 0x200)]


def sin256(angle: int) -> int:
    return SIN256_TABLE[_wrap(angle, 0x100)]


def cos256(angle: int) -> int:
    return COS256_TABLE[_wrap(angle, 0x100)]


def arctan_lookup(x: int, y: int) -> int:
    """Angle of the vector (x, y) on a 256-step circle, as a byte."""
    ax, ay = abs(x), abs(y)
    while max(ax, ay) > 0xFF:
        ax >>= 4
        ay >>= 4
    value = ARCTAN256_TABLE[(ax << 8) + ay]
    if x <= 0:
        if y <= 0:
            return (value - 0x80) & 0xFF
        return (-0x80 - value) & 0xFF
    if y <= 0:
        return -value & 0xFF
    return value