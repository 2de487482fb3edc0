"""Indexed colour palettes with packed 16-bit and 24-bit representations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum

PALETTE_COUNT = 0x8
PALETTE_SIZE = 0x100


class RenderType(IntEnum):
    SOFTWARE = 0
    HARDWARE = 1


@dataclass
class PaletteEntry:
    r: int = 0
    g: int = 0
    b: int = 0


def rgb888_to_rgb565(r: int, g: int, b: int) -> int:
    return (b >> 3) | ((g >> 2) << 5) | ((r >> 3) << 11)


def rgb888_to_rgb5551(r: int, g: int, b: int) -> int:
    return ((b >> 3) << 1) | ((g >> 3) << 6) | ((r >> 3) << 11)


class PaletteBank:
    """Eight palettes of 256 colours, a per-line palette selection and fade state."""

    SCREEN_HEIGHT = 240

    def __init__(self, render_type=RenderType.SOFTWARE):
        self.render_type = RenderType(render_type)
        self.full_palette = [[0] * PALETTE_SIZE for _ in range(PALETTE_COUNT)]
        self.full_palette32 = [
            [PaletteEntry() for _ in range(PALETTE_SIZE)] for _ in range(PALETTE_COUNT)
        ]
        self.line_buffer = [0] * self.SCREEN_HEIGHT
        self.active_id = 0
        self.fade_mode = 0
        self.fade_r = 0
        self.fade_g = 0
        self.fade_b = 0
        self.fade_a = 0
        self.palette_mode = 0
        self.tex_palette_num = 0

    @property
    def active_palette(self) -> list[int]:
        return self.full_palette[self.active_id]

    @property
    def active_palette32(self) -> list[PaletteEntry]:
        return self.full_palette32[self.active_id]

    def pack(self, r: int, g: int, b: int) -> int:
        if self.render_type == RenderType.HARDWARE:
            return rgb888_to_rgb5551(r, g, b)
        return rgb888_to_rgb565(r, g, b)

    def set_entry(self, palette_index: int, index: int, r: int, g: int, b: int) -> None:
        """Set one colour; a palette index of -1 (or 0xFF) means the active palette."""
        index &= 0xFF
        if palette_index in (-1, 0xFF):
            colours, entries = self.active_palette, self.active_palette32
        elif 0 <= palette_index < PALETTE_COUNT:
            colours, entries = self.full_palette[palette_index], self.full_palette32[palette_index]
        else:
            raise IndexError(f"palette index {palette_index} out of range")
        colours[index] = self.pack(r, g, b)
        entries[index] = PaletteEntry(r, g, b)
        if self.render_type == RenderType.HARDWARE and index:
            colours[index] |= 1

    def set_active(self, palette_id: int, start_line: int, end_line: int) -> None:
        if self.render_type == RenderType.SOFTWARE:
            if palette_id < PALETTE_COUNT:
                for line in range(max(start_line, 0), min(end_line, self.SCREEN_HEIGHT)):
                    self.line_buffer[line] = palette_id
            self.active_id = self.line_buffer[0]
        elif palette_id < PALETTE_COUNT:
            self.tex_palette_num = palette_id

    def copy(self, src: int, dest: int) -> None:
        if src < PALETTE_COUNT and dest < PALETTE_COUNT:
            self.full_palette[dest] = list(self.full_palette[src])
            self.full_palette32[dest] = [replace(entry) for entry in self.full_palette32[src]]

    def rotate(self, start_index: int, end_index: int, right: bool) -> None:
        """Cycle the active palette's colours between two indices inclusive."""
        colours, entries = self.active_palette, self.active_palette32
        if start_index >= end_index:
            if right:
                colours[start_index] = colours[end_index]
                entries[start_index] = replace(entries[end_index])
            else:
                colours[end_index] = colours[start_index]
                entries[end_index] = replace(entries[start_index])
            return
        span = slice(start_index, end_index + 1)
        for values in (colours, entries):
            segment = values[span]
            values[span] = segment[-1:] + segment[:-1] if right else segment[1:] + segment[:1]

    def set_fade(self, r: int, g: int, b: int, alpha: int) -> None:
        self.fade_mode = 1
        self.fade_r = r
        self.fade_g = g
        self.fade_b = b
        self.fade_a = min(alpha, 0xFF)

    def set_limited_fade(self, palette_id, r, g, b, alpha, start_index, end_index) -> None:
        """Blend a range of the given palette towards a colour and make it active."""
        if palette_id >= PALETTE_COUNT:
            return
        self.palette_mode = 1
        self.active_id = palette_id
        if alpha >= 0x100:
            alpha = 0xFF
        if start_index >= end_index:
            return
        inverse = 0xFF - alpha
        colours, entries = self.active_palette, self.active_palette32
        for index in range(start_index, end_index):
            entry = entries[index]
            nr = ((r * alpha + inverse * entry.r) & 0xFFFF) >> 8
            ng = ((g * alpha + inverse * entry.g) & 0xFFFF) >> 8
            nb = ((b * alpha + inverse * entry.b) & 0xFFFF) >> 8
            colours[index] = self.pack(nr, ng, nb)
            if self.render_type == RenderType.HARDWARE:
                entries[index] = PaletteEntry(nr, ng, nb)
                colours[index] |= 1

    def load_act(self, data: bytes, palette_id: int, start_palette_index: int,
                 start_index: int, end_index: int) -> None:
        """Load RGB triples ``start_index``..``end_index`` of an ACT palette file."""
        if not 0 <= palette_id < PALETTE_COUNT:
            palette_id = 0
        target = palette_id if palette_id else -1
        if start_index >= end_index:
            return
        chunk = bytes(data[3 * start_index: 3 * end_index])
        if len(chunk) < 3 * (end_index - start_index):
            raise ValueError("palette data too short for the requested range")
        triples = iter(chunk)
        for index, (r, g, b) in enumerate(zip(triples, triples, triples), start_palette_index):
            self.set_entry(target, index, r, g, b)