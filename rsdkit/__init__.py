"""Game engine building blocks: INI config, trig tables, palettes, data archives, input, players, objects and mods."""

__version__ = "1.3.2"
__all__ = ["ini", "trig", "palette", "reader", "input", "player", "objects", "mods"]