"""Line-based INI configuration files with sections, typed values and comments."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike
from typing import Iterable, Optional, Union

_C_SPACE = " \t\n\v\f\r"

_SECTION_RE = re.compile(r"\[([^\[\]]+)")
_KEY_RE = re.compile(r"([^;=]+)=")
_VALUE_RE = re.compile(r"[^\t\r\n]+")
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def _parse_pair(line: str) -> Optional[tuple[str, str]]:
    """Split ``key=value``; the key keeps any spaces before the '='."""
    key_match = _KEY_RE.match(line)
    if not key_match:
        return None
    rest = line[key_match.end():]
    value_match = _VALUE_RE.match(rest.lstrip(_C_SPACE)) or _VALUE_RE.match(rest)
    if not value_match:
        return None
    return key_match.group(1), value_match.group(0)


class ItemType(IntEnum):
    STRING = 0
    INT = 1
    FLOAT = 2
    BOOL = 3
    COMMENT = 4


@dataclass
class ConfigItem:
    section: str = ""
    key: str = ""
    value: str = ""
    has_section: bool = False
    type: ItemType = ItemType.STRING


class IniParser:
    """An ordered list of configuration items that can be read and written."""

    def __init__(self, items: Optional[Iterable[ConfigItem]] = None):
        self.items: list[ConfigItem] = list(items) if items is not None else []

    @classmethod
    def parse(cls, text: str) -> "IniParser":
        items = []
        section = ""
        has_section = False
        for line in text.split("\n"):
            if line.startswith("#"):
                continue
            section_match = _SECTION_RE.match(line)
            if section_match:
                section = section_match.group(1)
                has_section = True
                continue
            pair = _parse_pair(line)
            if pair is not None:
                key, value = pair
                items.append(ConfigItem(section if has_section else "", key, value, has_section))
        return cls(items)

    @classmethod
    def load(cls, path: Union[str, PathLike]) -> "IniParser":
        with open(path, encoding="utf-8", newline="") as handle:
            return cls.parse(handle.read())

    def _find(self, section: str, key: str) -> Optional[ConfigItem]:
        return next(
            (item for item in self.items if item.section == section and item.key == key),
            None,
        )

    def get_string(self, section, key, default=None):
        item = self._find(section, key)
        return item.value if item is not None else default

    def get_int(self, section, key, default=None):
        item = self._find(section, key)
        return _atoi(item.value) if item is not None else default

    def get_float(self, section, key, default=None):
        item = self._find(section, key)
        return _to_f32(_atof(item.value)) if item is not None else default

    def get_bool(self, section, key, default=None):
        item = self._find(section, key)
        if item is None:
            return default
        return item.value.lower() == "true" or item.value == "1"

    def _set(self, section: str, key: str, value: str, item_type: ItemType) -> None:
        item = self._find(section, key)
        if item is None:
            item = ConfigItem()
            self.items.append(item)
        item.section = section
        item.key = key
        item.value = value
        item.type = item_type

    def set_string(self, section, key, value):
        self._set(section, key, str(value), ItemType.STRING)

    def set_int(self, section, key, value):
        self._set(section, key, str(int(value)), ItemType.INT)

    def set_float(self, section, key, value):
        self._set(section, key, f"{_to_f32(float(value)):.6f}", ItemType.FLOAT)

    def set_bool(self, section, key, value):
        self._set(section, key, "true" if value else "false", ItemType.BOOL)

    def set_comment(self, section, key, comment):
        self._set(section, key, str(comment), ItemType.COMMENT)

    @staticmethod
    def _render(item: ConfigItem) -> str:
        if item.type == ItemType.COMMENT:
            return f"; {item.value}\n"
        return f"{item.key}={item.value}\n"

    def dumps(self) -> str:
        """Render sectionless items first, then each section in order of appearance."""
        head = "".join(self._render(item) for item in self.items if item.section == "") + "\n"
        sections = dict.fromkeys(item.section for item in self.items if item.section)
        blocks = [
            f"[{name}]\n" + "".join(self._render(item) for item in self.items if item.section == name)
            for name in sections
        ]
        return head + "\n".join(blocks)

    def write(self, path: Union[str, PathLike]) -> None:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(self.dumps())