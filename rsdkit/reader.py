"""Reading game files from a data folder or from an encrypted data archive."""

from __future__ import annotations

import struct
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import BinaryIO, Iterable, Mapping, Optional, Union

KEY_A = b"4RaS9D7KaEbxcp2o5r6t"
KEY_B = b"3tRaUxLmEaSn"

BYTECODE_MOBILE_PATH = "Data/Scripts/ByteCode/GlobalCode.bin"
BYTECODE_PC_PATH = "Data/Scripts/ByteCode/GS000.bin"

_U32 = struct.Struct("<I")
_HEADER = struct.Struct("<IH")

StrPath = Union[str, PathLike]


class BytecodeMode(Enum):
    MOBILE = "mobile"
    PC = "pc"


class ArchiveError(ValueError):
    """The data archive is malformed or truncated."""


def _swap_nybbles(value: int) -> int:
    return ((value & 0x0F) << 4) | (value >> 4)


class KeyStream:
    """The rolling key used to encrypt one file inside a data archive."""

    def __init__(self, file_size: int):
        self.file_size = file_size
        self.reset()

    def reset(self) -> None:
        """Return to the state at the first byte of the file."""
        self.string_no = (self.file_size & 0x1FC) >> 2
        self.pos_b = self.string_no % 9 + 1
        self.pos_a = self.string_no % self.pos_b + 1
        self.nybble_swap = False

    def advance(self) -> None:
        """Move the key on by one byte."""
        self.pos_a += 1
        self.pos_b += 1
        if self.pos_a <= 19 or self.pos_b <= 11:
            if self.pos_a > 19:
                self.pos_a = 1
                self.nybble_swap = not self.nybble_swap
            if self.pos_b > 11:
                self.pos_b = 1
                self.nybble_swap = not self.nybble_swap
        else:
            self.string_no = (self.string_no + 1) & 0x7F
            if self.nybble_swap:
                self.nybble_swap = False
                self.pos_a = self.string_no % 12 + 6
                self.pos_b = self.string_no % 5 + 4
            else:
                self.nybble_swap = True
                self.pos_a = self.string_no % 15 + 3
                self.pos_b = self.string_no % 7 + 1

    def decrypt(self, data: bytes) -> bytes:
        out = bytearray()
        for byte in data:
            value = byte ^ KEY_B[self.pos_b] ^ self.string_no
            if self.nybble_swap:
                value = _swap_nybbles(value)
            out.append(value ^ KEY_A[self.pos_a])
            self.advance()
        return bytes(out)

    def encrypt(self, data: bytes) -> bytes:
        out = bytearray()
        for byte in data:
            value = byte ^ KEY_A[self.pos_a]
            if self.nybble_swap:
                value = _swap_nybbles(value)
            out.append(value ^ KEY_B[self.pos_b] ^ self.string_no)
            self.advance()
        return bytes(out)


class FileReader:
    """A readable view of one file, plain or encrypted, with its own position."""

    def __init__(self, handle: BinaryIO, name: str, offset: int, size: int,
                 keystream: Optional[KeyStream] = None, is_mod: bool = False):
        self.name = name
        self.offset = offset
        self.size = size
        self.is_mod = is_mod
        self._handle = handle
        self._keys = keystream
        self._position = 0
        handle.seek(offset)

    @property
    def encrypted(self) -> bool:
        return self._keys is not None

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all that remain if negative)."""
        remaining = max(self.size - self._position, 0)
        count = remaining if size < 0 else min(size, remaining)
        raw = self._handle.read(count)
        if len(raw) < count:
            raise ArchiveError(f"unexpected end of data while reading '{self.name}'")
        self._position += len(raw)
        return self._keys.decrypt(raw) if self._keys is not None else raw

    def seek(self, position: int) -> None:
        if position < 0:
            raise ValueError("negative file position")
        if self._keys is not None:
            self._keys.reset()
            for _ in range(position):
                self._keys.advance()
        self._handle.seek(self.offset + position)
        self._position = position

    def tell(self) -> int:
        return self._position

    def at_end(self) -> bool:
        return self._position >= self.size

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> "FileReader":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _read_exact(handle: BinaryIO, count: int) -> bytes:
    data = handle.read(count)
    if len(data) < count:
        raise ArchiveError("unexpected end of archive")
    return data


def _read_u32(handle: BinaryIO) -> int:
    return _U32.unpack(_read_exact(handle, 4))[0]


def _read_directory_name(handle: BinaryIO) -> str:
    length = _read_exact(handle, 1)[0]
    mask = 0xFF - length
    return bytes(byte ^ mask for byte in _read_exact(handle, length)).decode("latin-1")


def _read_file_name(handle: BinaryIO) -> str:
    length = _read_exact(handle, 1)[0]
    return bytes(byte ^ 0xFF for byte in _read_exact(handle, length)).decode("latin-1")


class Archive:
    """A data archive: a directory table followed by encrypted file entries."""

    def __init__(self, path: StrPath):
        self.path = Path(path)
        with open(self.path, "rb") as handle:
            self.header_size, dir_count = _HEADER.unpack(_read_exact(handle, _HEADER.size))
            self.directories: list[tuple[str, int]] = [
                (_read_directory_name(handle), _read_u32(handle)) for _ in range(dir_count)
            ]
            self.size = handle.seek(0, 2)

    def locate(self, name: str) -> Optional[tuple[int, int]]:
        """Return (data offset, size) of a file, or None if the archive lacks it."""
        directory, slash, file_name = name.rpartition("/")
        directory = (directory + slash).lower()
        file_name = file_name.lower()

        entries = iter(enumerate(self.directories))
        found = next(((i, offset) for i, (entry, offset) in entries if entry.lower() == directory), None)
        if found is None:
            return None
        index, dir_offset = found
        if index + 1 < len(self.directories):
            end = self.directories[index + 1][1] + self.header_size
        else:
            end = self.size

        with open(self.path, "rb") as handle:
            position = dir_offset + self.header_size
            while True:
                handle.seek(position)
                entry_name = _read_file_name(handle)
                size = _read_u32(handle)
                data_start = handle.tell()
                if entry_name.lower() == file_name:
                    return (data_start, size) if data_start < end else None
                position = data_start + size
                if position >= end:
                    return None

    def contains(self, name: str) -> bool:
        return self.locate(name) is not None

    def open(self, name: str) -> FileReader:
        location = self.locate(name)
        if location is None:
            raise FileNotFoundError(f"'{name}' is not in archive '{self.path}'")
        offset, size = location
        return FileReader(open(self.path, "rb"), name, offset, size, KeyStream(size))


class FileSystem:
    """Resolves game paths through mod overrides, an archive or the data folder."""

    def __init__(self, base_path: StrPath = ".", data_file: Optional[StrPath] = None,
                 mod_maps: Iterable[Mapping[str, str]] = (), force_use_scripts: bool = False):
        self.base_path = Path(base_path)
        self.mod_maps = list(mod_maps)
        self.force_use_scripts = force_use_scripts
        self.archive: Optional[Archive] = None
        if data_file is not None:
            archive_path = self.base_path / data_file
            if archive_path.is_file():
                self.archive = Archive(archive_path)

    @property
    def using_data_file(self) -> bool:
        return self.archive is not None

    def _resolve(self, path: str) -> tuple[Optional[Path], bool]:
        """Return (folder path, is_mod); a folder path of None means the archive."""
        lowered = path.lower()
        for mapping in self.mod_maps:
            if lowered in mapping:
                return Path(mapping[lowered]), True
        if self.force_use_scripts and path.startswith("Data/Scripts/") and path.endswith("txt"):
            return self.base_path / path[len("Data/"):], True
        if self.archive is not None:
            return None, False
        return self.base_path / path, False

    def open(self, path: str) -> FileReader:
        target, is_mod = self._resolve(path)
        if target is None:
            return self.archive.open(path)
        handle = open(target, "rb")
        size = handle.seek(0, 2)
        return FileReader(handle, str(target), 0, size, None, is_mod)

    def exists(self, path: str) -> bool:
        target, _ = self._resolve(path)
        if target is None:
            return self.archive.contains(path)
        return target.is_file()

    def bytecode_mode(self) -> Optional[BytecodeMode]:
        if self.exists(BYTECODE_MOBILE_PATH):
            return BytecodeMode.MOBILE
        if self.exists(BYTECODE_PC_PATH):
            return BytecodeMode.PC
        return None