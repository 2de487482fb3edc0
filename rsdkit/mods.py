"""Discovering, configuring and ordering game mods that override data files."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Optional, Sequence, Union

from rsdkit.ini import IniParser

StrPath = Union[str, PathLike]

MOD_CONFIG_NAME = "modconfig.ini"
MOD_INI_NAME = "mod.ini"
MODS_SECTION = "mods"

_OVERRIDE_FOLDERS = ("Data", "Scripts", "Videos")


@dataclass
class ModInfo:
    name: str = ""
    desc: str = ""
    author: str = ""
    version: str = ""
    folder: str = ""
    file_map: dict[str, str] = field(default_factory=dict)
    use_scripts: bool = False
    disable_focus_pause: int = 0
    redirect_save: bool = False
    disable_save_ini_override: bool = False
    save_path: str = ""
    active: bool = False


@dataclass
class ModSettings:
    """Engine settings that result from the set of active mods."""

    force_use_scripts: bool = False
    disable_focus_pause: int = 0
    redirect_save: bool = False
    save_path: str = ""
    disable_save_ini_override: bool = False


def resolve_path(given: StrPath) -> Path:
    """Find an existing entry matching the path's last part case-insensitively."""
    path = Path(given)
    if not path.is_absolute():
        path = Path.cwd() / path
    parent = path.parent
    if not parent.is_dir():
        return path
    wanted = path.name.lower()
    for entry in parent.iterdir():
        if entry.name.lower() == wanted:
            return entry
    return path


def scan_mod_folder(info: ModInfo, mods_dir: StrPath) -> ModInfo:
    """Add the mod's Data, Scripts and Videos files to its override map."""
    mod_dir = Path(mods_dir) / info.folder
    search_from = len(str(mod_dir))
    for folder in _OVERRIDE_FOLDERS:
        root = resolve_path(mod_dir / folder)
        if not root.is_dir():
            continue
        tokens = (f"{folder}/", f"{folder}\\", f"{folder.lower()}/", f"{folder.lower()}\\")
        for file in sorted(p for p in root.rglob("*") if p.is_file()):
            full = str(file)
            position = next(
                (pos for pos in (full.find(t, search_from) for t in tokens) if pos >= 0),
                -1,
            )
            if position < 0:
                continue
            key = full[position:].replace("\\", "/").lower()
            info.file_map.setdefault(key, full)
    return info


def load_mod(mods_dir: StrPath, folder: str, active: bool = False) -> Optional[ModInfo]:
    """Read a mod's ``mod.ini``; return None when the folder holds no mod."""
    ini_path = Path(mods_dir) / folder / MOD_INI_NAME
    if not ini_path.is_file():
        return None
    settings = IniParser.load(ini_path)

    info = ModInfo(
        name="Unnamed Mod",
        author="Unknown Author",
        version="1.0.0",
        folder=folder,
        active=active,
    )
    for attribute, key in (("name", "Name"), ("desc", "Description"),
                           ("author", "Author"), ("version", "Version")):
        value = settings.get_string("", key, "")
        if value:
            setattr(info, attribute, value)

    scan_mod_folder(info, mods_dir)

    info.use_scripts = settings.get_bool("", "TxtScripts", False)
    info.disable_focus_pause = settings.get_int("", "DisableFocusPause", 0)
    info.redirect_save = settings.get_bool("", "RedirectSaveRAM", False)
    if info.redirect_save:
        info.save_path = f"mods/{folder}/"
    info.disable_save_ini_override = settings.get_bool("", "DisableSaveIniOverride", False)
    return info


def get_scene_id(stage_names: Sequence[str], scene_name: str) -> int:
    """Index of the stage whose name matches ignoring spaces and case, or -1."""
    wanted = scene_name.replace(" ", "").lower()
    return next(
        (index for index, name in enumerate(stage_names)
         if name.replace(" ", "").lower() == wanted),
        -1,
    )


class ModLoader:
    """The ordered list of installed mods and their on/off configuration."""

    def __init__(self, base_path: StrPath = ".", force_use_scripts: bool = False,
                 disable_focus_pause: int = 0):
        self.base_path = Path(base_path)
        self.force_use_scripts = force_use_scripts
        self.disable_focus_pause = disable_focus_pause
        self.mods: list[ModInfo] = []

    def mods_dir(self) -> Path:
        return resolve_path(self.base_path / "mods")

    def init_mods(self) -> list[ModInfo]:
        """Load mods listed in the config first, then any other mod folders."""
        self.mods = []
        mods_dir = self.mods_dir()
        if not mods_dir.is_dir():
            return self.mods

        config_path = mods_dir / MOD_CONFIG_NAME
        if config_path.is_file():
            config = IniParser.load(config_path)
            for item in config.items:
                active = config.get_bool(MODS_SECTION, item.key, False)
                info = load_mod(mods_dir, item.key, active)
                if info is not None:
                    self.mods.append(info)

        known = {mod.folder for mod in self.mods}
        for entry in sorted(p for p in mods_dir.iterdir() if p.is_dir()):
            if entry.name in known:
                continue
            info = load_mod(mods_dir, entry.name, False)
            if info is not None:
                self.mods.append(info)
        return self.mods

    def settings(self) -> ModSettings:
        result = ModSettings(
            force_use_scripts=self.force_use_scripts,
            disable_focus_pause=self.disable_focus_pause,
        )
        for mod in self.mods:
            if not mod.active:
                continue
            if mod.use_scripts:
                result.force_use_scripts = True
            if mod.disable_focus_pause:
                result.disable_focus_pause |= mod.disable_focus_pause
            if mod.redirect_save:
                result.save_path = mod.save_path
                result.redirect_save = True
            if mod.disable_save_ini_override:
                result.disable_save_ini_override = True
        return result

    def save_mods(self) -> Optional[Path]:
        """Write the mod order and states to the config; None if there is no mods folder."""
        mods_dir = self.mods_dir()
        if not mods_dir.is_dir():
            return None
        config = IniParser()
        for mod in self.mods:
            config.set_bool(MODS_SECTION, mod.folder, mod.active)
        path = mods_dir / MOD_CONFIG_NAME
        config.write(path)
        return path

    def file_maps(self) -> list[dict[str, str]]:
        """Override maps of the active mods, highest priority first."""
        return [mod.file_map for mod in self.mods if mod.active]

    def toggle(self, index: int) -> bool:
        mod = self.mods[index]
        mod.active = not mod.active
        return mod.active

    def swap(self, first: int, second: int) -> None:
        self.mods[first], self.mods[second] = self.mods[second], self.mods[first]