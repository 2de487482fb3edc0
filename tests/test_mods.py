from pathlib import Path

import pytest

from rsdkit.mods import (
    ModInfo,
    ModLoader,
    get_scene_id,
    load_mod,
    resolve_path,
    scan_mod_folder,
)
from rsdkit.reader import FileSystem


def make_mod(mods_dir: Path, folder: str, ini: str = "", files=()):
    mod_dir = mods_dir / folder
    mod_dir.mkdir(parents=True)
    (mod_dir / "mod.ini").write_text(ini)
    for rel, content in files:
        target = mod_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    return mod_dir


def test_resolve_path_matches_case_insensitively(tmp_path):
    (tmp_path / "Mods").mkdir()
    assert resolve_path(tmp_path / "mods") == tmp_path / "Mods"


def test_resolve_path_keeps_missing_path(tmp_path):
    assert resolve_path(tmp_path / "nothing") == tmp_path / "nothing"


def test_resolve_path_relative_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (Path.cwd() / "Folder").mkdir()
    assert resolve_path("folder") == Path.cwd() / "Folder"


def test_load_mod_defaults(tmp_path):
    make_mod(tmp_path, "Plain")
    info = load_mod(tmp_path, "Plain", True)
    assert info.name == "Unnamed Mod"
    assert info.author == "Unknown Author"
    assert info.version == "1.0.0"
    assert info.folder == "Plain"
    assert info.active is True
    assert info.redirect_save is False


def test_load_mod_reads_fields(tmp_path):
    ini = (
        "Name=Cool Mod\nDescription=Does things\nAuthor=Someone\nVersion=2.0\n"
        "TxtScripts=true\nDisableFocusPause=1\nRedirectSaveRAM=true\n"
        "DisableSaveIniOverride=1\n"
    )
    make_mod(tmp_path, "Cool", ini)
    info = load_mod(tmp_path, "Cool")
    assert info.name == "Cool Mod"
    assert info.desc == "Does things"
    assert info.author == "Someone"
    assert info.version == "2.0"
    assert info.use_scripts is True
    assert info.disable_focus_pause == 1
    assert info.save_path == "mods/Cool/"
    assert info.disable_save_ini_override is True
    assert info.active is False


def test_load_mod_without_ini_is_none(tmp_path):
    (tmp_path / "Empty").mkdir()
    assert load_mod(tmp_path, "Empty") is None


def test_scan_mod_folder_maps_overrides(tmp_path):
    mod_dir = make_mod(
        tmp_path,
        "M",
        files=[
            ("Data/Sprites/Player.gif", b"g"),
            ("Scripts/Enemy/Foo.txt", b"s"),
            ("Videos/Intro.ogv", b"v"),
        ],
    )
    info = scan_mod_folder(ModInfo(folder="M"), tmp_path)
    assert info.file_map == {
        "data/sprites/player.gif": str(mod_dir / "Data" / "Sprites" / "Player.gif"),
        "scripts/enemy/foo.txt": str(mod_dir / "Scripts" / "Enemy" / "Foo.txt"),
        "videos/intro.ogv": str(mod_dir / "Videos" / "Intro.ogv"),
    }


def test_init_mods_follows_config_order(tmp_path):
    mods = tmp_path / "mods"
    for name in ("A", "B", "C"):
        make_mod(mods, name)
    (mods / "modconfig.ini").write_text("[mods]\nB=true\nA=false\n")
    loader = ModLoader(tmp_path)
    loaded = loader.init_mods()
    assert [m.folder for m in loaded] == ["B", "A", "C"]
    assert [m.active for m in loaded] == [True, False, False]


def test_init_mods_without_folder_is_empty(tmp_path):
    assert ModLoader(tmp_path).init_mods() == []


def test_settings_combine_active_mods(tmp_path):
    mods = tmp_path / "mods"
    make_mod(mods, "S", "TxtScripts=true\nRedirectSaveRAM=true\n")
    make_mod(mods, "T", "DisableFocusPause=2\n")
    (mods / "modconfig.ini").write_text("[mods]\nS=true\nT=false\n")
    loader = ModLoader(tmp_path, disable_focus_pause=1)
    loader.init_mods()
    settings = loader.settings()
    assert settings.force_use_scripts is True
    assert settings.redirect_save is True
    assert settings.save_path == "mods/S/"
    assert settings.disable_focus_pause == 1

    loader.toggle(1)
    assert loader.settings().disable_focus_pause == 3


def test_save_mods_round_trip(tmp_path):
    mods = tmp_path / "mods"
    for name in ("A", "B"):
        make_mod(mods, name)
    loader = ModLoader(tmp_path)
    loader.init_mods()
    loader.swap(0, 1)
    assert loader.toggle(0) is True
    assert loader.save_mods() == mods / "modconfig.ini"

    again = ModLoader(tmp_path)
    again.init_mods()
    assert [(m.folder, m.active) for m in again.mods] == [("B", True), ("A", False)]


def test_save_mods_without_folder(tmp_path):
    assert ModLoader(tmp_path).save_mods() is None


def test_toggle_out_of_range(tmp_path):
    with pytest.raises(IndexError):
        ModLoader(tmp_path).toggle(0)


def test_file_maps_feed_file_system(tmp_path):
    mods = tmp_path / "mods"
    make_mod(mods, "On", files=[("Data/Game/Thing.bin", b"modded")])
    make_mod(mods, "Off", files=[("Data/Game/Other.bin", b"x")])
    (mods / "modconfig.ini").write_text("[mods]\nOn=true\nOff=false\n")
    loader = ModLoader(tmp_path)
    loader.init_mods()
    maps = loader.file_maps()
    assert len(maps) == 1
    fs = FileSystem(tmp_path, mod_maps=maps)
    with fs.open("Data/Game/Thing.bin") as reader:
        assert reader.read() == b"modded"
        assert reader.is_mod is True
    assert fs.exists("Data/Game/Other.bin") is False


def test_get_scene_id():
    names = ["Green Hill Zone", "Marble Zone", "Spring Yard"]
    assert get_scene_id(names, "MarbleZone") == 1
    assert get_scene_id(names, "green hill zone") == 0
    assert get_scene_id(names, "Labyrinth") == -1