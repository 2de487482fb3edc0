# rsdkit

Building blocks for a classic 2D game engine, in plain Python with no
third-party dependencies.

## Modules

### `rsdkit.ini`

`IniParser` holds an ordered list of `ConfigItem`s (section, key, value,
`ItemType`).

- `IniParser.parse(text)` and `IniParser.load(path)` read a file. Lines
  starting with `#` are skipped. `[name]` starts a section. `key=value` lines
  become items.
- `get_string`, `get_int`, `get_float` and `get_bool` look a value up by
  section and key and return the `default` you pass when the key is missing.
  `get_bool` is true for `true` (in any case) or `1`. `get_float` rounds to
  single precision.
- `set_string`, `set_int`, `set_float`, `set_bool` and `set_comment` replace
  an item or append a new one.
- `dumps()` renders sectionless items first and then each section in order of
  first appearance. Comments are written as `; text`. `write(path)` saves the
  same text to a file.

### `rsdkit.trig`

Fixed-point lookup tables (`SIN512_TABLE`, `COS512_TABLE`, `SIN256_TABLE`,
`COS256_TABLE`, `SIN_M_TABLE`, `COS_M_TABLE`, `ARCTAN256_TABLE`) and the
helpers `sin512`, `cos512`, `sin256`, `cos256`. The helpers wrap any integer
angle. `arctan_lookup(x, y)` returns the angle of a vector on a 256-step
circle, as a byte.

### `rsdkit.palette`

`PaletteBank(render_type)` holds eight 256-colour palettes. Each colour is
kept both as a `PaletteEntry` (RGB888) and as a packed 16-bit value: RGB565
for `RenderType.SOFTWARE`, RGB5551 for `RenderType.HARDWARE`. It provides:

- `set_entry` (a palette index of -1 means the active palette)
- `set_active` (per-line palette selection)
- `copy` and `rotate`
- `set_fade` and `set_limited_fade`
- `load_act(data, ...)`, which reads RGB triples from `.act` palette bytes

`rgb888_to_rgb565` and `rgb888_to_rgb5551` are available on their own.

### `rsdkit.reader`

- `Archive(path)` reads the directory table of an encrypted data archive.
  `locate(name)` returns `(offset, size)` or `None`. `contains(name)` tests
  for a file. `open(name)` returns a decrypting `FileReader`.
- `KeyStream(file_size)` is the per-file rolling cipher, with `decrypt`,
  `encrypt`, `advance` and `reset`.
- `FileReader` supports `read`, `seek`, `tell`, `at_end` and `close`, and
  works as a context manager.
- `FileSystem(base_path, data_file, mod_maps, force_use_scripts)` resolves a
  game path in this order:
  1. mod override maps
  2. `Data/Scripts/*.txt` redirected to `Scripts/` when `force_use_scripts`
     is set
  3. the archive, if `data_file` exists
  4. the data folder

  `exists(path)` checks whether a path resolves to a file.
  `bytecode_mode()` returns `BytecodeMode.MOBILE`, `BytecodeMode.PC` or
  `None`, depending on which bytecode file is present.
- `ArchiveError` is raised for a truncated or malformed archive.

### `rsdkit.input`

`InputState(key_mappings, controller_mappings)` tracks the nine engine
`Button`s.

- `process(keyboard, controllers)` takes a set of held key codes and a list
  of `ControllerState` snapshots. Stick and trigger axes count as virtual
  `ControllerButton`s, judged against configurable `Deadzones`
  (`axis_delta`, `controller_pressed`).
- `check_key_press` and `check_key_down` fill an `InputData`.
- `queue_haptic_effect` and `take_haptic_effect` manage one pending
  `HapticID`.

### `rsdkit.player`

`Player` holds the player's state. `PlayerControl.process(player, key_down,
key_press)` applies the `ControlMode`:

- `NORMAL` copies input into the player.
- `NONE` keeps the player's own flags.
- `SIDEKICK` replays what the leader did 16 frames earlier.

### `rsdkit.objects`

`Entity`, `Priority` and `ObjectBorders`.

- `entity_active(...)` decides whether an entity runs this frame.
  `BOUNDS_DESTROY` entities that leave the area become blank.
- `process_objects(...)` and `process_paused_objects(...)` call your
  `run_entity(index, entity)` callback for each entity that runs. They return
  entity indices grouped by draw layer.
- `normalize_type_name` removes spaces from a type name.

### `rsdkit.mods`

`ModLoader(base_path)` manages the mods in `<base_path>/mods`. Folder names
are matched case-insensitively through `resolve_path`.

- `init_mods()` loads the mods listed in `modconfig.ini` first, then any
  other folder that holds a `mod.ini`.
- `settings()` combines the active mods into a `ModSettings`.
- `toggle`, `swap` and `save_mods` edit the mod list and write it back to
  `modconfig.ini`.
- `file_maps()` returns the override maps of the active mods.

`load_mod`, `scan_mod_folder` and `get_scene_id` can also be used on their
own.

## Install

```
pip install .
```

## Example

```python
from rsdkit.ini import IniParser

ini = IniParser.parse("[Game]\nLanguage=0\nDevMenu=true\n")
ini.get_int("Game", "Language", 0)      # 0
ini.get_bool("Game", "DevMenu", False)  # True
ini.set_int("Window", "WindowScale", 2)
print(ini.dumps())
```

```python
from rsdkit.mods import ModLoader
from rsdkit.reader import FileSystem

mods = ModLoader("game")
mods.init_mods()
fs = FileSystem("game", "Data.rsdk", mods.file_maps(), mods.settings().force_use_scripts)
with fs.open("Data/Game/GameConfig.bin") as f:
    header = f.read(16)
```

## What it does not do

This is a library only. It has no command-line program, window, renderer,
audio or script interpreter. Entity behaviour is supplied by your own
`run_entity` callback, and device input is supplied as plain key codes and
controller snapshots.

## Tests

```
pip install .[test]
pytest
```