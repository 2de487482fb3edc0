[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rsdkit"
version = "1.3.2"
description = "Building blocks for a classic 2D game engine: INI config, trig tables, palettes, encrypted data archives, input, players, objects and mods"
requires-python = ">=3.10"
dependencies = []
keywords = ["retro", "game-engine", "archive", "palette", "ini", "mods"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rsdkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
