[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jimbot"
version = "0.1.0"
description = "Game Boy memory map, timer, joypad and pixel-pipeline PPU emulation core"
requires-python = ">=3.10"
dependencies = []
keywords = ["game boy", "emulator", "ppu", "mmu", "dmg"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jimbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
