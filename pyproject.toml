[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pocketboy"
version = "0.1.0"
description = "Hardware components of a handheld game console emulator: PPU, timer, joypad, serial port and an event scheduler"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "gameboy", "ppu", "scheduler", "retro"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pocketboy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
