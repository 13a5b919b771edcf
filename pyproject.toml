[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dotmatrix"
version = "0.0.1"
description = "Core of a handheld console emulator: CPU instruction decoding and execution, interrupts, timers, joypad, serial and video memory."
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "game boy", "sm83", "cpu", "disassembler"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
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
packages = ["dotmatrix"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
