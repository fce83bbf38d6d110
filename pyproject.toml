[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zxpico"
version = "0.36.0"
description = "Key matrix scanning, PS/2 decoding, settings, menu text and scanline rendering for a ZX Spectrum emulator on small boards"
requires-python = ">=3.10"
dependencies = []
keywords = ["zx-spectrum", "emulator", "keyboard-matrix", "ps2", "hid", "scanline", "vga", "st7789"]
classifiers = [
    "Development Status :: 4 - Beta",
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
packages = ["zxpico"]

[tool.pytest.ini_options]
addopts = "-ra"
