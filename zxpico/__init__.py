"""ZX Spectrum emulator support: HID reports, key matrices, PS/2 decoding, settings, menu text and scanline rendering."""

__version__ = "0.36.0"

__all__ = [
    "display",
    "hid",
    "keyboard",
    "keymatrix",
    "lcd",
    "menu_text",
    "picomputer",
    "ps2",
    "scanline",
    "settings",
]