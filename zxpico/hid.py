"""USB HID keyboard usage codes, modifier bits and boot-protocol reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag

REPORT_MAX_KEYS = 6


class HidKey(IntEnum):
    """HID keyboard usage page codes."""

    NONE = 0x00
    A = 0x04
    B = 0x05
    C = 0x06
    D = 0x07
    E = 0x08
    F = 0x09
    G = 0x0A
    H = 0x0B
    I = 0x0C  # noqa: E741
    J = 0x0D
    K = 0x0E
    L = 0x0F
    M = 0x10
    N = 0x11
    O = 0x12  # noqa: E741
    P = 0x13
    Q = 0x14
    R = 0x15
    S = 0x16
    T = 0x17
    U = 0x18
    V = 0x19
    W = 0x1A
    X = 0x1B
    Y = 0x1C
    Z = 0x1D
    KEY_1 = 0x1E
    KEY_2 = 0x1F
    KEY_3 = 0x20
    KEY_4 = 0x21
    KEY_5 = 0x22
    KEY_6 = 0x23
    KEY_7 = 0x24
    KEY_8 = 0x25
    KEY_9 = 0x26
    KEY_0 = 0x27
    ENTER = 0x28
    ESCAPE = 0x29
    BACKSPACE = 0x2A
    TAB = 0x2B
    SPACE = 0x2C
    MINUS = 0x2D
    EQUAL = 0x2E
    BRACKET_LEFT = 0x2F
    BRACKET_RIGHT = 0x30
    BACKSLASH = 0x31
    EUROPE_1 = 0x32
    SEMICOLON = 0x33
    APOSTROPHE = 0x34
    GRAVE = 0x35
    COMMA = 0x36
    PERIOD = 0x37
    SLASH = 0x38
    CAPS_LOCK = 0x39
    F1 = 0x3A
    F2 = 0x3B
    F3 = 0x3C
    F4 = 0x3D
    F5 = 0x3E
    F6 = 0x3F
    F7 = 0x40
    F8 = 0x41
    F9 = 0x42
    F10 = 0x43
    F11 = 0x44
    F12 = 0x45
    PRINT_SCREEN = 0x46
    SCROLL_LOCK = 0x47
    PAUSE = 0x48
    INSERT = 0x49
    HOME = 0x4A
    PAGE_UP = 0x4B
    DELETE = 0x4C
    END = 0x4D
    PAGE_DOWN = 0x4E
    ARROW_RIGHT = 0x4F
    ARROW_LEFT = 0x50
    ARROW_DOWN = 0x51
    ARROW_UP = 0x52
    NUM_LOCK = 0x53
    KEYPAD_DIVIDE = 0x54
    KEYPAD_MULTIPLY = 0x55
    KEYPAD_SUBTRACT = 0x56
    KEYPAD_ADD = 0x57
    KEYPAD_ENTER = 0x58
    KEYPAD_1 = 0x59
    KEYPAD_2 = 0x5A
    KEYPAD_3 = 0x5B
    KEYPAD_4 = 0x5C
    KEYPAD_5 = 0x5D
    KEYPAD_6 = 0x5E
    KEYPAD_7 = 0x5F
    KEYPAD_8 = 0x60
    KEYPAD_9 = 0x61
    KEYPAD_0 = 0x62
    KEYPAD_DECIMAL = 0x63
    EUROPE_2 = 0x64
    APPLICATION = 0x65
    POWER = 0x66
    KEYPAD_EQUAL = 0x67
    F13 = 0x68
    F14 = 0x69
    F15 = 0x6A
    F16 = 0x6B
    F17 = 0x6C
    F18 = 0x6D
    F19 = 0x6E
    F20 = 0x6F
    F21 = 0x70
    F22 = 0x71
    F23 = 0x72
    F24 = 0x73
    CONTROL_LEFT = 0xE0
    SHIFT_LEFT = 0xE1
    ALT_LEFT = 0xE2
    GUI_LEFT = 0xE3
    CONTROL_RIGHT = 0xE4
    SHIFT_RIGHT = 0xE5
    ALT_RIGHT = 0xE6
    GUI_RIGHT = 0xE7


class KeyboardModifier(IntFlag):
    """Modifier bits of a keyboard report."""

    LEFTCTRL = 0x01
    LEFTSHIFT = 0x02
    LEFTALT = 0x04
    LEFTGUI = 0x08
    RIGHTCTRL = 0x10
    RIGHTSHIFT = 0x20
    RIGHTALT = 0x40
    RIGHTGUI = 0x80


@dataclass
class KeyboardReport:
    """A boot-protocol keyboard report: modifier byte and six key codes."""

    modifier: int = 0
    keycode: list[int] = field(default_factory=lambda: [0] * REPORT_MAX_KEYS)

    def __post_init__(self) -> None:
        if len(self.keycode) != REPORT_MAX_KEYS:
            raise ValueError(
                f"a keyboard report holds {REPORT_MAX_KEYS} key codes, "
                f"got {len(self.keycode)}"
            )
        self.keycode = list(self.keycode)

    @property
    def keys(self) -> list[int]:
        """The non-empty key codes, in report order."""
        return [code for code in self.keycode if code != HidKey.NONE]

    def copy(self) -> KeyboardReport:
        """Return an independent copy of this report."""
        return KeyboardReport(self.modifier, list(self.keycode))

    def clear(self) -> None:
        """Release every key and modifier."""
        self.modifier = 0
        self.keycode[:] = [HidKey.NONE] * REPORT_MAX_KEYS