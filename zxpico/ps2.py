"""PS/2 scan code set 2 decoding into HID keyboard reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from zxpico.hid import REPORT_MAX_KEYS, HidKey, KeyboardModifier, KeyboardReport

KeyHandler = Callable[[KeyboardReport, KeyboardReport], None]

_SELF_TEST_PASSED = 0xAA
_PREFIX_DOUBLE = 0xE1
_PREFIX_EXTENDED = 0xE0
_PREFIX_RELEASE = 0xF0

_PAGE0_SIZE = 0x84
_ = HidKey
_PAGE0 = {
    0x01: _.F9, 0x03: _.F5, 0x04: _.F3, 0x05: _.F1, 0x06: _.F2, 0x07: _.F12,
    0x08: _.F13, 0x09: _.F10, 0x0A: _.F8, 0x0B: _.F6, 0x0C: _.F4, 0x0D: _.TAB,
    0x0E: _.GRAVE, 0x0F: _.KEYPAD_EQUAL, 0x10: _.F14, 0x11: _.ALT_LEFT,
    0x12: _.SHIFT_LEFT, 0x14: _.CONTROL_LEFT, 0x15: _.Q, 0x16: _.KEY_1,
    0x18: _.F15, 0x1A: _.Z, 0x1B: _.S, 0x1C: _.A, 0x1D: _.W, 0x1E: _.KEY_2,
    0x20: _.F16, 0x21: _.C, 0x22: _.X, 0x23: _.D, 0x24: _.E, 0x25: _.KEY_4,
    0x26: _.KEY_3, 0x28: _.F17, 0x29: _.SPACE, 0x2A: _.V, 0x2B: _.F, 0x2C: _.T,
    0x2D: _.R, 0x2E: _.KEY_5, 0x30: _.F18, 0x31: _.N, 0x32: _.B, 0x33: _.H,
    0x34: _.G, 0x35: _.Y, 0x36: _.KEY_6, 0x38: _.F19, 0x3A: _.M, 0x3B: _.J,
    0x3C: _.U, 0x3D: _.KEY_7, 0x3E: _.KEY_8, 0x40: _.F20, 0x41: _.COMMA,
    0x42: _.K, 0x43: _.I, 0x44: _.O, 0x45: _.KEY_0, 0x46: _.KEY_9, 0x48: _.F21,
    0x49: _.PERIOD, 0x4A: _.SLASH, 0x4B: _.L, 0x4C: _.SEMICOLON, 0x4D: _.P,
    0x4E: _.MINUS, 0x50: _.F22, 0x52: _.APOSTROPHE, 0x54: _.BRACKET_LEFT,
    0x55: _.EQUAL, 0x57: _.F23, 0x58: _.CAPS_LOCK, 0x59: _.SHIFT_RIGHT,
    0x5A: _.ENTER, 0x5B: _.BRACKET_RIGHT, 0x5D: _.EUROPE_1, 0x5F: _.F24,
    0x61: _.EUROPE_2, 0x66: _.BACKSPACE, 0x69: _.KEYPAD_1, 0x6B: _.KEYPAD_4,
    0x6C: _.KEYPAD_7, 0x70: _.KEYPAD_0, 0x71: _.KEYPAD_DECIMAL, 0x72: _.KEYPAD_2,
    0x73: _.KEYPAD_5, 0x74: _.KEYPAD_6, 0x75: _.KEYPAD_8, 0x76: _.ESCAPE,
    0x77: _.NUM_LOCK, 0x78: _.F11, 0x79: _.KEYPAD_ADD, 0x7A: _.KEYPAD_3,
    0x7B: _.KEYPAD_SUBTRACT, 0x7C: _.KEYPAD_MULTIPLY, 0x7D: _.KEYPAD_9,
    0x7E: _.SCROLL_LOCK, 0x83: _.F7,
}
_PAGE1 = {
    0x11: _.ALT_RIGHT, 0x1F: _.GUI_LEFT, 0x14: _.CONTROL_RIGHT, 0x27: _.GUI_RIGHT,
    0x4A: _.KEYPAD_DIVIDE, 0x5A: _.KEYPAD_ENTER, 0x69: _.END, 0x6B: _.ARROW_LEFT,
    0x6C: _.HOME, 0x7C: _.PRINT_SCREEN, 0x70: _.INSERT, 0x71: _.DELETE,
    0x72: _.ARROW_DOWN, 0x74: _.ARROW_RIGHT, 0x75: _.ARROW_UP, 0x7A: _.PAGE_DOWN,
    0x7D: _.PAGE_UP,
}
del _

_MODIFIERS = {
    HidKey.CONTROL_LEFT: KeyboardModifier.LEFTCTRL,
    HidKey.SHIFT_LEFT: KeyboardModifier.LEFTSHIFT,
    HidKey.ALT_LEFT: KeyboardModifier.LEFTALT,
    HidKey.GUI_LEFT: KeyboardModifier.LEFTGUI,
    HidKey.CONTROL_RIGHT: KeyboardModifier.RIGHTCTRL,
    HidKey.SHIFT_RIGHT: KeyboardModifier.RIGHTSHIFT,
    HidKey.ALT_RIGHT: KeyboardModifier.RIGHTALT,
    HidKey.GUI_RIGHT: KeyboardModifier.RIGHTGUI,
}


def hid_code_page0(ps2code: int) -> int:
    """HID key for an unprefixed set 2 scan code."""
    if ps2code >= _PAGE0_SIZE:
        return HidKey.NONE
    return _PAGE0.get(ps2code, HidKey.NONE)


def hid_code_page1(ps2code: int) -> int:
    """HID key for a set 2 scan code that followed an 0xE0 prefix."""
    return _PAGE1.get(ps2code, HidKey.NONE)


def modifier_for_key(hid_key: int) -> int:
    """The modifier bit a HID key sets, or 0 for an ordinary key."""
    return _MODIFIERS.get(hid_key, 0)


@dataclass
class _Action:
    code: int = 0
    release: bool = False
    page: int = 0


class Ps2Keyboard:
    """Turns received PS/2 frames into HID reports passed to ``key_handler``."""

    def __init__(self, key_handler: KeyHandler) -> None:
        self._key_handler = key_handler
        self._report = KeyboardReport()
        self._actions = [_Action(), _Action()]
        self._action = 0
        self._double = False
        self._overflow = False

    @property
    def report(self) -> KeyboardReport:
        return self._report.copy()

    @property
    def overflowed(self) -> bool:
        """Whether received frames have ever been lost."""
        return self._overflow

    def _clear_actions(self) -> None:
        self._actions = [_Action(), _Action()]
        self._action = 0

    def clear(self) -> None:
        """Release every key and forget any partial scan code sequence."""
        self._report.clear()
        self._clear_actions()

    def _press(self, hid_key: int) -> None:
        prev = self._report.copy()
        if hid_key in self._report.keycode:
            return
        self._report.modifier |= modifier_for_key(hid_key)
        for i, code in enumerate(self._report.keycode):
            if code == HidKey.NONE:
                self._report.keycode[i] = int(hid_key)
                self._key_handler(self._report.copy(), prev)
                return
        # More than REPORT_MAX_KEYS keys down: the key is dropped.

    def _release(self, hid_key: int) -> None:
        prev = self._report.copy()
        self._report.modifier &= ~modifier_for_key(hid_key) & 0xFF
        for i, code in enumerate(self._report.keycode[:REPORT_MAX_KEYS]):
            if code == hid_key:
                self._report.keycode[i] = HidKey.NONE
                self._key_handler(self._report.copy(), prev)
                return

    def _handle_actions(self) -> None:
        if self._action != 0:
            return
        first = self._actions[0]
        lookup = hid_code_page1 if first.page == 1 else hid_code_page0
        hid_key = lookup(first.code)
        if hid_key == HidKey.NONE:
            return
        if first.release:
            self._release(hid_key)
        else:
            self._press(hid_key)

    def receive(self, raw: int) -> None:
        """Handle one word from the receiver; the scan code is bits 22..29."""
        code = ((raw << 2) & 0xFFFFFFFF) >> 24
        if code == _SELF_TEST_PASSED:
            return
        if code == _PREFIX_DOUBLE:
            self._double = True
        elif code == _PREFIX_EXTENDED:
            self._actions[self._action].page = 1
        elif code == _PREFIX_RELEASE:
            self._actions[self._action].release = True
        else:
            self._actions[self._action].code = code
            if self._double:
                self._action = 1
                self._double = False
            else:
                self._handle_actions()
                self._clear_actions()

    def tick(self, raw_words: Iterable[int], overflow: bool = False) -> None:
        """Process received words; on overflow drop them and release all keys."""
        if overflow:
            self._overflow = True
            for _ in raw_words:
                pass
            self.clear()
            return
        for raw in raw_words:
            self.receive(raw)