"""The Spectrum keyboard half-row matrix as seen on port 0xFE."""

from __future__ import annotations

from typing import Optional, Protocol

_LINES = 8
_SINCLAIR_LEFT_PORT = 0xF7FE
_SINCLAIR_RIGHT_PORT = 0xEFFE


class SinclairJoystick(Protocol):
    def sinclair_left(self) -> int: ...

    def sinclair_right(self) -> int: ...


def _check(value: int, what: str) -> None:
    if not 0 <= value < _LINES:
        raise ValueError(f"{what} {value} is out of range 0..{_LINES - 1}")


class ZxSpectrumKeyboard:
    """Eight half-rows of five keys; a cleared bit means the key is down."""

    def __init__(self, joystick: Optional[SinclairJoystick] = None) -> None:
        self._joystick = joystick
        self._lines = [0xFF] * _LINES

    @property
    def lines(self) -> tuple[int, ...]:
        return tuple(self._lines)

    def reset(self) -> None:
        self._lines = [0xFF] * _LINES

    def press(self, line: int, key: int) -> None:
        _check(line, "line")
        _check(key, "key")
        self._lines[line] &= ~(1 << key) & 0xFF

    def release(self, line: int, key: int) -> None:
        _check(line, "line")
        _check(key, "key")
        self._lines[line] |= 1 << key

    def read(self, address: int) -> int:
        """Return the byte read from the keyboard port at a 16-bit address."""
        selected = ~(address >> 8)
        value = 0xFF
        if self._joystick is not None:
            port = address | 0xF0
            if port == _SINCLAIR_LEFT_PORT:
                value = self._joystick.sinclair_left()
            if port == _SINCLAIR_RIGHT_PORT:
                value = self._joystick.sinclair_right()
        for i, line in enumerate(self._lines):
            if selected & (1 << i):
                value &= line
        return value & 0xFF

    def is_mounted(self) -> bool:
        return False


class Kiosk:
    """Kiosk-mode probe; the base never reports kiosk mode."""

    def is_kiosk(self) -> bool:
        return False