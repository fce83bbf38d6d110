"""Scanning and debouncing of an 8x8 key matrix wired to a shift register."""

from __future__ import annotations

from zxpico.hid import REPORT_MAX_KEYS, HidKey, KeyboardModifier, KeyboardReport

SAMPLES = 4
ROWS = 8
COLUMNS = 8

_SHIFT_ROW = 0
_SHIFT_BIT = 0x20
_CTRL_ROW = 5
_CTRL_BIT = 0x01
_ROLLOVER = 1

_ = HidKey
KEY_MAP: tuple[tuple[int, ...], ...] = (
    # 48k Spectrum keys
    (_.KEY_1, _.Q, _.A, _.KEY_0, _.P, 0, _.ENTER, _.SPACE),
    (_.KEY_2, _.W, _.S, _.KEY_9, _.O, _.Z, _.L, _.ALT_RIGHT),
    (_.KEY_3, _.E, _.D, _.KEY_8, _.I, _.X, _.K, _.M),
    (_.KEY_4, _.R, _.F, _.KEY_7, _.U, _.C, _.J, _.N),
    (_.KEY_5, _.T, _.G, _.KEY_6, _.Y, _.V, _.H, _.B),
    # Extra keys
    (0, _.ESCAPE, _.BACKSPACE, _.COMMA, _.PERIOD, _.SLASH, _.APOSTROPHE, _.MINUS),
    (_.ARROW_LEFT, _.ARROW_UP, _.ARROW_RIGHT, _.ARROW_DOWN, _.EQUAL, _.SEMICOLON,
     _.BRACKET_RIGHT, _.BRACKET_LEFT),
    (_.GRAVE, _.BACKSLASH, _.F1, _.F2, _.F3, _.F4, _.F5, _.F6),
)
del _


class KeyMatrix:
    """Oversampled, debounced key matrix producing HID keyboard reports.

    ``scan_row`` is fed the column bits of the row currently driven, with a
    set bit meaning the key is down; the matrix then moves on to the next row.
    """

    def __init__(self) -> None:
        self._samples = [[0] * SAMPLES for _ in range(ROWS)]
        self._debounced = [0] * ROWS
        self._row = 0
        self._sample = 0
        self._reports = [KeyboardReport(), KeyboardReport()]
        self._report_index = 0
        self._modifier = 0

    @property
    def row(self) -> int:
        """The row the next ``scan_row`` call samples."""
        return self._row

    def scan_row(self, columns: int) -> None:
        """Record the pressed columns of the current row and advance."""
        self._samples[self._row][self._sample] = columns & 0xFF
        self._row += 1
        if self._row >= ROWS:
            self._row = 0
            self._sample = (self._sample + 1) % SAMPLES

        any_on = 0
        all_on = (1 << COLUMNS) - 1
        for sample in self._samples[self._row]:
            any_on |= sample
            all_on &= sample
        # A key changes state only once every sample agrees.
        self._debounced[self._row] = (all_on | self._debounced[self._row]) & any_on

    def debounced(self) -> tuple[int, ...]:
        """The debounced column bits of every row."""
        return tuple(self._debounced)

    def get_hid_reports(self) -> tuple[KeyboardReport, KeyboardReport]:
        """Build the current report; return it with the previous one."""
        current = self._reports[self._report_index & 1]
        current.modifier = self._modifier
        if self._debounced[_SHIFT_ROW] & _SHIFT_BIT:
            current.modifier |= KeyboardModifier.LEFTSHIFT
        if self._debounced[_CTRL_ROW] & _CTRL_BIT:
            current.modifier |= KeyboardModifier.LEFTCTRL

        codes: list[int] = []
        for row_bits, row_keys in zip(self._debounced, KEY_MAP):
            for column, code in enumerate(row_keys):
                if not row_bits & (1 << column):
                    continue
                if len(codes) >= REPORT_MAX_KEYS:
                    codes = [_ROLLOVER] * REPORT_MAX_KEYS
                    break
                if code:
                    codes.append(code)
        codes.extend([HidKey.NONE] * (REPORT_MAX_KEYS - len(codes)))
        current.keycode[:] = [int(c) for c in codes]

        self._report_index = (self._report_index + 1) & 0xFF
        previous = self._reports[self._report_index & 1]
        return current.copy(), previous.copy()