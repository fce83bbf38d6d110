"""Key matrix scanning and joystick for the hand-held picomputer boards."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from zxpico.hid import REPORT_MAX_KEYS, HidKey, KeyboardModifier, KeyboardReport

SAMPLES = 4

_ROLLOVER = 1
_LEFTSHIFT = int(KeyboardModifier.LEFTSHIFT)
_LEFTCTRL = int(KeyboardModifier.LEFTCTRL)

# Kempston port bits: 000FUDLR
_KEMPSTON_FIRE = 0x10
_KEMPSTON_UP = 0x08
_KEMPSTON_DOWN = 0x04
_KEMPSTON_LEFT = 0x02
_KEMPSTON_RIGHT = 0x01

# On the alt-driven boards, alt+C selects cursor mode and alt+V joystick mode.
_ALT_CURSOR_KEY = (3, 0x08)
_ALT_JOYSTICK_KEY = (3, 0x10)
_ALT_QUICK_SAVE_ROWS = (0, 1, 2)
_ALT_QUICK_SAVE_BITS = 31
_ALT_TABLE = 4
_MENU_TABLE = 4

Key = tuple[int, int]
Table = tuple[tuple[int, ...], ...]


class Board(Enum):
    """Supported keyboard matrix layouts."""

    VGA = "vga"
    MAX = "max"
    ZX = "zx"
    PICOZX = "picozx"
    PICOZX_REAL = "picozx-real"
    PICOZX_REAL_BOB = "picozx-real-bob"
    PICOZX_REAL_DM = "picozx-real-dm"


@dataclass(frozen=True)
class _Layout:
    rows: int
    columns: int
    tables: tuple[Table, ...]
    joystick_offset: int
    fire: Key
    up: Key
    down: Key
    left: Key
    right: Key
    shift: Optional[Key] = None
    alt: Optional[Key] = None
    cursor: Optional[Key] = None
    kempston_key: Optional[Key] = None
    starts_in_joystick: bool = False
    has_menu_mapping: bool = False


_ = HidKey

# Six-by-six boards: rows of five keys plus a joystick column.
_MAX_TABLES: tuple[Table, ...] = (
    # Normal mappings + cursor joystick
    (
        (_.SPACE, _.ALT_RIGHT, _.M, _.N, _.B, _.ARROW_DOWN),
        (_.ENTER, _.L, _.K, _.J, _.H, _.ARROW_LEFT),
        (_.P, _.O, _.I, _.U, _.Y, _.ARROW_UP),
        (_.BACKSPACE, _.Z, _.X, _.C, _.V, _.ARROW_RIGHT),
        (_.A, _.S, _.D, _.F, _.G, _.ESCAPE),
        (_.Q, _.W, _.E, _.R, _.T, 0),
    ),
    # Normal mappings + kempston joystick
    (
        (_.SPACE, _.ALT_RIGHT, _.M, _.N, _.B, 0),
        (_.ENTER, _.L, _.K, _.J, _.H, 0),
        (_.P, _.O, _.I, _.U, _.Y, 0),
        (_.BACKSPACE, _.Z, _.X, _.C, _.V, 0),
        (_.A, _.S, _.D, _.F, _.G, _.ESCAPE),
        (_.Q, _.W, _.E, _.R, _.T, 0),
    ),
    # Numeric mappings + cursor joystick
    (
        (_.SPACE, _.ALT_RIGHT, _.SEMICOLON, _.MINUS, _.EQUAL, 0),
        (_.ENTER, _.BRACKET_RIGHT, _.BRACKET_LEFT, _.GRAVE, _.BACKSLASH, 0),
        (_.KEY_0, _.KEY_9, _.KEY_8, _.KEY_7, _.KEY_6, 0),
        (_.BACKSPACE, _.COMMA, _.PERIOD, _.SLASH, _.APOSTROPHE, 0),
        (_.A, _.S, _.D, _.F, _.G, _.ESCAPE),
        (_.KEY_1, _.KEY_2, _.KEY_3, _.KEY_4, _.KEY_5, 0),
    ),
    # Numeric mappings + kempston joystick
    (
        (_.SPACE, _.ALT_RIGHT, _.SEMICOLON, _.MINUS, _.EQUAL, _.ARROW_DOWN),
        (_.ENTER, _.BRACKET_RIGHT, _.BRACKET_LEFT, _.GRAVE, _.BACKSLASH, _.ARROW_LEFT),
        (_.KEY_0, _.KEY_9, _.KEY_8, _.KEY_7, _.KEY_6, _.ARROW_UP),
        (_.BACKSPACE, _.COMMA, _.PERIOD, _.SLASH, _.APOSTROPHE, _.ARROW_RIGHT),
        (_.A, _.S, _.D, _.F, _.G, _.ESCAPE),
        (_.KEY_1, _.KEY_2, _.KEY_3, _.KEY_4, _.KEY_5, 0),
    ),
    # Alt down mappings (quick save slots, menu)
    (
        (0, 0, 0, _.F12, _.F11, 0),
        (_.F10, _.F9, _.F8, _.F7, _.F6, 0),
        (_.F5, _.F4, _.F3, _.F2, _.F1, 0),
        (0, 0, 0, 0, 0, 0),
        (_.F8, _.F9, _.F10, 0, 0, 0),
        (_.F1, _.F2, _.F3, _.F4, 0, 0),
    ),
)

_PZX_ROW0_CURSOR = (_.ENTER, _.ARROW_LEFT, _.ARROW_UP, _.ARROW_RIGHT, _.ARROW_DOWN, 0, _.ALT_RIGHT)
_PZX_ROW0_SHIFTED = (_.ESCAPE, _.ARROW_LEFT, _.ARROW_UP, _.ARROW_RIGHT, _.ARROW_DOWN, 0, _.ALT_RIGHT)
_PZX_ROW0_JOYSTICK = (0, 0, 0, 0, 0, 0, _.ALT_RIGHT)
_PZX_ROWS = (
    (_.KEY_1, _.KEY_2, _.KEY_3, _.KEY_4, _.KEY_5, _.KEY_6, _.KEY_7),
    (_.KEY_8, _.KEY_9, _.KEY_0, _.Q, _.W, _.E, _.R),
    (_.T, _.Y, _.U, _.I, _.O, _.P, _.A),
    (_.S, _.D, _.F, _.G, _.H, _.J, _.K),
    (_.L, _.ENTER, _.Z, _.X, _.C, _.V, _.B),
)
_PZX_ROW6 = (_.N, _.M, _.SPACE, _.F1, _.F8, _.F9, _.F10)
_PZX_ROW6_SHIFTED = (_.N, _.M, _.SPACE, _.F13, _.F14, 0, 0)
_PZX_ROW6_MENU = (_.N, _.M, _.SPACE, _.F1, _.BACKSPACE, _.PAGE_UP, _.PAGE_DOWN)
_PZX_ROW6_MENU_SHIFTED = (_.N, _.M, _.SPACE, 0, _.DELETE, 0, 0)

_PZX_TABLES: tuple[Table, ...] = (
    (_PZX_ROW0_CURSOR, *_PZX_ROWS, _PZX_ROW6),
    (_PZX_ROW0_SHIFTED, *_PZX_ROWS, _PZX_ROW6_SHIFTED),
    (_PZX_ROW0_JOYSTICK, *_PZX_ROWS, _PZX_ROW6),
    (_PZX_ROW0_JOYSTICK, *_PZX_ROWS, _PZX_ROW6_SHIFTED),
    (_PZX_ROW0_CURSOR, *_PZX_ROWS, _PZX_ROW6_MENU),
    (_PZX_ROW0_SHIFTED, *_PZX_ROWS, _PZX_ROW6_MENU_SHIFTED),
)

_REAL_ROWS = (
    (_.B, _.H, _.V, _.Y, _.KEY_6, _.G, _.T, _.KEY_5),
    (_.N, _.J, _.C, _.U, _.KEY_7, _.F, _.R, _.KEY_4),
    (_.M, _.K, _.X, _.I, _.KEY_8, _.D, _.E, _.KEY_3),
    (_.ALT_RIGHT, _.L, _.Z, _.O, _.KEY_9, _.S, _.W, _.KEY_2),
    (_.SPACE, _.ENTER, _.SHIFT_LEFT, _.P, _.KEY_0, _.A, _.Q, _.KEY_1),
)
_REAL_MENU_TABLES: tuple[Table, ...] = (
    (
        (_.ENTER, _.ARROW_LEFT, _.ARROW_UP, _.ARROW_RIGHT, _.ARROW_DOWN, _.F1, 0, 0),
        *_REAL_ROWS[:3],
        (_.PERIOD, _.L, _.Z, _.O, _.KEY_9, _.S, _.W, _.KEY_2),
        _REAL_ROWS[4],
    ),
    (
        (_.ESCAPE, _.ARROW_LEFT, _.PAGE_UP, _.ARROW_RIGHT, _.PAGE_DOWN, _.ESCAPE, 0, 0),
        (_.B, _.H, _.V, _.Y, _.ARROW_DOWN, _.G, _.T, _.ARROW_LEFT),
        (_.N, _.J, _.C, _.U, _.ARROW_UP, _.F, _.R, _.PAGE_DOWN),
        (_.M, _.K, _.X, _.I, _.ARROW_RIGHT, _.D, _.E, _.KEY_3),
        (_.ALT_RIGHT, _.L, _.Z, _.O, _.PAGE_UP, _.S, _.W, _.KEY_2),
        (_.SPACE, _.ESCAPE, _.SHIFT_LEFT, _.P, _.BACKSPACE, _.A, _.Q, _.F1),
    ),
)


def _real_tables(first_rows: tuple[tuple[int, ...], ...]) -> tuple[Table, ...]:
    return tuple((row0, *_REAL_ROWS) for row0 in first_rows) + _REAL_MENU_TABLES


_REAL_CURSOR_ROW0 = (_.ENTER, _.ARROW_LEFT, _.ARROW_UP, _.ARROW_RIGHT, _.ARROW_DOWN,
                     _.F1, _.F11, _.F12)
_REAL_JOYSTICK_ROW0 = (0, 0, 0, 0, 0, _.F1, _.F11, _.F12)
_REAL_TABLES = _real_tables(
    (_REAL_CURSOR_ROW0, _REAL_CURSOR_ROW0, _REAL_JOYSTICK_ROW0, _REAL_JOYSTICK_ROW0)
)
_REAL_BOB_TABLES = _real_tables(
    (
        (_.KEY_0, _.ARROW_LEFT, _.ARROW_UP, _.ARROW_RIGHT, _.ARROW_DOWN, _.F1, _.F9, _.F10),
        (_.ENTER, _.ARROW_LEFT, _.ARROW_UP, _.ARROW_RIGHT, _.ARROW_DOWN, _.F1, 0, 0),
        (0, 0, 0, 0, 0, _.F1, _.F9, _.F10),
        (0, 0, 0, 0, 0, _.F1, 0, 0),
    )
)
del _


def _col(column: int) -> int:
    return 1 << (column - 1)


_MAX_LAYOUT = _Layout(
    rows=6,
    columns=6,
    tables=_MAX_TABLES,
    joystick_offset=1,
    fire=(4, 0x20),
    up=(2, 0x20),
    down=(0, 0x20),
    left=(1, 0x20),
    right=(3, 0x20),
    alt=(5, 0x20),
)

_REAL_COMMON = dict(
    rows=6,
    columns=8,
    joystick_offset=2,
    shift=(5, 0x04),
    starts_in_joystick=True,
    has_menu_mapping=True,
)
_REAL_KEYS = dict(
    fire=(0, _col(1)),
    left=(0, _col(2)),
    up=(0, _col(3)),
    right=(0, _col(4)),
    down=(0, _col(5)),
    cursor=(0, _col(7)),
    kempston_key=(0, _col(8)),
)

_LAYOUTS = {
    Board.VGA: _MAX_LAYOUT,
    Board.MAX: _MAX_LAYOUT,
    Board.ZX: _MAX_LAYOUT,
    Board.PICOZX: _Layout(
        rows=7,
        columns=7,
        tables=_PZX_TABLES,
        joystick_offset=2,
        fire=(0, 0x01),
        up=(0, 0x04),
        down=(0, 0x10),
        left=(0, 0x02),
        right=(0, 0x08),
        shift=(0, 0x20),
        cursor=(6, 0x20),
        kempston_key=(6, 0x40),
        has_menu_mapping=True,
    ),
    Board.PICOZX_REAL: _Layout(tables=_REAL_TABLES, **_REAL_COMMON, **_REAL_KEYS),
    Board.PICOZX_REAL_BOB: _Layout(tables=_REAL_BOB_TABLES, **_REAL_COMMON, **_REAL_KEYS),
    Board.PICOZX_REAL_DM: _Layout(
        tables=_REAL_TABLES,
        fire=(0, _col(2)),
        left=(0, _col(3)),
        up=(0, _col(4)),
        right=(0, _col(5)),
        down=(0, _col(6)),
        **_REAL_COMMON,
    ),
}


class KeyScan:
    """Oversampled, debounced keyboard matrix of a picomputer board.

    ``scan_row`` takes the pressed-column bits of the row currently driven
    (a set bit means the key is down) and moves on to the next row.
    """

    def __init__(self, board: Board = Board.PICOZX) -> None:
        self.board = board
        self._layout = _LAYOUTS[board]
        rows = self._layout.rows
        self._samples = [[0] * SAMPLES for _ in range(rows)]
        self._debounced = [0] * rows
        self._row = 0
        self._sample = 0
        self._reports = [KeyboardReport(), KeyboardReport()]
        self._report_index = 0
        self._table = 0
        self._modifier = 0
        self._menu = False
        self._joystick = 0
        self._led = False
        if self._layout.starts_in_joystick:
            self.mode_joystick()
        else:
            self.mode_cursor()

    @property
    def row(self) -> int:
        """The row the next ``scan_row`` call samples."""
        return self._row

    @property
    def led(self) -> bool:
        """The status LED: lit in cursor mode, dark in joystick mode."""
        return self._led

    def mode_joystick(self) -> None:
        """Send the direction keys to the Kempston joystick."""
        self._joystick = self._layout.joystick_offset
        self._led = False

    def mode_cursor(self) -> None:
        """Send the direction keys to the keyboard as cursor keys."""
        self._joystick = 0
        self._led = True

    def menu_mode(self, menu: bool) -> None:
        """Switch to the menu key mappings, on boards that have them."""
        if self._layout.has_menu_mapping:
            self._menu = bool(menu)

    def scan_row(self, columns: int) -> None:
        """Record the pressed columns of the current row and advance."""
        layout = self._layout
        full = (1 << layout.columns) - 1
        self._samples[self._row][self._sample] = columns & full
        self._row += 1
        if self._row >= layout.rows:
            self._row = 0
            self._sample = (self._sample + 1) % SAMPLES

        any_on = 0
        all_on = full
        for sample in self._samples[self._row]:
            any_on |= sample
            all_on &= sample
        # A key changes state only once every sample agrees.
        self._debounced[self._row] = (all_on | self._debounced[self._row]) & any_on

    def scan_matrix(self, read_columns: Callable[[int], int]) -> None:
        """Scan every row once, reading each row's columns from ``read_columns(row)``."""
        for _ in range(self._layout.rows):
            self.scan_row(read_columns(self._row))

    def fire_raw(self, read_columns: Callable[[int], int]) -> bool:
        """Scan the matrix and report whether any sample shows fire pressed."""
        self.scan_matrix(read_columns)
        row, bit = self._layout.fire
        return any(sample & bit for sample in self._samples[row])

    def _pressed(self, key: Optional[Key]) -> bool:
        if key is None:
            return False
        row, bit = key
        return bool(self._debounced[row] & bit)

    def _release(self, key: Key) -> None:
        row, bit = key
        self._debounced[row] &= ~bit & 0xFF

    def kempston(self) -> int:
        """The Kempston port value (000FUDLR) from the direction keys."""
        if not self._joystick or self._menu:
            return 0
        layout = self._layout
        value = 0
        for key, bit in (
            (layout.fire, _KEMPSTON_FIRE),
            (layout.up, _KEMPSTON_UP),
            (layout.down, _KEMPSTON_DOWN),
            (layout.left, _KEMPSTON_LEFT),
            (layout.right, _KEMPSTON_RIGHT),
        ):
            if self._pressed(key):
                value |= bit
        return value

    def _alt_keys(self) -> tuple[int, int]:
        layout = self._layout
        alt_down = self._pressed(layout.alt)
        if alt_down:
            if self._pressed(layout.up):
                self._modifier |= _LEFTSHIFT
            elif self._pressed(layout.down):
                self._modifier &= ~_LEFTSHIFT & 0xFF
            if self._pressed(layout.right):
                self._table = 2 + self._joystick
            elif self._pressed(layout.left):
                self._table = self._joystick
            if self._pressed(_ALT_CURSOR_KEY):
                self.mode_cursor()
                self._table &= ~1
            elif self._pressed(_ALT_JOYSTICK_KEY):
                self.mode_joystick()
                self._table |= 1
            for key in (layout.up, layout.down, layout.right, layout.left,
                        _ALT_CURSOR_KEY, _ALT_JOYSTICK_KEY):
                self._release(key)

        modifier = self._modifier
        if alt_down:
            rows = 0
            for row in _ALT_QUICK_SAVE_ROWS:
                rows |= self._debounced[row]
            if rows & _ALT_QUICK_SAVE_BITS:
                modifier |= _LEFTCTRL
        return (_ALT_TABLE if alt_down else self._table), modifier

    def _shift_keys(self) -> tuple[int, int]:
        layout = self._layout
        shift = self._pressed(layout.shift)
        if shift and layout.cursor is not None:
            if self._pressed(layout.cursor):
                self.mode_cursor()
            if self._pressed(layout.kempston_key):
                self.mode_joystick()
        self._table = (_MENU_TABLE if self._menu else self._joystick) + int(shift)
        modifier = self._modifier | (_LEFTSHIFT if shift else 0)
        return self._table, modifier

    def get_hid_reports(self) -> tuple[KeyboardReport, KeyboardReport]:
        """Build the current report; return it with the previous one."""
        if self._layout.alt is not None:
            table_index, modifier = self._alt_keys()
        else:
            table_index, modifier = self._shift_keys()
        table = self._layout.tables[table_index]

        current = self._reports[self._report_index & 1]
        current.modifier = modifier
        codes: list[int] = []
        for row_bits, row_keys in zip(self._debounced, table):
            for column, code in enumerate(row_keys):
                if not row_bits & (1 << column):
                    continue
                if len(codes) >= REPORT_MAX_KEYS:
                    codes = [_ROLLOVER] * REPORT_MAX_KEYS
                    break
                if code:
                    codes.append(int(code))
        codes.extend([int(HidKey.NONE)] * (REPORT_MAX_KEYS - len(codes)))
        current.keycode[:] = codes

        self._report_index = (self._report_index + 1) & 0xFF
        previous = self._reports[self._report_index & 1]
        return current.copy(), previous.copy()


class PicomputerJoystick:
    """The board's own direction keys as a Kempston joystick."""

    def __init__(self, keyscan: KeyScan) -> None:
        self._keyscan = keyscan
        self.enabled = True

    def sinclair_left(self) -> int:
        return 0xFF

    def sinclair_right(self) -> int:
        return 0xFF

    def kempston(self) -> int:
        return self._keyscan.kempston() if self.enabled else 0

    def is_connected_left(self) -> bool:
        return True

    def is_connected_right(self) -> bool:
        return False