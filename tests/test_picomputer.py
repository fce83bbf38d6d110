import pytest

from zxpico.hid import HidKey, KeyboardModifier
from zxpico.picomputer import SAMPLES, Board, KeyScan, PicomputerJoystick


def hold(keyscan, pressed):
    """Scan until every row has settled on the given pressed columns."""
    for _ in range(SAMPLES + 1):
        keyscan.scan_matrix(lambda row: pressed.get(row, 0))


def keys(keyscan):
    current, _ = keyscan.get_hid_reports()
    return current.keys


# PICOZX layout keys
PZX_FIRE = (0, 0x01)
PZX_LEFT = (0, 0x02)
PZX_UP = (0, 0x04)
PZX_RIGHT = (0, 0x08)
PZX_DOWN = (0, 0x10)
PZX_SHIFT = (0, 0x20)


def test_single_key_is_reported():
    ks = KeyScan(Board.PICOZX)
    hold(ks, {1: 0x01})
    current, _ = ks.get_hid_reports()
    assert current.keys == [HidKey.KEY_1]
    assert current.modifier == 0


def test_key_needs_every_sample_before_reported():
    ks = KeyScan(Board.PICOZX)
    ks.scan_matrix(lambda row: 0x01 if row == 1 else 0)
    assert keys(ks) == []


def test_shift_sets_modifier_and_uses_shifted_table():
    ks = KeyScan(Board.PICOZX)
    hold(ks, {0: 0x20, 2: 0x08})
    current, _ = ks.get_hid_reports()
    assert current.modifier == KeyboardModifier.LEFTSHIFT
    assert current.keys == [HidKey.Q]


def test_previous_report_follows_current():
    ks = KeyScan(Board.PICOZX)
    hold(ks, {1: 0x01})
    first, _ = ks.get_hid_reports()
    hold(ks, {})
    second, previous = ks.get_hid_reports()
    assert previous == first
    assert second.keys == []


def test_too_many_keys_gives_rollover():
    ks = KeyScan(Board.PICOZX)
    hold(ks, {1: 0x7F})
    current, _ = ks.get_hid_reports()
    assert current.keycode == [1] * 6


def test_row_wraps_after_full_scan():
    ks = KeyScan(Board.PICOZX)
    for _ in range(7):
        ks.scan_row(0xFF)
    assert ks.row == 0
    ks.scan_row(0)
    assert ks.row == 1


def test_cursor_mode_is_default_and_disables_kempston():
    ks = KeyScan(Board.PICOZX)
    assert ks.led is True
    hold(ks, {0: 0x01})
    assert ks.kempston() == 0


def test_kempston_fire_bit():
    ks = KeyScan(Board.PICOZX)
    ks.mode_joystick()
    hold(ks, {0: 0x01})
    assert ks.kempston() == 0x10


def test_kempston_directions_are_distinct_single_bits():
    directions = [PZX_FIRE, PZX_LEFT, PZX_UP, PZX_RIGHT, PZX_DOWN]
    values = []
    for row, bit in directions:
        ks = KeyScan(Board.PICOZX)
        ks.mode_joystick()
        hold(ks, {row: bit})
        values.append(ks.kempston())
    assert all(bin(v).count("1") == 1 for v in values)
    assert len(set(values)) == len(values)

    ks = KeyScan(Board.PICOZX)
    ks.mode_joystick()
    hold(ks, {0: 0x1F})
    combined = 0
    for v in values:
        combined |= v
    assert ks.kempston() == combined


def test_menu_mode_disables_kempston_on_picozx():
    ks = KeyScan(Board.PICOZX)
    ks.mode_joystick()
    hold(ks, {0: 0x01})
    fire = ks.kempston()
    ks.menu_mode(True)
    assert ks.kempston() == 0
    ks.menu_mode(False)
    assert ks.kempston() == fire


def test_menu_mode_ignored_on_max_board():
    ks = KeyScan(Board.MAX)
    ks.mode_joystick()
    hold(ks, {4: 0x20})
    before = ks.kempston()
    ks.menu_mode(True)
    assert ks.kempston() == before


def test_menu_mapping_table():
    ks = KeyScan(Board.PICOZX)
    hold(ks, {6: 0x10})
    assert keys(ks) == [HidKey.F8]
    ks.menu_mode(True)
    assert keys(ks) == [HidKey.BACKSPACE]


def test_shift_kempston_key_switches_to_joystick_mode():
    ks = KeyScan(Board.PICOZX)
    hold(ks, {0: 0x20, 6: 0x40})
    ks.get_hid_reports()
    assert ks.led is False
    hold(ks, {0: 0x02})
    assert keys(ks) == []


def test_shift_cursor_key_switches_back_to_cursor_mode():
    ks = KeyScan(Board.PICOZX)
    ks.mode_joystick()
    hold(ks, {0: 0x20, 6: 0x20})
    ks.get_hid_reports()
    assert ks.led is True
    hold(ks, {0: 0x02})
    assert keys(ks) == [HidKey.ARROW_LEFT]


def test_real_keyboard_starts_in_joystick_mode():
    ks = KeyScan(Board.PICOZX_REAL)
    assert ks.led is False
    hold(ks, {0: 0x01})
    assert ks.kempston() == 0x10


@pytest.mark.parametrize(
    "board, expected",
    [(Board.PICOZX_REAL, HidKey.ENTER), (Board.PICOZX_REAL_BOB, HidKey.KEY_0)],
)
def test_real_keyboard_variants_differ_in_first_row(board, expected):
    ks = KeyScan(board)
    ks.mode_cursor()
    hold(ks, {0: 0x01})
    assert keys(ks) == [expected]


def test_dm_directions_are_distinct_single_bits():
    values = []
    for bit in (0x02, 0x04, 0x08, 0x10, 0x20):
        ks = KeyScan(Board.PICOZX_REAL_DM)
        hold(ks, {0: bit})
        values.append(ks.kempston())
    assert all(bin(v).count("1") == 1 for v in values)
    assert len(set(values)) == 5


def test_max_alt_gives_function_keys_with_ctrl():
    ks = KeyScan(Board.MAX)
    hold(ks, {5: 0x20, 1: 0x01})
    current, _ = ks.get_hid_reports()
    assert current.keys == [HidKey.F10]
    assert current.modifier == KeyboardModifier.LEFTCTRL


def test_max_alt_right_selects_numeric_keys():
    ks = KeyScan(Board.MAX)
    hold(ks, {2: 0x01})
    assert keys(ks) == [HidKey.P]
    hold(ks, {5: 0x20, 3: 0x20})
    ks.get_hid_reports()
    hold(ks, {2: 0x01})
    assert keys(ks) == [HidKey.KEY_0]


def test_max_alt_v_selects_joystick_mode():
    ks = KeyScan(Board.MAX)
    assert ks.led is True
    hold(ks, {5: 0x20, 3: 0x10})
    ks.get_hid_reports()
    assert ks.led is False
    hold(ks, {4: 0x20})
    assert ks.kempston() == 0x10


def test_fire_raw():
    ks = KeyScan(Board.PICOZX)
    assert ks.fire_raw(lambda row: 0x01 if row == 0 else 0) is True
    other = KeyScan(Board.PICOZX)
    assert other.fire_raw(lambda row: 0) is False


def test_picomputer_joystick():
    ks = KeyScan(Board.PICOZX)
    ks.mode_joystick()
    hold(ks, {0: 0x01})
    joystick = PicomputerJoystick(ks)
    assert joystick.sinclair_left() == 0xFF
    assert joystick.sinclair_right() == 0xFF
    assert joystick.is_connected_left() is True
    assert joystick.is_connected_right() is False
    assert joystick.kempston() == ks.kempston()
    assert joystick.kempston() > 0
    joystick.enabled = False
    assert joystick.kempston() == 0