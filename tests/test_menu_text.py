import pytest

from zxpico.menu_text import (
    WizLayout,
    cpu_speed_label,
    devices_status,
    file_extension,
    is_tzx,
    is_z80,
    joystick_label,
    option_line,
    quick_save_name,
    snaps_title,
    tapes_title,
)
from zxpico.settings import JoystickMode


@pytest.mark.parametrize(
    "name, ext",
    [
        ("game.z80", "z80"),
        ("archive.tar.tzx", "tzx"),
        ("noext", ""),
        (".hidden", ""),
        ("trailing.", ""),
    ],
)
def test_file_extension(name, ext):
    assert file_extension(name) == ext


def test_is_z80_accepts_both_cases_only():
    assert is_z80("a.z80")
    assert is_z80("a.Z80")
    assert not is_z80("a.Z8O")
    assert not is_z80("a.tap")
    assert not is_z80("z80")


def test_is_tzx():
    assert is_tzx("tape.tzx")
    assert is_tzx("tape.TZX")
    assert not is_tzx("tape.Tzx")
    assert not is_tzx("tape.tap")


def test_quick_save_name_first_slot():
    assert quick_save_name(0) == "Slot 1.z80"


@pytest.mark.parametrize("slot", range(12))
def test_quick_save_names_are_z80_snapshots(slot):
    name = quick_save_name(slot)
    assert is_z80(name)
    assert name.startswith("Slot ")
    assert name[len("Slot "):-len(".z80")] == str(slot + 1)


def test_devices_status_none_connected():
    assert devices_status(False, False, False, False) == "USB: Joysticks 0, Keyboards 0"


def test_devices_status_all_connected():
    assert devices_status(True, True, True, True) == "USB: Joysticks L&R, Keyboards 1&2"


def test_devices_status_single_devices():
    text = devices_status(True, False, False, True)
    assert text == "USB: Joystick L, Keyboard 2"


@pytest.mark.parametrize(
    "moderate, label",
    [(9, "3.5 Mhz"), (8, "4.0 Mhz"), (0, "Unmoderated"), (5, "Unknown")],
)
def test_cpu_speed_label(moderate, label):
    assert cpu_speed_label(moderate) == label


@pytest.mark.parametrize(
    "mode, label",
    [
        (JoystickMode.KEMPSTON, "Kempston"),
        (JoystickMode.SINCLAIR_LR, "Sinclair L+R"),
        (JoystickMode.SINCLAIR_RL, "Sinclair R+L"),
        (None, "N/A"),
        (42, "N/A"),
    ],
)
def test_joystick_label(mode, label):
    assert joystick_label(mode) == label


def test_option_line_pads_both_columns():
    line = option_line("Audio", "on", 16, 40)
    assert len(line) == 16 + 2 + 40 + 1
    assert line.startswith("Audio")
    assert line[16:18] == "[ "
    assert line[18:20] == "on"
    assert line.endswith("]")


def test_option_line_without_value_is_padded_label():
    line = option_line("Settings", None, 16, 40)
    assert line.rstrip() == "Settings"
    assert len(line) == 16


def test_option_line_long_value_is_not_truncated():
    line = option_line("Tape player", "x" * 50, 4, 10)
    assert "x" * 50 in line


def test_snaps_title_wide_and_narrow():
    assert snaps_title(80) == "Snaps  [1=DEL 2=REN 3=CPY 4=PST 5=REF 6=SAV]"
    assert snaps_title(40) == "Snaps  [1=DE 2=RN 3=CP 4=PA 5=RF 6=SA]"


def test_tapes_title_wide_and_narrow():
    assert tapes_title(80) == "Tapes  [1=DEL 2=REN 3=CPY 4=PST 5=REF]"
    assert tapes_title(49) == "Tapes  [1=DE 2=RN 3=CP 4=PA 5=RF]"


def test_wiz_layout_default_columns():
    layout = WizLayout()
    assert layout.columns == layout.frame_cols - 2 * layout.margin
    assert (layout.col1, layout.col2) == (16, 40)


def test_wiz_layout_zero_margin_uses_full_width():
    layout = WizLayout(frame_cols=40, margin=0, col1=12, col2=18)
    assert layout.columns == 40


def test_wiz_layout_rejects_oversized_margin():
    with pytest.raises(ValueError):
        WizLayout(frame_cols=10, margin=6)


def test_wiz_layout_rejects_negative_margin():
    with pytest.raises(ValueError):
        WizLayout(margin=-1)