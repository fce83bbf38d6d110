# zxpico

Building blocks for a ZX Spectrum emulator that runs on a small board with a
scanned key matrix or a PS/2 keyboard, a text menu and a VGA or LCD output.
Everything is plain Python with no dependencies, so the logic can be used and
tested on any machine.

## Modules

- `zxpico.hid` holds the USB HID key codes (`HidKey`) and the modifier bits
  (`KeyboardModifier`). It also holds `KeyboardReport`, a modifier byte and
  six key codes, with `copy()`, `clear()` and a `keys` property that lists
  the codes in use.
- `zxpico.display` holds `DisplayGeometry`. It takes an output size, 640×480
  by default, and gives the blank line count and the border widths, both the
  coloured and the blank parts, in Spectrum pixels. An output smaller than
  the Spectrum screen raises `ValueError`.
- `zxpico.settings` holds `JoystickMode`, `SettingValues` and `Settings`.
  - `sanitise` limits the volume to 0x100 and turns an unknown joystick mode
    into Kempston.
  - `load()` returns the sanitised values and a flag that says whether they
    came from storage.
  - `save()` sanitises the values before it passes them on.
  - `on_save` and `on_load` are the places where a subclass stores the values.
- `zxpico.keyboard` holds two classes:
  - `ZxSpectrumKeyboard` models the eight half-rows. `press`/`release` take a
    line and a key. `read(address)` returns the port byte. When a joystick
    object is supplied, `read` merges in its `sinclair_left()` or
    `sinclair_right()` value on ports 0xF7FE and 0xEFFE.
  - `Kiosk.is_kiosk()` always returns `False`.
- `zxpico.scanline` renders lines of Spectrum screen memory into colour words:
  - `colour_words(encoding)` uses one of `VgaEncoding` RGB_332, RGB_222,
    BGYR_1111 or RGBY_1111.
  - `prepare_rgb_scanline`/`prepare_rgb_blankline` size their output from a
    `DisplayGeometry`.
  - `rgb444_colour_words`, `prepare_rgb444_scanline` and
    `prepare_rgb444_frame` give 160 words per line and 240 lines per frame,
    in the form sent to an LCD.
  - Attributes with the flash bit set are inverted on alternate 32-frame
    periods.
- `zxpico.keymatrix` holds `KeyMatrix`, an 8×8 matrix:
  - `scan_row(columns)` samples the current row and moves on to the next.
  - Each key is sampled four times, and its state changes only when all the
    samples agree.
  - `get_hid_reports()` returns the current and the previous
    `KeyboardReport`.
- `zxpico.ps2` decodes PS/2 scan code set 2:
  - `hid_code_page0`/`hid_code_page1` map unprefixed codes and codes that
    follow 0xE0.
  - `modifier_for_key` gives the modifier bit of a HID key.
  - `Ps2Keyboard` takes received words through `receive(raw)` or
    `tick(words, overflow)`. It calls `key_handler(current, previous)` each
    time a key goes down or up. An overflow drops the words and releases
    every key.
- `zxpico.lcd` handles the ST7789 initialisation sequence:
  - `init_sequence(mirror_x)` builds the encoded sequence.
  - `parse_init_sequence(data)` splits it into `LcdCommand` records.
  - Each record has `delay_ms`, `encode()` and `writes()`. `writes()` lists
    the bytes with their data/command flag.
- `zxpico.picomputer` covers the Picomputer family of boards (`Board`):
  - `KeyScan` scans and debounces the key matrix of the chosen board.
  - It switches between cursor and joystick modes, and between menu and
    normal key maps, and builds HID reports.
  - `kempston()` returns the joystick port value (000FUDLR).
  - `PicomputerJoystick` wraps a `KeyScan` as a Kempston-only joystick that
    can be turned off through `enabled`.
- `zxpico.menu_text` has the text helpers of the emulator menu:
  - `file_extension`, `is_z80` and `is_tzx` check file names, and
    `quick_save_name` names a quick-save slot.
  - `devices_status`, `cpu_speed_label`, `joystick_label` and `option_line`
    build the menu lines.
  - `snaps_title` and `tapes_title` build the explorer titles.
  - `WizLayout` gives the width of the wizard area.

## Example

```python
from zxpico.settings import Settings, SettingValues, JoystickMode

settings = Settings()
values = SettingValues(volume=0x200, joystick_mode=JoystickMode.SINCLAIR_LR)
settings.sanitise(values)
assert values.volume == 0x100
```

```python
from zxpico.ps2 import Ps2Keyboard
from zxpico.hid import HidKey

reports = []
kbd = Ps2Keyboard(lambda current, previous: reports.append(current))
kbd.receive(0x1C << 22)  # scan code 0x1C, the A key
assert reports[-1].keys == [HidKey.A]
```

## What it does not do

This package contains no Z80 CPU or memory emulation. It has no tape or
snapshot loading and no interactive menu windows. It has no command to run.
It does not drive any real display, GPIO, PIO, USB or PS/2 hardware: callers
pass in the column bits, the received words and the screen memory, and they
send the words that come back to their own output. `Settings` does not persist
anything by itself: `on_save` and `on_load` return `False` until a subclass
gives them storage.

## Tests

The test suite uses pytest, which is installed with the `test` extra.