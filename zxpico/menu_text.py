"""Text shown by the emulator's menu: labels, titles and file-name rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from zxpico.settings import JoystickMode

_QUICK_SAVE_NAME_MAX = 31
_NARROW_FRAME_COLS = 50

_CPU_SPEEDS = {
    9: "3.5 Mhz",
    8: "4.0 Mhz",
    0: "Unmoderated",
}

_JOYSTICK_LABELS = {
    JoystickMode.KEMPSTON: "Kempston",
    JoystickMode.SINCLAIR_LR: "Sinclair L+R",
    JoystickMode.SINCLAIR_RL: "Sinclair R+L",
}


def file_extension(filename: str) -> str:
    """The text after the last dot; empty if there is none or it leads the name."""
    dot = filename.rfind(".")
    if dot <= 0:
        return ""
    return filename[dot + 1:]


def is_z80(filename: str) -> bool:
    """Whether the file is a .z80 snapshot (lower or upper case extension)."""
    return file_extension(filename) in ("z80", "Z80")


def is_tzx(filename: str) -> bool:
    """Whether the file is a .tzx tape; other tapes are read as .tap."""
    return file_extension(filename) in ("tzx", "TZX")


def quick_save_name(slot: int) -> str:
    """File name of a zero-based quick-save slot."""
    return f"Slot {slot + 1}.z80"[:_QUICK_SAVE_NAME_MAX]


def _devices(noun: str, left: bool, right: bool, left_tag: str, right_tag: str) -> str:
    plural = "s" if left == right else ""
    if not left and not right:
        joiner = "0"
    elif left and right:
        joiner = "&"
    else:
        joiner = ""
    return (
        f"{noun}{plural} "
        f"{left_tag if left else ''}{joiner}{right_tag if right else ''}"
    )


def devices_status(
    joystick_left: bool, joystick_right: bool, keyboard1: bool, keyboard2: bool
) -> str:
    """The line listing connected USB joysticks and keyboards."""
    joysticks = _devices("Joystick", bool(joystick_left), bool(joystick_right), "L", "R")
    keyboards = _devices("Keyboard", bool(keyboard1), bool(keyboard2), "1", "2")
    return f"USB: {joysticks}, {keyboards}"


def cpu_speed_label(moderate: int) -> str:
    """Label for the CPU moderation setting."""
    return _CPU_SPEEDS.get(moderate, "Unknown")


def joystick_label(mode: Optional[int]) -> str:
    """Label for a joystick mode; "N/A" when there is no joystick or mode."""
    if mode is None:
        return "N/A"
    try:
        return _JOYSTICK_LABELS[JoystickMode(mode)]
    except ValueError:
        return "N/A"


def option_line(label: str, value: Optional[str], col1: int, col2: int) -> str:
    """A menu option: the label padded to col1, then the value in brackets.

    With no value only the padded label is shown.
    """
    col1 = max(col1, 0)
    col2 = max(col2, 0)
    if value is None:
        return f"{label:<{col1}}"
    return f"{label:<{col1}}[ {value:<{col2}}]"


def snaps_title(frame_cols: int) -> str:
    """Title of the snapshot explorer, with its quick-key help."""
    keys = (
        "1=DE 2=RN 3=CP 4=PA 5=RF 6=SA"
        if frame_cols < _NARROW_FRAME_COLS
        else "1=DEL 2=REN 3=CPY 4=PST 5=REF 6=SAV"
    )
    return f"Snaps  [{keys}]"


def tapes_title(frame_cols: int) -> str:
    """Title of the tape explorer, with its quick-key help."""
    keys = (
        "1=DE 2=RN 3=CP 4=PA 5=RF"
        if frame_cols < _NARROW_FRAME_COLS
        else "1=DEL 2=REN 3=CPY 4=PST 5=REF"
    )
    return f"Tapes  [{keys}]"


@dataclass(frozen=True)
class WizLayout:
    """Column layout of the menu's wizard area within the frame."""

    frame_cols: int = 80
    margin: int = 3
    col1: int = 16
    col2: int = 40

    def __post_init__(self) -> None:
        if self.margin < 0:
            raise ValueError(f"margin {self.margin} is negative")
        if self.frame_cols - 2 * self.margin < 0:
            raise ValueError(
                f"margin {self.margin} is too wide for {self.frame_cols} columns"
            )

    @property
    def columns(self) -> int:
        """Width of the wizard area: the frame less a margin on each side."""
        return self.frame_cols - 2 * self.margin