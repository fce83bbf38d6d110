"""Persisted emulator settings with sanitising and defaults."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MAX_VOLUME = 0x100


class JoystickMode(IntEnum):
    KEMPSTON = 0
    SINCLAIR_LR = 1
    SINCLAIR_RL = 2


@dataclass
class SettingValues:
    """The values that are saved and loaded."""

    volume: int = MAX_VOLUME
    joystick_mode: int = JoystickMode.KEMPSTON


class Settings:
    """Settings store; subclasses override on_save and on_load to persist."""

    def sanitise(self, values: SettingValues) -> SettingValues:
        """Clamp the volume and replace an unknown joystick mode, in place."""
        if values.volume > MAX_VOLUME:
            values.volume = MAX_VOLUME
        try:
            values.joystick_mode = JoystickMode(values.joystick_mode)
        except ValueError:
            values.joystick_mode = JoystickMode.KEMPSTON
        return values

    def on_save(self, values: SettingValues) -> bool:
        """Persist the values; return True on success."""
        return False

    def on_load(self, values: SettingValues) -> bool:
        """Fill the values from storage; return True if anything was read."""
        return False

    def save(self, values: SettingValues) -> bool:
        self.sanitise(values)
        return self.on_save(values)

    def load(self) -> tuple[SettingValues, bool]:
        """Return the sanitised values and whether they came from storage."""
        values = self.defaults()
        loaded = self.on_load(values)
        self.sanitise(values)
        return values, loaded

    def defaults(self) -> SettingValues:
        return SettingValues(volume=MAX_VOLUME, joystick_mode=JoystickMode.KEMPSTON)