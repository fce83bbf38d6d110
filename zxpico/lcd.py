"""ST7789 LCD initialisation command sequences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

DELAY_UNIT_MS = 5
MADCTL = 0x30
MADCTL_MIRROR_X = 0x70
RAMWR = 0x2C


@dataclass(frozen=True)
class LcdCommand:
    """One command byte, its payload and the delay that follows it."""

    command: int
    payload: bytes = b""
    delay_units: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.command <= 0xFF:
            raise ValueError(f"command {self.command} is not a byte")
        if not 0 <= self.delay_units <= 0xFF:
            raise ValueError(f"delay {self.delay_units} is not a byte")
        if len(self.payload) + 1 > 0xFF:
            raise ValueError("payload is too long")
        object.__setattr__(self, "payload", bytes(self.payload))

    @property
    def delay_ms(self) -> int:
        return self.delay_units * DELAY_UNIT_MS

    def encode(self) -> bytes:
        """The command in init-sequence form: length, delay, command, payload."""
        return bytes((len(self.payload) + 1, self.delay_units, self.command)) + self.payload

    def writes(self) -> list[tuple[bool, int]]:
        """The bytes sent, each with the data/command line: False for the command."""
        return [(False, self.command)] + [(True, b) for b in self.payload]


def parse_init_sequence(data: bytes) -> list[LcdCommand]:
    """Split a zero-terminated init sequence into its commands."""
    commands = []
    i = 0
    while True:
        if i >= len(data):
            raise ValueError("init sequence has no terminator")
        length = data[i]
        if length == 0:
            return commands
        end = i + 2 + length
        if end > len(data):
            raise ValueError(f"command at offset {i} is truncated")
        commands.append(
            LcdCommand(
                command=data[i + 2],
                payload=bytes(data[i + 3:end]),
                delay_units=data[i + 1],
            )
        )
        i = end


def _encode_all(commands: Iterable[LcdCommand]) -> bytes:
    return b"".join(c.encode() for c in commands) + b"\x00"


def init_sequence(mirror_x: bool = False) -> bytes:
    """The panel's start-up sequence for 12-bit colour at 320x240."""
    madctl = MADCTL_MIRROR_X if mirror_x else MADCTL
    return _encode_all(
        [
            LcdCommand(0x01, delay_units=20),  # software reset
            LcdCommand(0x11, delay_units=10),  # exit sleep
            LcdCommand(0x3A, b"\x63", 2),  # 12-bit colour
            LcdCommand(0x36, bytes((madctl,))),
            LcdCommand(0x2A, b"\x00\x00\x01\x40"),  # columns 0..320
            LcdCommand(0x2B, b"\x00\x00\x00\xf0"),  # rows 0..240
            LcdCommand(0x21, delay_units=2),  # inversion on
            LcdCommand(0x13, delay_units=2),  # normal display on
            LcdCommand(0x29, delay_units=2),  # display on
        ]
    )