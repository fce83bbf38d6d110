"""Geometry of the emulated screen within the output display."""

from __future__ import annotations

from dataclasses import dataclass

ZX_SPECTRUM_SCREEN_WIDTH = 256
ZX_SPECTRUM_SCREEN_HEIGHT = 240
MAX_COLORED_BORDER = 32


@dataclass(frozen=True)
class DisplayGeometry:
    """Output display size, with derived border and blank-line counts.

    Spectrum pixels and lines are doubled on output, so the derived
    values are in Spectrum pixels.
    """

    width_pixels: int = 640
    height_pixels: int = 480

    def __post_init__(self) -> None:
        if self.width_pixels >> 1 < ZX_SPECTRUM_SCREEN_WIDTH:
            raise ValueError(f"display width {self.width_pixels} is too narrow")
        if self.height_pixels >> 1 < ZX_SPECTRUM_SCREEN_HEIGHT:
            raise ValueError(f"display height {self.height_pixels} is too short")

    @property
    def blank_lines(self) -> int:
        """Blank lines to add, taking line doubling into account."""
        return (self.height_pixels >> 1) - ZX_SPECTRUM_SCREEN_HEIGHT

    @property
    def border_pixels(self) -> int:
        """Pixels across a line, taking pixel doubling into account."""
        return self.width_pixels >> 1

    @property
    def border_pixels_left(self) -> int:
        return (self.border_pixels - ZX_SPECTRUM_SCREEN_WIDTH) >> 1

    @property
    def border_pixels_right(self) -> int:
        return self.border_pixels - ZX_SPECTRUM_SCREEN_WIDTH - self.border_pixels_left

    @property
    def border_pixels_left_colored(self) -> int:
        return min(self.border_pixels_left, MAX_COLORED_BORDER)

    @property
    def border_pixels_right_colored(self) -> int:
        return min(self.border_pixels_right, MAX_COLORED_BORDER)

    @property
    def border_pixels_left_blank(self) -> int:
        return max(self.border_pixels_left - self.border_pixels_left_colored, 0)

    @property
    def border_pixels_right_blank(self) -> int:
        return max(self.border_pixels_right - self.border_pixels_right_colored, 0)