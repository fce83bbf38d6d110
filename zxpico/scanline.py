"""Render Spectrum scanlines into packed colour words for output devices."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional, Sequence

from zxpico.display import DisplayGeometry

_FIRST_SCREEN_LINE = 24
_SCREEN_LINES = 192
_OUTPUT_LINES = 240
_COLUMNS = 32
_WORD = 0xFFFFFFFF

_BITBIT_MASKS = (0x00000000, 0xFFFF0000, 0x0000FFFF, 0xFFFFFFFF)
_RGB444_MASKS = (0x00000000, 0x000FFF00, 0xFFF00000, 0xFFFFFF00)
_RGB444_BORDER_WORDS = 16
_RGB444_LINE_WORDS = 160


class VgaEncoding(Enum):
    BGYR_1111 = "bgyr1111"
    RGBY_1111 = "rgby1111"
    RGB_222 = "rgb222"
    RGB_332 = "rgb332"


def _components(index: int) -> tuple[int, int, int, bool]:
    blue = index & 1
    red = (index >> 1) & 1
    green = (index >> 2) & 1
    bright = index >= 8 and (index & 7) != 0
    return red, green, blue, bright


def _encode(encoding: VgaEncoding, index: int) -> int:
    r, g, b, bright = _components(index)
    y = int(bright)
    if encoding is VgaEncoding.BGYR_1111:
        return (y << 2) | (r << 3) | (g << 1) | b
    if encoding is VgaEncoding.RGBY_1111:
        return (y << 3) | (r << 2) | (g << 1) | b
    if encoding is VgaEncoding.RGB_222:
        level = 3 if bright else 2
        return ((r * level) << 4) | ((g * level) << 2) | (b * level)
    rg = 7 if bright else 5
    bl = 3 if bright else 2
    return ((r * rg) << 5) | ((g * rg) << 2) | (b * bl)


def colour_words(encoding: VgaEncoding = VgaEncoding.RGB_332) -> tuple[int, ...]:
    """The 16 Spectrum colours, each as one byte repeated over a 32-bit word."""
    return tuple(_encode(encoding, i) * 0x01010101 for i in range(16))


def rgb444_colour_words(inverse: bool = False, rgb_order: bool = False) -> tuple[int, ...]:
    """The 16 Spectrum colours as two 12-bit pixels packed for the LCD."""
    words = []
    for i in range(16):
        r, g, b, bright = _components(i)
        level = 0xF if bright else 0xC
        r, g, b = r * level, g * level, b * level
        if inverse:
            r, g, b = 0xF - r, 0xF - g, 0xF - b
        pixel = (b << 8) | (g << 4) | r if rgb_order else (r << 8) | (g << 4) | b
        words.append((pixel << 20) | (pixel << 8))
    return tuple(words)


def screen_offsets(v: int) -> tuple[int, int]:
    """Offsets of pixel row v in the bitmap and of its attribute row."""
    pixels = ((v & 0x7) << 8) + ((v & 0x38) << 2) + ((v & 0xC0) << 5)
    attrs = (v >> 3) << 5
    return pixels, attrs


def _is_border_line(y: int) -> bool:
    return y < _FIRST_SCREEN_LINE or y >= _FIRST_SCREEN_LINE + _SCREEN_LINES


def _check_colour(border_colour: int) -> None:
    if not 0 <= border_colour < 16:
        raise ValueError(f"border colour {border_colour} is out of range 0..15")


def _pixel_words(
    y: int,
    frame: int,
    screen: Sequence[int],
    attrs: Sequence[int],
    words: Sequence[int],
    masks: Sequence[int],
) -> Iterator[int]:
    pixel_offset, attr_offset = screen_offsets(y - _FIRST_SCREEN_LINE)
    flash = (frame >> 5) & 1
    for column in range(_COLUMNS):
        attr = attrs[attr_offset + column]
        pixels = screen[pixel_offset + column]
        if (attr >> 7) & flash:
            pixels ^= 0xFF
        paper = (attr >> 3) & 0xF
        ink = (attr & 7) | (paper & 0x8)
        paper_word = words[paper]
        ink_word = words[ink]
        for shift in (6, 4, 2, 0):
            mask = masks[(pixels >> shift) & 3]
            yield (mask & ink_word) | (~mask & paper_word & _WORD)


def prepare_rgb_scanline(
    y: int,
    frame: int,
    screen: Sequence[int],
    attrs: Sequence[int],
    border_colour: int,
    encoding: VgaEncoding = VgaEncoding.RGB_332,
    geometry: Optional[DisplayGeometry] = None,
) -> list[int]:
    """Words for output line y; each word carries two doubled Spectrum pixels."""
    _check_colour(border_colour)
    geometry = geometry or DisplayGeometry()
    words = colour_words(encoding)
    border = words[border_colour]
    left_blank = [0] * (geometry.border_pixels_left_blank // 2)
    right_blank = [0] * (geometry.border_pixels_right_blank // 2)
    if _is_border_line(y):
        coloured = (
            geometry.border_pixels
            - geometry.border_pixels_left_blank
            - geometry.border_pixels_right_blank
        ) // 2
        return left_blank + [border] * coloured + right_blank
    line = left_blank + [border] * (geometry.border_pixels_left_colored // 2)
    line.extend(_pixel_words(y, frame, screen, attrs, words, _BITBIT_MASKS))
    line.extend([border] * (geometry.border_pixels_right_colored // 2))
    line.extend(right_blank)
    return line


def prepare_rgb_blankline(geometry: Optional[DisplayGeometry] = None) -> list[int]:
    geometry = geometry or DisplayGeometry()
    return [0] * (geometry.width_pixels // 4)


def prepare_rgb444_scanline(
    y: int,
    frame: int,
    screen: Sequence[int],
    attrs: Sequence[int],
    border_colour: int,
    inverse: bool = False,
    rgb_order: bool = False,
) -> list[int]:
    """The 160 words sent to the LCD for line y."""
    _check_colour(border_colour)
    words = rgb444_colour_words(inverse, rgb_order)
    border = words[border_colour]
    if _is_border_line(y):
        return [border] * _RGB444_LINE_WORDS
    line = [border] * _RGB444_BORDER_WORDS
    line.extend(_pixel_words(y, frame, screen, attrs, words, _RGB444_MASKS))
    line.extend([border] * _RGB444_BORDER_WORDS)
    return line


def prepare_rgb444_frame(
    frame: int,
    screen: Sequence[int],
    attrs: Sequence[int],
    border_colour: int,
    inverse: bool = False,
    rgb_order: bool = False,
) -> list[list[int]]:
    return [
        prepare_rgb444_scanline(y, frame, screen, attrs, border_colour, inverse, rgb_order)
        for y in range(_OUTPUT_LINES)
    ]