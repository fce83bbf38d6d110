import pytest

from zxpico.display import ZX_SPECTRUM_SCREEN_WIDTH, DisplayGeometry


def test_default_vga_geometry():
    g = DisplayGeometry()
    assert g.blank_lines == 0
    assert g.border_pixels == 320
    assert g.border_pixels_left == g.border_pixels_right == 32
    assert g.border_pixels_left_blank == 0
    assert g.border_pixels_right_blank == 0


@pytest.mark.parametrize("width", [512, 640, 720, 800, 1024, 1025])
def test_border_parts_add_up(width):
    g = DisplayGeometry(width, 480)
    assert g.border_pixels_left + g.border_pixels_right + ZX_SPECTRUM_SCREEN_WIDTH == g.border_pixels
    assert g.border_pixels_left_colored + g.border_pixels_left_blank == g.border_pixels_left
    assert g.border_pixels_right_colored + g.border_pixels_right_blank == g.border_pixels_right
    assert g.border_pixels_left_colored <= 32
    assert g.border_pixels_right_colored <= 32


def test_wide_display_has_blank_border():
    g = DisplayGeometry(800, 480)
    assert g.border_pixels_left_colored == 32
    assert g.border_pixels_left_blank == g.border_pixels_left - 32
    assert g.border_pixels_left_blank > 0


def test_taller_display_adds_blank_lines():
    g = DisplayGeometry(640, 576)
    assert g.blank_lines == 576 // 2 - 240


@pytest.mark.parametrize("size", [(400, 480), (640, 400)])
def test_too_small_display_rejected(size):
    with pytest.raises(ValueError):
        DisplayGeometry(*size)