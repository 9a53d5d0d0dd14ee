#!/usr/bin/env python3
"""
Test Preview

Strip to image conversion.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from strip_renderer.errors import InvalidDimension
from strip_renderer.preview import MAX_PREVIEW_PIXELS, MAX_PREVIEW_SCALE, strip_to_image, to_png_bytes
from strip_renderer.render import render_space, render_text


def test_one_pixel_per_led():
    strip = render_text("+", 6, 0x00FF00, 0x000000)
    img = strip_to_image(strip)
    assert img.size == (6, 8)
    assert img.mode == 'RGB'
    assert img.getpixel((0, 0)) == (0, 0, 0)
    assert img.getpixel((1, 3)) == (0, 255, 0)


def test_scaled_preview():
    img = strip_to_image(render_space(2, 0x0000FF), scale=4)
    assert img.size == (8, 32)
    assert img.getpixel((7, 31)) == (0, 0, 255)


def test_invalid_previews():
    with pytest.raises(InvalidDimension):
        strip_to_image(render_space(2), scale=0)
    with pytest.raises(InvalidDimension):
        strip_to_image(render_space(0))


def test_preview_size_is_capped():
    img = strip_to_image(render_space(1), scale=MAX_PREVIEW_SCALE)
    assert img.size == (MAX_PREVIEW_SCALE, 8 * MAX_PREVIEW_SCALE)

    with pytest.raises(InvalidDimension):
        strip_to_image(render_space(1), scale=MAX_PREVIEW_SCALE + 1)

    # Within the scale limit but too many pixels in total
    wide = render_space(MAX_PREVIEW_PIXELS // (8 * 4) + 1)
    with pytest.raises(InvalidDimension):
        strip_to_image(wide, scale=2)


def test_png_bytes():
    png = to_png_bytes(strip_to_image(render_space(3, 0xFF0000)))
    assert png[:8] == b'\x89PNG\r\n\x1a\n', "Not valid PNG"
