"""
Strip Renderer - Bitmaps for 8-row scrolling LED displays

Turns blank space, text and small images into uniform pixel strips
and joins strips end-to-end into longer ones.

Supports:
- Packed 24-bit colors parsed from #RRGGBB strings
- Column-major strips with a fixed row count
- Two built-in bitmap fonts (6x8 and 8x8)
- PNG, JPEG, GIF, BMP and WebP input images
- HTTP service and CLI front-ends

License: Apache-2.0
"""

__version__ = "1.0.0"
__author__ = "Strip Renderer Contributors"

from .color import format_color, parse_color, rgb, unpack
from .config import RendererConfig, load_config, save_config
from .errors import (
    DecodeError,
    EmptyInput,
    InvalidColorFormat,
    InvalidDimension,
    OutOfBounds,
    RenderError,
    RowCountMismatch,
)
from .font import DEFAULT_GLYPHS, FONT_LARGE, FONT_SMALL, BitmapGlyphSet, Glyph
from .logging_setup import setup_logging
from .preview import strip_to_image, to_png_bytes
from .render import join, render_image, render_space, render_text, select_font
from .strip import DISPLAY_ROWS, Strip

__all__ = [
    # Color
    "format_color",
    "parse_color",
    "rgb",
    "unpack",
    # Strip
    "DISPLAY_ROWS",
    "Strip",
    # Fonts
    "DEFAULT_GLYPHS",
    "FONT_LARGE",
    "FONT_SMALL",
    "BitmapGlyphSet",
    "Glyph",
    # Rendering
    "join",
    "render_image",
    "render_space",
    "render_text",
    "select_font",
    "strip_to_image",
    "to_png_bytes",
    # Errors
    "RenderError",
    "InvalidColorFormat",
    "InvalidDimension",
    "DecodeError",
    "EmptyInput",
    "OutOfBounds",
    "RowCountMismatch",
    # Config
    "RendererConfig",
    "load_config",
    "save_config",
    "setup_logging",
]
