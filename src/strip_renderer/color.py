"""
Color Codec

Colors are packed 24-bit integers: red in bits 16-23, green in bits 8-15,
blue in bits 0-7. This is the value stored in every strip pixel and sent
over the wire.
"""

import re

from .errors import InvalidColorFormat

BLACK = 0x000000
WHITE = 0xFFFFFF

_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


def rgb(red: int, green: int, blue: int) -> int:
    """Pack three 8-bit channels into a color."""
    for name, value in (("red", red), ("green", green), ("blue", blue)):
        if not 0 <= value <= 255:
            raise InvalidColorFormat(f"{name} channel out of range: {value}")
    return (red << 16) | (green << 8) | blue


def unpack(color: int) -> tuple[int, int, int]:
    """Split a packed color into (red, green, blue)."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def parse_color(text: str) -> int:
    """
    Parse a '#RRGGBB' string (any case) into a packed color.

    Raises:
        InvalidColorFormat: if the text is not exactly '#' and six hex digits.
    """
    if not isinstance(text, str) or not _HEX_COLOR.fullmatch(text):
        raise InvalidColorFormat(f"unable to parse color {text!r}, expected #RRGGBB")
    return int(text[1:], 16)


def format_color(color: int) -> str:
    """Format a packed color as lowercase '#rrggbb'."""
    if not 0 <= color <= WHITE:
        raise InvalidColorFormat(f"not a 24-bit color: {color}")
    return f"#{color:06x}"
