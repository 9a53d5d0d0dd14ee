"""
Render Module - Producers and composer for display strips.

Supports:
- Spacer: solid background of a given width
- Text: characters drawn through a bitmap glyph set
- Image: 8 pixel high raster images, channels reduced from 16 to 8 bits
- Join: strips placed side by side, left to right

All functions are pure: they build a new strip or raise a RenderError.
"""

from io import BytesIO
from typing import Iterable, Iterator

from PIL import Image, UnidentifiedImageError

from .color import BLACK, rgb
from .errors import DecodeError, EmptyInput, InvalidDimension, RowCountMismatch
from .font import DEFAULT_GLYPHS, FONT_LARGE, FONT_SMALL
from .strip import DISPLAY_ROWS, Strip

# Font sizes below this use the small font
SMALL_FONT_LIMIT = 8

SUPPORTED_FORMATS = ("PNG", "JPEG", "GIF", "BMP", "WEBP")

# Pillow modes that carry one 16-bit grayscale sample per pixel
_GRAY16_MODES = {"I", "I;16", "I;16B", "I;16L"}


# =============================================================================
# Spacer
# =============================================================================

def render_space(width: int, bg_color: int = BLACK) -> Strip:
    """Create a display strip of `width` columns filled with `bg_color`."""
    if width < 0:
        raise InvalidDimension(f"spacer width must not be negative, got {width}")
    return Strip.blank(DISPLAY_ROWS, width, bg_color)


# =============================================================================
# Text
# =============================================================================

def select_font(font_size: int) -> str:
    """Pick the glyph set for a requested point size."""
    return FONT_SMALL if font_size < SMALL_FONT_LIMIT else FONT_LARGE


def render_text(
    text: str,
    font_size: int,
    fg_color: int,
    bg_color: int,
    glyphs=DEFAULT_GLYPHS,
) -> Strip:
    """
    Rasterize text into a display strip.

    The strip is allocated at its final width in `bg_color` first, then
    every glyph column is painted from column 0 onwards. Set glyph bits
    become `fg_color`, unset bits `bg_color`.

    Args:
        text: Characters to draw, in order.
        font_size: Point size; only decides between the small and large font.
        fg_color: Packed foreground color.
        bg_color: Packed background color.
        glyphs: Object with a glyph(font_id, char) method.
    """
    font_id = select_font(font_size)
    shapes = [glyphs.glyph(font_id, char) for char in text]

    strip = Strip.blank(DISPLAY_ROWS, sum(glyph.width for glyph in shapes), bg_color)

    cursor_x = 0
    for glyph in shapes:
        height = min(glyph.height, strip.rows)
        for gx in range(glyph.width):
            for y in range(height):
                color = fg_color if glyph.is_set(gx, y) else bg_color
                strip.set_pixel(cursor_x + gx, y, color)
        cursor_x += glyph.width

    return strip


# =============================================================================
# Image
# =============================================================================

def _samples16(img: Image.Image) -> Iterator[tuple[int, int, tuple[int, int, int]]]:
    """
    Yield (x, y, (r, g, b)) with each channel at 16-bit precision.

    8-bit channels are widened by repeating the byte (v * 0x101) and
    premultiplied by alpha, so a fully transparent pixel reads as black.
    """
    width, height = img.size

    if img.mode in _GRAY16_MODES:
        px = img.load()
        for y in range(height):
            for x in range(width):
                value = min(max(int(px[x, y]), 0), 0xFFFF)
                yield x, y, (value, value, value)
        return

    px = img.convert("RGBA").load()
    for y in range(height):
        for x in range(width):
            r, g, b, a = px[x, y]
            alpha = a * 0x101
            yield x, y, tuple(c * 0x101 * alpha // 0xFFFF for c in (r, g, b))


def render_image(data: bytes) -> Strip:
    """
    Convert an encoded image, exactly 8 pixels high, into a display strip.

    Raises:
        DecodeError: if the bytes are not a supported image.
        InvalidDimension: if the image is not 8 pixels high.
    """
    try:
        img = Image.open(BytesIO(data), formats=SUPPORTED_FORMATS)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Invalid Image: {e}") from e

    with img:
        width, height = img.size
        if height != DISPLAY_ROWS:
            raise InvalidDimension(
                f"Invalid Image Size. Must be {DISPLAY_ROWS} pixel high, got {width}x{height}"
            )

        try:
            img.load()
        except (OSError, SyntaxError, ValueError) as e:
            raise DecodeError(f"Invalid Image: {e}") from e

        strip = Strip.blank(DISPLAY_ROWS, width)
        for x, y, (r, g, b) in _samples16(img):
            strip.set_pixel(x, y, rgb(r >> 8, g >> 8, b >> 8))

    return strip


# =============================================================================
# Join
# =============================================================================

def join(strips: Iterable[Strip], strict: bool = True) -> Strip:
    """
    Concatenate strips left to right.

    The result has the first strip's row count and the summed column
    count; its bitmap is every input bitmap appended in order.

    Args:
        strips: Strips to join, in display order.
        strict: Reject strips whose row count differs from the first one.
            With strict=False mismatched strips are appended as-is.

    Raises:
        EmptyInput: if no strips are given.
        RowCountMismatch: in strict mode, on differing row counts.
    """
    strips = list(strips)
    if not strips:
        raise EmptyInput("Empty list")

    rows = strips[0].rows
    if strict:
        for index, strip in enumerate(strips):
            if strip.rows != rows:
                raise RowCountMismatch(
                    f"strip {index} has {strip.rows} rows, expected {rows}"
                )

    result = Strip(rows, 0, [])
    for strip in strips:
        result.append(strip)
    return result
