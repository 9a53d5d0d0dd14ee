"""
Strip preview helpers - turn a strip back into a viewable image.
"""

from io import BytesIO

from PIL import Image

from .color import unpack
from .errors import InvalidDimension
from .strip import Strip

MAX_PREVIEW_SCALE = 64
MAX_PREVIEW_PIXELS = 16 * 1024 * 1024


def strip_to_image(strip: Strip, scale: int = 1) -> Image.Image:
    """
    Render a strip as an RGB image, one pixel block per LED.

    Args:
        strip: Strip to draw.
        scale: Size of each LED in image pixels, 1 to MAX_PREVIEW_SCALE.

    Raises:
        InvalidDimension: on a bad scale, an empty strip, or a preview
            larger than MAX_PREVIEW_PIXELS.
    """
    if scale < 1:
        raise InvalidDimension(f"preview scale must be at least 1, got {scale}")
    if strip.columns == 0 or strip.rows == 0:
        raise InvalidDimension("cannot preview an empty strip")
    if scale > MAX_PREVIEW_SCALE:
        raise InvalidDimension(f"preview scale must be at most {MAX_PREVIEW_SCALE}, got {scale}")
    if strip.columns * strip.rows * scale * scale > MAX_PREVIEW_PIXELS:
        raise InvalidDimension(f"preview of {strip.columns}x{strip.rows} at scale {scale} is too large")

    img = Image.new('RGB', (strip.columns, strip.rows), (0, 0, 0))
    px = img.load()
    for x in range(strip.columns):
        for y, color in enumerate(strip.column(x)):
            px[x, y] = unpack(color)

    if scale > 1:
        img = img.resize((strip.columns * scale, strip.rows * scale), Image.Resampling.NEAREST)
    return img


def to_png_bytes(img: Image.Image) -> bytes:
    """Convert PIL Image to PNG bytes."""
    buf = BytesIO()
    img.save(buf, format='PNG', optimize=False)
    return buf.getvalue()
