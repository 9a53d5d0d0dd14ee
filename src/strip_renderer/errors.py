"""
Render Errors

Every failure a producer or the composer can raise. All of them derive from
RenderError so callers can catch the whole family in one place.
"""


class RenderError(Exception):
    """Base class for all strip rendering failures."""


class InvalidColorFormat(RenderError, ValueError):
    """A color string is not of the form #RRGGBB, or a channel is out of range."""


class InvalidDimension(RenderError, ValueError):
    """A width, height or pixel count is negative or not allowed."""


class DecodeError(RenderError, ValueError):
    """Image bytes could not be decoded."""


class EmptyInput(RenderError, ValueError):
    """Join was called with no strips."""


class RowCountMismatch(RenderError, ValueError):
    """Strips with different row counts were joined in strict mode."""


class OutOfBounds(RenderError, IndexError):
    """Pixel access outside the strip."""
