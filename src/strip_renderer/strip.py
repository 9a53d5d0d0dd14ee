"""
Strip Model

A strip is a fixed-height bitmap of packed colors. Pixels are stored
column-major: pixel (x, y) lives at index x * rows + y, so two strips
with the same row count can be joined by appending their bitmaps.
"""

from dataclasses import dataclass, field

from .color import BLACK, WHITE
from .errors import InvalidColorFormat, InvalidDimension, OutOfBounds

# Height of the physical display
DISPLAY_ROWS = 8


@dataclass
class Strip:
    """Bitmap with `rows` rows and `columns` columns."""
    rows: int
    columns: int
    bitmap: list[int] = field(default_factory=list)

    def __post_init__(self):
        if self.rows < 0 or self.columns < 0:
            raise InvalidDimension(f"negative strip size {self.rows}x{self.columns}")
        if len(self.bitmap) != self.rows * self.columns:
            raise InvalidDimension(
                f"bitmap has {len(self.bitmap)} pixels, "
                f"expected {self.rows}x{self.columns}={self.rows * self.columns}"
            )

    @classmethod
    def blank(cls, rows: int, columns: int, fill: int = BLACK) -> "Strip":
        """Allocate a strip with every pixel set to `fill`."""
        if rows < 0 or columns < 0:
            raise InvalidDimension(f"negative strip size {rows}x{columns}")
        return cls(rows, columns, [fill] * (rows * columns))

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.columns and 0 <= y < self.rows):
            raise OutOfBounds(f"pixel ({x}, {y}) outside {self.columns}x{self.rows} strip")
        return x * self.rows + y

    def get_pixel(self, x: int, y: int) -> int:
        """Color at column x, row y."""
        return self.bitmap[self._index(x, y)]

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Overwrite the pixel at column x, row y."""
        self.bitmap[self._index(x, y)] = color

    def column(self, x: int) -> list[int]:
        """All colors of column x, top to bottom."""
        if not 0 <= x < self.columns:
            raise OutOfBounds(f"column {x} outside strip of width {self.columns}")
        start = x * self.rows
        return self.bitmap[start:start + self.rows]

    def append(self, other: "Strip") -> None:
        """
        Extend this strip with the columns of another one.

        Row counts are not checked here; see render.join for the
        strict variant.
        """
        self.columns += other.columns
        self.bitmap.extend(other.bitmap)

    # -------------------------------------------------------------------------
    # Wire format
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize to {rows, columns, bitmap}."""
        return {"rows": self.rows, "columns": self.columns, "bitmap": list(self.bitmap)}

    @classmethod
    def from_dict(cls, data: dict) -> "Strip":
        """
        Build a strip from its wire form.

        Raises:
            InvalidDimension: if a field is missing or the sizes do not add up.
            InvalidColorFormat: if a pixel is not a 24-bit color.
        """
        try:
            rows = int(data["rows"])
            columns = int(data["columns"])
            bitmap = [int(pixel) for pixel in data.get("bitmap") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidDimension(f"malformed strip: {e}") from e
        for index, pixel in enumerate(bitmap):
            if not BLACK <= pixel <= WHITE:
                raise InvalidColorFormat(f"pixel {index} is not a 24-bit color: {pixel}")
        return cls(rows, columns, bitmap)
