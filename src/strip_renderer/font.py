"""
Glyph Sets - Bitmap fonts for the 8-row display.

Both built-in fonts are derived from one 5x7 dot-matrix alphabet:
- FONT_SMALL (6x8): one blank lead column, the 5x7 glyph, one blank bottom row
- FONT_LARGE (8x8): one blank lead column, the glyph widened to 7 columns,
  one blank bottom row

The rasterizer only needs an object with a `glyph(font_id, char)` method,
so tests and callers can inject their own glyph data.
"""

from dataclasses import dataclass

FONT_SMALL = "6x8"
FONT_LARGE = "8x8"

FALLBACK_CHAR = '?'


@dataclass(frozen=True)
class Glyph:
    """One character as rows of '#' (set) and ' ' (unset)."""
    rows: tuple[str, ...]

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        return len(self.rows)

    def is_set(self, x: int, y: int) -> bool:
        row = self.rows[y]
        return x < len(row) and row[x] == '#'


# =============================================================================
# Base Alphabet (5x7 pixel characters)
# =============================================================================

DOT_MATRIX_5X7 = {
    'A': [" ### ", "#   #", "#   #", "#####", "#   #", "#   #", "#   #"],
    'B': ["#### ", "#   #", "#   #", "#### ", "#   #", "#   #", "#### "],
    'C': [" ### ", "#   #", "#    ", "#    ", "#    ", "#   #", " ### "],
    'D': ["#### ", "#   #", "#   #", "#   #", "#   #", "#   #", "#### "],
    'E': ["#####", "#    ", "#    ", "#### ", "#    ", "#    ", "#####"],
    'F': ["#####", "#    ", "#    ", "#### ", "#    ", "#    ", "#    "],
    'G': [" ### ", "#   #", "#    ", "# ###", "#   #", "#   #", " ### "],
    'H': ["#   #", "#   #", "#   #", "#####", "#   #", "#   #", "#   #"],
    'I': ["#####", "  #  ", "  #  ", "  #  ", "  #  ", "  #  ", "#####"],
    'J': ["#####", "    #", "    #", "    #", "    #", "#   #", " ### "],
    'K': ["#   #", "#  # ", "# #  ", "##   ", "# #  ", "#  # ", "#   #"],
    'L': ["#    ", "#    ", "#    ", "#    ", "#    ", "#    ", "#####"],
    'M': ["#   #", "## ##", "# # #", "#   #", "#   #", "#   #", "#   #"],
    'N': ["#   #", "##  #", "# # #", "#  ##", "#   #", "#   #", "#   #"],
    'O': [" ### ", "#   #", "#   #", "#   #", "#   #", "#   #", " ### "],
    'P': ["#### ", "#   #", "#   #", "#### ", "#    ", "#    ", "#    "],
    'Q': [" ### ", "#   #", "#   #", "#   #", "# # #", "#  # ", " ## #"],
    'R': ["#### ", "#   #", "#   #", "#### ", "# #  ", "#  # ", "#   #"],
    'S': [" ####", "#    ", "#    ", " ### ", "    #", "    #", "#### "],
    'T': ["#####", "  #  ", "  #  ", "  #  ", "  #  ", "  #  ", "  #  "],
    'U': ["#   #", "#   #", "#   #", "#   #", "#   #", "#   #", " ### "],
    'V': ["#   #", "#   #", "#   #", "#   #", "#   #", " # # ", "  #  "],
    'W': ["#   #", "#   #", "#   #", "#   #", "# # #", "## ##", "#   #"],
    'X': ["#   #", "#   #", " # # ", "  #  ", " # # ", "#   #", "#   #"],
    'Y': ["#   #", "#   #", " # # ", "  #  ", "  #  ", "  #  ", "  #  "],
    'Z': ["#####", "    #", "   # ", "  #  ", " #   ", "#    ", "#####"],
    '0': [" ### ", "#   #", "#  ##", "# # #", "##  #", "#   #", " ### "],
    '1': ["  #  ", " ##  ", "  #  ", "  #  ", "  #  ", "  #  ", "#####"],
    '2': [" ### ", "#   #", "    #", "  ## ", " #   ", "#    ", "#####"],
    '3': [" ### ", "#   #", "    #", "  ## ", "    #", "#   #", " ### "],
    '4': ["#   #", "#   #", "#   #", "#####", "    #", "    #", "    #"],
    '5': ["#####", "#    ", "#### ", "    #", "    #", "#   #", " ### "],
    '6': [" ### ", "#    ", "#    ", "#### ", "#   #", "#   #", " ### "],
    '7': ["#####", "    #", "   # ", "  #  ", "  #  ", "  #  ", "  #  "],
    '8': [" ### ", "#   #", "#   #", " ### ", "#   #", "#   #", " ### "],
    '9': [" ### ", "#   #", "#   #", " ####", "    #", "    #", " ### "],
    ' ': ["     ", "     ", "     ", "     ", "     ", "     ", "     "],
    '.': ["     ", "     ", "     ", "     ", "     ", " ##  ", " ##  "],
    ',': ["     ", "     ", "     ", "     ", "  #  ", "  #  ", " #   "],
    '!': ["  #  ", "  #  ", "  #  ", "  #  ", "  #  ", "     ", "  #  "],
    '?': [" ### ", "#   #", "    #", "  ## ", "  #  ", "     ", "  #  "],
    ':': ["     ", "  #  ", "  #  ", "     ", "  #  ", "  #  ", "     "],
    ';': ["     ", "  #  ", "  #  ", "     ", "  #  ", "  #  ", " #   "],
    '-': ["     ", "     ", "     ", "#####", "     ", "     ", "     "],
    '+': ["     ", "  #  ", "  #  ", "#####", "  #  ", "  #  ", "     "],
    '*': ["     ", "  #  ", "# # #", " ### ", "# # #", "  #  ", "     "],
    '=': ["     ", "     ", "#####", "     ", "#####", "     ", "     "],
    '_': ["     ", "     ", "     ", "     ", "     ", "     ", "#####"],
    '/': ["    #", "   # ", "  #  ", "  #  ", " #   ", "#    ", "#    "],
    '\\': ["#    ", "#    ", " #   ", "  #  ", "   # ", "    #", "    #"],
    '|': ["  #  ", "  #  ", "  #  ", "  #  ", "  #  ", "  #  ", "  #  "],
    '>': ["#    ", " #   ", "  #  ", "   # ", "  #  ", " #   ", "#    "],
    '<': ["    #", "   # ", "  #  ", " #   ", "  #  ", "   # ", "    #"],
    '(': ["  #  ", " #   ", "#    ", "#    ", "#    ", " #   ", "  #  "],
    ')': ["  #  ", "   # ", "    #", "    #", "    #", "   # ", "  #  "],
    '[': [" ### ", " #   ", " #   ", " #   ", " #   ", " #   ", " ### "],
    ']': [" ### ", "   # ", "   # ", "   # ", "   # ", "   # ", " ### "],
    '{': ["   # ", "  #  ", "  #  ", " #   ", "  #  ", "  #  ", "   # "],
    '}': [" #   ", "  #  ", "  #  ", "   # ", "  #  ", "  #  ", " #   "],
    '"': [" # # ", " # # ", "     ", "     ", "     ", "     ", "     "],
    "'": ["  #  ", "  #  ", "     ", "     ", "     ", "     ", "     "],
    '`': [" #   ", "  #  ", "     ", "     ", "     ", "     ", "     "],
    '^': ["  #  ", " # # ", "#   #", "     ", "     ", "     ", "     "],
    '~': ["     ", "     ", " #   ", "# # #", "   # ", "     ", "     "],
    '#': [" # # ", " # # ", "#####", " # # ", "#####", " # # ", " # # "],
    '$': ["  #  ", " ####", "# #  ", " ### ", "  # #", "#### ", "  #  "],
    '%': ["##   ", "##  #", "   # ", "  #  ", " #   ", "#  ##", "   ##"],
    '&': [" ##  ", "#  # ", "# #  ", " #   ", "# # #", "#  # ", " ## #"],
    '@': [" ### ", "#   #", "# ###", "# # #", "# ###", "#    ", " ### "],
}

# Source column for each of the 7 columns of a widened glyph
_WIDE_COLUMNS = (0, 1, 1, 2, 3, 3, 4)


def _small(pattern: list[str]) -> Glyph:
    rows = [" " + row for row in pattern]
    rows.append(" " * 6)
    return Glyph(tuple(rows))


def _large(pattern: list[str]) -> Glyph:
    rows = [" " + "".join(row[c] for c in _WIDE_COLUMNS) for row in pattern]
    rows.append(" " * 8)
    return Glyph(tuple(rows))


class BitmapGlyphSet:
    """
    Lookup of (font id, character) -> Glyph.

    Lowercase letters fold to uppercase; anything else missing from a font
    is drawn with the fallback glyph.
    """

    def __init__(self, fonts: dict[str, dict[str, Glyph]], fallback: str = FALLBACK_CHAR):
        self.fonts = fonts
        self.fallback = fallback

    def glyph(self, font_id: str, char: str) -> Glyph:
        try:
            font = self.fonts[font_id]
        except KeyError:
            raise KeyError(f"Unknown font: {font_id}") from None
        if char in font:
            return font[char]
        if char.upper() in font:
            return font[char.upper()]
        return font[self.fallback]


DEFAULT_GLYPHS = BitmapGlyphSet({
    FONT_SMALL: {char: _small(pattern) for char, pattern in DOT_MATRIX_5X7.items()},
    FONT_LARGE: {char: _large(pattern) for char, pattern in DOT_MATRIX_5X7.items()},
})
