"""Monochrome and colour palettes."""

from __future__ import annotations

_SHADES = (
    (255, 255, 255),
    (192, 192, 192),
    (96, 96, 96),
    (0, 0, 0),
)


class Palette:
    """A monochrome palette mapping four colour indices to grey shades."""

    def __init__(self, value: int = 0) -> None:
        self._data = [0, 0, 0, 0]
        self.write(value)

    def pixel_color(self, color: int) -> tuple[int, int, int]:
        """RGB shade for a colour index."""
        return _SHADES[self._data[color]]

    def write(self, value: int) -> None:
        """Load the palette from its register byte."""
        self._data = [(value >> (i * 2)) & 0b11 for i in range(4)]

    def read(self) -> int:
        """The palette as its register byte."""
        result = 0
        for i, shade in enumerate(self._data):
            result |= shade << (i * 2)
        return result


def color_index(byte1: int, byte2: int, pixel_index: int) -> int:
    """Colour index of one pixel from the two bit planes of a tile row."""
    lsb = (byte1 >> pixel_index) & 0b1
    msb = ((byte2 >> pixel_index) & 0b1) << 1
    return msb | lsb


class CgbPalette:
    """Eight colour palettes of four 15-bit colours, reached through an index register."""

    def __init__(self) -> None:
        self._increment = False
        self._address = 0
        self._data = [[[0, 0, 0] for _ in range(4)] for _ in range(8)]

    def pixel_color(self, palette: int, color: int) -> tuple[int, int, int]:
        """RGB colour, corrected for the LCD, of a colour in a palette."""
        r, g, b = self._data[palette][color]
        red = ((r * 13 + g * 2 + b) >> 1) & 0xFF
        green = ((g * 3 + b) << 1) & 0xFF
        blue = ((r * 3 + g * 2 + b * 11) >> 1) & 0xFF
        return red, green, blue

    def _entry(self) -> list[int]:
        return self._data[self._address >> 3][(self._address >> 1) & 0x03]

    def write_spec_and_index(self, value: int) -> None:
        """Set the auto-increment flag and the byte address."""
        self._increment = value & 0x80 != 0
        self._address = value & 0x3F

    def write_palette(self, value: int) -> None:
        """Write one byte of colour data at the current address."""
        entry = self._entry()
        if self._address & 0x01 == 0:
            entry[0] = value & 0x1F
            entry[1] = (entry[1] & 0x18) | (value >> 5)
        else:
            entry[1] = (entry[1] & 0x07) | ((value & 0x03) << 3)
            entry[2] = (value >> 2) & 0x1F
        if self._increment:
            self._address = (self._address + 1) & 0x3F

    def read_spec_and_index(self) -> int:
        """The index register byte."""
        return (int(self._increment) << 7) | 0x40 | self._address

    def read_palette(self) -> int:
        """Read one byte of colour data at the current address."""
        entry = self._entry()
        if self._address & 0x01 == 0:
            return entry[0] | ((entry[1] & 0x07) << 5)
        return ((entry[1] & 0x18) >> 3) | (entry[2] << 2)