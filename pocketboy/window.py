"""The window layer drawn over the background."""

from __future__ import annotations

from pocketboy.tile import TILE_HEIGHT, TILE_WIDTH

VIEWPORT_WIDTH = 160
VIEWPORT_HEIGHT = 144


class Window:
    """Window position registers WX and WY and the internal line counter."""

    def __init__(self) -> None:
        self._wx = 0
        self.wy = 0
        self.line_counter = 0

    @property
    def wx(self) -> int:
        """Window X position plus 7."""
        return self._wx

    @wx.setter
    def wx(self, value: int) -> None:
        # Values below 7 are ignored.
        if value >= 7:
            self._wx = value

    def _left(self) -> int:
        return (self._wx - 7) & 0xFF

    def inside_window(self, window_enabled: bool, lx: int, ly: int) -> bool:
        """True when screen pixel (lx, ly) is covered by the window."""
        return window_enabled and lx >= self._left() and ly >= self.wy

    def reset_line_counter(self) -> None:
        """Restart the window at its first line."""
        self.line_counter = 0

    def increment_line_counter(self, window_enabled: bool, ly: int) -> None:
        """Advance the window line after a line on which it was visible."""
        if (
            window_enabled
            and self._left() < VIEWPORT_WIDTH
            and self.wy < VIEWPORT_HEIGHT
            and ly >= self.wy
        ):
            self.line_counter = min(self.line_counter + 1, 0xFF)

    def tile_map_coordinates(self, lx: int) -> tuple[int, int]:
        """Position in the window's tile map of screen column lx on the current line."""
        return (lx - self._left()) & 0xFF, self.line_counter

    def pixel_offsets(self, lx: int, ly: int) -> tuple[int, int]:
        """Bit index within a tile row and byte offset of that row within the tile."""
        x_offset = ((self._wx - lx) & 0xFF) % TILE_WIDTH
        y_offset = 2 * (((ly - self.wy) & 0xFF) % TILE_HEIGHT)
        return x_offset, y_offset