"""Scrolling of the background layer."""

from __future__ import annotations

from dataclasses import dataclass

from pocketboy.tile import TILE_HEIGHT, TILE_WIDTH


@dataclass
class Background:
    """Background scroll registers SCX and SCY."""

    scx: int = 0
    scy: int = 0

    def tile_map_coordinates(self, lx: int, ly: int) -> tuple[int, int]:
        """Position in the 256x256 map of screen pixel (lx, ly)."""
        return (lx + self.scx) & 0xFF, (ly + self.scy) & 0xFF

    def pixel_offsets(self, lx: int, ly: int) -> tuple[int, int]:
        """Bit index within a tile row and byte offset of that row within the tile."""
        return 7 - (lx % TILE_WIDTH), 2 * (ly % TILE_HEIGHT)