"""Tile geometry and the addressing of tile data and tile maps."""

from __future__ import annotations

from enum import Enum

TILE_WIDTH = 8
TILE_HEIGHT = TILE_WIDTH
TILE_BYTES = 16
FULL_WIDTH = 256


class TileDataAddressingMode(Enum):
    """Where tile indices point into VRAM."""

    HIGH = 0
    LOW = 1

    def tile_address(self, tile_index: int) -> int:
        """Address of the first byte of a tile."""
        if self is TileDataAddressingMode.LOW:
            return 0x8000 + tile_index * TILE_BYTES
        if tile_index < 128:
            return 0x9000 + tile_index * TILE_BYTES
        return 0x8800 + (tile_index - 128) * TILE_BYTES

    @classmethod
    def from_flag(cls, value: bool) -> TileDataAddressingMode:
        """Mode selected by the LCD control bit."""
        return cls.LOW if value else cls.HIGH


class TileMap(Enum):
    """Which of the two 32x32 tile maps is used."""

    LOW = 0
    HIGH = 1

    def tile_index_address(self, x: int, y: int) -> int:
        """Address of the map entry covering pixel (x, y) of the full map."""
        base_address = 0x9C00 if self is TileMap.HIGH else 0x9800
        tiles_per_row = FULL_WIDTH // TILE_WIDTH
        return base_address + (y // TILE_HEIGHT) * tiles_per_row + x // TILE_WIDTH

    @classmethod
    def from_flag(cls, value: bool) -> TileMap:
        """Map selected by the LCD control bit."""
        return cls.HIGH if value else cls.LOW