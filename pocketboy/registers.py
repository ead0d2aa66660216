"""PPU mode and the LCD control and status registers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from pocketboy.tile import TileDataAddressingMode, TileMap


class PpuMode(IntEnum):
    """The four modes of the PPU, numbered as in the STAT register."""

    HBLANK = 0
    VBLANK = 1
    OAM_SCAN = 2
    DRAWING_PIXELS = 3


@dataclass
class LcdControl:
    """The LCDC register."""

    lcd_enabled: bool = True
    window_tile_map: TileMap = TileMap.LOW
    window_enabled: bool = False
    tile_data: TileDataAddressingMode = TileDataAddressingMode.LOW
    bg_tile_map: TileMap = TileMap.LOW
    object_size: bool = False
    object_enabled: bool = False
    bg_window_enabled: bool = True

    @classmethod
    def from_byte(cls, value: int) -> LcdControl:
        """Decode the register byte."""
        return cls(
            lcd_enabled=value & 0x80 != 0,
            window_tile_map=TileMap.from_flag(value & 0x40 != 0),
            window_enabled=value & 0x20 != 0,
            tile_data=TileDataAddressingMode.from_flag(value & 0x10 != 0),
            bg_tile_map=TileMap.from_flag(value & 0x08 != 0),
            object_size=value & 0x04 != 0,
            object_enabled=value & 0x02 != 0,
            bg_window_enabled=value & 0x01 != 0,
        )

    def to_byte(self) -> int:
        """Encode the register byte."""
        return (
            (int(self.lcd_enabled) << 7)
            | (self.window_tile_map.value << 6)
            | (int(self.window_enabled) << 5)
            | (self.tile_data.value << 4)
            | (self.bg_tile_map.value << 3)
            | (int(self.object_size) << 2)
            | (int(self.object_enabled) << 1)
            | int(self.bg_window_enabled)
        )


@dataclass
class LcdStatus:
    """The STAT register."""

    lyc_interrupt: bool = False
    mode2_interrupt: bool = False
    mode1_interrupt: bool = False
    mode0_interrupt: bool = False
    lyc_equals_ly: bool = False
    mode: PpuMode = PpuMode.OAM_SCAN

    @classmethod
    def from_byte(cls, value: int) -> LcdStatus:
        """Decode the register byte."""
        return cls(
            lyc_interrupt=value & 0x40 != 0,
            mode2_interrupt=value & 0x20 != 0,
            mode1_interrupt=value & 0x10 != 0,
            mode0_interrupt=value & 0x08 != 0,
            lyc_equals_ly=value & 0x04 != 0,
            mode=PpuMode(value & 0x03),
        )

    def to_byte(self) -> int:
        """Encode the register byte."""
        return (
            (int(self.lyc_interrupt) << 6)
            | (int(self.mode2_interrupt) << 5)
            | (int(self.mode1_interrupt) << 4)
            | (int(self.mode0_interrupt) << 3)
            | (int(self.lyc_equals_ly) << 2)
            | int(self.mode)
        )

    def set_mode(self, mode: PpuMode) -> bool:
        """Enter ``mode``; return True when that change requests an LCD interrupt."""
        if self.mode == mode:
            return False
        self.mode = mode
        if mode is PpuMode.HBLANK:
            return self.mode0_interrupt
        if mode in (PpuMode.VBLANK, PpuMode.OAM_SCAN):
            return self.mode1_interrupt
        return False