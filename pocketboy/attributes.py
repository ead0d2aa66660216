"""Attribute bytes of background map entries and of objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BgMapAttributes:
    """Attributes of a background or window tile map entry (colour hardware only)."""

    priority: bool = False
    y_flip: bool = False
    x_flip: bool = False
    bank: bool = False
    color_palette: int = 0

    @classmethod
    def from_byte(cls, value: int) -> BgMapAttributes:
        """Decode the attribute byte stored in VRAM bank 1."""
        return cls(
            priority=value & 0x80 != 0,
            y_flip=value & 0x40 != 0,
            x_flip=value & 0x20 != 0,
            bank=value & 0x08 != 0,
            color_palette=value & 0x07,
        )

    def to_byte(self) -> int:
        """Encode the attributes as a byte."""
        return (
            (int(self.priority) << 7)
            | (int(self.y_flip) << 6)
            | (int(self.x_flip) << 5)
            | (int(self.bank) << 3)
            | (self.color_palette << 2)
        ) & 0xFF


@dataclass(frozen=True)
class ObjectAttributes:
    """Attributes of an object held in OAM."""

    priority: bool = False
    y_flip: bool = False
    x_flip: bool = False
    dmg_palette: bool = False
    bank: bool = False
    cgb_palette: int = 0

    @classmethod
    def from_byte(cls, value: int) -> ObjectAttributes:
        """Decode the fourth byte of an OAM entry."""
        return cls(
            priority=value & 0x80 != 0,
            y_flip=value & 0x40 != 0,
            x_flip=value & 0x20 != 0,
            dmg_palette=value & 0x10 != 0,
            bank=value & 0x08 != 0,
            cgb_palette=value & 0x07,
        )

    def to_byte(self) -> int:
        """Encode the attributes as a byte."""
        return (
            (int(self.priority) << 7)
            | (int(self.y_flip) << 6)
            | (int(self.x_flip) << 5)
            | (int(self.dmg_palette) << 4)
            | (int(self.bank) << 3)
            | (self.cgb_palette << 2)
        ) & 0xFF