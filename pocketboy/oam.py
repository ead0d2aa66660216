"""Entries of the object attribute memory."""

from __future__ import annotations

from dataclasses import dataclass, field

from pocketboy.attributes import ObjectAttributes


@dataclass
class OamEntry:
    """One four-byte object: position, tile and attributes."""

    y_position: int = 0
    x_position: int = 0
    tile_index: int = 0
    attributes: ObjectAttributes = field(default_factory=ObjectAttributes)

    def read(self, offset: int) -> int:
        """Read byte ``offset`` (0 to 3) of the entry."""
        if offset == 0:
            return self.y_position
        if offset == 1:
            return self.x_position
        if offset == 2:
            return self.tile_index
        if offset == 3:
            return self.attributes.to_byte()
        raise IndexError(f"OAM entry has no byte {offset}")

    def write(self, offset: int, value: int) -> None:
        """Write byte ``offset`` (0 to 3) of the entry."""
        if offset == 0:
            self.y_position = value
        elif offset == 1:
            self.x_position = value
        elif offset == 2:
            self.tile_index = value
        elif offset == 3:
            self.attributes = ObjectAttributes.from_byte(value)
        else:
            raise IndexError(f"OAM entry has no byte {offset}")