"""Hardware models the emulator can run as."""

from enum import Enum, auto


class GameBoyMode(Enum):
    """Which hardware the cartridge is being run on."""

    MONOCHROME = auto()
    COLOR = auto()
    COLOR_AS_MONOCHROME = auto()

    @property
    def is_color(self) -> bool:
        """True only when colour-only hardware features are active."""
        return self is GameBoyMode.COLOR