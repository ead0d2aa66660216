"""The joypad register and the state of the eight buttons."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from pocketboy.events import Interrupt
from pocketboy.memory import SystemMemoryAccess

InterruptRequest = Callable[[Interrupt], None]

_ALL_RELEASED = 0x0F
_DIRECTION_SELECT = 0x10
_ACTION_SELECT = 0x20


class JoypadButton(Enum):
    """A button, valued by its (row, bit) position in the key matrix."""

    RIGHT = (0, 0)
    LEFT = (0, 1)
    UP = (0, 2)
    DOWN = (0, 3)
    A = (1, 0)
    B = (1, 1)
    SELECT = (1, 2)
    START = (1, 3)

    @property
    def row(self) -> int:
        """0 for the direction keys, 1 for the action keys."""
        return self.value[0]

    @property
    def mask(self) -> int:
        """Bit of the button within its row."""
        return 1 << self.value[1]


class JoyPad(SystemMemoryAccess):
    """The P1/JOYP register; a pressed button reads as a cleared bit."""

    def __init__(self, request_interrupt: InterruptRequest) -> None:
        self._rows = [_ALL_RELEASED, _ALL_RELEASED]
        self._value = 0xFF
        self._request_interrupt = request_interrupt

    def read_8(self, address: int) -> int:
        return self._value

    def write_8(self, address: int, value: int) -> None:
        self._value = (self._value & 0xCF) | (value & 0x30)
        self._update_buttons()

    def button_down(self, button: JoypadButton) -> None:
        """Press ``button``."""
        self._rows[button.row] &= ~button.mask & 0x0F
        self._update_buttons()

    def button_up(self, button: JoypadButton) -> None:
        """Release ``button``."""
        self._rows[button.row] |= button.mask
        self._update_buttons()

    def _update_buttons(self) -> None:
        previous = self._value & 0x0F
        updated = _ALL_RELEASED
        if self._value & _DIRECTION_SELECT == 0:
            updated &= self._rows[0]
        if self._value & _ACTION_SELECT == 0:
            updated &= self._rows[1]

        if previous == _ALL_RELEASED and updated != _ALL_RELEASED:
            self._request_interrupt(Interrupt.JOYPAD)

        self._value = (self._value & 0xF0) | updated