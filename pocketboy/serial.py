"""The serial port registers, whose transmitted bytes are echoed as text."""

from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from pocketboy.events import Interrupt
from pocketboy.memory import SystemMemoryAccess

InterruptRequest = Callable[[Interrupt], None]

SERIAL_DATA = 0xFF01
SERIAL_CONTROL = 0xFF02
_START_INTERNAL_CLOCK = 0x81


class SerialTransfer(SystemMemoryAccess):
    """SB and SC; every byte written to SB is collected into a message."""

    def __init__(
        self,
        request_interrupt: InterruptRequest,
        output: Optional[TextIO] = None,
    ) -> None:
        self._data = 0
        self._control = 0
        self._message: list[str] = []
        self._request_interrupt = request_interrupt
        self._output = output

    @property
    def message(self) -> str:
        """Every character written to the data register so far."""
        return "".join(self._message)

    def read_8(self, address: int) -> int:
        if address == SERIAL_DATA:
            return self._data
        if address == SERIAL_CONTROL:
            return self._control
        raise ValueError(f"Serial Transfer does not handle read to address {address:04X}")

    def write_8(self, address: int, value: int) -> None:
        if address == SERIAL_DATA:
            self._data = value
            self._message.append(chr(value))
        elif address == SERIAL_CONTROL:
            self._control = value
            if value == _START_INTERNAL_CLOCK:
                self._request_interrupt(Interrupt.SERIAL)
                print(self.message, file=self._output or sys.stdout)
        else:
            raise ValueError(
                f"Serial Transfer does not handle write to address {address:04X}"
            )