"""The DIV, TIMA, TMA and TAC timer registers, driven by scheduled overflows."""

from __future__ import annotations

from typing import Callable, Optional

from pocketboy.events import EventType, Interrupt, TimerEvent
from pocketboy.memory import SystemMemoryAccess
from pocketboy.ppu import CPU_CLOCK_SPEED
from pocketboy.scheduler import Scheduler

InterruptRequest = Callable[[Interrupt], None]

TIMER_CLOCK_SPEED = 16384
DIV_CYCLES = CPU_CLOCK_SPEED // TIMER_CLOCK_SPEED
INCREMENTS_TO_OVERFLOW = 256

_CLOCK_SELECT_BITS = {16: 0b01, 64: 0b10, 256: 0b11}
_CLOCK_SELECT_CYCLES = {0b01: 16, 0b10: 64, 0b11: 256, 0b00: 1024}


class Timer(SystemMemoryAccess):
    """Timer registers whose counters are derived from the scheduler's clock."""

    def __init__(self, scheduler: Scheduler, request_interrupt: InterruptRequest) -> None:
        self._div = 0
        self._div_start = 0
        self._tima = 0
        self._tima_start = 0
        self._tma = 0
        self._enabled = False
        self._clock_select = 256
        self._scheduler = scheduler
        self._request_interrupt = request_interrupt

    def read_8(self, address: int) -> int:
        if address == 0xFF04:
            return self._read_div()
        if address == 0xFF05:
            return self._read_tima()
        if address == 0xFF06:
            return self._tma
        if address == 0xFF07:
            return self._tac()
        raise ValueError(f"Timer does not handle read to address {address:04X}")

    def write_8(self, address: int, value: int) -> None:
        if address == 0xFF04:
            self._reset_div()
        elif address == 0xFF05:
            self._write_tima(value)
        elif address == 0xFF06:
            self._tma = value
        elif address == 0xFF07:
            self._write_tac(value)
        else:
            raise ValueError(f"Timer does not handle write to address {address:04X}")

    def handle_event(
        self, timer_event: TimerEvent, timestamp: int
    ) -> Optional[tuple[EventType, int]]:
        """Handle an overflow at ``timestamp``; return the next overflow to schedule."""
        if timer_event is TimerEvent.DIV_OVERFLOW:
            self._div = 0
            self._div_start = timestamp
            return TimerEvent.DIV_OVERFLOW, DIV_CYCLES * INCREMENTS_TO_OVERFLOW

        self._request_interrupt(Interrupt.TIMER)
        self._tima = self._tma
        self._tima_start = timestamp
        if not self._enabled:
            return None
        cycles = self._clock_select * (INCREMENTS_TO_OVERFLOW - self._tima)
        return TimerEvent.TIMA_OVERFLOW, cycles

    def _reschedule(self, timer_event: TimerEvent) -> None:
        self._scheduler.cancel_events(timer_event)
        if timer_event is TimerEvent.DIV_OVERFLOW:
            cycles = DIV_CYCLES * (INCREMENTS_TO_OVERFLOW - self._read_div())
            self._scheduler.schedule(TimerEvent.DIV_OVERFLOW, cycles)
        elif self._enabled:
            cycles = self._clock_select * (INCREMENTS_TO_OVERFLOW - self._read_tima())
            self._scheduler.schedule(TimerEvent.TIMA_OVERFLOW, cycles)

    def _read_div(self) -> int:
        elapsed = self._scheduler.timestamp - self._div_start
        self._div = (elapsed // DIV_CYCLES) & 0xFF
        return self._div

    def _reset_div(self) -> None:
        self._div = 0
        self._div_start = self._scheduler.timestamp
        self._reschedule(TimerEvent.DIV_OVERFLOW)

    def _read_tima(self) -> int:
        if not self._enabled:
            return self._tima
        increments = (self._scheduler.timestamp - self._tima_start) // self._clock_select
        self._tima = (self._tima + increments) & 0xFF
        return self._tima

    def _write_tima(self, value: int) -> None:
        if self._tima == value:
            return
        self._tima = value
        self._tima_start = self._scheduler.timestamp
        self._reschedule(TimerEvent.TIMA_OVERFLOW)

    def _tac(self) -> int:
        return 0xF8 | (int(self._enabled) << 2) | _CLOCK_SELECT_BITS.get(self._clock_select, 0)

    def _write_tac(self, value: int) -> None:
        if self._tac() == value:
            return

        now = self._scheduler.timestamp
        if self._enabled:
            increments = (now - self._tima_start) // self._clock_select
            self._tima = (self._tima + increments) & 0xFF

        self._enabled = value & 0b100 != 0
        self._clock_select = _CLOCK_SELECT_CYCLES[value & 0b011]
        self._tima_start = now
        self._reschedule(TimerEvent.TIMA_OVERFLOW)