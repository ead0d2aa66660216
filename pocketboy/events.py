"""Event kinds handled by the scheduler, and interrupt sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag, auto
from typing import Union


class PpuEvent(Enum):
    """End of a PPU mode."""

    HBLANK = auto()
    VBLANK = auto()
    OAM_SCAN = auto()
    DRAWING_PIXELS = auto()


class ApuEvent(Enum):
    """Frame sequencer steps, channel ticks and sample output."""

    LENGTH_TIMER = auto()
    SWEEP = auto()
    VOLUME_ENVELOPE = auto()
    CHANNEL_1 = auto()
    CHANNEL_2 = auto()
    CHANNEL_3 = auto()
    CHANNEL_4 = auto()
    SAMPLE = auto()


class TimerEvent(Enum):
    """Timer counter overflows."""

    DIV_OVERFLOW = auto()
    TIMA_OVERFLOW = auto()


class SystemEvent(Enum):
    """Events that concern the machine as a whole."""

    FRAME_COMPLETE = auto()


class Interrupt(IntFlag):
    """Interrupt request bits, as laid out in the IF and IE registers."""

    VBLANK = 0x01
    LCD = 0x02
    TIMER = 0x04
    SERIAL = 0x08
    JOYPAD = 0x10


EventType = Union[SystemEvent, TimerEvent, PpuEvent, ApuEvent]


@dataclass(order=True)
class Event:
    """A scheduled event; events order and compare by timestamp alone."""

    event_type: EventType = field(compare=False)
    timestamp: int
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        """Mark the event so that it is skipped when due."""
        self.cancelled = True