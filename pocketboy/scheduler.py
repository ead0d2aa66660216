"""Timestamp-ordered queue of pending hardware events."""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Optional

from pocketboy.events import Event, EventType

log = logging.getLogger(__name__)


class Scheduler:
    """Keeps the current cycle count and the events due at later cycles."""

    def __init__(self) -> None:
        self._timestamp = 0
        self._events: list[tuple[int, int, Event]] = []
        self._sequence = itertools.count()

    @property
    def timestamp(self) -> int:
        """The current cycle count."""
        return self._timestamp

    def peek(self) -> Optional[EventType]:
        """Type of the earliest queued event, cancelled or not."""
        if not self._events:
            return None
        return self._events[0][2].event_type

    def pop(self) -> Optional[tuple[EventType, int]]:
        """Remove and return the earliest due event that is not cancelled."""
        while self._events:
            event = self._events[0][2]
            if self._timestamp < event.timestamp:
                return None
            heapq.heappop(self._events)
            if event.cancelled:
                continue
            log.debug(
                "EVENT_EXECUTED: %s at timestamp %d (current: %d)",
                event.event_type,
                event.timestamp,
                self._timestamp,
            )
            return event.event_type, event.timestamp
        return None

    def cancel_events(self, event_type: EventType) -> None:
        """Cancel every queued event of the given type."""
        for _, _, event in self._events:
            if event.event_type == event_type:
                log.debug(
                    "EVENT_CANCELLED: %s at timestamp %d (current: %d)",
                    event.event_type,
                    event.timestamp,
                    self._timestamp,
                )
                event.cancel()

    def schedule(self, event_type: EventType, delta_time: int) -> None:
        """Queue an event ``delta_time`` cycles from now."""
        self.schedule_at_timestamp(event_type, self._timestamp + delta_time)

    def schedule_at_timestamp(self, event_type: EventType, timestamp: int) -> None:
        """Queue an event at an absolute cycle count."""
        log.debug(
            "EVENT_SCHEDULED: %s at timestamp %d (current: %d)",
            event_type,
            timestamp,
            self._timestamp,
        )
        event = Event(event_type, timestamp)
        heapq.heappush(self._events, (timestamp, next(self._sequence), event))

    def cycles_until_next_event(self) -> int:
        """Cycles left before the earliest queued event; 0 if none or overdue."""
        if not self._events:
            return 0
        return max(0, self._events[0][0] - self._timestamp)

    def update(self, cycles: int) -> None:
        """Advance the clock by ``cycles``."""
        self._timestamp += cycles

    def update_to_next_event(self) -> None:
        """Advance the clock to the earliest queued event."""
        self._timestamp += self.cycles_until_next_event()

    def timestamp_of_next_event(self) -> int:
        """Timestamp of the earliest queued event."""
        if not self._events:
            raise IndexError("no events scheduled")
        return self._events[0][0]

    def is_empty(self) -> bool:
        """True when nothing, not even a cancelled event, is queued."""
        return not self._events