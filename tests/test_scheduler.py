import pytest

from pocketboy.events import ApuEvent, PpuEvent, SystemEvent, TimerEvent
from pocketboy.scheduler import Scheduler


def test_new_scheduler_is_empty():
    scheduler = Scheduler()
    assert scheduler.is_empty() is True
    assert scheduler.timestamp == 0
    assert scheduler.peek() is None
    assert scheduler.pop() is None
    assert scheduler.cycles_until_next_event() == 0


def test_event_is_not_popped_before_it_is_due():
    scheduler = Scheduler()
    scheduler.schedule(PpuEvent.OAM_SCAN, 80)
    assert scheduler.pop() is None
    scheduler.update(79)
    assert scheduler.pop() is None
    scheduler.update(1)
    assert scheduler.pop() == (PpuEvent.OAM_SCAN, 80)
    assert scheduler.is_empty() is True


def test_events_pop_in_timestamp_order():
    scheduler = Scheduler()
    scheduler.schedule(TimerEvent.DIV_OVERFLOW, 300)
    scheduler.schedule(ApuEvent.SAMPLE, 10)
    scheduler.schedule(PpuEvent.HBLANK, 100)
    scheduler.update(1000)
    popped = [scheduler.pop(), scheduler.pop(), scheduler.pop()]
    assert popped == [
        (ApuEvent.SAMPLE, 10),
        (PpuEvent.HBLANK, 100),
        (TimerEvent.DIV_OVERFLOW, 300),
    ]
    assert scheduler.pop() is None


def test_schedule_is_relative_to_current_timestamp():
    scheduler = Scheduler()
    scheduler.update(50)
    scheduler.schedule(SystemEvent.FRAME_COMPLETE, 25)
    assert scheduler.timestamp_of_next_event() == 75
    assert scheduler.cycles_until_next_event() == 25


def test_schedule_at_timestamp_is_absolute():
    scheduler = Scheduler()
    scheduler.update(50)
    scheduler.schedule_at_timestamp(PpuEvent.VBLANK, 60)
    assert scheduler.timestamp_of_next_event() == 60
    assert scheduler.peek() is PpuEvent.VBLANK


def test_cancelled_events_are_skipped():
    scheduler = Scheduler()
    scheduler.schedule(TimerEvent.TIMA_OVERFLOW, 10)
    scheduler.schedule(TimerEvent.TIMA_OVERFLOW, 20)
    scheduler.schedule(TimerEvent.DIV_OVERFLOW, 30)
    scheduler.cancel_events(TimerEvent.TIMA_OVERFLOW)
    scheduler.update(100)
    assert scheduler.pop() == (TimerEvent.DIV_OVERFLOW, 30)
    assert scheduler.pop() is None
    assert scheduler.is_empty() is True


def test_peek_still_sees_cancelled_event():
    scheduler = Scheduler()
    scheduler.schedule(PpuEvent.DRAWING_PIXELS, 5)
    scheduler.cancel_events(PpuEvent.DRAWING_PIXELS)
    assert scheduler.peek() is PpuEvent.DRAWING_PIXELS
    assert scheduler.is_empty() is False


def test_cancel_leaves_other_types_alone():
    scheduler = Scheduler()
    scheduler.schedule(PpuEvent.HBLANK, 5)
    scheduler.schedule(PpuEvent.VBLANK, 6)
    scheduler.cancel_events(PpuEvent.HBLANK)
    scheduler.update(10)
    assert scheduler.pop() == (PpuEvent.VBLANK, 6)


def test_update_to_next_event_reaches_its_timestamp():
    scheduler = Scheduler()
    scheduler.schedule(ApuEvent.CHANNEL_1, 42)
    scheduler.update_to_next_event()
    assert scheduler.timestamp == 42
    assert scheduler.cycles_until_next_event() == 0
    assert scheduler.pop() == (ApuEvent.CHANNEL_1, 42)


def test_timestamp_of_next_event_without_events_raises():
    with pytest.raises(IndexError):
        Scheduler().timestamp_of_next_event()