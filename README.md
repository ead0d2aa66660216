# pocketboy

pocketboy provides hardware components for a handheld game console emulator. They are written in plain Python and use only the standard library. Each device is memory-mapped. You read and write its registers with `read_8(address)` and `write_8(address, value)`, using the hardware's own addresses. Devices report interrupts through a callable that you pass in. That callable receives a `pocketboy.events.Interrupt` flag.

## Modules

- `pocketboy.scheduler.Scheduler` is an event queue ordered by timestamp.
  - `schedule(event_type, delta_time)` and `schedule_at_timestamp(event_type, timestamp)` queue an event.
  - `update(cycles)` and `update_to_next_event()` advance the clock.
  - `pop()` returns the earliest due event that has not been cancelled, as `(event_type, timestamp)`. It returns `None` when no event is due.
  - `cancel_events(event_type)` marks every queued event of that type as cancelled.
  - `peek()`, `cycles_until_next_event()`, `timestamp_of_next_event()` and `is_empty()` let you inspect the queue. `timestamp_of_next_event()` raises `IndexError` when the queue is empty.
  - `timestamp` is the current cycle count.
- `pocketboy.events` defines the event kinds and the interrupt bits:
  - event kinds: `PpuEvent`, `TimerEvent`, `ApuEvent` and `SystemEvent.FRAME_COMPLETE`;
  - interrupt bits: `Interrupt`, with the values `VBLANK`, `LCD`, `TIMER`, `SERIAL` and `JOYPAD`.
- `pocketboy.mode.GameBoyMode` selects the hardware model: `MONOCHROME`, `COLOR` or `COLOR_AS_MONOCHROME`. Colour-only features are active only in `COLOR`.
- `pocketboy.ppu.Ppu(mode, scheduler, request_interrupt)` is the picture processing unit.
  - It holds VRAM (`vram`, two banks), OAM, the LCD registers (`0xFF40`–`0xFF4B`) and the monochrome and colour palettes.
  - It schedules its first `PpuEvent.OAM_SCAN` when it is created.
  - `handle_event(ppu_event)` ends the current mode. While the LCD is on, it returns the `(event, cycles)` pairs to schedule next. `SystemEvent.FRAME_COMPLETE` is among them when a frame finishes.
  - A scanline is drawn at the end of each pixel-drawing mode. `read_buffer()` returns the last completed 160×144 frame as a flat list of `(r, g, b)` tuples.
  - `ly`, `is_hblanking` and `set_lyc(value)` are also available.
  - The module defines `FPS` and `CPU_CLOCK_SPEED`.
- `pocketboy.timer.Timer(scheduler, request_interrupt)` provides DIV, TIMA, TMA and TAC (`0xFF04`–`0xFF07`).
  - It computes the counters from the scheduler's clock.
  - It schedules overflow events when its registers are written.
  - `handle_event(timer_event, timestamp)` handles an overflow. It returns the next overflow to schedule, or `None`.
- `pocketboy.joypad.JoyPad(request_interrupt)` is the joypad register (`0xFF00`).
  - `button_down(button)` and `button_up(button)` take a `JoypadButton`.
  - It requests `Interrupt.JOYPAD` when a selected line goes from all released to pressed.
- `pocketboy.serial.SerialTransfer(request_interrupt, output=None)` provides SB and SC (`0xFF01`, `0xFF02`).
  - Bytes written to SB are collected in `message`.
  - Writing `0x81` to SC requests `Interrupt.SERIAL` and prints the message so far to `output`, or to standard output if `output` is `None`.
- `pocketboy.memory` holds the abstract base classes `MemoryInterface` (`load_8`, `load_16`, `store_8`, `store_16`, `cycle`, `change_speed`) and `SystemMemoryAccess` (`read_8`, `write_8`).
- Smaller building blocks used by the PPU:
  - `pocketboy.palette`: `Palette`, `CgbPalette`, `color_index`;
  - `pocketboy.tile`: `TileDataAddressingMode`, `TileMap`;
  - `pocketboy.attributes`: `BgMapAttributes`, `ObjectAttributes`;
  - `pocketboy.oam`: `OamEntry`;
  - `pocketboy.background`: `Background`;
  - `pocketboy.window`: `Window`;
  - `pocketboy.registers`: `PpuMode`, `LcdControl`, `LcdStatus`.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

This example runs the PPU and the timer from one scheduler until the first frame is complete:

```python
from pocketboy.events import PpuEvent, SystemEvent, TimerEvent
from pocketboy.mode import GameBoyMode
from pocketboy.ppu import Ppu
from pocketboy.scheduler import Scheduler
from pocketboy.timer import Timer

scheduler = Scheduler()
interrupts = []
ppu = Ppu(GameBoyMode.MONOCHROME, scheduler, interrupts.append)
timer = Timer(scheduler, interrupts.append)
timer.write_8(0xFF04, 0)  # reset DIV, which schedules its overflow

frame = None
while frame is None:
    scheduler.update_to_next_event()
    while (due := scheduler.pop()) is not None:
        event, timestamp = due
        if isinstance(event, PpuEvent):
            for next_event, cycles in ppu.handle_event(event):
                scheduler.schedule(next_event, cycles)
        elif isinstance(event, TimerEvent):
            follow_up = timer.handle_event(event, timestamp)
            if follow_up is not None:
                scheduler.schedule(*follow_up)
        elif event is SystemEvent.FRAME_COMPLETE:
            frame = ppu.read_buffer()

print(len(frame), interrupts)
```

## What it does not include

pocketboy has no CPU, no cartridge or memory bank controller, no sound unit and no system bus tying the devices into one address space. It has no command-line program and no display or audio output. `ApuEvent` is defined, but no module handles it. To run a game, you have to supply these pieces yourself, for example by building a bus on `MemoryInterface`.