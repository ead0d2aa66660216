import pytest

from pocketboy.events import Interrupt, PpuEvent, SystemEvent
from pocketboy.mode import GameBoyMode
from pocketboy.ppu import (
    DRAWING_PIXELS_CYCLES,
    FPS,
    HBLANK_CYCLES,
    OAM_SCAN_CYCLES,
    VBLANK_CYCLES,
    Ppu,
)
from pocketboy.scheduler import Scheduler
from pocketboy.window import VIEWPORT_HEIGHT, VIEWPORT_WIDTH


def make_ppu(mode=GameBoyMode.MONOCHROME):
    scheduler = Scheduler()
    requested = []
    ppu = Ppu(mode, scheduler, requested.append)
    return ppu, scheduler, requested


def run_frame(ppu):
    """Drive the PPU from OAM scan of line 0 until a frame completes."""
    event = PpuEvent.OAM_SCAN
    while True:
        result = ppu.handle_event(event)
        if any(kind is SystemEvent.FRAME_COMPLETE for kind, _ in result):
            return result
        event = result[-1][0]


def test_constructor_schedules_oam_scan():
    _, scheduler, _ = make_ppu()
    assert scheduler.peek() is PpuEvent.OAM_SCAN
    assert scheduler.timestamp_of_next_event() == OAM_SCAN_CYCLES


def test_mode_sequence_on_a_visible_line():
    ppu, _, _ = make_ppu()
    assert ppu.handle_event(PpuEvent.OAM_SCAN) == [
        (PpuEvent.DRAWING_PIXELS, DRAWING_PIXELS_CYCLES)
    ]
    assert ppu.read_8(0xFF41) & 0x03 == 3
    assert ppu.handle_event(PpuEvent.DRAWING_PIXELS) == [(PpuEvent.HBLANK, HBLANK_CYCLES)]
    assert ppu.is_hblanking
    assert ppu.read_8(0xFF41) & 0x03 == 0
    assert ppu.handle_event(PpuEvent.HBLANK) == [(PpuEvent.OAM_SCAN, OAM_SCAN_CYCLES)]
    assert ppu.ly == 1
    assert ppu.read_8(0xFF44) == 1


def test_frame_ends_with_vblank_and_wraps_to_line_zero():
    ppu, _, requested = make_ppu()
    result = run_frame(ppu)
    assert result == [(SystemEvent.FRAME_COMPLETE, 0), (PpuEvent.VBLANK, VBLANK_CYCLES)]
    assert ppu.ly == VIEWPORT_HEIGHT
    assert Interrupt.VBLANK in requested
    for _ in range(9):
        assert ppu.handle_event(PpuEvent.VBLANK) == [(PpuEvent.VBLANK, VBLANK_CYCLES)]
    assert ppu.handle_event(PpuEvent.VBLANK) == [(PpuEvent.OAM_SCAN, OAM_SCAN_CYCLES)]
    assert ppu.ly == 0


def test_vram_round_trip():
    ppu, _, _ = make_ppu()
    ppu.write_8(0x8000, 0x12)
    ppu.write_8(0x9FFF, 0x34)
    assert ppu.read_8(0x8000) == 0x12
    assert ppu.read_8(0x9FFF) == 0x34


def test_vram_banks_in_color_mode():
    ppu, _, _ = make_ppu(GameBoyMode.COLOR)
    ppu.write_8(0x8000, 0x11)
    ppu.write_8(0xFF4F, 1)
    assert ppu.read_8(0xFF4F) == 0xFF
    ppu.write_8(0x8000, 0x22)
    assert ppu.read_8(0x8000) == 0x22
    ppu.write_8(0xFF4F, 0)
    assert ppu.read_8(0xFF4F) == 0xFE
    assert ppu.read_8(0x8000) == 0x11


def test_color_registers_ignored_in_monochrome():
    ppu, _, _ = make_ppu()
    ppu.write_8(0xFF4F, 1)
    ppu.write_8(0x8000, 0x22)
    assert ppu.read_8(0xFF4F) == 0xFF
    assert ppu.read_8(0xFF68) == 0xFF
    ppu.write_8(0xFF4F, 0)
    assert ppu.read_8(0x8000) == 0x22


def test_oam_round_trip():
    ppu, _, _ = make_ppu()
    values = [0x20, 0x30, 0x05, 0xF8]
    for offset, value in enumerate(values):
        ppu.write_8(0xFE04 + offset, value)
    assert [ppu.read_8(0xFE04 + offset) for offset in range(4)] == values
    assert ppu.read_8(0xFE00) == 0


def test_registers_round_trip():
    ppu, _, _ = make_ppu()
    for address, value in [(0xFF42, 0x10), (0xFF43, 0x20), (0xFF47, 0xE4), (0xFF4A, 0x40)]:
        ppu.write_8(address, value)
        assert ppu.read_8(address) == value


def test_ly_is_read_only_and_wx_ignores_small_values():
    ppu, _, _ = make_ppu()
    ppu.write_8(0xFF44, 0x50)
    assert ppu.read_8(0xFF44) == 0
    ppu.write_8(0xFF4B, 3)
    assert ppu.read_8(0xFF4B) == 0
    ppu.write_8(0xFF4B, 7)
    assert ppu.read_8(0xFF4B) == 7


def test_lyc_match_sets_flag_and_requests_interrupt():
    ppu, _, requested = make_ppu()
    ppu.write_8(0xFF41, 0x40)
    ppu.set_lyc(0)
    assert ppu.read_8(0xFF41) & 0x04
    assert requested == [Interrupt.LCD]
    ppu.set_lyc(5)
    assert ppu.read_8(0xFF41) & 0x04 == 0
    assert ppu.read_8(0xFF45) == 5


def test_hblank_stat_interrupt():
    ppu, _, requested = make_ppu()
    ppu.write_8(0xFF41, 0x08)
    ppu.handle_event(PpuEvent.OAM_SCAN)
    assert requested == []
    ppu.handle_event(PpuEvent.DRAWING_PIXELS)
    assert requested == [Interrupt.LCD]


def test_disabling_lcd_cancels_events_and_clears_screen():
    ppu, scheduler, _ = make_ppu()
    ppu.write_8(0xFF40, 0x11)
    assert scheduler.pop() == (SystemEvent.FRAME_COMPLETE, 0)
    scheduler.update(1000)
    assert scheduler.pop() is None
    assert set(ppu.read_buffer()) == {(255, 255, 255)}
    assert len(ppu.read_buffer()) == VIEWPORT_WIDTH * VIEWPORT_HEIGHT
    assert ppu.handle_event(PpuEvent.OAM_SCAN) == []


def test_reenabling_lcd_schedules_oam_scan():
    ppu, scheduler, _ = make_ppu()
    ppu.write_8(0xFF40, 0x11)
    scheduler.pop()
    ppu.write_8(0xFF40, 0x91)
    scheduler.update(OAM_SCAN_CYCLES)
    assert scheduler.pop() == (PpuEvent.OAM_SCAN, OAM_SCAN_CYCLES)


def test_unhandled_write_raises():
    ppu, _, _ = make_ppu()
    with pytest.raises(ValueError):
        ppu.write_8(0xFF46, 0)


def test_background_rendering():
    ppu, _, _ = make_ppu()
    ppu.write_8(0xFF47, 0xE4)
    ppu.write_8(0x8000, 0xFF)
    ppu.write_8(0x8001, 0x00)
    run_frame(ppu)
    frame = ppu.read_buffer()
    assert frame[:VIEWPORT_WIDTH] == [(192, 192, 192)] * VIEWPORT_WIDTH
    assert frame[VIEWPORT_WIDTH : 2 * VIEWPORT_WIDTH] == [(255, 255, 255)] * VIEWPORT_WIDTH


def test_object_rendering():
    ppu, _, _ = make_ppu()
    ppu.write_8(0xFF40, 0x93)
    ppu.write_8(0xFF47, 0xE4)
    ppu.write_8(0xFF48, 0xE4)
    ppu.write_8(0x8010, 0xFF)
    ppu.write_8(0x8011, 0xFF)
    for offset, value in enumerate([16, 8, 1, 0]):
        ppu.write_8(0xFE00 + offset, value)
    run_frame(ppu)
    frame = ppu.read_buffer()
    assert frame[:8] == [(0, 0, 0)] * 8
    assert frame[8] == (255, 255, 255)
    assert frame[VIEWPORT_WIDTH] == (255, 255, 255)


def test_frames_alternate_buffers():
    ppu, _, _ = make_ppu()
    first = ppu.read_buffer()
    run_frame(ppu)
    assert ppu.read_buffer() is not first
    for _ in range(10):
        ppu.handle_event(PpuEvent.VBLANK)
    run_frame(ppu)
    assert ppu.read_buffer() is first


def test_full_frame_cycle_count_matches_fps():
    ppu, _, _ = make_ppu()
    event = PpuEvent.OAM_SCAN
    total = 0
    while True:
        result = ppu.handle_event(event)
        event, cycles = result[-1]
        total += cycles
        if event is PpuEvent.OAM_SCAN and ppu.ly == 0:
            break
    assert total == 154 * 456
    assert FPS * total == pytest.approx(4194304)
    assert 59 < FPS < 60