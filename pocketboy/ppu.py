"""The picture processing unit: LCD registers, VRAM, OAM and scanline rendering."""

from __future__ import annotations

from typing import Callable

from pocketboy.attributes import BgMapAttributes
from pocketboy.background import Background
from pocketboy.events import EventType, Interrupt, PpuEvent, SystemEvent
from pocketboy.memory import SystemMemoryAccess
from pocketboy.mode import GameBoyMode
from pocketboy.oam import OamEntry
from pocketboy.palette import CgbPalette, Palette, color_index
from pocketboy.registers import LcdControl, LcdStatus, PpuMode
from pocketboy.scheduler import Scheduler
from pocketboy.tile import TILE_HEIGHT, TILE_WIDTH
from pocketboy.window import VIEWPORT_HEIGHT, VIEWPORT_WIDTH, Window

CPU_CLOCK_SPEED = 4_194_304
TOTAL_LINE_CYCLES = 456
NUMBER_OF_LINES = 154
FPS = CPU_CLOCK_SPEED / (NUMBER_OF_LINES * TOTAL_LINE_CYCLES)

VRAM_SIZE = 0x4000
OAM_SIZE = 40
MAX_OBJECTS_PER_LINE = 10

OAM_SCAN_CYCLES = 80
DRAWING_PIXELS_CYCLES = 172
HBLANK_CYCLES = 204
VBLANK_CYCLES = 456

LAST_VISIBLE_LINE_INDEX = VIEWPORT_HEIGHT - 1
LAST_LINE_INDEX = NUMBER_OF_LINES - 1

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

Color = tuple[int, int, int]
InterruptRequest = Callable[[Interrupt], None]

_PPU_EVENTS = (
    PpuEvent.HBLANK,
    PpuEvent.VBLANK,
    PpuEvent.OAM_SCAN,
    PpuEvent.DRAWING_PIXELS,
)


class Ppu(SystemMemoryAccess):
    """Draws one scanline at a time into a pair of frame buffers."""

    def __init__(
        self,
        mode: GameBoyMode,
        scheduler: Scheduler,
        request_interrupt: InterruptRequest,
    ) -> None:
        scheduler.schedule(PpuEvent.OAM_SCAN, OAM_SCAN_CYCLES)

        self._ly = 0
        self._lyc = 0
        self._lcd_control = LcdControl()
        self._lcd_status = LcdStatus()
        self._background = Background()
        self._window = Window()
        self._bg_palette = Palette(0)
        self._obj0_palette = Palette(0)
        self._obj1_palette = Palette(1)
        self._cgb_bg_palette = CgbPalette()
        self._cgb_obj_palette = CgbPalette()
        self.vram = bytearray(VRAM_SIZE)
        self._oam = [OamEntry() for _ in range(OAM_SIZE)]
        self._oam_buffer: list[tuple[int, int]] = []
        self._object_height = TILE_HEIGHT
        self._line_priority: list[tuple[int, bool]] = [(0, False)] * VIEWPORT_WIDTH
        self._screen_buffers: list[list[Color]] = [
            [BLACK] * (VIEWPORT_WIDTH * VIEWPORT_HEIGHT),
            [BLACK] * (VIEWPORT_WIDTH * VIEWPORT_HEIGHT),
        ]
        self._write_buffer_index = 0
        self._request_interrupt = request_interrupt
        self._vram_bank = 0
        self._is_hblanking = False
        self._mode = mode
        self._scheduler = scheduler

    # ------------------------------------------------------------------ state

    @property
    def ly(self) -> int:
        """The line currently being processed."""
        return self._ly

    @property
    def is_hblanking(self) -> bool:
        """True once the PPU has entered horizontal blanking."""
        return self._is_hblanking

    def read_buffer(self) -> list[Color]:
        """The last completed frame, row by row, as RGB tuples."""
        return self._screen_buffers[1 - self._write_buffer_index]

    # --------------------------------------------------------- memory access

    def read_8(self, address: int) -> int:
        if 0x8000 <= address <= 0x9FFF:
            return self.vram[(self._vram_bank * 0x2000) | (address & 0x1FFF)]
        if 0xFE00 <= address <= 0xFE9F:
            return self._read_oam(address - 0xFE00)
        simple = {
            0xFF40: lambda: self._lcd_control.to_byte(),
            0xFF41: lambda: self._lcd_status.to_byte(),
            0xFF42: lambda: self._background.scy,
            0xFF43: lambda: self._background.scx,
            0xFF44: lambda: self._ly,
            0xFF45: lambda: self._lyc,
            0xFF46: lambda: 0,
            0xFF47: self._bg_palette.read,
            0xFF48: self._obj0_palette.read,
            0xFF49: self._obj1_palette.read,
            0xFF4A: lambda: self._window.wy,
            0xFF4B: lambda: self._window.wx,
            0xFF4C: lambda: 0xFF,
            0xFF4E: lambda: 0xFF,
        }
        if address in simple:
            return simple[address]()
        if 0xFF4F <= address <= 0xFF6B and not self._mode.is_color:
            return 0xFF
        if address == 0xFF4F:
            return self._vram_bank | 0xFE
        if address == 0xFF68:
            return self._cgb_bg_palette.read_spec_and_index()
        if address == 0xFF69:
            return self._cgb_bg_palette.read_palette()
        if address == 0xFF6A:
            return self._cgb_obj_palette.read_spec_and_index()
        if address == 0xFF6B:
            return self._cgb_obj_palette.read_palette()
        return 0xFF

    def write_8(self, address: int, value: int) -> None:
        if 0x8000 <= address <= 0x9FFF:
            self.vram[(self._vram_bank * 0x2000) | (address & 0x1FFF)] = value
        elif 0xFE00 <= address <= 0xFE9F:
            self._write_oam(address - 0xFE00, value)
        elif address == 0xFF40:
            self._set_lcd_control(value)
        elif address == 0xFF41:
            self._lcd_status = LcdStatus.from_byte(value)
        elif address == 0xFF42:
            self._background.scy = value
        elif address == 0xFF43:
            self._background.scx = value
        elif address in (0xFF44, 0xFF4C, 0xFF4E):
            pass
        elif address == 0xFF45:
            self.set_lyc(value)
        elif address == 0xFF47:
            self._bg_palette.write(value)
        elif address == 0xFF48:
            self._obj0_palette.write(value)
        elif address == 0xFF49:
            self._obj1_palette.write(value)
        elif address == 0xFF4A:
            self._window.wy = value
        elif address == 0xFF4B:
            self._window.wx = value
        elif 0xFF4F <= address <= 0xFF6B and not self._mode.is_color:
            pass
        elif address == 0xFF4F:
            self._vram_bank = value & 0x01
        elif address == 0xFF68:
            self._cgb_bg_palette.write_spec_and_index(value)
        elif address == 0xFF69:
            self._cgb_bg_palette.write_palette(value)
        elif address == 0xFF6A:
            self._cgb_obj_palette.write_spec_and_index(value)
        elif address == 0xFF6B:
            self._cgb_obj_palette.write_palette(value)
        else:
            raise ValueError(f"PPU does not handle write {address:04X}")

    def _read_oam(self, address: int) -> int:
        return self._oam[address // 4].read(address % 4)

    def _write_oam(self, address: int, value: int) -> None:
        self._oam[address // 4].write(address % 4, value)

    # ---------------------------------------------------------------- events

    def handle_event(self, ppu_event: PpuEvent) -> list[tuple[EventType, int]]:
        """Finish the mode ``ppu_event`` ends; return the events to schedule next."""
        events: list[tuple[EventType, int]] = []
        if ppu_event is PpuEvent.OAM_SCAN:
            next_event = self._handle_oam_scan_end()
        elif ppu_event is PpuEvent.DRAWING_PIXELS:
            next_event = self._handle_drawing_pixels_end()
        elif ppu_event is PpuEvent.HBLANK:
            next_event = self._handle_hblank_end(events)
        else:
            next_event = self._handle_vblank_end()

        if self._lcd_control.lcd_enabled:
            events.append(next_event)
        return events

    def _enter_mode(self, mode: PpuMode) -> None:
        if self._lcd_status.set_mode(mode):
            self._request_interrupt(Interrupt.LCD)

    def _handle_oam_scan_end(self) -> tuple[EventType, int]:
        self._lcd_status.set_mode(PpuMode.DRAWING_PIXELS)
        return PpuEvent.DRAWING_PIXELS, DRAWING_PIXELS_CYCLES

    def _handle_drawing_pixels_end(self) -> tuple[EventType, int]:
        self._render_scanline()
        self._is_hblanking = True
        self._enter_mode(PpuMode.HBLANK)
        return PpuEvent.HBLANK, HBLANK_CYCLES

    def _handle_hblank_end(self, events: list[tuple[EventType, int]]) -> tuple[EventType, int]:
        if self._ly == LAST_VISIBLE_LINE_INDEX:
            self._set_ly(self._ly + 1)
            self._frame_complete()
            events.append((SystemEvent.FRAME_COMPLETE, 0))
            self._request_interrupt(Interrupt.VBLANK)
            self._enter_mode(PpuMode.VBLANK)
            return PpuEvent.VBLANK, VBLANK_CYCLES
        self._window.increment_line_counter(self._lcd_control.window_enabled, self._ly)
        self._set_ly(self._ly + 1)
        self._enter_mode(PpuMode.OAM_SCAN)
        return PpuEvent.OAM_SCAN, OAM_SCAN_CYCLES

    def _handle_vblank_end(self) -> tuple[EventType, int]:
        if self._ly == LAST_LINE_INDEX:
            self._window.reset_line_counter()
            self._set_ly(0)
            self._enter_mode(PpuMode.OAM_SCAN)
            return PpuEvent.OAM_SCAN, OAM_SCAN_CYCLES
        self._set_ly(self._ly + 1)
        return PpuEvent.VBLANK, VBLANK_CYCLES

    def _frame_complete(self) -> None:
        self._write_buffer_index = 1 - self._write_buffer_index

    def _clear_screen(self) -> None:
        self._line_priority = [(0, False)] * VIEWPORT_WIDTH
        self._screen_buffers[self._write_buffer_index] = [WHITE] * (
            VIEWPORT_WIDTH * VIEWPORT_HEIGHT
        )
        self._frame_complete()
        self._scheduler.schedule(SystemEvent.FRAME_COMPLETE, 0)

    # ------------------------------------------------------------- registers

    def _set_ly(self, value: int) -> None:
        self._ly = value
        self._compare_line()

    def set_lyc(self, value: int) -> None:
        """Set the line compare register and check it against LY."""
        self._lyc = value
        self._compare_line()

    def _compare_line(self) -> None:
        self._lcd_status.lyc_equals_ly = False
        if self._lyc != self._ly:
            return
        self._lcd_status.lyc_equals_ly = True
        if self._lcd_status.lyc_interrupt:
            self._request_interrupt(Interrupt.LCD)

    def _set_lcd_control(self, value: int) -> None:
        previous_enabled = self._lcd_control.lcd_enabled
        self._lcd_control = LcdControl.from_byte(value)

        if not self._lcd_control.lcd_enabled:
            self._clear_screen()
            self._window.reset_line_counter()
            self._set_ly(0)
            self._lcd_status.set_mode(PpuMode.HBLANK)
            for event in _PPU_EVENTS:
                self._scheduler.cancel_events(event)
        elif not previous_enabled:
            self._scheduler.schedule(PpuEvent.OAM_SCAN, OAM_SCAN_CYCLES)

    # ------------------------------------------------------------- rendering

    def _render_scanline(self) -> None:
        if self._lcd_control.bg_window_enabled or self._mode.is_color:
            self._render_bg_window_line()
        if self._lcd_control.object_enabled:
            self._render_object_line()

    def _render_bg_window_line(self) -> None:
        buffer = self._screen_buffers[self._write_buffer_index]
        row_start = self._ly * VIEWPORT_WIDTH
        for lx in range(VIEWPORT_WIDTH):
            tile_index_address, x_offset, y_offset = self._bg_window_tile_data(lx)

            tile_index = self._read_vram_bank_0(tile_index_address)
            if self._mode.is_color:
                attributes = BgMapAttributes.from_byte(self._read_vram_bank_1(tile_index_address))
            else:
                attributes = BgMapAttributes()

            tile_address = self._lcd_control.tile_data.tile_address(tile_index)
            row = 14 - y_offset if attributes.y_flip else y_offset
            byte1, byte2 = self._get_tile_bytes(tile_address + row, attributes.bank)

            if attributes.x_flip:
                x_offset = 7 - x_offset

            index = color_index(byte1, byte2, x_offset)
            self._line_priority[lx] = (index, attributes.priority)

            if self._mode.is_color:
                color = self._cgb_bg_palette.pixel_color(attributes.color_palette, index)
            else:
                color = self._bg_palette.pixel_color(index)
            buffer[row_start + lx] = color

    def _bg_window_tile_data(self, lx: int) -> tuple[int, int, int]:
        window_enabled = self._lcd_control.window_enabled
        if self._window.inside_window(window_enabled, lx, self._ly):
            x, y = self._window.tile_map_coordinates(lx)
            address = self._lcd_control.window_tile_map.tile_index_address(x, y)
            x_offset, y_offset = self._window.pixel_offsets(lx, self._ly)
        else:
            x, y = self._background.tile_map_coordinates(lx, self._ly)
            address = self._lcd_control.bg_tile_map.tile_index_address(x, y)
            x_offset, y_offset = self._background.pixel_offsets(x, y)
        return address, x_offset, y_offset

    def _render_object_line(self) -> None:
        self._read_objects_from_oam()
        buffer = self._screen_buffers[self._write_buffer_index]
        row_start = self._ly * VIEWPORT_WIDTH
        color_mode = self._mode.is_color

        for oam_index, x_start in self._oam_buffer:
            entry = self._oam[oam_index]
            attributes = entry.attributes
            y_start = (entry.y_position - 16) & 0xFF

            tile_index = entry.tile_index
            if self._object_height == 2 * TILE_HEIGHT:
                tile_index &= 0xFE

            line = (self._ly - y_start) & 0xFF
            if attributes.y_flip:
                line = self._object_height - 1 - line
            tile_address = 0x8000 + tile_index * 16 + line * 2
            byte1, byte2 = self._get_tile_bytes(tile_address, attributes.bank)

            for pixel_index in range(TILE_WIDTH):
                lx = (x_start + pixel_index) & 0xFF
                if lx >= VIEWPORT_WIDTH:
                    continue

                bit = pixel_index if attributes.x_flip else 7 - pixel_index
                index = color_index(byte1, byte2, bit)
                if index == 0:
                    continue

                bg_index, bg_priority = self._line_priority[lx]
                if color_mode:
                    if (
                        bg_index != 0
                        and self._lcd_control.bg_window_enabled
                        and (bg_priority or attributes.priority)
                    ):
                        continue
                    color = self._cgb_obj_palette.pixel_color(attributes.cgb_palette, index)
                else:
                    if attributes.priority and bg_index != 0:
                        continue
                    palette = self._obj1_palette if attributes.dmg_palette else self._obj0_palette
                    color = palette.pixel_color(index)
                buffer[row_start + lx] = color

    def _read_objects_from_oam(self) -> None:
        self._object_height = 2 * TILE_HEIGHT if self._lcd_control.object_size else TILE_HEIGHT

        selected = []
        for i, entry in enumerate(self._oam):
            object_y = (entry.y_position - 16) & 0xFF
            object_x = (entry.x_position - 8) & 0xFF
            if object_y <= self._ly < ((object_y + self._object_height) & 0xFF):
                selected.append((i, object_x))

        if self._mode.is_color:
            selected.sort(key=lambda item: item[0])
        else:
            selected.sort(key=lambda item: (item[1], item[0]))
        del selected[MAX_OBJECTS_PER_LINE:]
        selected.reverse()
        self._oam_buffer = selected

    def _get_tile_bytes(self, address: int, bank: bool) -> tuple[int, int]:
        read = self._read_vram_bank_1 if bank else self._read_vram_bank_0
        return read(address), read(address + 1)

    def _read_vram_bank_0(self, address: int) -> int:
        return self.vram[address - 0x8000]

    def _read_vram_bank_1(self, address: int) -> int:
        return self.vram[0x2000 + address - 0x8000]