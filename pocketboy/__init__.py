"""Handheld game console hardware components: PPU, timer, joypad, serial port and event scheduler."""

__version__ = "0.1.0"