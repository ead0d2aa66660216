"""Interfaces between the CPU, the bus and memory-mapped devices."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MemoryInterface(ABC):
    """Memory as seen by the CPU."""

    @abstractmethod
    def load_8(self, address: int) -> int:
        """Read one byte."""

    def load_16(self, address: int) -> int:
        """Read a little-endian 16-bit word."""
        lo = self.load_8(address)
        hi = self.load_8((address + 1) & 0xFFFF)
        return (hi << 8) | lo

    @abstractmethod
    def store_8(self, address: int, value: int) -> None:
        """Write one byte."""

    def store_16(self, address: int, value: int) -> None:
        """Write a little-endian 16-bit word, low byte first."""
        self.store_8(address, value & 0xFF)
        self.store_8((address + 1) & 0xFFFF, (value >> 8) & 0xFF)

    @abstractmethod
    def cycle(self, cycles: int, cpu_halted: bool) -> int:
        """Let the hardware run for ``cycles``; return the cycles consumed."""

    @abstractmethod
    def change_speed(self) -> None:
        """Carry out an armed CPU speed switch."""


class SystemMemoryAccess(ABC):
    """A device mapped into the address space."""

    @abstractmethod
    def read_8(self, address: int) -> int:
        """Read one byte from a mapped register or memory."""

    @abstractmethod
    def write_8(self, address: int, value: int) -> None:
        """Write one byte to a mapped register or memory."""