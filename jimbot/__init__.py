"""Game Boy memory map, timer, joypad and clock-stepped PPU emulation core."""

__version__ = "0.1.0"