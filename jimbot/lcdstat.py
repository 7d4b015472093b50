"""The LCD status register."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """PPU mode, valued by its two-bit encoding in STAT."""

    HBLANK = 0b00
    VBLANK = 0b01
    OAM_SEARCH = 0b10
    LCD_TRANSFER = 0b11


@dataclass
class LCDStat:
    """Mutable view of the STAT register."""

    value: int = 0

    def _bit(self, n: int) -> bool:
        return bool((self.value >> n) & 1)

    def mode(self) -> Mode:
        return Mode(self.value & 0b11)

    def set_mode(self, mode: Mode) -> None:
        self.value = (self.value & 0b1111_1100) | mode.value

    def ly_eq_lyc_interrupt(self) -> bool:
        return self._bit(6)

    def oam_interrupt(self) -> bool:
        return self._bit(5)

    def vblank_interrupt(self) -> bool:
        return self._bit(4)

    def hblank_interrupt(self) -> bool:
        return self._bit(3)

    def set_coincidence(self, value: bool) -> None:
        if value:
            self.value |= 0b0000_0100
        else:
            self.value &= 0b1111_1011

    def coincidence(self) -> bool:
        return self._bit(2)

    def __int__(self) -> int:
        return self.value