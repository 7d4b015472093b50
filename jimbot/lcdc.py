"""The LCD control register and the memory areas it selects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TileMapArea(Enum):
    U9800 = 0x9800
    U9C00 = 0x9C00

    def address(self, offset: int) -> int:
        return (self.value + offset) & 0xFFFF


class TileDataArea(Enum):
    I8800 = 0x9000
    U8000 = 0x8000

    def address(self, offset: int) -> int:
        """Address of tile ``offset``; 16 bytes per tile."""
        if self is TileDataArea.I8800:
            index = offset & 0xFF
            if index >= 0x80:
                index -= 0x100
            return (self.value + index * 16) & 0xFFFF
        return (self.value + offset * 16) & 0xFFFF


@dataclass(frozen=True)
class LCDC:
    """Decoded view of the LCDC register."""

    value: int = 0

    def _bit(self, n: int) -> bool:
        return bool((self.value >> n) & 1)

    def sprite_height(self) -> int:
        return 16 if self._bit(2) else 8

    def bg_tilemap_area(self) -> TileMapArea:
        return TileMapArea.U9C00 if self._bit(3) else TileMapArea.U9800

    def window_tilemap_area(self) -> TileMapArea:
        return TileMapArea.U9C00 if self._bit(6) else TileMapArea.U9800

    def bg_window_tiledata_area(self) -> TileDataArea:
        return TileDataArea.U8000 if self._bit(4) else TileDataArea.I8800

    def is_sprite_enabled(self) -> bool:
        return self._bit(1)

    def is_display_enabled(self) -> bool:
        return self._bit(7)

    def is_window_enabled(self) -> bool:
        return self.is_bg_window_enabled() and self._bit(5)

    def is_bg_window_enabled(self) -> bool:
        return self._bit(0)

    def __int__(self) -> int:
        return self.value