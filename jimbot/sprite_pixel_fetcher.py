"""Fetches one row of an object's tile into the object pixel queue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from jimbot.sprite import Sprite
from jimbot.sprite_pixel_fifo import SpritePixelFifo

if TYPE_CHECKING:
    from jimbot.mmu import MMU

_TILE_BASE = 0x8000
_TILE_BYTES = 16


@dataclass(frozen=True)
class _FetchLow:
    sprite: Sprite


@dataclass(frozen=True)
class _FetchHigh:
    sprite: Sprite
    address: int
    low: int


@dataclass(frozen=True)
class _Push:
    sprite: Sprite
    low: int
    high: int


_Step = Union[_FetchLow, _FetchHigh, _Push]


def _row_pixels(lo: int, hi: int) -> list[int]:
    return [((lo >> b) & 1) | (((hi >> b) & 1) << 1) for b in range(7, -1, -1)]


def _clip(byte: int, sprite: Sprite) -> int:
    """Shift out the part of a row hidden left of the screen."""
    if sprite.x >= 8:
        return byte
    shift = 8 - sprite.x
    if sprite.flags.is_x_flipped():
        return byte >> shift
    return (byte << shift) & 0xFF


class SpritePixelFetcher:
    """Three two-clock stages: low byte, high byte, push to the queue."""

    def __init__(self) -> None:
        self._cycles = 0
        self._step: Optional[_Step] = None

    def fetch(self, sprite: Sprite, mmu: MMU, fifo: SpritePixelFifo) -> None:
        """Begin fetching ``sprite`` and spend the first clock on it."""
        self._step = _FetchLow(sprite)
        self.step(mmu, fifo)

    def need_step(self) -> bool:
        """True while a fetch is in progress."""
        return self._step is not None

    def step(self, mmu: MMU, fifo: SpritePixelFifo) -> None:
        """Advance the fetch by one clock."""
        if self._step is None:
            raise RuntimeError("sprite fetcher is idle")
        self._cycles += 1
        if self._cycles < 2:
            return
        self._cycles -= 2

        match self._step:
            case _FetchLow(sprite):
                address = self._row_address(sprite, mmu)
                low = _clip(mmu.read(address), sprite)
                self._step = _FetchHigh(sprite, address, low)
            case _FetchHigh(sprite, address, low):
                high = _clip(mmu.read(address + 1), sprite)
                self._step = _Push(sprite, low, high)
            case _Push(sprite, low, high):
                flags = sprite.flags
                if mmu.lcdc.is_sprite_enabled():
                    colors = _row_pixels(low, high)
                else:
                    colors = [0] * 8
                row = [(color, flags) for color in colors]
                if flags.is_x_flipped():
                    row.reverse()
                fifo.push_row(row)
                self._step = None

    @staticmethod
    def _row_address(sprite: Sprite, mmu: MMU) -> int:
        height = mmu.lcdc.sprite_height()
        row = ((mmu.ly - sprite.y) & 0xFF) % height
        if sprite.flags.is_y_flipped():
            row = height - 1 - row
        index = sprite.tile_index if height == 8 else sprite.tile_index & ~1
        return _TILE_BASE + index * _TILE_BYTES + 2 * row

    def reset(self) -> None:
        """Return to idle; refuses while a stage is half done."""
        if self._cycles != 0:
            raise RuntimeError(f"cannot reset with {self._cycles} clock pending")
        self._step = None