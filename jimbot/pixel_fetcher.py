"""Fetches background and window tile rows into the pixel queue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from jimbot.pixel_fifo import PixelFifo
from jimbot.sprite import Sprite
from jimbot.sprite_pixel_fetcher import SpritePixelFetcher
from jimbot.sprite_pixel_fifo import SpritePixelFifo

if TYPE_CHECKING:
    from jimbot.mmu import MMU


def pixels_from_tile_data(lo: int, hi: int) -> list[int]:
    """Colour indices of a tile row, leftmost pixel first."""
    return [((lo >> b) & 1) | (((hi >> b) & 1) << 1) for b in range(7, -1, -1)]


@dataclass(frozen=True)
class _FetchIndex:
    pass


@dataclass(frozen=True)
class _FetchLow:
    tile_index: int


@dataclass(frozen=True)
class _FetchHigh:
    address: int
    low: int


@dataclass(frozen=True)
class _Push:
    low: int
    high: int


@dataclass(frozen=True)
class _WaitFifo:
    row: tuple[int, ...]


_Step = Union[_FetchIndex, _FetchLow, _FetchHigh, _Push, _WaitFifo]


class PixelFetcher:
    """Background/window fetcher that hands over to the sprite fetcher."""

    def __init__(self) -> None:
        self._sprite_fetcher = SpritePixelFetcher()
        self._cycles = 0
        self._step: _Step = _FetchIndex()
        self._window_mode = False
        self._x = 0
        self._window_line = 0

    def fetching_sprite(self) -> bool:
        return self._sprite_fetcher.need_step()

    def fetch_sprite(self, sprite: Sprite, mmu: MMU, sprite_fifo: SpritePixelFifo) -> None:
        self._sprite_fetcher.fetch(sprite, mmu, sprite_fifo)

    def fetch_window(
        self, mmu: MMU, pixel_fifo: PixelFifo, sprite_fifo: SpritePixelFifo
    ) -> None:
        """Switch to window tiles for the rest of the line."""
        if self._sprite_fetcher.need_step():
            raise RuntimeError("cannot start the window while a sprite is being fetched")
        self._x = 0
        self._window_mode = True
        self._step = _FetchIndex()
        self.step(mmu, pixel_fifo, sprite_fifo)

    def step(self, mmu: MMU, pixel_fifo: PixelFifo, sprite_fifo: SpritePixelFifo) -> None:
        """Advance one clock, giving it to a sprite fetch in progress if any."""
        if self._sprite_fetcher.need_step():
            self._sprite_fetcher.step(mmu, sprite_fifo)
            return

        self._cycles += 1
        if isinstance(self._step, _WaitFifo):
            self._cycles -= 1
            if pixel_fifo.can_push():
                pixel_fifo.push_row_front(self._step.row)
                self._x = (self._x + 1) & 0xFF
                self._step = _FetchIndex()
            return

        if self._cycles < 2:
            return
        self._cycles -= 2

        match self._step:
            case _FetchIndex():
                self._step = _FetchLow(mmu.read(self._tile_map_address(mmu)))
            case _FetchLow(tile_index):
                address = self._tile_row_address(mmu, tile_index)
                self._step = _FetchHigh(address, mmu.read(address))
            case _FetchHigh(address, low):
                self._step = _Push(low, mmu.read(address + 1))
            case _Push(low, high):
                if mmu.lcdc.is_bg_window_enabled():
                    row = tuple(pixels_from_tile_data(low, high))
                else:
                    row = (0,) * 8
                if pixel_fifo.can_push():
                    pixel_fifo.push_row(row)
                    self._x = (self._x + 1) & 0xFF
                    self._step = _FetchIndex()
                else:
                    self._step = _WaitFifo(row)

    def _tile_map_address(self, mmu: MMU) -> int:
        lcdc = mmu.lcdc
        if self._window_mode:
            area = lcdc.window_tilemap_area()
            x_offset = self._x
            y_offset = 32 * (self._window_line // 8)
        else:
            area = lcdc.bg_tilemap_area()
            x_offset = (self._x + mmu.scx // 8) & 0x1F
            y_offset = 32 * (((mmu.ly + mmu.scy) & 0xFF) // 8)
        return area.address((x_offset + y_offset) & 0x3FF)

    def _tile_row_address(self, mmu: MMU, tile_index: int) -> int:
        base = mmu.lcdc.bg_window_tiledata_area().address(tile_index)
        if self._window_mode:
            row = self._window_line % 8
        else:
            row = (mmu.ly + mmu.scy) % 8
        return base + 2 * row

    def reset(self, is_vblank: bool) -> None:
        """Prepare for the next line; at vertical blank restart the window."""
        self._step = _FetchIndex()
        self._cycles = 0
        if self._window_mode:
            self._window_line = (self._window_line + 1) & 0xFF
        self._window_mode = False
        self._x = 0
        if is_vblank:
            self._window_line = 0

    def is_window_mode(self) -> bool:
        return self._window_mode