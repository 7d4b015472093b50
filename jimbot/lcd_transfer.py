"""Mode 3: shifting background, window and object pixels onto the screen."""

from __future__ import annotations

from typing import TYPE_CHECKING, MutableSequence, Optional

from jimbot.pixel_fetcher import PixelFetcher
from jimbot.pixel_fifo import PixelFifo
from jimbot.sprite import Sprite
from jimbot.sprite_pixel_fifo import SpritePixelFifo

if TYPE_CHECKING:
    from jimbot.mmu import MMU

SCREEN_WIDTH = 160
SCREEN_HEIGHT = 144
LAST_VISIBLE_LINE = SCREEN_HEIGHT - 1

Screen = MutableSequence[MutableSequence[int]]


def new_screen() -> list[list[int]]:
    """A blank screen indexed as ``screen[x][y]``."""
    return [[0] * SCREEN_HEIGHT for _ in range(SCREEN_WIDTH)]


class LCDTransfer:
    """Draws one scan line, one pixel per clock when the queues allow it."""

    def __init__(self) -> None:
        self._initial_scanline = True
        self._pixel_fifo = PixelFifo()
        self._sprite_fifo = SpritePixelFifo()
        self._fetcher = PixelFetcher()
        self._x = 0
        self._discard = 0
        self._window_line = False

    def cycle(self, mmu: MMU, sprite_buffer: list[Sprite], lcd: Screen) -> bool:
        """Advance one clock; return True once the line's 160 pixels are drawn."""
        if self._initial_scanline:
            if mmu.ly == mmu.wy:
                self._window_line = True
            self._discard = mmu.scx % 8
            self._initial_scanline = False

        fetcher = self._fetcher
        if fetcher.fetching_sprite():
            fetcher.step(mmu, self._pixel_fifo, self._sprite_fifo)
        elif self._window_starts(mmu):
            self._pixel_fifo.reset()
            fetcher.fetch_window(mmu, self._pixel_fifo, self._sprite_fifo)
        elif not self._pixel_fifo.can_pop():
            fetcher.step(mmu, self._pixel_fifo, self._sprite_fifo)
        elif self._discard > 0:
            self._pixel_fifo.pop()
            self._sprite_fifo.pop()
            self._discard -= 1
            fetcher.step(mmu, self._pixel_fifo, self._sprite_fifo)
        else:
            sprite = self._take_sprite(sprite_buffer)
            if sprite is not None:
                fetcher.fetch_sprite(sprite, mmu, self._sprite_fifo)
            else:
                lcd[self._x][mmu.ly] = self._mix_pixel(mmu)
                self._x += 1
                fetcher.step(mmu, self._pixel_fifo, self._sprite_fifo)

        if self._x == SCREEN_WIDTH:
            self.reset(mmu.ly == LAST_VISIBLE_LINE)
            return True
        return False

    def _window_starts(self, mmu: MMU) -> bool:
        return (
            self._discard == 0
            and not self._fetcher.is_window_mode()
            and mmu.lcdc.is_window_enabled()
            and self._window_line
            and self._x >= (mmu.wx - 7) & 0xFF
        )

    def _take_sprite(self, sprite_buffer: list[Sprite]) -> Optional[Sprite]:
        """Remove and return the first buffered sprite that starts here."""
        for i, sprite in enumerate(sprite_buffer):
            if sprite.x <= self._x + 8:
                return sprite_buffer.pop(i)
        return None

    def _mix_pixel(self, mmu: MMU) -> int:
        bg = self._pixel_fifo.pop()
        sprite_pixel = self._sprite_fifo.pop()
        if sprite_pixel is not None:
            color, flags = sprite_pixel
            if color > 0 and (not flags.bg_priority() or bg == 0):
                palette = mmu.obp1 if flags.palette_1() else mmu.obp0
                return palette.color(color)
        return mmu.bgp.color(bg)

    def reset(self, all_lines: bool) -> None:
        """Prepare for the next line; ``all_lines`` also restarts the window."""
        self._initial_scanline = True
        self._x = 0
        self._pixel_fifo.reset()
        self._sprite_fifo.reset()
        if all_lines:
            self._window_line = False
        self._fetcher.reset(all_lines)