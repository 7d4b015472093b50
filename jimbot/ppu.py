"""The picture processing unit: line timing, modes and the frame buffers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jimbot.interrupts import InterruptRequest
from jimbot.lcd_transfer import LCDTransfer, new_screen
from jimbot.lcdstat import LCDStat, Mode
from jimbot.oam_search import OAMSearch
from jimbot.sprite import Sprite

if TYPE_CHECKING:
    from jimbot.mmu import MMU

log = logging.getLogger(__name__)

CYCLES_PER_LINE = 456
LINES_PER_FRAME = 154
CYCLES_PER_FRAME = CYCLES_PER_LINE * LINES_PER_FRAME
VBLANK_LINE = 144
_ENABLE_START_CYCLE = 8
_MODE_SWITCH_CYCLE = 4
_TRANSFER_START_CYCLE = 84


def _compare_lyc(mmu: MMU, stat: LCDStat) -> bool:
    """Update the coincidence bit; return whether it raises the STAT line."""
    equal = mmu.ly == mmu.lyc
    stat.set_coincidence(equal)
    return equal and stat.ly_eq_lyc_interrupt()


class PPU:
    """Drives the display one clock at a time into two alternating buffers."""

    def __init__(self) -> None:
        self._enabled = False
        self._init_enable = False
        self._scanline = 0
        self._scanline_cycle = 0
        self._sprite_buffer: list[Sprite] = []
        self._oam_search = OAMSearch()
        self._lcd_transfer = LCDTransfer()
        self._buffers = [new_screen(), new_screen()]
        self._current = 0
        self._stat_line = False

    def cycle(self, mmu: MMU) -> None:
        """Advance the display by one clock."""
        lcdc = mmu.lcdc
        stat = mmu.lcdstat
        if self._enabled and not lcdc.is_display_enabled():
            self._turn_off(mmu, stat)
            return
        if not self._enabled and lcdc.is_display_enabled():
            self._enabled = True
            self._init_enable = True
            self._scanline = 0
            self._scanline_cycle = _ENABLE_START_CYCLE
        if not self._enabled:
            return

        stat_line = self._line_events(mmu, stat)

        mode = stat.mode()
        if mode is Mode.OAM_SEARCH:
            self._oam_search.cycle(mmu, self._sprite_buffer)
        elif mode is Mode.LCD_TRANSFER:
            screen = self._buffers[self._current]
            if self._lcd_transfer.cycle(mmu, self._sprite_buffer, screen):
                self._sprite_buffer.clear()
                stat.set_mode(Mode.HBLANK)
                stat_line = stat_line or stat.hblank_interrupt()

        mmu.lcdstat = stat
        if stat_line and not self._stat_line:
            mmu.request_interrupt(InterruptRequest.LCD_STAT)
        self._stat_line = stat_line

        self._scanline_cycle += 1
        if self._scanline_cycle >= CYCLES_PER_LINE:
            self._scanline_cycle = 0
            self._scanline += 1
            if self._scanline >= LINES_PER_FRAME:
                self._current = (self._current + 1) % 2
                self._scanline = 0

    def _turn_off(self, mmu: MMU, stat: LCDStat) -> None:
        if stat.mode() is Mode.VBLANK:
            log.warning("display disabled; outside vertical blank this may damage hardware")
        self._scanline_cycle = 0
        self._scanline = 0
        mmu.ly = 0
        self._enabled = False
        self._buffers = [new_screen(), new_screen()]
        stat.set_mode(Mode.HBLANK)
        self._sprite_buffer.clear()
        mmu.lcdstat = stat

    def _line_events(self, mmu: MMU, stat: LCDStat) -> bool:
        """Apply the timed events of the current line; return the STAT line."""
        line = self._scanline
        clock = self._scanline_cycle
        raised = False

        if line == 0:
            if clock == 0:
                mmu.ly = 0
                raised = stat.vblank_interrupt()
            elif clock == _MODE_SWITCH_CYCLE:
                if self._init_enable:
                    self._init_enable = False
                else:
                    stat.set_mode(Mode.OAM_SEARCH)
                    raised = stat.oam_interrupt()
            elif clock == _TRANSFER_START_CYCLE:
                stat.set_mode(Mode.LCD_TRANSFER)
        elif line < VBLANK_LINE:
            if clock == 0:
                mmu.ly = line
                raised = stat.oam_interrupt()
            elif clock == _MODE_SWITCH_CYCLE:
                stat.set_mode(Mode.OAM_SEARCH)
                raised = _compare_lyc(mmu, stat)
            elif clock == _TRANSFER_START_CYCLE:
                stat.set_mode(Mode.LCD_TRANSFER)
        elif line == VBLANK_LINE:
            if clock == 0:
                mmu.ly = VBLANK_LINE
            elif clock == _MODE_SWITCH_CYCLE:
                stat.set_mode(Mode.VBLANK)
                mmu.request_interrupt(InterruptRequest.VBLANK)
                lyc = _compare_lyc(mmu, stat)
                raised = lyc or stat.oam_interrupt() or stat.vblank_interrupt()
            elif clock > _MODE_SWITCH_CYCLE:
                raised = stat.vblank_interrupt()
        elif line < LINES_PER_FRAME - 1:
            if clock == 0:
                mmu.ly = line
            elif clock == _MODE_SWITCH_CYCLE:
                lyc = _compare_lyc(mmu, stat)
                raised = lyc or stat.oam_interrupt()
        elif line == LINES_PER_FRAME - 1:
            raised = stat.vblank_interrupt()
            if clock == 0:
                mmu.ly = line
            elif clock == _MODE_SWITCH_CYCLE:
                lyc = _compare_lyc(mmu, stat)
                raised = raised or lyc or stat.oam_interrupt()
                mmu.ly = 0
            elif clock == 12:
                lyc = _compare_lyc(mmu, stat)
                raised = raised or lyc or stat.oam_interrupt()
        return raised

    def lcd(self) -> list[list[int]]:
        """A copy of the last completed frame, indexed as ``[x][y]``."""
        return [column[:] for column in self._buffers[(self._current + 1) % 2]]