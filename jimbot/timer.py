"""The DIV/TIMA/TMA/TAC timer block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from jimbot.tac import TAC

DIV = 0xFF04
TIMA = 0xFF05
TMA = 0xFF06
TAC_ADDRESS = 0xFF07

_FRAME_SEQUENCER_BIT = 13


@dataclass
class Timer:
    """Divider and programmable timer, advanced one clock at a time."""

    div: int = 0
    tima: int = 0
    tma: int = 0
    tac: int = 0
    frame_step: int = 0

    def cycle(self, on_frame_step: Optional[Callable[[int], None]] = None) -> bool:
        """Advance one clock; return True when TIMA overflows.

        ``on_frame_step`` is called with the frame sequencer step (0-7) each
        time divider bit 13 falls.
        """
        prev = self.div
        self.div = (self.div + 1) & 0xFFFF

        overflow = False
        tac = TAC(self.tac)
        if tac.is_timer_enabled():
            bit = tac.clock_select()
            if (prev >> bit) & 1 and not (self.div >> bit) & 1:
                if self.tima == 0xFF:
                    self.tima = self.tma
                    overflow = True
                else:
                    self.tima += 1

        bit = _FRAME_SEQUENCER_BIT
        if (prev >> bit) & 1 and not (self.div >> bit) & 1:
            if on_frame_step is not None:
                on_frame_step(self.frame_step)
            self.frame_step = (self.frame_step + 1) % 8
        return overflow

    def write(self, address: int, value: int) -> None:
        value &= 0xFF
        if address == DIV:
            self.div = 0
        elif address == TIMA:
            self.tima = value
        elif address == TMA:
            self.tma = value
        elif address == TAC_ADDRESS:
            self.tac = value
        else:
            raise ValueError(f"not a timer register: {address:#06x}")

    def read(self, address: int) -> int:
        if address == DIV:
            return self.div >> 8
        if address == TIMA:
            return self.tima
        if address == TMA:
            return self.tma
        if address == TAC_ADDRESS:
            return self.tac
        raise ValueError(f"not a timer register: {address:#06x}")