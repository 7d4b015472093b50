"""The timer control register."""

from __future__ import annotations

from dataclasses import dataclass

_CLOCK_SELECT_BITS = {0b00: 9, 0b01: 3, 0b10: 5, 0b11: 7}


@dataclass(frozen=True)
class TAC:
    """Decoded view of TAC."""

    value: int = 0

    def is_timer_enabled(self) -> bool:
        return bool((self.value >> 2) & 1)

    def clock_select(self) -> int:
        """Bit of the internal divider whose falling edge increments TIMA."""
        return _CLOCK_SELECT_BITS[self.value & 0b11]

    def __int__(self) -> int:
        return self.value