"""Interrupt request kinds and the IF/IE register bit set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InterruptRequest(Enum):
    """Interrupt sources, valued by their bit position (also their priority)."""

    VBLANK = 0
    LCD_STAT = 1
    TIMER = 2
    SERIAL = 3
    JOYPAD = 4

    @property
    def mask(self) -> int:
        return 1 << self.value

    def routine_location(self) -> int:
        """Address of the handler the CPU jumps to for this interrupt."""
        return 0x40 + 8 * self.value


@dataclass
class Interrupts:
    """A set of interrupt bits as held in the IF and IE registers."""

    value: int = 0

    def requests_by_priority(self) -> list[InterruptRequest]:
        """Requests whose bit is set, highest priority first."""
        return [request for request in InterruptRequest if self.value & request.mask]

    def enable_request(self, request: InterruptRequest) -> None:
        self.value = (self.value | request.mask) & 0xFF

    def is_enabled(self, request: InterruptRequest) -> bool:
        return bool(self.value & request.mask)

    def disable_request(self, request: InterruptRequest) -> None:
        self.value &= ~request.mask & 0xFF

    def __int__(self) -> int:
        return self.value