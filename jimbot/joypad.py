"""The joypad register (P1)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class Key(Enum):
    START = auto()
    SELECT = auto()
    B = auto()
    A = auto()
    DOWN = auto()
    UP = auto()
    LEFT = auto()
    RIGHT = auto()


class SelectMode(Enum):
    """Which button group the register currently reports."""

    DIRECTION = auto()
    ACTION = auto()
    NONE = auto()


_DIRECTION_BITS = {Key.DOWN: 3, Key.UP: 2, Key.LEFT: 1, Key.RIGHT: 0}
_ACTION_BITS = {Key.START: 3, Key.SELECT: 2, Key.B: 1, Key.A: 0}


@dataclass
class JoyPad:
    """Tracks pressed keys and the selected button group."""

    mode: SelectMode = SelectMode.NONE
    pressed: set[Key] = field(default_factory=set)

    def write(self, value: int) -> None:
        """Select the button group; a clear bit 5 selects the action buttons."""
        # Any other value selects the directions; the "none" group is never chosen.
        self.mode = SelectMode.ACTION if (value >> 5) & 1 == 0 else SelectMode.DIRECTION

    def press(self, key: Key) -> None:
        self.pressed.add(key)

    def release(self, key: Key) -> None:
        self.pressed.discard(key)

    def read(self) -> int:
        """Register value: pressed keys of the selected group read as 0 bits."""
        if self.mode is SelectMode.NONE:
            return 0xFF
        if self.mode is SelectMode.DIRECTION:
            byte, bits = 0b1101_1111, _DIRECTION_BITS
        else:
            byte, bits = 0b1110_1111, _ACTION_BITS
        for key in self.pressed:
            if key in bits:
                byte &= ~(1 << bits[key]) & 0xFF
        return byte