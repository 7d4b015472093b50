"""Object attribute entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True)
class SpriteFlags:
    """The attribute byte of an OAM entry."""

    value: int = 0

    def _bit(self, n: int) -> bool:
        return bool((self.value >> n) & 1)

    def is_x_flipped(self) -> bool:
        return self._bit(5)

    def is_y_flipped(self) -> bool:
        return self._bit(6)

    def bg_priority(self) -> bool:
        return self._bit(7)

    def palette_1(self) -> bool:
        return self._bit(4)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Sprite:
    """One 4-byte OAM entry."""

    y: int = 0
    x: int = 0
    tile_index: int = 0
    flags: SpriteFlags = field(default_factory=SpriteFlags)

    @classmethod
    def from_bytes(cls, data: Sequence[int]) -> Sprite:
        """Build a sprite from the four OAM bytes: y, x, tile index, flags."""
        if len(data) != 4:
            raise ValueError(f"an OAM entry has 4 bytes, got {len(data)}")
        y, x, tile_index, flags = data
        return cls(y, x, tile_index, SpriteFlags(flags))

    def is_empty(self) -> bool:
        return self.y == 0 and self.x == 0 and self.tile_index == 0 and self.flags.value == 0