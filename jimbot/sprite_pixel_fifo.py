"""The object pixel queue, which mixes overlapping sprites."""

from __future__ import annotations

from collections import deque
from typing import Optional, Sequence, Tuple

from jimbot.sprite import SpriteFlags

ROW = 8

SpritePixel = Tuple[int, SpriteFlags]


class SpritePixelFifo:
    """Queue of (colour index, flags) pairs for objects."""

    def __init__(self) -> None:
        self._pixels: deque[SpritePixel] = deque()

    def __len__(self) -> int:
        return len(self._pixels)

    def can_pop(self) -> bool:
        return len(self._pixels) >= ROW

    def can_push(self) -> bool:
        return len(self._pixels) <= ROW

    def pop(self) -> Optional[SpritePixel]:
        """Remove the front pixel, or return None when empty."""
        return self._pixels.popleft() if self._pixels else None

    def push_row(self, row: Sequence[SpritePixel]) -> None:
        """Merge a row: queued transparent pixels are replaced, others kept."""
        if len(row) != ROW:
            raise ValueError(f"a tile row has {ROW} pixels, got {len(row)}")
        for i, pixel in enumerate(row):
            if i < len(self._pixels):
                if self._pixels[i][0] == 0:
                    self._pixels[i] = pixel
            else:
                self._pixels.append(pixel)

    def reset(self) -> None:
        self._pixels.clear()