"""The background/window pixel queue."""

from __future__ import annotations

from collections import deque
from typing import Sequence

ROW = 8
CAPACITY = 16


def _check_row(row: Sequence[int]) -> None:
    if len(row) != ROW:
        raise ValueError(f"a tile row has {ROW} pixels, got {len(row)}")


class PixelFifo:
    """Queue of colour indices holding up to two tile rows."""

    def __init__(self) -> None:
        self._pixels: deque[int] = deque()

    def __len__(self) -> int:
        return len(self._pixels)

    def can_pop(self) -> bool:
        return len(self._pixels) >= ROW

    def can_push(self) -> bool:
        return len(self._pixels) <= ROW

    def pop(self) -> int:
        if not self.can_pop():
            raise IndexError("pixel queue holds fewer than 8 pixels")
        return self._pixels.popleft()

    def push_row(self, row: Sequence[int]) -> None:
        """Append a tile row at the back."""
        _check_row(row)
        if len(self._pixels) + ROW > CAPACITY:
            raise OverflowError(f"pixel queue would exceed {CAPACITY} pixels")
        self._pixels.extend(row)

    def push_row_front(self, row: Sequence[int]) -> None:
        """Insert a tile row at the front, keeping its order."""
        _check_row(row)
        if not self.can_push():
            raise OverflowError(f"cannot push with {len(self._pixels)} pixels queued")
        self._pixels.extendleft(reversed(row))

    def reset(self) -> None:
        self._pixels.clear()

    def pop_front_8(self) -> list[int]:
        """Remove and return the first eight pixels."""
        if len(self._pixels) < ROW:
            raise IndexError("pixel queue holds fewer than 8 pixels")
        return [self._pixels.popleft() for _ in range(ROW)]