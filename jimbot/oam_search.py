"""Mode 2: selecting the objects that appear on the current line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jimbot.sprite import Sprite

if TYPE_CHECKING:
    from jimbot.mmu import MMU

OAM_ENTRIES = 40
MAX_SPRITES_PER_LINE = 10
_ENTRY_SIZE = 4
_CYCLES_PER_ENTRY = 2


class OAMSearch:
    """Scans one OAM entry every two clocks, collecting visible sprites."""

    def __init__(self) -> None:
        self._entry = 0
        self._cycles = 0

    def cycle(self, mmu: MMU, sprite_buffer: list[Sprite]) -> bool:
        """Advance one clock; return True once all 40 entries are scanned."""
        self._cycles += 1
        if self._cycles >= _CYCLES_PER_ENTRY:
            self._cycles -= _CYCLES_PER_ENTRY
            start = self._entry * _ENTRY_SIZE
            sprite = Sprite.from_bytes(mmu.oam[start:start + _ENTRY_SIZE])
            line = mmu.ly + 16
            height = mmu.lcdc.sprite_height()
            if (
                sprite.x > 0
                and sprite.y <= line < sprite.y + height
                and len(sprite_buffer) < MAX_SPRITES_PER_LINE
            ):
                sprite_buffer.append(sprite)
            self._entry += 1

        if self._entry == OAM_ENTRIES:
            self.reset()
            return True
        return False

    def reset(self) -> None:
        """Start the next search from the first entry."""
        self._cycles = 0
        self._entry = 0