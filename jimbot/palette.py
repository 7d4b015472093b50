"""Monochrome palettes for the background and for objects."""

from __future__ import annotations

from dataclasses import dataclass


def _shade(value: int, index: int) -> int:
    if not 0 <= index <= 3:
        raise ValueError(f"palette index out of range: {index}")
    return (value >> (2 * index)) & 0b11


@dataclass(frozen=True)
class BackgroundPalette:
    """The BGP register: maps colour indices 0-3 to shades."""

    value: int = 0

    def color(self, index: int) -> int:
        """Return the shade for colour index ``index``."""
        return _shade(self.value, index)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class ObjectPalette:
    """An OBP register: colour index 0 is always transparent (shade 0)."""

    value: int = 0

    def color(self, index: int) -> int:
        """Return the shade for colour index ``index``."""
        shade = _shade(self.value, index)
        return 0 if index == 0 else shade

    def __int__(self) -> int:
        return self.value