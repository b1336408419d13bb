"""Width metrics consumed by the wrap engine and cursor placement."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from wcwidth import wcwidth


class WidthMetrics(Protocol):
    """Font-derived measurements supplied by the rendering side."""

    line_height: float
    baseline: float

    def width_of(self, char: str) -> float:
        ...

    def measure(self, text: str) -> float:
        ...


@dataclass(frozen=True, slots=True)
class FixedMetrics:
    """Every character has the same advance; handy for pixel fonts."""

    char_width: float = 1.0
    line_height: float = 1.0
    baseline: float = 1.0

    def width_of(self, char: str) -> float:
        return self.char_width

    def measure(self, text: str) -> float:
        return self.char_width * len(text)


@lru_cache(maxsize=4096)
def _cell_width(char: str, tab_width: int) -> int:
    if char == "\t":
        return tab_width
    width = wcwidth(char)
    # Control characters report -1; they still occupy one cell once escaped.
    return 1 if width < 0 else width


@dataclass(frozen=True, slots=True)
class CellMetrics:
    """Terminal cell metrics: wide CJK glyphs take two cells."""

    tab_width: int = 4
    line_height: float = 1.0
    baseline: float = 1.0

    def width_of(self, char: str) -> float:
        return float(_cell_width(char, self.tab_width))

    def measure(self, text: str) -> float:
        return float(sum(_cell_width(char, self.tab_width) for char in text))


__all__ = ["CellMetrics", "FixedMetrics", "WidthMetrics"]
