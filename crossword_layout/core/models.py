"""Data models supporting the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .constants import Direction


@dataclass(frozen=True)
class WordEntry:
    """An input word with its clue.

    ``main_word_index`` marks a letter used by the hidden-word feature; the
    engine never interprets it and passes it through unchanged.
    """

    word: str
    clue: str = ""
    main_word_index: Optional[int] = None


@dataclass(frozen=True)
class PlacedWord:
    """A word entry resolved to an origin cell and a direction."""

    entry: WordEntry
    x: int
    y: int
    direction: Direction

    @property
    def word(self) -> str:
        return self.entry.word

    @property
    def clue(self) -> str:
        return self.entry.clue

    @property
    def main_word_index(self) -> Optional[int]:
        return self.entry.main_word_index

    @property
    def length(self) -> int:
        return len(self.entry.word)

    def cells(self) -> List[Tuple[int, int]]:
        dx, dy = self.direction.step
        return [(self.x + dx * i, self.y + dy * i) for i in range(self.length)]

    def shifted(self, dx: int, dy: int) -> PlacedWord:
        return replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class PlacementCandidate:
    x: int
    y: int
    direction: Direction
    score: float
    intersections: int = 0

    @property
    def key(self) -> Tuple[int, int, Direction]:
        return (self.x, self.y, self.direction)


@dataclass(frozen=True)
class GridBounds:
    """Inclusive bounding box of the occupied cells."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def expanded_to(self, x: int, y: int) -> GridBounds:
        return GridBounds(
            min_x=min(self.min_x, x),
            min_y=min(self.min_y, y),
            max_x=max(self.max_x, x),
            max_y=max(self.max_y, y),
        )
