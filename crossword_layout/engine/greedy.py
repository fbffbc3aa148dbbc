"""Greedy multi-pass placement for words backtracking left behind."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from ..core.models import PlacedWord, WordEntry
from ..utils.logger import get_logger
from .grid import LayoutGrid
from .placement import find_placements

if TYPE_CHECKING:
    from .generator import LayoutConfig

LOGGER = get_logger(__name__)


def greedy_fill(
    grid: LayoutGrid,
    placed: List[PlacedWord],
    entries: Sequence[WordEntry],
    config: LayoutConfig,
) -> List[WordEntry]:
    """Commit the best candidate for each word, pass after pass.

    Placements are never undone. Passes repeat while they make progress, up
    to ``config.greedy_passes``; words a later placement makes reachable get
    picked up on the next pass. Returns the words that remain unplaced.
    """

    unplaced = list(entries)
    for pass_number in range(1, config.greedy_passes + 1):
        if not unplaced:
            break
        still_unplaced: List[WordEntry] = []
        for entry in unplaced:
            candidates = find_placements(grid, entry.word, placed, config)
            if not candidates:
                still_unplaced.append(entry)
                continue
            best = candidates[0]
            grid.place(entry.word, best.x, best.y, best.direction)
            placed.append(PlacedWord(entry, best.x, best.y, best.direction))
        if len(still_unplaced) == len(unplaced):
            LOGGER.debug("Greedy pass %d made no progress", pass_number)
            break
        unplaced = still_unplaced

    if unplaced:
        LOGGER.debug(
            "Greedy fallback left %d words unplaced: %s",
            len(unplaced),
            [entry.word for entry in unplaced],
        )
    return unplaced
