"""Recursive backtracking placement with a bounded candidate beam."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..core.exceptions import SolverStateError
from ..core.models import PlacedWord, WordEntry
from ..utils.logger import get_logger
from .grid import LayoutGrid
from .placement import find_placements

if TYPE_CHECKING:
    from .generator import LayoutConfig

LOGGER = get_logger(__name__)


class BacktrackingSolver:
    """Depth-first search over word placements.

    Only placements crossing the existing grid are explored; disconnected
    positions are left to the greedy fallback. Of those, the ``beam_width``
    best are tried for each word, and the search stops once the deadline
    passes or the node budget is spent. A
    cutoff is not an error: :meth:`solve` simply reports failure and the
    caller moves on to the greedy fallback. On failure every placement the
    solver made has been rolled back; :meth:`restore_best` re-applies the
    deepest partial path the search reached.
    """

    def __init__(
        self,
        grid: LayoutGrid,
        placed: List[PlacedWord],
        config: LayoutConfig,
        deadline: Optional[float] = None,
    ) -> None:
        self.grid = grid
        self.placed = placed
        self.config = config
        self.deadline = deadline
        self.iterations = 0
        self.cutoff = False
        self._base = len(placed)
        self._best_path: List[PlacedWord] = []

    def solve(self, entries: Sequence[WordEntry]) -> bool:
        return self._place_from(entries, 0)

    def _place_from(self, entries: Sequence[WordEntry], index: int) -> bool:
        if index >= len(entries):
            return True
        if self._budget_spent():
            return False
        self.iterations += 1

        entry = entries[index]
        candidates = find_placements(
            self.grid, entry.word, self.placed, self.config, allow_isolated=False
        )
        for candidate in candidates[: self.config.beam_width]:
            placed = PlacedWord(entry, candidate.x, candidate.y, candidate.direction)
            self.grid.place(entry.word, placed.x, placed.y, placed.direction)
            self.placed.append(placed)
            if len(self.placed) - self._base > len(self._best_path):
                self._best_path = self.placed[self._base:]

            if self._place_from(entries, index + 1):
                return True

            self.placed.pop()
            self.grid.remove(entry.word, placed.x, placed.y, placed.direction)
        return False

    def _budget_spent(self) -> bool:
        if self.cutoff:
            return True
        max_iterations = self.config.max_iterations
        if max_iterations is not None and self.iterations >= max_iterations:
            LOGGER.debug("Backtracking node budget spent after %d nodes", self.iterations)
            self.cutoff = True
        elif self.deadline is not None and time.monotonic() > self.deadline:
            LOGGER.debug("Backtracking deadline passed after %d nodes", self.iterations)
            self.cutoff = True
        return self.cutoff

    def restore_best(self) -> List[PlacedWord]:
        """Re-apply the deepest partial placement found by a failed search."""

        if len(self.placed) != self._base:
            raise SolverStateError("restore_best() requires the search to have rolled back")
        for placed in self._best_path:
            self.grid.place(placed.word, placed.x, placed.y, placed.direction)
            self.placed.append(placed)
        return list(self._best_path)
