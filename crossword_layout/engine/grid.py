"""Sparse grid representation and placement validity checks."""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from ..core.constants import INVALID, ORTHOGONAL_STEPS, Direction
from ..core.models import GridBounds

Cell = Tuple[int, int]


class LayoutGrid:
    """Letters keyed by signed ``(x, y)`` coordinates.

    Every cell carries a reference count of the placed words covering it, so
    removing one of two crossing words keeps the shared letter. The grid also
    tracks running coordinate sums (for the centroid) and a cached bounding
    box, both kept current on every mutation.
    """

    def __init__(self) -> None:
        self.cells: Dict[Cell, str] = {}
        self._refs: Dict[Cell, int] = {}
        self._sum_x = 0
        self._sum_y = 0
        self._bounds: Optional[GridBounds] = None
        self._bounds_stale = False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place(self, word: str, x: int, y: int, direction: Direction) -> None:
        """Write ``word`` starting at ``(x, y)``. Callers validate first."""

        dx, dy = direction.step
        for index, letter in enumerate(word):
            cell = (x + dx * index, y + dy * index)
            count = self._refs.get(cell, 0)
            if count == 0:
                self._sum_x += cell[0]
                self._sum_y += cell[1]
                self._grow_bounds(cell)
            self.cells[cell] = letter
            self._refs[cell] = count + 1

    def remove(self, word: str, x: int, y: int, direction: Direction) -> None:
        """Undo a :meth:`place` of the same word at the same position."""

        dx, dy = direction.step
        for index in range(len(word)):
            cell = (x + dx * index, y + dy * index)
            count = self._refs.get(cell, 0) - 1
            if count > 0:
                self._refs[cell] = count
                continue
            self._refs.pop(cell, None)
            if self.cells.pop(cell, None) is not None:
                self._sum_x -= cell[0]
                self._sum_y -= cell[1]
                self._bounds_stale = True

    def _grow_bounds(self, cell: Cell) -> None:
        if self._bounds_stale:
            return
        if self._bounds is None:
            self._bounds = GridBounds(cell[0], cell[1], cell[0], cell[1])
        else:
            self._bounds = self._bounds.expanded_to(*cell)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.cells)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def letter(self, x: int, y: int) -> Optional[str]:
        return self.cells.get((x, y))

    def ref_count(self, x: int, y: int) -> int:
        return self._refs.get((x, y), 0)

    def bounds(self) -> GridBounds:
        """Bounding box of occupied cells; a single origin cell when empty."""

        if not self.cells:
            return GridBounds(0, 0, 0, 0)
        if self._bounds is None or self._bounds_stale:
            xs = [x for x, _ in self.cells]
            ys = [y for _, y in self.cells]
            self._bounds = GridBounds(min(xs), min(ys), max(xs), max(ys))
            self._bounds_stale = False
        return self._bounds

    def centroid(self) -> Tuple[float, float]:
        count = len(self.cells) or 1
        return self._sum_x / count, self._sum_y / count

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------
    def check_placement(self, word: str, x: int, y: int, direction: Direction) -> int:
        """Return how many existing letters ``word`` would cross, or ``INVALID``.

        Rules:
          - the cells just before the start and just after the end are empty;
          - an occupied cell must already hold the same letter, and two
            consecutive occupied cells mean the word would run along an
            existing word instead of crossing it;
          - an empty cell must not have letters on either side across the
            axis, so words only ever touch where they cross.
        """

        cells = self.cells
        dx, dy = direction.step
        length = len(word)
        if (x - dx, y - dy) in cells:
            return INVALID
        if (x + dx * length, y + dy * length) in cells:
            return INVALID

        px, py = direction.perpendicular.step
        intersections = 0
        previous_occupied = False
        for index, letter in enumerate(word):
            cx = x + dx * index
            cy = y + dy * index
            existing = cells.get((cx, cy))
            if existing is not None:
                if existing != letter or previous_occupied:
                    return INVALID
                intersections += 1
                previous_occupied = True
                continue
            if (cx + px, cy + py) in cells or (cx - px, cy - py) in cells:
                return INVALID
            previous_occupied = False
        return intersections

    def would_create_hole(self, word: str, x: int, y: int, direction: Direction) -> bool:
        """True if placing ``word`` walls an empty cell in on all four sides."""

        dx, dy = direction.step
        new_cells: Set[Cell] = set()
        for index in range(len(word)):
            cell = (x + dx * index, y + dy * index)
            if cell not in self.cells:
                new_cells.add(cell)

        def filled(cell: Cell) -> bool:
            return cell in self.cells or cell in new_cells

        checked: Set[Cell] = set()
        for cx, cy in new_cells:
            for sx, sy in ORTHOGONAL_STEPS:
                neighbor = (cx + sx, cy + sy)
                if neighbor in checked or filled(neighbor):
                    continue
                checked.add(neighbor)
                nx, ny = neighbor
                if all(filled((nx + ox, ny + oy)) for ox, oy in ORTHOGONAL_STEPS):
                    return True
        return False

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_matrix(self) -> List[List[Optional[str]]]:
        """Rows of letters over the bounding box, ``None`` for empty cells."""

        if not self.cells:
            return []
        bounds = self.bounds()
        matrix: List[List[Optional[str]]] = [
            [None] * bounds.width for _ in range(bounds.height)
        ]
        for (x, y), letter in self.cells.items():
            matrix[y - bounds.min_y][x - bounds.min_x] = letter
        return matrix
