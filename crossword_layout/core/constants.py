"""Shared constants and enumerations for the layout engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        """Unit ``(dx, dy)`` vector along the word."""
        return (1, 0) if self is Direction.ACROSS else (0, 1)

    @property
    def perpendicular(self) -> Direction:
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


DIRECTIONS: Tuple[Direction, ...] = (Direction.ACROSS, Direction.DOWN)

ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

# Returned by ``LayoutGrid.check_placement`` for rejected positions.
INVALID = -1

# Smallest canvas edge the puzzle UI renders, whatever the layout size.
MIN_GRID_SIZE = 5
