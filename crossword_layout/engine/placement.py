"""Candidate search and density scoring for word placements."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence, Set, Tuple

from ..core.constants import DIRECTIONS, ORTHOGONAL_STEPS, Direction
from ..core.models import PlacedWord, PlacementCandidate
from .grid import LayoutGrid

if TYPE_CHECKING:
    from .generator import LayoutConfig


def density_score(
    grid: LayoutGrid,
    word: str,
    x: int,
    y: int,
    direction: Direction,
    config: LayoutConfig,
) -> float:
    """Heuristic quality of a placement, higher is better.

    Combines a touching bonus (crossings weigh 3, each filled neighbour of a
    new cell weighs 1), a penalty on bounding-box growth, a smaller penalty
    on the distance from the grid's centre of mass, and a fixed baseline.
    """

    dx, dy = direction.step
    cells = grid.cells
    touching = 0
    for index in range(len(word)):
        cx = x + dx * index
        cy = y + dy * index
        if (cx, cy) in cells:
            touching += 3
            continue
        for sx, sy in ORTHOGONAL_STEPS:
            if (cx + sx, cy + sy) in cells:
                touching += 1

    bounds = grid.bounds()
    end_x = x + dx * (len(word) - 1)
    end_y = y + dy * (len(word) - 1)
    grown = bounds.expanded_to(x, y).expanded_to(end_x, end_y)
    expansion = grown.area - bounds.area

    com_x, com_y = grid.centroid()
    mid_x = (x + end_x) / 2
    mid_y = (y + end_y) / 2
    distance = abs(mid_x - com_x) + abs(mid_y - com_y)

    return (
        touching * config.touch_weight
        - expansion * config.expansion_weight
        - distance * config.compactness_weight
        + config.score_baseline
    )


def direction_counts(placed_words: Sequence[PlacedWord]) -> Tuple[int, int]:
    across = sum(1 for placed in placed_words if placed.direction is Direction.ACROSS)
    return across, len(placed_words) - across


def find_placements(
    grid: LayoutGrid,
    word: str,
    placed_words: Sequence[PlacedWord],
    config: LayoutConfig,
    allow_isolated: Optional[bool] = None,
) -> List[PlacementCandidate]:
    """Return every valid placement of ``word``, best first.

    Search runs in three phases:
      1. crossings at each letter ``word`` shares with a placed word;
      2. a scan of every start that could overlap the current bounding box,
         which also finds positions crossing several words at once;
      3. only if both found nothing, the not yet scanned starts within a
         margin around the grid, accepting positions that touch nothing at
         all (when ``allow_isolated``, which defaults to
         ``config.allow_isolated``).
    Candidates in the minority direction get a bonus proportional to the
    current across/down imbalance.
    """

    length = len(word)
    seen: Set[Tuple[int, int, Direction]] = set()
    results: List[PlacementCandidate] = []

    across, down = direction_counts(placed_words)
    imbalance = abs(across - down)
    minority = Direction.ACROSS if across <= down else Direction.DOWN

    def consider(sx: int, sy: int, direction: Direction, min_intersections: int) -> None:
        key = (sx, sy, direction)
        if key in seen:
            return
        seen.add(key)
        intersections = grid.check_placement(word, sx, sy, direction)
        if intersections < min_intersections:
            return
        if config.reject_holes and grid.would_create_hole(word, sx, sy, direction):
            return
        score = density_score(grid, word, sx, sy, direction, config)
        score += intersections * config.intersection_weight
        if direction is minority:
            score += config.balance_bonus * imbalance
        results.append(
            PlacementCandidate(
                x=sx, y=sy, direction=direction, score=score, intersections=intersections
            )
        )

    # Phase 1: shared letters
    for placed in placed_words:
        placed_cells = placed.cells()
        for pi, placed_letter in enumerate(placed.word):
            for wi, letter in enumerate(word):
                if placed_letter != letter:
                    continue
                tx, ty = placed_cells[pi]
                for direction in DIRECTIONS:
                    dx, dy = direction.step
                    consider(tx - dx * wi, ty - dy * wi, direction, 1)

    # Phase 2: bounded scan
    bounds = grid.bounds()
    if not grid.is_empty:
        for direction in DIRECTIONS:
            if direction is Direction.ACROSS:
                xs = range(bounds.min_x - length + 1, bounds.max_x + 1)
                ys = range(bounds.min_y, bounds.max_y + 1)
            else:
                xs = range(bounds.min_x, bounds.max_x + 1)
                ys = range(bounds.min_y - length + 1, bounds.max_y + 1)
            for sy in ys:
                for sx in xs:
                    consider(sx, sy, direction, 1)

    # Phase 3: disconnected fallback
    if allow_isolated is None:
        allow_isolated = config.allow_isolated
    if not results and allow_isolated:
        margin = config.fallback_margin
        for direction in DIRECTIONS:
            for sy in range(bounds.min_y - length - margin, bounds.max_y + margin + 1):
                for sx in range(bounds.min_x - length - margin, bounds.max_x + margin + 1):
                    consider(sx, sy, direction, 0)

    results.sort(key=lambda candidate: candidate.score, reverse=True)
    return results
