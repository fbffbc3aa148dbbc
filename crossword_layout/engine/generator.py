"""Layout generation orchestration.

Each attempt orders the words from its seed, seeds the grid with the first
word at the origin, runs the backtracking solver on the rest and lets the
greedy fallback place whatever is left. The optimizer repeats this over many
seeds and keeps the best-scoring layout.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core.constants import MIN_GRID_SIZE, Direction
from ..core.exceptions import ConfigError
from ..core.models import PlacedWord, WordEntry
from ..data.normalization import RawEntry, coerce_entries
from ..utils.logger import get_logger
from .greedy import greedy_fill
from .grid import LayoutGrid
from .placement import direction_counts
from .solver import BacktrackingSolver
from .validator import LayoutValidator, count_components


LOGGER = get_logger(__name__)


@dataclass
class LayoutConfig:
    """Tunables for search budgets, heuristics and attempt scoring."""

    # Search budgets
    beam_width: int = 12
    greedy_passes: int = 30
    attempt_timeout_seconds: Optional[float] = 0.3
    overall_timeout_seconds: Optional[float] = 10.0
    max_iterations: Optional[int] = None
    allow_isolated: bool = True
    reject_holes: bool = True
    fallback_margin: int = 1

    # Placement scoring
    intersection_weight: float = 8000.0
    touch_weight: float = 2000.0
    expansion_weight: float = 150.0
    compactness_weight: float = 10.0
    score_baseline: float = 50.0
    balance_bonus: float = 3000.0

    # Attempt scoring
    words_weight: float = 10000.0
    density_weight: float = 5000.0
    area_weight: float = 3.0
    balance_weight: float = 100.0
    imbalance_threshold: int = 4
    imbalance_penalty: float = 50000.0
    island_penalty: float = 5000.0
    target_density: float = 0.55

    validate_result: bool = True

    def validate(self) -> None:
        if self.beam_width < 1:
            raise ConfigError(f"beam_width must be at least 1, got {self.beam_width}")
        if self.greedy_passes < 0:
            raise ConfigError(f"greedy_passes must be non-negative, got {self.greedy_passes}")
        if self.fallback_margin < 0:
            raise ConfigError(f"fallback_margin must be non-negative, got {self.fallback_margin}")
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ConfigError(f"max_iterations must be positive, got {self.max_iterations}")
        for name in ("attempt_timeout_seconds", "overall_timeout_seconds"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value}")
        if not 0.0 <= self.target_density <= 1.0:
            raise ConfigError(f"target_density must lie in [0, 1], got {self.target_density}")


@dataclass
class LayoutResult:
    placed_words: List[PlacedWord]
    total_words: int
    seed: int
    grid_width: int
    grid_height: int
    density: float
    dir_balance: int
    connected: bool
    unplaced: List[WordEntry] = field(default_factory=list)
    score: float = 0.0
    validation_messages: List[str] = field(default_factory=list)

    @property
    def words_placed(self) -> int:
        return len(self.placed_words)

    @property
    def success(self) -> bool:
        """Every word placed, all of them in one crossing-connected grid."""
        return self.words_placed == self.total_words and self.connected

    @property
    def area(self) -> int:
        return self.grid_width * self.grid_height

    @property
    def grid_size(self) -> int:
        return max(self.grid_width, self.grid_height, MIN_GRID_SIZE)

    def to_matrix(self) -> List[List[Optional[str]]]:
        matrix: List[List[Optional[str]]] = [
            [None] * self.grid_width for _ in range(self.grid_height)
        ]
        for placed in self.placed_words:
            for (x, y), letter in zip(placed.cells(), placed.word):
                matrix[y][x] = letter
        return matrix

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "words": [
                {
                    "word": placed.word,
                    "clue": placed.clue,
                    "main_word_index": placed.main_word_index,
                    "x": placed.x,
                    "y": placed.y,
                    "direction": placed.direction.value,
                }
                for placed in self.placed_words
            ],
            "unplaced": [entry.word for entry in self.unplaced],
            "stats": {
                "success": self.success,
                "words_placed": self.words_placed,
                "total_words": self.total_words,
                "grid_width": self.grid_width,
                "grid_height": self.grid_height,
                "density": round(self.density, 4),
                "area": self.area,
                "dir_balance": self.dir_balance,
                "seed": self.seed,
            },
        }


# ----------------------------------------------------------------------
# Single attempt
# ----------------------------------------------------------------------
def order_entries(entries: Sequence[WordEntry], seed: int, rng: random.Random) -> List[WordEntry]:
    """Seed-dependent placement order.

    Even seeds shuffle everything; odd seeds keep long words first and only
    shuffle within each group of equal length.
    """

    if seed % 2 == 0:
        shuffled = list(entries)
        rng.shuffle(shuffled)
        return shuffled
    by_length = sorted(entries, key=lambda entry: len(entry.word), reverse=True)
    ordered: List[WordEntry] = []
    start = 0
    while start < len(by_length):
        end = start
        length = len(by_length[start].word)
        while end < len(by_length) and len(by_length[end].word) == length:
            end += 1
        group = by_length[start:end]
        rng.shuffle(group)
        ordered.extend(group)
        start = end
    return ordered


def normalize_placements(placed_words: Sequence[PlacedWord]) -> List[PlacedWord]:
    """Shift placements so the smallest occupied x and y are both 0."""

    if not placed_words:
        return []
    min_x = min(x for placed in placed_words for x, _ in placed.cells())
    min_y = min(y for placed in placed_words for _, y in placed.cells())
    if min_x == 0 and min_y == 0:
        return list(placed_words)
    return [placed.shifted(-min_x, -min_y) for placed in placed_words]


def build_result(
    grid: LayoutGrid,
    placed_words: Sequence[PlacedWord],
    total_words: int,
    seed: int,
    unplaced: Sequence[WordEntry],
    config: LayoutConfig,
) -> LayoutResult:
    bounds = grid.bounds()
    across, down = direction_counts(placed_words)
    normalized = normalize_placements(placed_words)
    result = LayoutResult(
        placed_words=normalized,
        total_words=total_words,
        seed=seed,
        grid_width=bounds.width,
        grid_height=bounds.height,
        density=len(grid) / bounds.area,
        dir_balance=abs(across - down),
        connected=count_components(normalized) == 1,
        unplaced=list(unplaced),
    )
    result.score = score_layout(result, config)
    return result


def score_layout(result: LayoutResult, config: LayoutConfig) -> float:
    """Attempt score: words placed dominate, then density, then compactness."""

    score = (
        result.words_placed * config.words_weight
        + result.density * config.density_weight
        - result.area * config.area_weight
        - result.dir_balance * config.balance_weight
    )
    if result.dir_balance > config.imbalance_threshold:
        score -= config.imbalance_penalty
    components = count_components(result.placed_words)
    if components > 1:
        score -= (components - 1) * config.island_penalty
    return score


def _run_attempt(entries: Sequence[WordEntry], seed: int, config: LayoutConfig) -> LayoutResult:
    rng = random.Random(seed)
    ordered = order_entries(entries, seed, rng)

    grid = LayoutGrid()
    placed: List[PlacedWord] = []
    first = ordered[0]
    start_direction = Direction.ACROSS if seed % 2 == 0 else Direction.DOWN
    grid.place(first.word, 0, 0, start_direction)
    placed.append(PlacedWord(first, 0, 0, start_direction))

    remaining = ordered[1:]
    deadline = None
    if config.attempt_timeout_seconds is not None:
        deadline = time.monotonic() + config.attempt_timeout_seconds
    solver = BacktrackingSolver(grid, placed, config, deadline=deadline)

    unplaced: List[WordEntry] = []
    if not solver.solve(remaining):
        restored = solver.restore_best()
        leftovers = remaining[len(restored):]
        LOGGER.debug(
            "Seed %d: backtracking stopped after %d nodes with %d/%d words, greedy takes %d",
            seed,
            solver.iterations,
            len(placed),
            len(entries),
            len(leftovers),
        )
        unplaced = greedy_fill(grid, placed, leftovers, config)

    return build_result(grid, placed, len(entries), seed, unplaced, config)


def _attach_validation(result: LayoutResult) -> None:
    validation = LayoutValidator().validate(result)
    result.validation_messages = validation.messages


def _log_attempt(layout: LayoutResult) -> None:
    LOGGER.debug(
        "Seed %d: %d/%d words, density %.3f, balance %d, score %.1f",
        layout.seed,
        layout.words_placed,
        layout.total_words,
        layout.density,
        layout.dir_balance,
        layout.score,
    )


# ----------------------------------------------------------------------
# Public entrypoints
# ----------------------------------------------------------------------
def generate_layout(
    words: Sequence[RawEntry],
    seed: int = 1,
    config: Optional[LayoutConfig] = None,
) -> LayoutResult:
    """Lay out ``words`` with a single seed."""

    config = config or LayoutConfig()
    config.validate()
    entries = coerce_entries(words)
    result = _run_attempt(entries, seed, config)
    if config.validate_result:
        _attach_validation(result)
    return result


def is_good_enough(result: LayoutResult, config: LayoutConfig) -> bool:
    return (
        result.success
        and result.density > config.target_density
        and result.dir_balance <= config.imbalance_threshold
    )


def generate_layout_optimized(
    words: Sequence[RawEntry],
    seed_hint: int = 1,
    attempts: int = 200,
    config: Optional[LayoutConfig] = None,
) -> LayoutResult:
    """Try seeds ``seed_hint`` onwards and return the best-scoring layout.

    Stops early when the overall deadline passes or an attempt is good
    enough (everything placed and connected, dense, balanced). A layout that
    could not place every word is still returned, with ``success`` false.
    """

    config = config or LayoutConfig()
    config.validate()
    if attempts < 1:
        raise ConfigError(f"attempts must be at least 1, got {attempts}")
    entries = coerce_entries(words)

    deadline = None
    if config.overall_timeout_seconds is not None:
        deadline = time.monotonic() + config.overall_timeout_seconds

    best = layout = _run_attempt(entries, seed_hint, config)
    _log_attempt(layout)
    tried = 1
    for seed in range(seed_hint + 1, seed_hint + attempts):
        if is_good_enough(layout, config):
            break
        if deadline is not None and time.monotonic() > deadline:
            LOGGER.debug("Overall deadline reached after %d attempts", tried)
            break
        layout = _run_attempt(entries, seed, config)
        tried += 1
        _log_attempt(layout)
        if layout.score > best.score:
            best = layout

    if config.validate_result:
        _attach_validation(best)
    LOGGER.info(
        "Best layout: seed %d, %d/%d words, density %.1f%%, balance %d (%d attempts)",
        best.seed,
        best.words_placed,
        best.total_words,
        best.density * 100,
        best.dir_balance,
        tried,
    )
    if best.unplaced:
        LOGGER.warning(
            "Could not place %d words: %s",
            len(best.unplaced),
            [entry.word for entry in best.unplaced],
        )
    return best
