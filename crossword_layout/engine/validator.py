"""Deterministic structural validation for generated layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Sequence, Set, Tuple

from ..core.constants import Direction
from ..core.exceptions import ValidationError
from ..core.models import PlacedWord
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .generator import LayoutResult


LOGGER = get_logger(__name__)

Cell = Tuple[int, int]


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


def count_components(placed_words: Sequence[PlacedWord]) -> int:
    """Number of groups of words connected through shared cells."""

    parents = list(range(len(placed_words)))

    def find(index: int) -> int:
        while parents[index] != index:
            parents[index] = parents[parents[index]]
            index = parents[index]
        return index

    owners: Dict[Cell, int] = {}
    for index, placed in enumerate(placed_words):
        for cell in placed.cells():
            other = owners.setdefault(cell, index)
            if other != index:
                parents[find(index)] = find(other)
    return len({find(index) for index in range(len(placed_words))})


class LayoutValidator:
    """Runs the structural invariants over a finished layout."""

    def validate(self, result: LayoutResult) -> ValidationResult:
        try:
            letters = self._check_letter_conflicts(result.placed_words)
            self._check_parallel_overlap(result.placed_words)
            self._check_word_extension(result.placed_words, letters)
            self._check_side_adjacency(result.placed_words, letters)
            self._check_normalized(letters)
            self._check_bounds(result, letters)
            self._check_connectivity(result)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_letter_conflicts(self, placed_words: Sequence[PlacedWord]) -> Dict[Cell, str]:
        letters: Dict[Cell, str] = {}
        for placed in placed_words:
            for cell, letter in zip(placed.cells(), placed.word):
                existing = letters.setdefault(cell, letter)
                if existing != letter:
                    raise ValidationError(
                        f"Letter conflict at {cell}: '{existing}' vs '{letter}' from {placed.word}"
                    )
        return letters

    def _check_parallel_overlap(self, placed_words: Sequence[PlacedWord]) -> None:
        covered: Dict[Tuple[Cell, Direction], str] = {}
        for placed in placed_words:
            for cell in placed.cells():
                key = (cell, placed.direction)
                if key in covered:
                    raise ValidationError(
                        f"Words {covered[key]} and {placed.word} both run "
                        f"{placed.direction.value} through {cell}"
                    )
                covered[key] = placed.word

    def _check_word_extension(
        self, placed_words: Sequence[PlacedWord], letters: Dict[Cell, str]
    ) -> None:
        for placed in placed_words:
            dx, dy = placed.direction.step
            before = (placed.x - dx, placed.y - dy)
            after = (placed.x + dx * placed.length, placed.y + dy * placed.length)
            for cell in (before, after):
                if cell in letters:
                    raise ValidationError(
                        f"Word {placed.word} at ({placed.x},{placed.y}) is extended by "
                        f"'{letters[cell]}' at {cell}"
                    )

    def _check_side_adjacency(
        self, placed_words: Sequence[PlacedWord], letters: Dict[Cell, str]
    ) -> None:
        linked: Set[Tuple[Cell, Cell]] = set()
        for placed in placed_words:
            cells = placed.cells()
            linked.update(zip(cells, cells[1:]))
        for x, y in letters:
            for neighbor in ((x + 1, y), (x, y + 1)):
                if neighbor in letters and ((x, y), neighbor) not in linked:
                    raise ValidationError(
                        f"Letters at {(x, y)} and {neighbor} touch without forming a word"
                    )

    def _check_normalized(self, letters: Dict[Cell, str]) -> None:
        if not letters:
            return
        min_x = min(x for x, _ in letters)
        min_y = min(y for _, y in letters)
        if (min_x, min_y) != (0, 0):
            raise ValidationError(f"Layout origin is ({min_x},{min_y}), expected (0,0)")

    def _check_bounds(self, result: LayoutResult, letters: Dict[Cell, str]) -> None:
        if not letters:
            return
        width = max(x for x, _ in letters) + 1
        height = max(y for _, y in letters) + 1
        if (width, height) != (result.grid_width, result.grid_height):
            raise ValidationError(
                f"Reported size {result.grid_width}x{result.grid_height} "
                f"does not match occupied extent {width}x{height}"
            )
        if result.area < len(letters):
            raise ValidationError(f"Area {result.area} smaller than {len(letters)} occupied cells")
        expected = len(letters) / result.area
        if not 0 < result.density <= 1 or abs(result.density - expected) > 1e-9:
            raise ValidationError(f"Density {result.density} inconsistent with {expected}")

    def _check_connectivity(self, result: LayoutResult) -> None:
        if not result.connected:
            return
        components = count_components(result.placed_words)
        if components != 1:
            raise ValidationError(f"Layout claims connectivity but has {components} components")
