import unittest

from crossword_layout.core.constants import Direction
from crossword_layout.core.models import PlacedWord, WordEntry
from crossword_layout.engine.generator import LayoutConfig
from crossword_layout.engine.grid import LayoutGrid
from crossword_layout.engine.placement import density_score, direction_counts, find_placements


def _place(grid: LayoutGrid, placed: list, word: str, x: int, y: int, direction: Direction) -> None:
    grid.place(word, x, y, direction)
    placed.append(PlacedWord(WordEntry(word), x, y, direction))


def _flat_config(**weights) -> LayoutConfig:
    base = dict(
        intersection_weight=0,
        touch_weight=0,
        expansion_weight=0,
        compactness_weight=0,
        score_baseline=0,
        balance_bonus=0,
    )
    base.update(weights)
    return LayoutConfig(**base)


class DensityScoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = LayoutGrid()
        self.grid.place("CAT", 0, 0, Direction.ACROSS)

    def test_touching_counts_crossings_and_neighbours(self) -> None:
        config = _flat_config(touch_weight=1)
        score = density_score(self.grid, "CAR", 0, 0, Direction.DOWN, config)
        self.assertEqual(score, 4)

    def test_bounding_box_growth_is_penalised(self) -> None:
        config = _flat_config(expansion_weight=1)
        score = density_score(self.grid, "CAR", 0, 0, Direction.DOWN, config)
        self.assertEqual(score, -6)

    def test_distance_from_centroid_is_penalised(self) -> None:
        config = _flat_config(compactness_weight=1)
        score = density_score(self.grid, "CAR", 0, 0, Direction.DOWN, config)
        self.assertEqual(score, -2)

    def test_baseline_is_added(self) -> None:
        config = _flat_config(score_baseline=50)
        self.assertEqual(density_score(self.grid, "CAR", 0, 0, Direction.DOWN, config), 50)


class FindPlacementsTests(unittest.TestCase):
    def test_only_valid_crossings_are_returned_best_first(self) -> None:
        grid = LayoutGrid()
        placed: list = []
        _place(grid, placed, "CAT", 0, 0, Direction.ACROSS)

        candidates = find_placements(grid, "CAR", placed, LayoutConfig())

        self.assertEqual(
            {candidate.key for candidate in candidates},
            {(0, 0, Direction.DOWN), (1, -1, Direction.DOWN)},
        )
        self.assertTrue(all(candidate.intersections == 1 for candidate in candidates))
        self.assertEqual(candidates[0].key, (1, -1, Direction.DOWN))
        scores = [candidate.score for candidate in candidates]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_isolated_fallback_when_nothing_crosses(self) -> None:
        grid = LayoutGrid()
        placed: list = []
        _place(grid, placed, "XYZ", 0, 0, Direction.ACROSS)

        candidates = find_placements(grid, "QWV", placed, LayoutConfig())
        self.assertTrue(candidates)
        self.assertTrue(all(candidate.intersections == 0 for candidate in candidates))
        for candidate in candidates:
            self.assertGreaterEqual(
                grid.check_placement("QWV", candidate.x, candidate.y, candidate.direction), 0
            )

    def test_isolated_fallback_can_be_disabled(self) -> None:
        grid = LayoutGrid()
        placed: list = []
        _place(grid, placed, "XYZ", 0, 0, Direction.ACROSS)

        config = LayoutConfig(allow_isolated=False)
        self.assertEqual(find_placements(grid, "QWV", placed, config), [])

    def test_empty_grid_offers_positions(self) -> None:
        candidates = find_placements(LayoutGrid(), "AB", [], LayoutConfig())
        self.assertTrue(candidates)

    def test_minority_direction_gets_balance_bonus(self) -> None:
        grid = LayoutGrid()
        placed: list = []
        _place(grid, placed, "XYZ", 0, 0, Direction.ACROSS)

        config = _flat_config(balance_bonus=1000)
        candidates = find_placements(grid, "QWV", placed, config)

        self.assertIs(candidates[0].direction, Direction.DOWN)
        for candidate in candidates:
            expected = 1000 if candidate.direction is Direction.DOWN else 0
            self.assertEqual(candidate.score, expected)

    def test_hole_forming_positions_are_skipped(self) -> None:
        grid = LayoutGrid()
        placed: list = []
        _place(grid, placed, "ABC", 0, 0, Direction.ACROSS)
        _place(grid, placed, "ADE", 0, 0, Direction.DOWN)
        _place(grid, placed, "CFG", 2, 0, Direction.DOWN)
        hole_key = (0, 2, Direction.ACROSS)

        strict = find_placements(grid, "EXG", placed, LayoutConfig())
        self.assertNotIn(hole_key, {candidate.key for candidate in strict})

        lenient = find_placements(grid, "EXG", placed, LayoutConfig(reject_holes=False))
        self.assertIn(hole_key, {candidate.key for candidate in lenient})


class DirectionCountTests(unittest.TestCase):
    def test_counts_each_direction(self) -> None:
        placed = [
            PlacedWord(WordEntry("CAT"), 0, 0, Direction.ACROSS),
            PlacedWord(WordEntry("CAR"), 0, 0, Direction.DOWN),
            PlacedWord(WordEntry("ART"), 1, 0, Direction.DOWN),
        ]
        self.assertEqual(direction_counts(placed), (1, 2))
        self.assertEqual(direction_counts([]), (0, 0))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
