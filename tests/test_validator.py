import unittest

from crossword_layout.core.constants import Direction
from crossword_layout.core.models import PlacedWord, WordEntry
from crossword_layout.engine.generator import LayoutResult
from crossword_layout.engine.validator import LayoutValidator, count_components


def _result(*placements, connected=True, width=None, height=None) -> LayoutResult:
    placed = [
        PlacedWord(WordEntry(word), x, y, direction) for word, x, y, direction in placements
    ]
    cells = {cell for item in placed for cell in item.cells()}
    grid_width = width if width is not None else max(x for x, _ in cells) + 1
    grid_height = height if height is not None else max(y for _, y in cells) + 1
    return LayoutResult(
        placed_words=placed,
        total_words=len(placed),
        seed=1,
        grid_width=grid_width,
        grid_height=grid_height,
        density=len(cells) / (grid_width * grid_height),
        dir_balance=0,
        connected=connected,
    )


class LayoutValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = LayoutValidator()

    def test_valid_layout_passes(self) -> None:
        result = _result(
            ("CAT", 0, 2, Direction.ACROSS),
            ("CAR", 0, 2, Direction.DOWN),
            ("ART", 2, 0, Direction.DOWN),
        )
        outcome = self.validator.validate(result)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.messages, [])

    def test_letter_conflict_is_reported(self) -> None:
        result = _result(("CAT", 0, 0, Direction.ACROSS), ("DOG", 0, 0, Direction.DOWN))
        with self.assertLogs("crossword_layout.engine.validator", level="ERROR"):
            outcome = self.validator.validate(result)
        self.assertFalse(outcome.ok)
        self.assertIn("Letter conflict", outcome.messages[0])

    def test_parallel_words_through_one_cell_are_reported(self) -> None:
        result = _result(("CAT", 0, 0, Direction.ACROSS), ("CAT", 0, 0, Direction.ACROSS))
        with self.assertLogs("crossword_layout.engine.validator", level="ERROR"):
            outcome = self.validator.validate(result)
        self.assertIn("both run ACROSS", outcome.messages[0])

    def test_extended_word_is_reported(self) -> None:
        result = _result(("CAT", 0, 0, Direction.ACROSS), ("SO", 3, 0, Direction.ACROSS))
        with self.assertLogs("crossword_layout.engine.validator", level="ERROR"):
            outcome = self.validator.validate(result)
        self.assertIn("is extended by", outcome.messages[0])

    def test_touching_words_are_reported(self) -> None:
        result = _result(("CAT", 0, 0, Direction.ACROSS), ("DOG", 0, 1, Direction.ACROSS))
        with self.assertLogs("crossword_layout.engine.validator", level="ERROR"):
            outcome = self.validator.validate(result)
        self.assertIn("touch without forming a word", outcome.messages[0])

    def test_unnormalized_origin_is_reported(self) -> None:
        result = _result(("CAT", 1, 1, Direction.ACROSS))
        with self.assertLogs("crossword_layout.engine.validator", level="ERROR"):
            outcome = self.validator.validate(result)
        self.assertIn("origin", outcome.messages[0])

    def test_wrong_dimensions_are_reported(self) -> None:
        result = _result(("CAT", 0, 0, Direction.ACROSS), width=4, height=1)
        with self.assertLogs("crossword_layout.engine.validator", level="ERROR"):
            outcome = self.validator.validate(result)
        self.assertIn("does not match", outcome.messages[0])

    def test_false_connectivity_claim_is_reported(self) -> None:
        result = _result(
            ("XYZ", 0, 0, Direction.ACROSS),
            ("QWV", 0, 2, Direction.ACROSS),
            connected=True,
        )
        with self.assertLogs("crossword_layout.engine.validator", level="ERROR"):
            outcome = self.validator.validate(result)
        self.assertIn("2 components", outcome.messages[0])

    def test_disconnected_layout_reported_honestly_passes(self) -> None:
        result = _result(
            ("XYZ", 0, 0, Direction.ACROSS),
            ("QWV", 0, 2, Direction.ACROSS),
            connected=False,
        )
        self.assertTrue(self.validator.validate(result).ok)


class ComponentCountTests(unittest.TestCase):
    def test_counts_crossing_groups(self) -> None:
        placed = [
            PlacedWord(WordEntry("CAT"), 0, 0, Direction.ACROSS),
            PlacedWord(WordEntry("CAR"), 0, 0, Direction.DOWN),
            PlacedWord(WordEntry("XYZ"), 5, 5, Direction.ACROSS),
        ]
        self.assertEqual(count_components(placed), 2)
        self.assertEqual(count_components(placed[:2]), 1)
        self.assertEqual(count_components([]), 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
