"""Free-form crossword layout engine.

This package exposes the public API surface via:

- ``crossword_layout.engine.generator.generate_layout``: one seeded attempt.
- ``crossword_layout.engine.generator.generate_layout_optimized``: many seeds,
  best-scoring layout wins.
- ``crossword_layout.engine.validator.LayoutValidator``: structural checks
  over a finished layout.
"""

from .core.constants import Direction
from .core.exceptions import (
    ConfigError,
    CrosswordError,
    InvalidWordListError,
    SolverStateError,
    ValidationError,
)
from .core.models import PlacedWord, WordEntry
from .data.normalization import clean_word
from .engine.generator import (
    LayoutConfig,
    LayoutResult,
    generate_layout,
    generate_layout_optimized,
)
from .engine.validator import LayoutValidator, ValidationResult

__all__ = [
    "ConfigError",
    "CrosswordError",
    "Direction",
    "InvalidWordListError",
    "LayoutConfig",
    "LayoutResult",
    "LayoutValidator",
    "PlacedWord",
    "SolverStateError",
    "ValidationError",
    "ValidationResult",
    "WordEntry",
    "clean_word",
    "generate_layout",
    "generate_layout_optimized",
]

__version__ = "0.1.0"
