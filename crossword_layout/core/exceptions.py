"""Custom exception hierarchy for crossword layout generation."""


class CrosswordError(Exception):
    """Base exception for layout engine failures."""


class InvalidWordListError(CrosswordError, ValueError):
    """Raised when the caller hands the engine a malformed word list."""


class ConfigError(CrosswordError, ValueError):
    """Raised when a layout configuration value is out of range."""


class ValidationError(CrosswordError):
    """Raised when a finished layout breaks a structural invariant."""


class SolverStateError(CrosswordError):
    """Raised when a solver operation is called in the wrong search state."""
