"""Logging utilities tailored for layout generation."""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "crossword_layout"

# Library default: records go nowhere until the host configures logging.
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a sensible formatter.

    Opt-in helper for scripts and notebooks. The optimizer runs hundreds of
    short attempts, so per-attempt detail is logged at DEBUG and only the
    final summary at INFO.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger namespaced under the package."""

    return logging.getLogger(name or PACKAGE_LOGGER)
