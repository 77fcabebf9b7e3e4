"""Logging setup for sprintplan with semantic verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels between the standard ones
PLACEMENTS_LEVEL = 25  # verbosity 1: one line per placed item
CHECKS_LEVEL = 15  # verbosity 2: every worker/iteration probe

logging.addLevelName(PLACEMENTS_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

# -v value -> logger level
_LEVELS = {0: logging.ERROR, 1: PLACEMENTS_LEVEL, 2: CHECKS_LEVEL, 3: logging.DEBUG}


class SprintPlanLogger(logging.Logger):
    """Logger with one method per verbosity tier.

    - changes(): placements and other decisions (verbosity 1)
    - checks(): capacity and fit probes (verbosity 2)
    - debug(): pass and iteration bookkeeping (verbosity 3)
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a decision (verbosity level 1)."""
        if self.isEnabledFor(PLACEMENTS_LEVEL):
            self._log(PLACEMENTS_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a probe (verbosity level 2)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> SprintPlanLogger:
    """Return the shared sprintplan logger.

    The same instance comes back on every call; configure it with
    setup_logger().
    """
    logging.setLoggerClass(SprintPlanLogger)
    logger = logging.getLogger("sprintplan")
    assert isinstance(logger, SprintPlanLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the sprintplan logger for a verbosity level.

    Safe to call repeatedly; previous handlers are dropped.

    Args:
        verbosity: 0=errors only, 1=changes, 2=checks, 3=debug
        stream: Output stream, sys.stderr when omitted
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVELS.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and go back to errors-only."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def debug_enabled() -> bool:
    """True if debug messages will be emitted (verbosity >= 3)."""
    return get_logger().isEnabledFor(logging.DEBUG)
