"""Failures tolerated at the window backend boundary."""

from __future__ import annotations

import logging

# A closed or not-yet-realized window raises these from size/title calls.
# Programming errors (TypeError, ValueError, ...) still propagate.
BACKEND_WINDOW_ERRORS: tuple[type[Exception], ...] = (RuntimeError, OSError)


def log_recoverable(logger: logging.Logger, event: str) -> None:
    """Record a tolerated backend failure with its traceback at debug level."""
    logger.debug(event, exc_info=True)
