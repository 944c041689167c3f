"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain loggers under the ``flipbook`` namespace.
    - Allow an optional verbose/debug mode for the command line.

Notes/Edge cases:
    - Configuration is idempotent; repeated calls never stack handlers.
    - Library use stays silent unless the host application configures logging.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["ROOT_LOGGER", "get_logger", "configure_logging"]

ROOT_LOGGER = "flipbook"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` nested under the package root logger."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package root logger.

    ``verbose`` selects ``DEBUG`` instead of ``WARNING``.  Calling this more
    than once replaces the handler so it writes to the current ``sys.stderr``.
    """

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for stale in [h for h in root.handlers if getattr(h, "_flipbook_cli", False)]:
        root.removeHandler(stale)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._flipbook_cli = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
