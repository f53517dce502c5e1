"""Logging helpers for chrono.

All modules obtain their logger through :func:`get_logger` so that a single
call to :func:`configure_logging` from the CLI controls verbosity everywhere.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "chrono_cli"

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the chrono namespace.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the chrono root logger.

    Precedence: quiet > debug > verbose > default (warnings only).
    Log records go to stderr so that machine-readable output on stdout
    stays clean.

    Args:
        debug: Enable debug-level logging.
        verbose: Enable info-level logging.
        quiet: Only show errors.
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers so repeated calls (tests, re-entrant CLI) don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if debug else LOG_FORMAT))
    logger.addHandler(handler)
