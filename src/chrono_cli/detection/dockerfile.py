"""Dockerfile lookup with a shallow structural check.

Validation is a token presence check, not a parser: the text must contain
``FROM`` and at least one of ``EXPOSE``, ``CMD`` or ``ENTRYPOINT``. Tokens
inside comments count too, so a commented-out ``# FROM golang:1.22`` still
satisfies the ``FROM`` requirement.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple

from chrono_cli.core.logging import get_logger
from chrono_cli.detection.manifests import read_text

LOGGER = get_logger(__name__)

BASE_IMAGE_TOKEN = "FROM"
RUNTIME_TOKENS = ("EXPOSE", "CMD", "ENTRYPOINT")


def is_valid_dockerfile(content: str) -> bool:
    """Shallow structural check on Dockerfile text."""
    if BASE_IMAGE_TOKEN not in content:
        return False
    return any(token in content for token in RUNTIME_TOKENS)


def find_dockerfile(directory: Path, candidates: Sequence[str]) -> Tuple[str, bool]:
    """Return the first candidate that exists and passes validation.

    Args:
        directory: Directory the candidates are relative to.
        candidates: Relative paths in priority order.

    Returns:
        Tuple of (relative path, found). The path is empty when nothing matched.
    """
    for candidate in candidates:
        content = read_text(directory / candidate)
        if content is None:
            continue
        if is_valid_dockerfile(content):
            LOGGER.debug(f"Using Dockerfile {candidate} in {directory}")
            return candidate, True
        LOGGER.debug(f"Ignoring {candidate} in {directory}: failed structural check")
    return "", False
