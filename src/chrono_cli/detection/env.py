"""Environment variable key harvesting from .env-style files.

Only variable names are kept; every value is replaced by a placeholder.
Names that look like secrets are dropped entirely.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Sequence

from chrono_cli.core.logging import get_logger
from chrono_cli.detection.manifests import read_text

LOGGER = get_logger(__name__)

REDACTED_VALUE = "[VALUE]"

# Lowercased substrings marking a variable name as sensitive
SENSITIVE_MARKERS = ("secret", "password", "key")


def is_sensitive_key(key: str) -> bool:
    """Check whether a variable name looks like it holds a secret."""
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


def parse_env_keys(content: str) -> list[str]:
    """Extract variable names from .env content, in file order.

    Blank lines, ``#`` comments and lines without ``=`` are skipped.
    A leading ``export`` is ignored.
    """
    keys = []
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key = line.split("=", 1)[0].strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        if key:
            keys.append(key)
    return keys


def harvest_env_vars(directory: Path, candidates: Sequence[str]) -> Dict[str, str]:
    """Collect redacted environment variables from candidate files.

    Files are read in priority order and accumulate: a key captured from an
    earlier file is kept as is.

    Args:
        directory: Directory the candidates are relative to.
        candidates: Relative .env paths in priority order.

    Returns:
        Mapping of variable name to the redaction placeholder.
    """
    env_vars: Dict[str, str] = {}

    for candidate in candidates:
        content = read_text(directory / candidate)
        if content is None:
            continue

        for key in parse_env_keys(content):
            if key in env_vars:
                continue
            if is_sensitive_key(key):
                LOGGER.debug(f"Withholding sensitive variable name from {candidate}")
                continue
            env_vars[key] = REDACTED_VALUE

    return env_vars
