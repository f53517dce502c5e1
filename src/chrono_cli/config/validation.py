"""Configuration validation for chrono.

Warns on unknown keys and invalid values instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set

from chrono_cli.config.models import VALID_OUTPUT_FORMATS
from chrono_cli.core.logging import get_logger

LOGGER = get_logger(__name__)

# Valid top-level keys
VALID_TOP_LEVEL_KEYS: Set[str] = {
    "output",
    "metadata",
    "platform",
}

# Valid keys per section
VALID_SECTION_KEYS: Dict[str, Set[str]] = {
    "output": {"format"},
    "metadata": {"path"},
    "platform": {"created_by", "template"},
}


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warnings.append(ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
        ))
        return warnings

    for key, value in data.items():
        if key not in VALID_TOP_LEVEL_KEYS:
            _add_warning(warnings, ConfigValidationWarning(
                message=f"Unknown top-level key '{key}'",
                source=source,
                key=key,
                suggestion=_suggest_key(key, VALID_TOP_LEVEL_KEYS),
            ))
            continue

        if not isinstance(value, dict):
            _add_warning(warnings, ConfigValidationWarning(
                message=f"'{key}' must be a mapping, got {type(value).__name__}",
                source=source,
                key=key,
            ))
            continue

        valid_keys = VALID_SECTION_KEYS[key]
        for sub_key in value:
            if sub_key not in valid_keys:
                _add_warning(warnings, ConfigValidationWarning(
                    message=f"Unknown key '{key}.{sub_key}'",
                    source=source,
                    key=f"{key}.{sub_key}",
                    suggestion=_suggest_key(sub_key, valid_keys),
                ))

    output = data.get("output")
    output_format = output.get("format") if isinstance(output, dict) else None
    if output_format is not None and output_format not in VALID_OUTPUT_FORMATS:
        _add_warning(warnings, ConfigValidationWarning(
            message=f"Invalid output format '{output_format}'",
            source=source,
            key="output.format",
            suggestion=_suggest_key(str(output_format), VALID_OUTPUT_FORMATS),
        ))

    return warnings


def _suggest_key(key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a similar valid key for typos."""
    matches = get_close_matches(key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _add_warning(
    warnings: List[ConfigValidationWarning],
    warning: ConfigValidationWarning,
) -> None:
    warnings.append(warning)
    message = f"{warning.source}: {warning.message}"
    if warning.suggestion:
        message += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(message)
