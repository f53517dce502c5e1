"""Configuration module for chrono.

Provides configuration file loading, parsing, and validation with support for:
- Project-level config (.chrono.yml)
- Global config (~/.chrono/config/config.yml)
- Environment variable expansion
"""

from chrono_cli.config.models import (
    ChronoConfig,
    MetadataConfig,
    OutputConfig,
    PlatformConfig,
)
from chrono_cli.config.loader import ConfigError, load_config, find_project_config, find_global_config
from chrono_cli.config.validation import validate_config, ConfigValidationWarning

__all__ = [
    "ChronoConfig",
    "MetadataConfig",
    "OutputConfig",
    "PlatformConfig",
    "ConfigError",
    "load_config",
    "find_project_config",
    "find_global_config",
    "validate_config",
    "ConfigValidationWarning",
]
