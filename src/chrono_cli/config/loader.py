"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.chrono.yml)
- Global config (~/.chrono/config/config.yml)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from chrono_cli.config.models import (
    DEFAULT_CREATED_BY,
    DEFAULT_METADATA_PATH,
    DEFAULT_OUTPUT_FORMAT,
    ChronoConfig,
    MetadataConfig,
    OutputConfig,
    PlatformConfig,
)
from chrono_cli.config.validation import validate_config
from chrono_cli.core.logging import get_logger
from chrono_cli.core.paths import ChronoPaths

LOGGER = get_logger(__name__)

# Config file names
PROJECT_CONFIG_NAMES = [".chrono.yml", ".chrono.yaml", "chrono.yml", "chrono.yaml"]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> ChronoConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.chrono.yml)
    3. Global config (~/.chrono/config/config.yml)
    4. Built-in defaults

    Args:
        project_root: Project root directory for finding .chrono.yml.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged ChronoConfig instance.

    Raises:
        ConfigError: If specified config file doesn't exist or has parse errors.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Global config
    global_path = find_global_config()
    if global_path:
        try:
            global_dict = load_yaml_file(global_path)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (yaml.YAMLError, ConfigError, OSError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    # Layer 2: Project or custom config
    if cli_config_path:
        try:
            found = cli_config_path.exists()
        except OSError as e:
            raise ConfigError(f"Cannot access config file {cli_config_path}: {e}") from e
        if not found:
            raise ConfigError(f"Config file not found: {cli_config_path}")
        config_path: Optional[Path] = cli_config_path
        label = "custom"
    else:
        config_path = find_project_config(project_root)
        label = "project"

    if config_path:
        try:
            project_dict = load_yaml_file(config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e
        validate_config(project_dict, source=str(config_path))
        merged = merge_configs(merged, project_dict)
        sources.append(f"{label}:{config_path}")
        LOGGER.debug(f"Loaded {label} config from {config_path}")

    # Layer 3: CLI overrides
    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if _is_config_file(config_path):
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Find global config at ~/.chrono/config/config.yml.

    Returns:
        Path to global config if it exists, None otherwise.
    """
    config_path = ChronoPaths.default().global_config
    if _is_config_file(config_path):
        return config_path
    return None


def _is_config_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        LOGGER.debug(f"Skipping config candidate {path}: {e}")
        return False


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def dict_to_config(data: Dict[str, Any]) -> ChronoConfig:
    """Convert a merged dict to a typed ChronoConfig.

    Missing or malformed sections fall back to defaults.
    """
    output_data = _section(data, "output")
    metadata_data = _section(data, "metadata")
    platform_data = _section(data, "platform")

    return ChronoConfig(
        output=OutputConfig(
            format=str(output_data.get("format") or DEFAULT_OUTPUT_FORMAT),
        ),
        metadata=MetadataConfig(
            path=str(metadata_data.get("path") or DEFAULT_METADATA_PATH),
        ),
        platform=PlatformConfig(
            created_by=str(platform_data.get("created_by") or DEFAULT_CREATED_BY),
            template=str(platform_data.get("template") or ""),
        ),
    )
