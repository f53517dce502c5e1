"""Configuration data models for chrono.

Defines typed configuration classes that represent the .chrono.yml structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

# Output formats understood by `chrono detect`
VALID_OUTPUT_FORMATS = {"table", "json", "yaml"}

DEFAULT_OUTPUT_FORMAT = "table"
DEFAULT_METADATA_PATH = ".chrono/metadata.yaml"
DEFAULT_CREATED_BY = "chrono_cli"


@dataclass
class OutputConfig:
    """Output formatting configuration."""

    format: str = DEFAULT_OUTPUT_FORMAT


@dataclass
class MetadataConfig:
    """Where detection results are persisted."""

    path: str = DEFAULT_METADATA_PATH
    """Metadata file path, relative to the project root."""


@dataclass
class PlatformConfig:
    """Platform info stamped into saved metadata."""

    created_by: str = DEFAULT_CREATED_BY
    template: str = ""


@dataclass
class ChronoConfig:
    """Complete chrono configuration."""

    output: OutputConfig = field(default_factory=OutputConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    platform: PlatformConfig = field(default_factory=PlatformConfig)

    # Config sources, for debugging
    _config_sources: List[str] = field(default_factory=list, repr=False)
