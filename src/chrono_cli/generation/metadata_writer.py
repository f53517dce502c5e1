"""Metadata file writer.

Serializes detection results to YAML (persisted) or JSON (console output).
"""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

import yaml

from chrono_cli.config.models import DEFAULT_CREATED_BY, DEFAULT_METADATA_PATH
from chrono_cli.core.logging import get_logger
from chrono_cli.detection.detector import timestamp
from chrono_cli.detection.models import Metadata, PlatformInfo

LOGGER = get_logger(__name__)


def render_yaml(metadata: Metadata) -> str:
    """Render metadata as YAML, keeping field order."""
    return yaml.safe_dump(
        metadata.to_dict(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def render_json(metadata: Metadata) -> str:
    """Render metadata as indented JSON."""
    return json.dumps(metadata.to_dict(), indent=2)


class MetadataWriter:
    """Writes detection results to the project metadata file."""

    def __init__(self, project_root: Path, relative_path: str = DEFAULT_METADATA_PATH):
        """Initialize MetadataWriter.

        Args:
            project_root: Project root directory.
            relative_path: Metadata file path relative to the project root.
        """
        self.project_root = project_root
        self.path = project_root / relative_path

    def exists(self) -> bool:
        """Check whether a metadata file was already written."""
        return self.path.exists()

    def write(
        self,
        metadata: Metadata,
        created_by: str = DEFAULT_CREATED_BY,
        template: Optional[str] = None,
    ) -> Path:
        """Stamp platform info and write metadata as YAML.

        Args:
            metadata: Detection result to persist.
            created_by: Value for ``platform.created_by``.
            template: Optional template name for ``platform.template``.

        Returns:
            Path to the written file.
        """
        stamped = replace(
            metadata,
            project=replace(metadata.project, detected_at=timestamp()),
            platform=PlatformInfo(created_by=created_by, template=template or ""),
        )

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(render_yaml(stamped), encoding="utf-8")
        LOGGER.info(f"Wrote metadata to {self.path}")
        return self.path

    def read(self) -> Optional[Metadata]:
        """Load previously written metadata.

        Returns:
            Metadata, or None if the file does not exist.
        """
        if not self.path.exists():
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            return None
        return Metadata.from_dict(data)
