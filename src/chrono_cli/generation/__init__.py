"""Metadata generation module.

This module renders detection results and persists them to the
project-local metadata file.
"""

from chrono_cli.generation.metadata_writer import MetadataWriter, render_json, render_yaml

__all__ = [
    "MetadataWriter",
    "render_json",
    "render_yaml",
]
