"""Project detection module.

This module inspects a project directory, without building or running it,
and infers:
- Project type (frontend, backend, fullstack)
- Framework, language and default port per side
- Dockerfile presence and shallow validity
- Environment variable names (values redacted)
- Middleware dependencies (MongoDB, Redis, PostgreSQL, MySQL)

Usage:
    from chrono_cli.detection import ProjectDetector

    metadata = ProjectDetector(Path(".")).detect()
"""

from chrono_cli.detection.detector import DetectionError, ProjectDetector, detect_project
from chrono_cli.detection.models import (
    Metadata,
    Middleware,
    PlatformInfo,
    ProjectMetadata,
    ProjectType,
    TechStack,
    TechStackMap,
)

__all__ = [
    "DetectionError",
    "ProjectDetector",
    "detect_project",
    "Metadata",
    "Middleware",
    "PlatformInfo",
    "ProjectMetadata",
    "ProjectType",
    "TechStack",
    "TechStackMap",
]
