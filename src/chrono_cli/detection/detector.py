"""Project detector orchestrating the frontend, backend and middleware probes."""

from __future__ import annotations

import os
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, Union

from chrono_cli.core.logging import get_logger
from chrono_cli.detection.backend import detect_backend
from chrono_cli.detection.frontend import detect_frontend
from chrono_cli.detection.manifests import is_directory
from chrono_cli.detection.middleware import detect_middleware
from chrono_cli.detection.models import (
    Metadata,
    ProjectMetadata,
    ProjectType,
    TechStack,
    TechStackMap,
)

LOGGER = get_logger(__name__)

# Monorepo subdirectories, in priority order
FRONTEND_DIRS = ("frontend", "web", "client", "ui")
BACKEND_DIRS = ("backend", "api", "server", "services")


class DetectionError(Exception):
    """The project root itself could not be inspected."""

    pass


class ProjectDetector:
    """Detects project type, tech stacks and middleware for one root directory.

    The detector holds no state besides its root; each call to :meth:`detect`
    is an independent, read-only scan.
    """

    def __init__(self, root: Union[str, Path]):
        """Initialize ProjectDetector.

        Args:
            root: Project root directory.
        """
        self.root = Path(root).resolve()

    def detect(self) -> Metadata:
        """Analyze the project and return its metadata.

        Returns:
            Metadata for the project.

        Raises:
            DetectionError: If the root is missing, not a directory or unreadable.
        """
        self._check_root()

        frontend = detect_frontend(self.root)
        backend = detect_backend(self.root)

        # Monorepo fallback only when nothing matched at the root
        if frontend is None and backend is None:
            LOGGER.debug(f"Nothing detected at {self.root}, checking monorepo layout")
            frontend, backend = self._detect_monorepo()

        middleware = detect_middleware(self.root)
        project_type = ProjectType.from_stacks(frontend, backend)
        LOGGER.info(f"Detected {project_type.value} project at {self.root}")

        return Metadata(
            project=ProjectMetadata(
                name=self.root.name,
                type=project_type,
                detected_at=timestamp(),
            ),
            tech_stack=TechStackMap(frontend=frontend, backend=backend),
            middleware=middleware,
        )

    def _check_root(self) -> None:
        try:
            if not self.root.exists():
                raise DetectionError(f"Project directory not found: {self.root}")
            if not self.root.is_dir():
                raise DetectionError(f"Not a directory: {self.root}")
            with os.scandir(self.root):
                pass
        except OSError as e:
            raise DetectionError(f"Cannot read project directory {self.root}: {e}") from e

    def _detect_monorepo(self) -> Tuple[Optional[TechStack], Optional[TechStack]]:
        frontend = self._scan_subdirectories(FRONTEND_DIRS, detect_frontend)
        backend = self._scan_subdirectories(BACKEND_DIRS, detect_backend)
        return frontend, backend

    def _scan_subdirectories(
        self,
        candidates: Sequence[str],
        probe: Callable[[Path], Optional[TechStack]],
    ) -> Optional[TechStack]:
        """Return the first subdirectory hit, with its Dockerfile path re-rooted."""
        for name in candidates:
            subdir = self.root / name
            if not is_directory(subdir):
                continue
            stack = probe(subdir)
            if stack is None:
                continue
            LOGGER.debug(f"Monorepo match in {name}/: {stack.framework}")
            if stack.dockerfile_path:
                stack = replace(stack, dockerfile_path=f"{name}/{stack.dockerfile_path}")
            return stack
        return None


def detect_project(root: Union[str, Path]) -> Metadata:
    """Detect project metadata for ``root``.

    Convenience wrapper around :class:`ProjectDetector`.
    """
    return ProjectDetector(root).detect()


def timestamp() -> str:
    """Current UTC time in ISO-8601 format."""
    return datetime.now(timezone.utc).isoformat()
