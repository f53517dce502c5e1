"""Frontend stack detection from package.json."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from chrono_cli.core.logging import get_logger
from chrono_cli.detection.dockerfile import find_dockerfile
from chrono_cli.detection.env import harvest_env_vars
from chrono_cli.detection.manifests import has_any_dependency, read_package_dependencies
from chrono_cli.detection.models import TechStack

LOGGER = get_logger(__name__)

# Frontend frameworks in priority order: (framework, dependency names, port).
# Meta-frameworks come before the UI libraries they build on.
FRONTEND_FRAMEWORKS: Tuple[Tuple[str, Tuple[str, ...], int], ...] = (
    ("nextjs", ("next",), 3000),
    ("nuxt", ("nuxt",), 3000),
    ("react", ("react", "react-dom"), 3000),
    ("vue", ("vue",), 5173),
    ("angular", ("@angular/core",), 4200),
    ("vite", ("vite",), 5173),
    ("svelte", ("svelte",), 5173),
)

# Any of these switches the language to typescript
TYPESCRIPT_MARKERS = ("typescript", "@types/react", "@types/node")

FRONTEND_DOCKERFILES = (
    "frontend/Dockerfile",
    "Dockerfile",
    "Dockerfile.frontend",
)

FRONTEND_ENV_FILES = (
    "frontend/.env",
    "frontend/.env.local",
    ".env",
    ".env.local",
)

FRONTEND_BUILD_COMMAND = "npm run build"
FRONTEND_START_COMMAND = "npm start"


def detect_frontend(directory: Path) -> Optional[TechStack]:
    """Detect a frontend stack in a directory.

    Args:
        directory: Directory containing the candidate package.json.

    Returns:
        Detected TechStack, or None if no recognised frontend framework.
    """
    deps = read_package_dependencies(directory)
    if deps is None:
        return None

    match = None
    for framework, packages, port in FRONTEND_FRAMEWORKS:
        if has_any_dependency(deps, packages):
            match = (framework, port)
            break

    if match is None:
        LOGGER.debug(f"package.json in {directory} declares no known frontend framework")
        return None

    framework, port = match
    language = "typescript" if has_any_dependency(deps, TYPESCRIPT_MARKERS) else "javascript"
    dockerfile, has_dockerfile = find_dockerfile(directory, FRONTEND_DOCKERFILES)

    LOGGER.debug(f"Detected frontend {framework} ({language}) in {directory}")
    return TechStack(
        framework=framework,
        language=language,
        port=port,
        has_dockerfile=has_dockerfile,
        dockerfile_path=dockerfile,
        build_command=FRONTEND_BUILD_COMMAND,
        start_command=FRONTEND_START_COMMAND,
        env_vars=harvest_env_vars(directory, FRONTEND_ENV_FILES),
    )
