"""Backend stack detection.

Three language probes run in fixed order and the first manifest found wins:
go.mod, then requirements.txt / pyproject.toml, then a package.json that
declares a Node server framework.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

from chrono_cli.core.logging import get_logger
from chrono_cli.detection.dockerfile import find_dockerfile
from chrono_cli.detection.env import harvest_env_vars
from chrono_cli.detection.manifests import (
    GO_MOD,
    PYPROJECT_TOML,
    REQUIREMENTS_TXT,
    has_dependency,
    path_exists,
    read_package_dependencies,
)
from chrono_cli.detection.models import TechStack

LOGGER = get_logger(__name__)

BACKEND_ENV_FILES = (
    "backend/.env",
    ".env",
)

GO_DOCKERFILES = ("backend/Dockerfile", "Dockerfile", "Dockerfile.backend")
PYTHON_DOCKERFILES = ("backend/Dockerfile", "Dockerfile")
NODE_DOCKERFILES = ("backend/Dockerfile", "api/Dockerfile", "Dockerfile")

PYTHON_MANIFESTS = (REQUIREMENTS_TXT, PYPROJECT_TOML)

# Node server frameworks in priority order
NODE_FRAMEWORKS: Tuple[str, ...] = ("fastify", "koa", "express")

GO_VERSION = "1.22"


def detect_backend(directory: Path) -> Optional[TechStack]:
    """Detect a backend stack in a directory.

    Args:
        directory: Directory to probe.

    Returns:
        Detected TechStack, or None if no backend manifest matched.
    """
    if path_exists(directory / GO_MOD):
        return detect_go_backend(directory)

    if any(path_exists(directory / manifest) for manifest in PYTHON_MANIFESTS):
        return detect_python_backend(directory)

    deps = read_package_dependencies(directory)
    if deps is not None:
        for framework in NODE_FRAMEWORKS:
            if has_dependency(deps, framework):
                return detect_node_backend(directory, deps)

    LOGGER.debug(f"No backend manifest recognised in {directory}")
    return None


def detect_go_backend(directory: Path) -> TechStack:
    """Build the Go backend stack."""
    dockerfile, has_dockerfile = find_dockerfile(directory, GO_DOCKERFILES)
    LOGGER.debug(f"Detected Go backend in {directory}")
    return TechStack(
        framework="gin",
        language="go",
        version=GO_VERSION,
        port=8080,
        has_dockerfile=has_dockerfile,
        dockerfile_path=dockerfile,
        build_command="go build -o bin/server ./cmd/server",
        start_command="./bin/server",
        env_vars=harvest_env_vars(directory, BACKEND_ENV_FILES),
    )


def detect_python_backend(directory: Path) -> TechStack:
    """Build the Python backend stack."""
    dockerfile, has_dockerfile = find_dockerfile(directory, PYTHON_DOCKERFILES)
    LOGGER.debug(f"Detected Python backend in {directory}")
    return TechStack(
        framework="fastapi",
        language="python",
        port=8000,
        has_dockerfile=has_dockerfile,
        dockerfile_path=dockerfile,
        build_command="pip install -r requirements.txt",
        start_command="uvicorn main:app --host 0.0.0.0 --port 8000",
        env_vars=harvest_env_vars(directory, BACKEND_ENV_FILES),
    )


def detect_node_backend(directory: Path, deps: Dict[str, str]) -> TechStack:
    """Build the Node.js backend stack for the highest-priority framework."""
    framework = next(
        (name for name in NODE_FRAMEWORKS if has_dependency(deps, name)),
        "express",
    )
    dockerfile, has_dockerfile = find_dockerfile(directory, NODE_DOCKERFILES)
    LOGGER.debug(f"Detected Node.js {framework} backend in {directory}")
    return TechStack(
        framework=framework,
        language="nodejs",
        port=8080,
        has_dockerfile=has_dockerfile,
        dockerfile_path=dockerfile,
        build_command="npm run build",
        start_command="npm start",
        env_vars=harvest_env_vars(directory, BACKEND_ENV_FILES),
    )
