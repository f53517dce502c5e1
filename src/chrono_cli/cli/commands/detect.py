"""Detect command implementation.

Analyzes a project directory and reports:
- Project type (frontend, backend, fullstack)
- Frameworks, languages and ports
- Dockerfile status
- Middleware dependencies (MongoDB, Redis, ...)
- Environment variable names
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Optional

import questionary
from questionary import Style

from chrono_cli.cli.commands import Command
from chrono_cli.cli.exit_codes import (
    EXIT_DETECTION_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_OUTPUT_ERROR,
    EXIT_SUCCESS,
)
from chrono_cli.config.models import ChronoConfig
from chrono_cli.core.logging import get_logger
from chrono_cli.detection import DetectionError, Metadata, ProjectDetector, ProjectType, TechStack
from chrono_cli.generation import MetadataWriter, render_json, render_yaml

LOGGER = get_logger(__name__)

STYLE = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
    ("instruction", "fg:gray"),
])

SEPARATOR = "━" * 34

TYPE_LABELS = {
    ProjectType.FRONTEND: "[frontend]",
    ProjectType.BACKEND: "[backend]",
    ProjectType.FULLSTACK: "[fullstack]",
    ProjectType.UNKNOWN: "[?]",
}


class DetectCommand(Command):
    """Analyze a project and detect its tech stack."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "detect"

    def execute(self, args: Namespace, config: Optional[ChronoConfig] = None) -> int:
        """Execute the detect command.

        Args:
            args: Parsed command-line arguments.
            config: Chrono configuration (defaults when None).

        Returns:
            Exit code.
        """
        config = config or ChronoConfig()
        project_root = Path(getattr(args, "path", ".")).resolve()

        try:
            metadata = ProjectDetector(project_root).detect()
        except DetectionError as e:
            LOGGER.error(f"Detection failed: {e}")
            return EXIT_DETECTION_ERROR

        output_format = config.output.format
        if output_format == "json":
            print(render_json(metadata))
        elif output_format == "yaml":
            print(render_yaml(metadata), end="")
        else:
            print(f"Scanning: {project_root}\n")
            display_results(metadata, details=getattr(args, "details", False))

        if getattr(args, "save", False):
            return self._save(project_root, metadata, args, config)

        return EXIT_SUCCESS

    def _save(
        self,
        project_root: Path,
        metadata: Metadata,
        args: Namespace,
        config: ChronoConfig,
    ) -> int:
        writer = MetadataWriter(project_root, config.metadata.path)

        if writer.exists() and not getattr(args, "force", False):
            if getattr(args, "non_interactive", False):
                LOGGER.error(f"{writer.path} already exists. Use --force to overwrite.")
                return EXIT_INVALID_USAGE

            overwrite = questionary.confirm(
                f"{config.metadata.path} already exists. Overwrite?",
                default=False,
                style=STYLE,
            ).ask()

            if not overwrite:
                print("Aborted.")
                return EXIT_SUCCESS

        try:
            path = writer.write(
                metadata,
                created_by=config.platform.created_by,
                template=config.platform.template or None,
            )
        except OSError as e:
            LOGGER.error(f"Failed to save metadata: {e}")
            return EXIT_OUTPUT_ERROR

        print(f"\nSaved to {_relative(path, project_root)}")
        return EXIT_SUCCESS


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _print_section(title: str) -> None:
    print(SEPARATOR)
    print(title)
    print(SEPARATOR)


def _print_env_vars(stack: TechStack) -> None:
    if not stack.env_vars:
        return
    print("  Env Vars:")
    for key in sorted(stack.env_vars):
        print(f"    - {key}")


def display_results(metadata: Metadata, details: bool = False) -> None:
    """Print the human-readable detection report."""
    project = metadata.project
    print(f"{TYPE_LABELS[project.type]} Project Type: {project.type.value}")
    print(f"   Name: {project.name}")
    print()

    frontend = metadata.frontend
    if frontend is not None:
        _print_section("Frontend")
        print(f"  Framework: {frontend.framework} ({frontend.language})")
        print(f"  Port:      {frontend.port}")
        print(f"  Build:     {frontend.build_command}")
        # SPAs are served as static files, so no Dockerfile is required
        print("  Serving:   Static files via nginx (no Dockerfile needed)")
        if details:
            _print_env_vars(frontend)
        print()

    backend = metadata.backend
    if backend is not None:
        _print_section("Backend")
        print(f"  Framework: {backend.framework} ({backend.language})")
        if backend.version:
            print(f"  Version:   {backend.version}")
        print(f"  Port:      {backend.port}")
        if backend.has_dockerfile:
            print(f"  Docker:    found {backend.dockerfile_path}")
        else:
            print("  Docker:    missing (will be generated during deployment)")
        if details:
            print(f"  Build:     {backend.build_command}")
            print(f"  Start:     {backend.start_command}")
            _print_env_vars(backend)
        print()

    middleware = metadata.middleware.detected
    if middleware:
        _print_section("Middleware Detected")
        for name in middleware:
            print(f"  - {name}")
        print()

    _print_section("Status")
    ready = backend is None or backend.has_dockerfile
    if ready:
        print("  Ready to deploy")
        if backend is not None:
            print("    Backend Dockerfile found")
        if frontend is not None:
            print("    Frontend will be built as static files")
    else:
        print("  Backend Dockerfile missing - will be generated during deployment")

    if middleware:
        print("  Middleware detected - will be provisioned")

    print()
    print("Next Steps:")
    print("  chrono detect --save    # Save metadata for deployment")

