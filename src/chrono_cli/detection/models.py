"""Data model for detected project metadata.

Every class here is a frozen dataclass: a detection result is built once per
scan and never updated in place. ``to_dict`` renders the field names used in
the persisted ``.chrono/metadata.yaml`` file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class ProjectType(str, Enum):
    """Project topology derived from the detected stacks."""

    FRONTEND = "frontend"
    BACKEND = "backend"
    FULLSTACK = "fullstack"
    UNKNOWN = "unknown"

    @classmethod
    def from_stacks(
        cls,
        frontend: Optional["TechStack"],
        backend: Optional["TechStack"],
    ) -> "ProjectType":
        """Derive the project type from which sides were detected."""
        if frontend is not None and backend is not None:
            return cls.FULLSTACK
        if frontend is not None:
            return cls.FRONTEND
        if backend is not None:
            return cls.BACKEND
        return cls.UNKNOWN


@dataclass(frozen=True)
class TechStack:
    """Detected technology stack for one side of a project."""

    framework: str
    """Framework identifier (nextjs, react, gin, fastapi, express, ...)."""

    language: str
    """Implementation language (typescript, javascript, go, python, nodejs)."""

    version: str = ""
    """Runtime/toolchain version hint, empty when unknown."""

    port: int = 0
    """Default port for the framework."""

    has_dockerfile: bool = False
    dockerfile_path: str = ""
    """Dockerfile path relative to the project root."""

    build_command: str = ""
    start_command: str = ""

    env_vars: Mapping[str, str] = field(default_factory=dict, hash=False)
    """Environment variable names mapped to a redaction placeholder (read-only)."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "env_vars", MappingProxyType(dict(self.env_vars)))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "framework": self.framework,
            "language": self.language,
        }
        if self.version:
            data["version"] = self.version
        if self.port:
            data["port"] = self.port
        data["has_dockerfile"] = self.has_dockerfile
        if self.dockerfile_path:
            data["dockerfile_path"] = self.dockerfile_path
        if self.build_command:
            data["build_command"] = self.build_command
        if self.start_command:
            data["start_command"] = self.start_command
        if self.env_vars:
            data["env_vars"] = dict(self.env_vars)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TechStack":
        return cls(
            framework=str(data.get("framework", "")),
            language=str(data.get("language", "")),
            version=str(data.get("version", "") or ""),
            port=int(data.get("port", 0) or 0),
            has_dockerfile=bool(data.get("has_dockerfile", False)),
            dockerfile_path=str(data.get("dockerfile_path", "") or ""),
            build_command=str(data.get("build_command", "") or ""),
            start_command=str(data.get("start_command", "") or ""),
            env_vars=dict(data.get("env_vars") or {}),
        )


@dataclass(frozen=True)
class Middleware:
    """Database and cache dependencies inferred from manifests."""

    mongodb: bool = False
    redis: bool = False
    postgres: bool = False
    mysql: bool = False

    @property
    def detected(self) -> list[str]:
        """Human-readable names of the detected middleware."""
        names = []
        if self.mongodb:
            names.append("MongoDB")
        if self.redis:
            names.append("Redis")
        if self.postgres:
            names.append("PostgreSQL")
        if self.mysql:
            names.append("MySQL")
        return names

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mongodb": self.mongodb,
            "redis": self.redis,
            "postgres": self.postgres,
            "mysql": self.mysql,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Middleware":
        return cls(
            mongodb=bool(data.get("mongodb", False)),
            redis=bool(data.get("redis", False)),
            postgres=bool(data.get("postgres", False)),
            mysql=bool(data.get("mysql", False)),
        )


@dataclass(frozen=True)
class ProjectMetadata:
    """Basic project identity."""

    name: str
    type: ProjectType = ProjectType.UNKNOWN
    detected_at: str = ""
    """ISO-8601 UTC timestamp of the scan."""


@dataclass(frozen=True)
class TechStackMap:
    """Frontend and/or backend stacks; absent sides are None."""

    frontend: Optional[TechStack] = None
    backend: Optional[TechStack] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.frontend is not None:
            data["frontend"] = self.frontend.to_dict()
        if self.backend is not None:
            data["backend"] = self.backend.to_dict()
        return data


@dataclass(frozen=True)
class PlatformInfo:
    """Platform bookkeeping stamped when metadata is persisted."""

    created_by: str = ""
    template: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.created_by:
            data["created_by"] = self.created_by
        if self.template:
            data["template"] = self.template
        return data


@dataclass(frozen=True)
class Metadata:
    """Complete result of one project detection."""

    project: ProjectMetadata
    tech_stack: TechStackMap = field(default_factory=TechStackMap)
    middleware: Middleware = field(default_factory=Middleware)
    platform: PlatformInfo = field(default_factory=PlatformInfo)

    @property
    def frontend(self) -> Optional[TechStack]:
        return self.tech_stack.frontend

    @property
    def backend(self) -> Optional[TechStack]:
        return self.tech_stack.backend

    def to_dict(self) -> Dict[str, Any]:
        """Render as a plain dict suitable for YAML/JSON serialization."""
        return {
            "project": {
                "name": self.project.name,
                "type": self.project.type.value,
                "detected_at": self.project.detected_at,
            },
            "tech_stack": self.tech_stack.to_dict(),
            "middleware": self.middleware.to_dict(),
            "platform": self.platform.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Metadata":
        """Rebuild metadata from a persisted dict.

        Unknown project types fall back to ``unknown``.
        """
        project_data = data.get("project") or {}
        try:
            project_type = ProjectType(project_data.get("type", "unknown"))
        except ValueError:
            project_type = ProjectType.UNKNOWN

        stacks = data.get("tech_stack") or {}
        frontend = stacks.get("frontend")
        backend = stacks.get("backend")
        platform = data.get("platform") or {}

        return cls(
            project=ProjectMetadata(
                name=str(project_data.get("name", "")),
                type=project_type,
                detected_at=str(project_data.get("detected_at", "") or ""),
            ),
            tech_stack=TechStackMap(
                frontend=TechStack.from_dict(frontend) if frontend else None,
                backend=TechStack.from_dict(backend) if backend else None,
            ),
            middleware=Middleware.from_dict(data.get("middleware") or {}),
            platform=PlatformInfo(
                created_by=str(platform.get("created_by", "") or ""),
                template=str(platform.get("template", "") or ""),
            ),
        )
