"""Middleware (database / cache) detection from root-level manifests.

Matching is by name only, never version-aware: parsed dependency keys for
package.json, raw substring search for go.mod and the Python manifests.

Prisma can target several engines, so its dependencies are resolved through
``prisma/schema.prisma``: a relational provider counts toward that engine,
anything else (including a missing schema) is read as MongoDB.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Set

from chrono_cli.core.logging import get_logger
from chrono_cli.detection.manifests import (
    GO_MOD,
    PRISMA_SCHEMA,
    PYPROJECT_TOML,
    REQUIREMENTS_TXT,
    has_any_dependency,
    read_package_dependencies,
    read_text,
)
from chrono_cli.detection.models import Middleware

LOGGER = get_logger(__name__)

# package.json dependency names per family
NODE_MONGODB = ("mongodb", "mongoose")
NODE_REDIS = ("redis", "ioredis", "@redis/client")
NODE_POSTGRES = ("pg", "postgres")
NODE_MYSQL = ("mysql", "mysql2")
NODE_ORM = ("@prisma/client", "prisma")

# go.mod module paths per family
GO_MONGODB = ("go.mongodb.org/mongo-driver",)
GO_REDIS = ("github.com/redis/go-redis", "github.com/go-redis/redis")
GO_POSTGRES = ("github.com/lib/pq", "github.com/jackc/pgx")
GO_MYSQL = ("github.com/go-sql-driver/mysql",)

# Python distribution names per family
PYTHON_MONGODB = ("pymongo", "motor")
PYTHON_REDIS = ("redis", "aioredis")
PYTHON_POSTGRES = ("psycopg2", "asyncpg")
PYTHON_MYSQL = ("pymysql", "mysqlclient", "aiomysql")

POSTGRES_PROVIDERS = {"postgresql", "cockroachdb"}
MYSQL_PROVIDERS = {"mysql"}
RELATIONAL_PROVIDERS = POSTGRES_PROVIDERS | MYSQL_PROVIDERS | {"sqlite", "sqlserver"}

PROVIDER_PATTERN = re.compile(r'provider\s*=\s*"([^"]+)"')


def read_schema_providers(directory: Path) -> Set[str]:
    """Return the provider values declared in the Prisma schema.

    The generator block's provider (``prisma-client-js``) is included too;
    callers only test for known database providers.
    """
    content = read_text(directory / PRISMA_SCHEMA)
    if content is None:
        return set()
    return set(PROVIDER_PATTERN.findall(content))


def _contains_any(content: str, needles: tuple[str, ...]) -> bool:
    return any(needle in content for needle in needles)


def _scan_package_json(directory: Path, deps: Dict[str, str], flags: Dict[str, bool]) -> None:
    if has_any_dependency(deps, NODE_REDIS):
        flags["redis"] = True
    if has_any_dependency(deps, NODE_POSTGRES):
        flags["postgres"] = True
    if has_any_dependency(deps, NODE_MYSQL):
        flags["mysql"] = True
    if has_any_dependency(deps, NODE_MONGODB):
        flags["mongodb"] = True

    if has_any_dependency(deps, NODE_ORM):
        providers = read_schema_providers(directory)
        if providers & POSTGRES_PROVIDERS:
            flags["postgres"] = True
        if providers & MYSQL_PROVIDERS:
            flags["mysql"] = True
        if not providers & RELATIONAL_PROVIDERS:
            LOGGER.debug("Prisma dependency without relational provider, assuming MongoDB")
            flags["mongodb"] = True


def _scan_raw_manifest(
    content: str,
    flags: Dict[str, bool],
    mongodb: tuple[str, ...],
    redis: tuple[str, ...],
    postgres: tuple[str, ...],
    mysql: tuple[str, ...],
) -> None:
    if _contains_any(content, mongodb):
        flags["mongodb"] = True
    if _contains_any(content, redis):
        flags["redis"] = True
    if _contains_any(content, postgres):
        flags["postgres"] = True
    if _contains_any(content, mysql):
        flags["mysql"] = True


def detect_middleware(directory: Path) -> Middleware:
    """Detect middleware dependencies declared in a directory's manifests.

    Args:
        directory: Project root. Monorepo subdirectories are not scanned.

    Returns:
        Middleware flags.
    """
    flags = {"mongodb": False, "redis": False, "postgres": False, "mysql": False}

    deps = read_package_dependencies(directory)
    if deps is not None:
        _scan_package_json(directory, deps, flags)

    go_mod = read_text(directory / GO_MOD)
    if go_mod is not None:
        _scan_raw_manifest(go_mod, flags, GO_MONGODB, GO_REDIS, GO_POSTGRES, GO_MYSQL)

    for manifest in (REQUIREMENTS_TXT, PYPROJECT_TOML):
        content = read_text(directory / manifest)
        if content is not None:
            _scan_raw_manifest(
                content, flags, PYTHON_MONGODB, PYTHON_REDIS, PYTHON_POSTGRES, PYTHON_MYSQL
            )

    middleware = Middleware(**flags)
    if middleware.detected:
        LOGGER.debug(f"Detected middleware: {', '.join(middleware.detected)}")
    return middleware
