"""Manifest reading helpers.

The package.json dependency extraction here is deliberately NOT a JSON
parser. It is a lenient, line-oriented scanner over a normalised text model:

1. Compact JSON is broken into lines after ``{`` and ``,`` and before ``}``
   (outside string literals), so ``{"dependencies": {"react": "^18"}}``
   and the conventional pretty-printed layout look the same.
2. A ``"dependencies":`` or ``"devDependencies":`` line opens a section.
3. Inside a section, every ``name: value`` line is recorded.
4. A line starting with ``}`` or ``]`` closes the section.

Malformed files simply yield fewer (or no) dependencies; nothing raises.
Framework priority matching depends on this behaviour, so keep it lenient.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from chrono_cli.core.logging import get_logger

LOGGER = get_logger(__name__)

PACKAGE_JSON = "package.json"
GO_MOD = "go.mod"
REQUIREMENTS_TXT = "requirements.txt"
PYPROJECT_TOML = "pyproject.toml"
PRISMA_SCHEMA = "prisma/schema.prisma"

# Section headers that open a dependency block (both quote styles accepted)
DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")

_QUOTES = "\"'"


def read_text(path: Path) -> Optional[str]:
    """Read a candidate file, treating any failure as "not present".

    Args:
        path: File to read.

    Returns:
        File content, or None if missing or unreadable.
    """
    try:
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        LOGGER.warning(f"Could not read {path}: {e}")
        return None


def path_exists(path: Path) -> bool:
    """Check for a path, treating a failed stat as absence."""
    try:
        return path.exists()
    except OSError as e:
        LOGGER.warning(f"Could not stat {path}: {e}")
        return False


def is_directory(path: Path) -> bool:
    """Check for a directory, treating a failed stat as absence."""
    try:
        return path.is_dir()
    except OSError as e:
        LOGGER.warning(f"Could not stat {path}: {e}")
        return False


def _normalise_layout(content: str) -> List[str]:
    """Split manifest text into one logical entry per line."""
    lines: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    escaped = False

    for char in content:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in _QUOTES:
            quote = char
            current.append(char)
        elif char == "\n":
            lines.append("".join(current))
            current = []
        elif char in "{,":
            current.append(char)
            lines.append("".join(current))
            current = []
        elif char == "}":
            lines.append("".join(current))
            current = [char]
        else:
            current.append(char)

    lines.append("".join(current))
    return [line.strip() for line in lines]


def _opens_section(line: str) -> bool:
    for section in DEPENDENCY_SECTIONS:
        for quote in _QUOTES:
            if line.startswith(f"{quote}{section}{quote}:"):
                return True
    return False


def parse_package_dependencies(content: str) -> Dict[str, str]:
    """Extract dependency names and version strings from package.json text.

    Args:
        content: Raw package.json content.

    Returns:
        Mapping of dependency name to version string.
    """
    deps: Dict[str, str] = {}
    in_deps = False

    for line in _normalise_layout(content):
        if _opens_section(line):
            in_deps = True
            continue

        if in_deps and (line.startswith("}") or line.startswith("]")):
            in_deps = False

        if not in_deps:
            continue

        parts = line.split(":", 1)
        if len(parts) != 2:
            continue
        name = parts[0].strip().strip(_QUOTES)
        if name:
            deps[name] = parts[1].strip().strip("\"',").strip()

    return deps


def read_package_dependencies(directory: Path) -> Optional[Dict[str, str]]:
    """Read package.json dependencies from a directory.

    Returns:
        Dependency mapping, or None when there is no package.json.
    """
    content = read_text(directory / PACKAGE_JSON)
    if content is None:
        return None
    return parse_package_dependencies(content)


def has_dependency(deps: Dict[str, str], name: str) -> bool:
    """Check whether a dependency is declared.

    A dependency is present on an exact key match, or when any declared key
    starts with ``name`` (scoped and sub-package variants such as
    ``react-dom`` for ``react``).
    """
    if name in deps:
        return True
    return any(dep.startswith(name) for dep in deps)


def has_any_dependency(deps: Dict[str, str], names: Iterable[str]) -> bool:
    """Check whether any of ``names`` is declared."""
    return any(has_dependency(deps, name) for name in names)
