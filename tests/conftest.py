"""Shared fixtures for chrono tests."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest


def write_package_json(
    directory: Path,
    dependencies: Optional[Dict[str, str]] = None,
    dev_dependencies: Optional[Dict[str, str]] = None,
) -> Path:
    """Write a conventionally formatted package.json."""
    data: Dict[str, object] = {"name": directory.name, "version": "1.0.0"}
    if dependencies:
        data["dependencies"] = dependencies
    if dev_dependencies:
        data["devDependencies"] = dev_dependencies
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(data, indent=2))
    return path


VALID_DOCKERFILE = "FROM node:20-alpine\nWORKDIR /app\nEXPOSE 3000\nCMD [\"npm\", \"start\"]\n"

# chmod(0) is not enforced for root or on Windows
requires_permission_bits = pytest.mark.skipif(
    sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Factory writing a {relative_path: content} mapping under tmp_path."""

    def _make(files: Dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return tmp_path

    return _make
