"""Tests for backend detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from chrono_cli.detection.backend import detect_backend
from tests.conftest import VALID_DOCKERFILE, write_package_json

GO_MOD = "module example.com/api\n\ngo 1.22\n\nrequire github.com/gin-gonic/gin v1.9.1\n"


class TestGoBackend:
    """Tests for the go.mod probe."""

    def test_go_backend(self, tmp_path: Path) -> None:
        """Test the Go backend stack from go.mod."""
        (tmp_path / "go.mod").write_text(GO_MOD)

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.framework == "gin"
        assert stack.language == "go"
        assert stack.version == "1.22"
        assert stack.port == 8080
        assert stack.build_command == "go build -o bin/server ./cmd/server"
        assert stack.start_command == "./bin/server"

    def test_go_dockerfile_candidates(self, tmp_path: Path) -> None:
        """Test Go Dockerfile candidate order."""
        (tmp_path / "go.mod").write_text(GO_MOD)
        (tmp_path / "Dockerfile.backend").write_text("FROM golang:1.22\nEXPOSE 8080\n")

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.has_dockerfile is True
        assert stack.dockerfile_path == "Dockerfile.backend"

    def test_go_wins_over_package_json(self, tmp_path: Path) -> None:
        """Test that go.mod is checked before package.json."""
        (tmp_path / "go.mod").write_text(GO_MOD)
        write_package_json(tmp_path, {"express": "^4.18.0"})

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.language == "go"


class TestPythonBackend:
    """Tests for the Python manifest probe."""

    @pytest.mark.parametrize("manifest", ["requirements.txt", "pyproject.toml"])
    def test_python_backend(self, tmp_path: Path, manifest: str) -> None:
        """Test the Python backend stack from either manifest."""
        (tmp_path / manifest).write_text("fastapi\n")

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.framework == "fastapi"
        assert stack.language == "python"
        assert stack.port == 8000
        assert stack.version == ""
        assert stack.start_command == "uvicorn main:app --host 0.0.0.0 --port 8000"

    def test_python_ignores_dockerfile_backend_variant(self, tmp_path: Path) -> None:
        """Test that Dockerfile.backend is not a Python candidate."""
        (tmp_path / "requirements.txt").write_text("fastapi\n")
        (tmp_path / "Dockerfile.backend").write_text(VALID_DOCKERFILE)

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.has_dockerfile is False

    def test_python_env_vars(self, tmp_path: Path) -> None:
        """Test env harvesting for a Python backend."""
        (tmp_path / "requirements.txt").write_text("fastapi\n")
        (tmp_path / ".env").write_text("DATABASE_URL=postgres://db\nDB_PASSWORD=x\n")

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.env_vars == {"DATABASE_URL": "[VALUE]"}


class TestNodeBackend:
    """Tests for the package.json server framework probe."""

    @pytest.mark.parametrize("framework", ["express", "fastify", "koa"])
    def test_node_framework(self, tmp_path: Path, framework: str) -> None:
        """Test each Node server framework."""
        write_package_json(tmp_path, {framework: "^1.0.0"})

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.framework == framework
        assert stack.language == "nodejs"
        assert stack.port == 8080

    def test_fastify_has_priority_over_express(self, tmp_path: Path) -> None:
        """Test that fastify wins over express."""
        write_package_json(tmp_path, {"express": "^4.18.0", "fastify": "^4.0.0"})

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.framework == "fastify"

    def test_koa_has_priority_over_express(self, tmp_path: Path) -> None:
        """Test that koa wins over express."""
        write_package_json(tmp_path, {"express": "^4.18.0", "koa": "^2.14.0"})

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.framework == "koa"

    def test_api_dockerfile_candidate(self, tmp_path: Path) -> None:
        """Test the api/Dockerfile candidate for Node backends."""
        write_package_json(tmp_path, {"express": "^4.18.0"})
        (tmp_path / "api").mkdir()
        (tmp_path / "api" / "Dockerfile").write_text(VALID_DOCKERFILE)

        stack = detect_backend(tmp_path)

        assert stack is not None
        assert stack.dockerfile_path == "api/Dockerfile"

    def test_package_json_without_server_framework(self, tmp_path: Path) -> None:
        """Test that a UI-only package.json has no backend."""
        write_package_json(tmp_path, {"react": "^18.2.0"})
        assert detect_backend(tmp_path) is None


def test_empty_directory(tmp_path: Path) -> None:
    """Test that an empty directory has no backend."""
    assert detect_backend(tmp_path) is None
