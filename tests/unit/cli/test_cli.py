"""Tests for CLI functionality."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

import chrono_cli.cli as cli
from chrono_cli.cli.exit_codes import EXIT_DETECTION_ERROR, EXIT_INVALID_USAGE, EXIT_SUCCESS
from tests.conftest import requires_permission_bits


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path):
    home = tmp_path / "chrono-home"
    with patch.dict(os.environ, {"CHRONO_HOME": str(home)}):
        yield home


class TestBuildParser:
    """Tests for CLI argument parser."""

    def test_build_parser_includes_global_flags(self) -> None:
        """Test that global flags are registered on the top-level parser."""
        parser = cli.build_parser()
        assert isinstance(parser, argparse.ArgumentParser)

        for flag in ["--version", "--debug", "--verbose", "--quiet", "--config"]:
            assert any(a.option_strings and flag in a.option_strings for a in parser._actions)

    def test_detect_arguments(self) -> None:
        """Test parsing of the detect subcommand arguments."""
        args = cli.build_parser().parse_args(["detect", "some/dir", "--json", "--save"])

        assert args.command == "detect"
        assert args.path == "some/dir"
        assert args.format == "json"
        assert args.save is True
        assert args.force is False

    def test_json_and_yaml_are_exclusive(self) -> None:
        """Test that --json and --yaml cannot be combined."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["detect", "--json", "--yaml"])

    def test_detect_verbose_is_details_alias(self) -> None:
        """Test that --verbose after detect asks for details, not debug logging."""
        args = cli.build_parser().parse_args(["detect", "--verbose"])

        assert args.details is True
        assert args.verbose is False

    def test_global_verbose_before_command(self) -> None:
        """Test that --verbose before detect only raises log verbosity."""
        args = cli.build_parser().parse_args(["--verbose", "detect"])

        assert args.verbose is True
        assert args.details is False


class TestCliOverrides:
    """Tests for translating flags into config overrides."""

    def test_no_format_flag(self) -> None:
        """Test that no override is produced without a format flag."""
        args = cli.build_parser().parse_args(["detect"])
        assert cli.cli_overrides(args) == {}

    def test_format_flag(self) -> None:
        """Test that --yaml becomes an output.format override."""
        args = cli.build_parser().parse_args(["detect", "--yaml"])
        assert cli.cli_overrides(args) == {"output": {"format": "yaml"}}


class TestMain:
    """Tests for main CLI entry point."""

    def test_help_exits_successfully(self, capsys) -> None:
        """Test that --help exits with success."""
        exit_code = cli.main(["--help"])
        captured = capsys.readouterr()
        assert exit_code == EXIT_SUCCESS
        assert "usage:" in captured.out.lower()

    def test_no_command_prints_help(self, capsys) -> None:
        """Test that running without a command prints help."""
        exit_code = cli.main([])
        assert exit_code == EXIT_SUCCESS
        assert "detect" in capsys.readouterr().out

    def test_version(self, capsys) -> None:
        """Test that --version prints a version string."""
        exit_code = cli.main(["--version"])
        assert exit_code == EXIT_SUCCESS
        assert capsys.readouterr().out.strip()

    def test_bad_arguments(self) -> None:
        """Test that unknown flags are a usage error."""
        assert cli.main(["detect", "--no-such-flag"]) == EXIT_INVALID_USAGE

    def test_detect_missing_directory(self, tmp_path: Path) -> None:
        """Test that a missing project directory is a detection error."""
        exit_code = cli.main(["detect", str(tmp_path / "missing")])
        assert exit_code == EXIT_DETECTION_ERROR

    @requires_permission_bits
    def test_detect_directory_under_unsearchable_parent(self, tmp_path: Path) -> None:
        """Test that a project directory that cannot be statted is a detection error."""
        parent = tmp_path / "locked"
        project = parent / "project"
        project.mkdir(parents=True)
        parent.chmod(0)
        try:
            exit_code = cli.main(["detect", str(project), "--json"])
        finally:
            parent.chmod(0o755)

        assert exit_code == EXIT_DETECTION_ERROR

    def test_invalid_config_file(self, tmp_path: Path) -> None:
        """Test that a broken project config is a usage error."""
        (tmp_path / ".chrono.yml").write_text("output: [unclosed\n")
        assert cli.main(["detect", str(tmp_path)]) == EXIT_INVALID_USAGE

    def test_config_output_format_is_used(self, tmp_path: Path, capsys) -> None:
        """Test that output.format from the project config selects JSON."""
        (tmp_path / ".chrono.yml").write_text("output:\n  format: json\n")
        (tmp_path / "go.mod").write_text("module x\n")

        exit_code = cli.main(["detect", str(tmp_path)])

        assert exit_code == EXIT_SUCCESS
        assert '"framework": "gin"' in capsys.readouterr().out

    def test_format_flag_overrides_config(self, tmp_path: Path, capsys) -> None:
        """Test that --yaml wins over output.format from the config."""
        (tmp_path / ".chrono.yml").write_text("output:\n  format: json\n")
        (tmp_path / "go.mod").write_text("module x\n")

        exit_code = cli.main(["detect", str(tmp_path), "--yaml"])

        assert exit_code == EXIT_SUCCESS
        data = yaml.safe_load(capsys.readouterr().out)
        assert data["tech_stack"]["backend"]["framework"] == "gin"

    def test_detect_verbose_lists_env_vars(self, tmp_path: Path, capsys) -> None:
        """Test that detect --verbose prints environment variable names."""
        (tmp_path / "go.mod").write_text("module x\n")
        (tmp_path / ".env").write_text("PORT=8080\n")

        exit_code = cli.main(["detect", str(tmp_path), "--verbose"])

        assert exit_code == EXIT_SUCCESS
        assert "- PORT" in capsys.readouterr().out


class TestCLIRunner:
    """Tests for command dispatch."""

    def test_registers_detect(self) -> None:
        """Test that the detect command is registered."""
        runner = cli.CLIRunner()
        assert "detect" in runner.commands

    @patch("chrono_cli.cli.CLIRunner")
    def test_main_passes_argv(self, mock_runner_cls) -> None:
        """Test that main forwards argv to the runner and returns its code."""
        mock_runner_cls.return_value.run.return_value = 2

        assert cli.main(["detect"]) == 2
        mock_runner_cls.return_value.run.assert_called_once_with(["detect"])
