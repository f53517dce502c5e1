"""Command-line interface for chrono."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from chrono_cli.cli.commands import Command, DetectCommand
from chrono_cli.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from chrono_cli.config import ConfigError, load_config
from chrono_cli.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    try:
        return version("chrono-cli")
    except PackageNotFoundError:
        # Fallback for source checkouts without installed metadata.
        from chrono_cli import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chrono",
        description="chrono - detect project stacks and prepare deployment metadata.",
    )

    # Global options
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show chrono version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: .chrono.yml in project root).",
    )

    subparsers = parser.add_subparsers(dest="command")

    detect = subparsers.add_parser(
        "detect",
        help="Analyze project and detect tech stack.",
        description=(
            "Detect project type, tech stack, Dockerfile status, middleware "
            "dependencies and environment variables."
        ),
    )
    detect.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory (default: current directory).",
    )
    output = detect.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_const",
        const="json",
        dest="format",
        help="Output as JSON.",
    )
    output.add_argument(
        "--yaml",
        action="store_const",
        const="yaml",
        dest="format",
        help="Output as YAML.",
    )
    detect.add_argument(
        "--save",
        action="store_true",
        help="Save detection results to .chrono/metadata.yaml.",
    )
    detect.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing metadata file without asking.",
    )
    detect.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never prompt; fail instead of asking to overwrite.",
    )
    detect.add_argument(
        "--details",
        "--verbose",
        dest="details",
        action="store_true",
        help="Show build/start commands and environment variable names.",
    )

    return parser


def cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate command flags into config overrides."""
    overrides: Dict[str, Any] = {}
    output_format = getattr(args, "format", None)
    if output_format:
        overrides["output"] = {"format": output_format}
    return overrides


class CLIRunner:
    """Parses arguments, loads configuration and dispatches commands."""

    def __init__(self) -> None:
        self.parser = build_parser()
        commands: List[Command] = [DetectCommand()]
        self.commands: Dict[str, Command] = {cmd.name: cmd for cmd in commands}

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Argument list (defaults to sys.argv).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None

        try:
            args = self.parser.parse_args(argv_list)
        except SystemExit as e:
            # argparse exits on --help (0) and on usage errors (2)
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        # Configure logging as early as possible.
        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

        if args.version:
            print(get_version())
            return EXIT_SUCCESS

        command = self.commands.get(args.command or "")
        if command is None:
            self.parser.print_help()
            return EXIT_SUCCESS

        project_root = Path(getattr(args, "path", ".")).resolve()
        try:
            config = load_config(
                project_root=project_root,
                cli_config_path=args.config,
                cli_overrides=cli_overrides(args),
            )
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        return command.execute(args, config)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script.
    """
    return CLIRunner().run(argv)
