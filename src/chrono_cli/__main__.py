"""Entry point for ``python -m chrono_cli``."""

from chrono_cli.cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via console script
    raise SystemExit(main())
