"""Path management for the chrono home directory.

Handles the ~/.chrono directory structure used for global configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".chrono"

# Environment variable to override home directory
CHRONO_HOME_ENV = "CHRONO_HOME"


def get_chrono_home() -> Path:
    """Get the chrono home directory path.

    Resolution order:
    1. CHRONO_HOME environment variable (if set)
    2. ~/.chrono (default)

    Returns:
        Path to the chrono home directory.
    """
    env_home = os.environ.get(CHRONO_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass
class ChronoPaths:
    """Manages paths within the chrono home directory.

    Directory structure:
        ~/.chrono/
            config/     - Global configuration (config.yml)
    """

    home: Path

    _CONFIG_DIR: ClassVar[str] = "config"
    _GLOBAL_CONFIG_NAME: ClassVar[str] = "config.yml"

    @classmethod
    def default(cls) -> "ChronoPaths":
        """Create paths from the default chrono home."""
        return cls(get_chrono_home())

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files."""
        return self.home / self._CONFIG_DIR

    @property
    def global_config(self) -> Path:
        """Path of the global configuration file."""
        return self.config_dir / self._GLOBAL_CONFIG_NAME
