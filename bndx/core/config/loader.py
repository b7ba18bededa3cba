"""
Configuration loader — reads bndx.yml into an ExplorerConfig.

The file is optional. When present it is validated against the
Pydantic schema; relative workspace paths are taken relative to the
directory holding the file, not the current directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from bndx.core.errors import BndxError
from bndx.core.models.config import ExplorerConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "bndx.yml"


class ConfigError(BndxError):
    """Raised when the explorer configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for bndx.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to bndx.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, search: bool = True) -> ExplorerConfig:
    """Load and validate the explorer configuration.

    Args:
        path: Explicit path to bndx.yml. Must exist when given.
        search: When no path is given, search upward from the cwd.

    Returns:
        Validated ExplorerConfig, defaults if no file was found.

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    if path is None:
        path = find_config_file() if search else None
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return ExplorerConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Accept both a flat file and one wrapped under a "bndx" key
    data = data.get("bndx", data)

    try:
        config = ExplorerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    return config.anchored(path.parent.resolve())
