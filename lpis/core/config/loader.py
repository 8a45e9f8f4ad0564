"""
Configuration loader — reads lpis.yml into domain models.

It reads YAML, validates against Pydantic schemas, and returns a typed
Configuration. A missing file is not an error here: callers check
``config_exists`` first and decide what "nothing to do" means.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from lpis.core.models.catalog import Configuration

logger = logging.getLogger(__name__)

# Where distributions ship the checklist
DEFAULT_CONFIG_PATH = Path("/usr/share/lpis/lpis.yml")


class ConfigError(Exception):
    """Raised when lpis.yml is unreadable or invalid."""


def config_exists(path: Path) -> bool:
    """True if *path* points at a regular file."""
    return path.is_file()


def parse_config(raw: str, source: str = "<string>") -> Configuration:
    """Parse YAML text into a Configuration.

    Raises:
        ConfigError: If the YAML is malformed or doesn't match the schema.
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e

    # An empty document is an empty checklist
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {source}, got {type(data).__name__}")

    try:
        config = Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e

    # installed is derived by the probe, never declared
    for item in config.flatpaks:
        item.installed = False

    return config


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> Configuration:
    """Load and validate lpis.yml.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated Configuration model.

    Raises:
        ConfigError: If the file can't be read or is invalid.
    """
    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    config = parse_config(raw, source=str(path))
    logger.info(
        "Loaded %d flatpaks and %d scripts from %s",
        len(config.flatpaks), len(config.scripts), path,
    )
    return config
