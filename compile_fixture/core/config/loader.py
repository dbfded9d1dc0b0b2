"""
Configuration loader — reads fixture.yml into a FixtureConfig.

This is the primary entry point for loading fixture configuration.
It reads YAML, validates against the Pydantic schema, and roots every
relative path at the directory holding the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from compile_fixture.core.models.fixture import FixtureConfig

logger = logging.getLogger(__name__)

# Default config filename
FIXTURE_CONFIG_FILE = "fixture.yml"


class ConfigError(Exception):
    """Raised when fixture configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for fixture.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to fixture.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / FIXTURE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, allow_default: bool = False) -> FixtureConfig:
    """Load and validate fixture configuration.

    Args:
        path: Explicit path to fixture.yml. If None, searches upward.
        allow_default: Return defaults rooted at cwd when no file exists.

    Returns:
        Validated FixtureConfig.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        if allow_default:
            logger.debug("No %s found, using defaults", FIXTURE_CONFIG_FILE)
            return FixtureConfig(root=Path.cwd().resolve())
        raise ConfigError(f"No {FIXTURE_CONFIG_FILE} found.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading fixture config from %s", path)

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

    # The YAML may wrap everything under a "fixture" key or be flat
    fixture_data = data.get("fixture", data)
    if not isinstance(fixture_data, dict):
        raise ConfigError(f"Expected a mapping under 'fixture' in {path}")
    fixture_data = dict(fixture_data)
    fixture_data["root"] = path.parent.resolve()

    try:
        config = FixtureConfig.model_validate(fixture_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid fixture configuration: {e}") from e

    logger.info("Loaded fixture config rooted at %s", config.root)
    return config
