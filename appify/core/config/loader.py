"""
Configuration loader — reads appify.yml into an AppConfig.

Reads YAML, validates against the pydantic model, and returns a typed,
immutable configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from appify.core.models.config import AppConfig

logger = logging.getLogger(__name__)

# Default config filename
APP_CONFIG_FILE = "appify.yml"


class ConfigError(Exception):
    """Raised when the app configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for appify.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to appify.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / APP_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def parse_config(data: object, source: str = "<data>") -> AppConfig:
    """Validate an already-parsed mapping into an AppConfig.

    The mapping may be flat or wrap everything under an ``app`` key.

    Raises:
        ConfigError: If the data is not a mapping or fails validation.
    """
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {source}, got {type(data).__name__}")

    app_data = data["app"] if isinstance(data.get("app"), dict) else data

    try:
        return AppConfig.model_validate(app_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid app configuration: {e}") from e


def load_config(path: Path | None = None) -> AppConfig:
    """Load and validate the app configuration.

    Args:
        path: Explicit path to appify.yml. If None, searches upward.

    Returns:
        Validated AppConfig.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No {APP_CONFIG_FILE} found. "
            "Create one in the current directory, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading app config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    config = parse_config(data, source=str(path))
    logger.info(
        "Loaded app '%s' with %d permission(s)",
        config.name, len(config.permissions),
    )
    return config


def dump_config(config: AppConfig) -> str:
    """Serialize a configuration back to appify.yml text."""
    return yaml.safe_dump(
        {"app": config.to_dict()},
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
