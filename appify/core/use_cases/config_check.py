"""
Config check use case — validate appify.yml and report issues.

Load failures are errors. Values the generator would only fill with
placeholders are warnings: generation never fails on them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from appify.core.config.loader import ConfigError, find_config_file, load_config
from appify.core.models.config import AppConfig, Permission
from appify.core.services.generators.projection import derive_identifier

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: AppConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "app_name": self.config.name if self.config else None,
            "identifier": derive_identifier(self.config.name) if self.config else None,
            "permissions": (
                [p.value for p in self.config.enabled_permissions()] if self.config else []
            ),
        }


def config_warnings(config: AppConfig) -> list[str]:
    """Semantic warnings for a loaded configuration."""
    warnings: list[str] = []

    if not config.name.strip():
        warnings.append("No app name set. Artifacts will use placeholder names.")

    parsed = urlparse(config.url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        warnings.append(f"URL does not look like an http(s) address: '{config.url}'")
    elif parsed.scheme == "http":
        warnings.append("URL uses plain http. Mobile wrappers will allow cleartext traffic.")

    if not _HEX_COLOR.match(config.color):
        warnings.append(f"Color is not a hex value (#rgb or #rrggbb): '{config.color}'")

    if not config.icon_url:
        warnings.append("No icon set. Icon entries will be omitted.")

    if config.has(Permission.FULLSCREEN):
        warnings.append("'fullscreen' only affects the desktop window, not mobile targets.")

    return warnings


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the app configuration and report issues.

    Args:
        config_path: Optional explicit path to appify.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.errors.append("No appify.yml found.")
        return result

    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.config = config
    result.warnings.extend(config_warnings(config))
    result.valid = not result.errors
    return result
