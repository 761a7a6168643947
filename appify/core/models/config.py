"""
App configuration model — the single input of the descriptor generator.

Loaded from appify.yml (or posted by the preview UI), this is everything
the generator knows about the web app being wrapped. Instances are frozen:
an edit produces a new configuration, never a mutation.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_URL = "https://"
DEFAULT_COLOR = "#6366f1"


class Permission(StrEnum):
    """Abstract capabilities a generated app may declare."""

    CAMERA = "camera"
    MICROPHONE = "microphone"
    GEOLOCATION = "geolocation"
    NOTIFICATIONS = "notifications"
    FULLSCREEN = "fullscreen"


class AppConfig(BaseModel):
    """Normalized application configuration.

    Attributes:
        name:        Human-readable app name (may be empty).
        url:         Entry URL of the wrapped web app, treated as opaque text.
        description: Free text, used verbatim.
        color:       Hex theme color, passed through as stored.
        icon_url:    Icon reference (data URL or remote URL), or "".
        splash_url:  Splash image reference, or "".
        permissions: Enabled permissions.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = ""
    url: str = DEFAULT_URL
    description: str = ""
    color: str = DEFAULT_COLOR
    icon_url: str = Field(default="", alias="iconUrl")
    splash_url: str = Field(default="", alias="splashUrl")
    permissions: frozenset[Permission] = Field(default_factory=frozenset)

    @field_validator("name", "url", "description", "color", "icon_url", "splash_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("permissions", mode="before")
    @classmethod
    def _coerce_permissions(cls, value: Any) -> Any:
        # Accept {"camera": true, ...} as well as ["camera", ...]
        if value is None:
            return frozenset()
        if isinstance(value, dict):
            return frozenset(Permission(k) for k, enabled in value.items() if enabled)
        return value

    def has(self, permission: Permission) -> bool:
        """Check whether a permission is enabled."""
        return permission in self.permissions

    def enabled_permissions(self) -> list[Permission]:
        """Enabled permissions in declaration order."""
        return [p for p in Permission if p in self.permissions]

    def with_permission(self, permission: Permission, enabled: bool = True) -> AppConfig:
        """Return a copy with one permission switched on or off."""
        perms = set(self.permissions)
        if enabled:
            perms.add(permission)
        else:
            perms.discard(permission)
        return self.model_copy(update={"permissions": frozenset(perms)})

    def permission_flags(self) -> dict[str, bool]:
        """Record-of-booleans view, in declaration order."""
        return {p.value: p in self.permissions for p in Permission}

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "url": self.url,
            "description": self.description,
            "color": self.color,
            "iconUrl": self.icon_url,
            "splashUrl": self.splash_url,
            "permissions": self.permission_flags(),
        }
