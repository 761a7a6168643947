"""
Permission mapping table — abstract permission → platform declaration.

Only the two mobile platforms need explicit declarations. The table is
total over ``Permission × Platform``; an entry of ``None`` means the
permission has no declaration on that platform.

Exception documented here rather than in the formatters:
    fullscreen → None on both platforms. Fullscreen is a window mode on
    the desktop shell, applied as a boot-time ``BrowserWindow`` option by
    the Electron formatter, and is not a permission on mobile OSes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from appify.core.models.config import Permission


class Platform(StrEnum):
    """Platforms that require explicit permission declarations."""

    ANDROID = "android"
    IOS = "ios"


@dataclass(frozen=True)
class AndroidDeclaration:
    """``<uses-permission>`` names plus optional ``<uses-feature>`` names."""

    permissions: tuple[str, ...]
    features: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlistDeclaration:
    """One Info.plist key.

    ``value`` is either a usage-description template (``{name}`` is
    replaced by the app's display name) or a fixed list value.
    """

    key: str
    value: str | tuple[str, ...]

    def render(self, app_name: str) -> str | list[str]:
        if isinstance(self.value, str):
            return self.value.format(name=app_name)
        return list(self.value)


Declaration = AndroidDeclaration | PlistDeclaration


# Always declared on Android: the wrapped app is loaded over the network.
ANDROID_BASE_PERMISSIONS: tuple[str, ...] = ("android.permission.INTERNET",)


PERMISSION_TABLE: dict[Permission, dict[Platform, Declaration | None]] = {
    Permission.CAMERA: {
        Platform.ANDROID: AndroidDeclaration(
            permissions=("android.permission.CAMERA",),
            features=("android.hardware.camera",),
        ),
        Platform.IOS: PlistDeclaration(
            key="NSCameraUsageDescription",
            value="{name} needs access to the camera to capture photos and video.",
        ),
    },
    Permission.MICROPHONE: {
        Platform.ANDROID: AndroidDeclaration(
            permissions=(
                "android.permission.RECORD_AUDIO",
                "android.permission.MODIFY_AUDIO_SETTINGS",
            ),
        ),
        Platform.IOS: PlistDeclaration(
            key="NSMicrophoneUsageDescription",
            value="{name} needs access to the microphone to record audio.",
        ),
    },
    Permission.GEOLOCATION: {
        Platform.ANDROID: AndroidDeclaration(
            permissions=(
                "android.permission.ACCESS_COARSE_LOCATION",
                "android.permission.ACCESS_FINE_LOCATION",
            ),
            features=("android.hardware.location.gps",),
        ),
        Platform.IOS: PlistDeclaration(
            key="NSLocationWhenInUseUsageDescription",
            value="{name} uses your location while the app is open.",
        ),
    },
    Permission.NOTIFICATIONS: {
        Platform.ANDROID: AndroidDeclaration(
            permissions=("android.permission.POST_NOTIFICATIONS",),
        ),
        # iOS asks at runtime; the plist only enables remote delivery.
        Platform.IOS: PlistDeclaration(
            key="UIBackgroundModes",
            value=("remote-notification",),
        ),
    },
    Permission.FULLSCREEN: {
        # Desktop window option, see module docstring.
        Platform.ANDROID: None,
        Platform.IOS: None,
    },
}


def _check_totality() -> None:
    missing = [
        f"{perm}/{platform}"
        for perm in Permission
        for platform in Platform
        if platform not in PERMISSION_TABLE.get(perm, {})
    ]
    if missing:
        raise AssertionError(f"Permission table incomplete: {', '.join(missing)}")


_check_totality()


def lookup(permission: Permission | str, platform: Platform | str) -> Declaration | None:
    """Declaration for a permission on a platform, or None if it has none.

    Raises:
        ValueError: For an unrecognized permission or platform name. The
            key sets are closed, so this is a programming error.
    """
    return PERMISSION_TABLE[Permission(permission)][Platform(platform)]


def declarations_for(
    permissions: list[Permission],
    platform: Platform,
) -> list[Declaration]:
    """Declarations for the given permissions, skipping those with none."""
    found: list[Declaration] = []
    for perm in permissions:
        decl = lookup(perm, platform)
        if decl is not None:
            found.append(decl)
    return found


def android_declarations(permissions: list[Permission]) -> list[AndroidDeclaration]:
    """Android entries for the given permissions."""
    return [
        decl for decl in declarations_for(permissions, Platform.ANDROID)
        if isinstance(decl, AndroidDeclaration)
    ]


def ios_declarations(permissions: list[Permission]) -> list[PlistDeclaration]:
    """Info.plist entries for the given permissions."""
    return [
        decl for decl in declarations_for(permissions, Platform.IOS)
        if isinstance(decl, PlistDeclaration)
    ]


def permission_table() -> list[dict]:
    """Serializable view of the table (for CLI and web output)."""
    rows: list[dict] = []
    for perm in Permission:
        row: dict = {"permission": perm.value}
        for platform in Platform:
            decl = lookup(perm, platform)
            if decl is None:
                row[platform.value] = None
            elif isinstance(decl, AndroidDeclaration):
                row[platform.value] = {
                    "permissions": list(decl.permissions),
                    "features": list(decl.features),
                }
            else:
                row[platform.value] = {
                    "key": decl.key,
                    "value": decl.value if isinstance(decl.value, str) else list(decl.value),
                }
        rows.append(row)
    return rows
