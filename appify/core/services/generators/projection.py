"""
Field projection — platform-safe fields derived from the configuration.

Every formatter receives the same ``ProjectedFields`` instance, computed
once per generation, so the identifier that lands in package.json is the
one that lands in AndroidManifest.xml and Info.plist.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

from appify.core.models.config import AppConfig


DEFAULT_IDENTIFIER = "app"
DEFAULT_DISPLAY_NAME = "My App"
DEFAULT_START_URL = "/"
BUNDLE_ID_PREFIX = "com.appify"
SHORT_NAME_LENGTH = 12
APP_VERSION = "1.0.0"

ICON_FILENAME = "icon.png"
SPLASH_FILENAME = "splash.png"

_NON_TOKEN = re.compile(r"[^a-z0-9]+")

# Characters XML 1.0 cannot carry; plist output is XML too.
_XML_FORBIDDEN = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe(text: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document.

    >>> xml_safe("Bell\\x07 App")
    'Bell App'
    """
    return _XML_FORBIDDEN.sub("", text)


def derive_identifier(name: str) -> str:
    """Derive a lower-case, hyphen-joined token from a free-text name.

    Accents are folded to ASCII, every run of other characters becomes a
    single ``-``. Names with nothing usable yield ``DEFAULT_IDENTIFIER``.

    >>> derive_identifier("My  Dashboard!")
    'my-dashboard'
    >>> derive_identifier("   ")
    'app'
    """
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    token = _NON_TOKEN.sub("-", folded.lower()).strip("-")
    return token or DEFAULT_IDENTIFIER


def bundle_id_for(identifier: str) -> str:
    """Reverse-DNS id (Android package / Apple bundle id) for a token."""
    segment = identifier.replace("-", "")
    if segment[:1].isdigit():
        segment = DEFAULT_IDENTIFIER + segment
    return f"{BUNDLE_ID_PREFIX}.{segment}"


@dataclass(frozen=True)
class ProjectedFields:
    """Derived fields shared by all formatters."""

    display_name: str
    short_name: str
    identifier: str
    bundle_id: str
    start_url: str
    theme_color: str = ""
    icon_file: str | None = None
    splash_file: str | None = None


def project_fields(config: AppConfig) -> ProjectedFields:
    """Compute the shared derived fields for one generation.

    Text that reaches the XML formatters (names, theme color) is passed
    through ``xml_safe`` here, once, so every target sees the same value.
    """
    display_name = xml_safe(config.name).strip() or DEFAULT_DISPLAY_NAME
    identifier = derive_identifier(config.name)

    return ProjectedFields(
        display_name=display_name,
        short_name=display_name[:SHORT_NAME_LENGTH].rstrip(),
        identifier=identifier,
        bundle_id=bundle_id_for(identifier),
        start_url=config.url or DEFAULT_START_URL,
        theme_color=xml_safe(config.color),
        icon_file=ICON_FILENAME if config.icon_url else None,
        splash_file=SPLASH_FILENAME if config.splash_url else None,
    )
