"""
Descriptor operations — fan one configuration out into every target.

Pure and synchronous: no I/O, no caching, no shared mutable state. Safe to
call on every configuration edit from a live preview.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from appify.core.models.artifact import GeneratedFile, Target
from appify.core.models.config import AppConfig
from appify.core.services.generators.android_manifest import generate_android_manifest
from appify.core.services.generators.capacitor import generate_capacitor_config
from appify.core.services.generators.electron import generate_electron
from appify.core.services.generators.info_plist import generate_info_plist
from appify.core.services.generators.projection import ProjectedFields, project_fields
from appify.core.services.generators.web_manifest import generate_web_manifest

logger = logging.getLogger(__name__)


Formatter = Callable[[AppConfig, ProjectedFields], GeneratedFile | list[GeneratedFile]]

# ── Target → formatter, in output order ─────────────────────────

TARGETS: dict[Target, Formatter] = {
    Target.WEB: generate_web_manifest,
    Target.DESKTOP: generate_electron,
    Target.WRAPPER: generate_capacitor_config,
    Target.MOBILE: generate_android_manifest,
    Target.NATIVE: generate_info_plist,
}

# Stable artifact names, in output order
ARTIFACT_NAMES: tuple[str, ...] = (
    "manifest.json",
    "package.json",
    "main.js",
    "capacitor.config.json",
    "AndroidManifest.xml",
    "Info.plist",
)


def _as_list(result: GeneratedFile | list[GeneratedFile]) -> list[GeneratedFile]:
    return result if isinstance(result, list) else [result]


def generate_target(
    config: AppConfig,
    target: Target | str,
    fields: ProjectedFields | None = None,
) -> list[GeneratedFile]:
    """Artifacts for a single target."""
    formatter = TARGETS[Target(target)]
    return _as_list(formatter(config, fields or project_fields(config)))


def generate_files(config: AppConfig) -> list[GeneratedFile]:
    """Generate every artifact for a configuration.

    Every target is always emitted, whatever state the configuration is
    in; degenerate input (empty name, no assets, no permissions) produces
    placeholder values, never an error.

    Returns:
        Artifacts in ``ARTIFACT_NAMES`` order.
    """
    fields = project_fields(config)

    files: list[GeneratedFile] = []
    for target in TARGETS:
        files.extend(generate_target(config, target, fields))

    logger.debug(
        "Generated %d artifacts for '%s' (id=%s)",
        len(files), fields.display_name, fields.identifier,
    )
    return files


def get_file(files: list[GeneratedFile], name: str) -> GeneratedFile | None:
    """Look up an artifact by filename."""
    for f in files:
        if f.name == name:
            return f
    return None
