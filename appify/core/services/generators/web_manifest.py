"""
Web app manifest generator — manifest.json for installable PWAs.
"""

from __future__ import annotations

import json

from appify.core.models.artifact import GeneratedFile, Target
from appify.core.models.config import AppConfig
from appify.core.services.generators.projection import ProjectedFields


ICON_SIZES = ("192x192", "512x512")


def generate_web_manifest(config: AppConfig, fields: ProjectedFields) -> GeneratedFile:
    """Generate manifest.json.

    The icon list is omitted entirely when no icon is set.
    """
    manifest: dict = {
        "name": fields.display_name,
        "short_name": fields.short_name,
        "description": config.description,
        "start_url": fields.start_url,
        "scope": "/",
        "display": "standalone",
        "orientation": "any",
        "background_color": config.color,
        "theme_color": config.color,
    }

    if fields.icon_file:
        manifest["icons"] = [
            {
                "src": fields.icon_file,
                "sizes": size,
                "type": "image/png",
                "purpose": "any maskable",
            }
            for size in ICON_SIZES
        ]

    return GeneratedFile(
        name="manifest.json",
        content=json.dumps(manifest, indent=2, ensure_ascii=False) + "\n",
        format="json",
        target=Target.WEB,
        description="Web App Manifest for PWAs",
    )
