"""
Capacitor config generator — capacitor.config.json for the mobile wrapper.
"""

from __future__ import annotations

import json

from appify.core.models.artifact import GeneratedFile, Target
from appify.core.models.config import AppConfig
from appify.core.services.generators.projection import ProjectedFields


SPLASH_DURATION_MS = 2000


def generate_capacitor_config(config: AppConfig, fields: ProjectedFields) -> GeneratedFile:
    """Generate capacitor.config.json.

    The wrapper loads the remote URL directly (``server.url``); cleartext
    traffic is only allowed when the URL itself is plain http.
    """
    splash: dict = {
        "launchShowDuration": SPLASH_DURATION_MS,
        "launchAutoHide": True,
        "backgroundColor": config.color,
        "showSpinner": False,
    }
    if fields.splash_file:
        splash["androidSplashResourceName"] = fields.splash_file.rsplit(".", 1)[0]

    cap = {
        "appId": fields.bundle_id,
        "appName": fields.display_name,
        "webDir": "www",
        "server": {
            "url": fields.start_url,
            "cleartext": fields.start_url.startswith("http://"),
        },
        "plugins": {
            "SplashScreen": splash,
        },
    }

    return GeneratedFile(
        name="capacitor.config.json",
        content=json.dumps(cap, indent=2, ensure_ascii=False) + "\n",
        format="json",
        target=Target.WRAPPER,
        description="Cross-platform Mobile Config",
    )
