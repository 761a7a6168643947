"""
Preview server — Flask app factory.

Serves the generator over HTTP for a live preview UI: the UI posts the
whole configuration on each edit and renders the returned artifacts.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask

logger = logging.getLogger(__name__)


def create_app(config_path: Path | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Optional appify.yml served as the default
            configuration by ``GET /api/config``.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    app.config["CONFIG_PATH"] = str(config_path) if config_path else None
    app.config["MAX_CONTENT_LENGTH"] = 20 * 1024 * 1024  # inline images

    from appify.ui.web.routes_generate import generate_bp

    app.register_blueprint(generate_bp, url_prefix="/api")

    logger.info("Preview app created (config=%s)", config_path)
    return app


def run_server(
    app: Flask,
    host: str = "127.0.0.1",
    port: int = 8000,
    debug: bool = False,
) -> None:
    """Run the Flask development server."""
    logger.info("Starting preview API on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False)
