"""
Generate routes — live preview and bundle download endpoints.

Blueprint: generate_bp
Prefix: /api

Thin HTTP wrappers over ``appify.core.services``.

Endpoints:
    GET  /health        — liveness and version
    GET  /permissions   — permission mapping table
    GET  /config        — default configuration (appify.yml or built-in)
    POST /generate      — configuration in, artifacts out
    POST /bundle        — {config, documents} in, zip archive out
"""

from __future__ import annotations

import io
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request, send_file

from appify import __version__
from appify.core.config.loader import ConfigError, load_config, parse_config
from appify.core.models.config import AppConfig
from appify.core.services import descriptor_ops
from appify.core.services.bundle import BundleError, build_bundle
from appify.core.services.documents import as_document
from appify.core.services.generators.permissions import permission_table

generate_bp = Blueprint("generate", __name__)


def _request_config(data: dict) -> AppConfig:
    return parse_config(data, source="request body")


@generate_bp.route("/health")
def health():  # type: ignore[no-untyped-def]
    """Liveness check."""
    return jsonify({"status": "ok", "version": __version__})


@generate_bp.route("/permissions")
def permissions():  # type: ignore[no-untyped-def]
    """Permission mapping table."""
    return jsonify(permission_table())


@generate_bp.route("/config")
def default_config():  # type: ignore[no-untyped-def]
    """Configuration the preview starts from."""
    config_path = current_app.config.get("CONFIG_PATH")
    if not config_path:
        return jsonify(AppConfig().to_dict())

    try:
        config = load_config(Path(config_path))
    except ConfigError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(config.to_dict())


@generate_bp.route("/generate", methods=["POST"])
def generate():  # type: ignore[no-untyped-def]
    """Render every artifact for the posted configuration."""
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({"error": "Expected a JSON configuration"}), 400

    try:
        config = _request_config(data)
    except ConfigError as e:
        return jsonify({"error": str(e)}), 400

    files = descriptor_ops.generate_files(config)
    return jsonify({
        "files": [f.model_dump(mode="json") for f in files],
    })


@generate_bp.route("/bundle", methods=["POST"])
def bundle():  # type: ignore[no-untyped-def]
    """Build and download the zip bundle.

    Body: ``{"config": {...}, "documents": {"README.md": "...", ...}}``
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object with 'config' and 'documents'"}), 400

    config_data = data.get("config") or {}
    if not isinstance(config_data, dict):
        return jsonify({"error": "'config' must be a JSON object"}), 400

    documents = data.get("documents") or {}
    if not isinstance(documents, dict):
        return jsonify({"error": "'documents' must map filenames to text"}), 400

    try:
        config = _request_config(config_data)
        result = build_bundle(
            config,
            [as_document(name, str(text)) for name, text in documents.items()],
        )
    except (ConfigError, BundleError) as e:
        return jsonify({"error": str(e)}), 400

    return send_file(
        io.BytesIO(result.data),
        mimetype="application/zip",
        as_attachment=True,
        download_name=result.filename,
    )
