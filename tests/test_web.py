"""
Tests for the preview API — app factory and generate/bundle routes.
"""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest
from flask.testing import FlaskClient

from appify.ui.web.server import create_app


@pytest.fixture()
def client(app_yml: Path) -> FlaskClient:
    """Create a Flask test client."""
    app = create_app(config_path=app_yml)
    app.config["TESTING"] = True
    return app.test_client()


class TestAppFactory:
    def test_create_app(self, app_yml: Path):
        app = create_app(config_path=app_yml)
        assert app.config["CONFIG_PATH"] == str(app_yml)

    def test_without_config(self):
        app = create_app()
        assert app.config["CONFIG_PATH"] is None


class TestInfoRoutes:
    def test_health(self, client: FlaskClient):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "ok"

    def test_permissions(self, client: FlaskClient):
        data = client.get("/api/permissions").get_json()
        assert [r["permission"] for r in data][0] == "camera"

    def test_config_from_file(self, client: FlaskClient):
        data = client.get("/api/config").get_json()
        assert data["name"] == "Trackr"
        assert data["permissions"]["geolocation"] is True

    def test_config_defaults(self):
        client = create_app().test_client()
        data = client.get("/api/config").get_json()
        assert data["name"] == ""
        assert data["url"] == "https://"


class TestGenerateRoute:
    def test_generate(self, client: FlaskClient):
        resp = client.post("/api/generate", json={
            "name": "Trackr",
            "url": "https://trackr.app",
            "color": "#ff0000",
            "permissions": {"geolocation": True},
        })
        assert resp.status_code == 200
        files = resp.get_json()["files"]
        assert [f["name"] for f in files][0] == "manifest.json"
        android = next(f for f in files if f["name"] == "AndroidManifest.xml")
        assert "ACCESS_FINE_LOCATION" in android["content"]
        assert android["target"] == "mobile"

    def test_empty_config(self, client: FlaskClient):
        resp = client.post("/api/generate", json={})
        assert resp.status_code == 200
        assert len(resp.get_json()["files"]) == 6

    def test_not_json(self, client: FlaskClient):
        resp = client.post("/api/generate", data="nope", content_type="text/plain")
        assert resp.status_code == 400

    def test_invalid_permission(self, client: FlaskClient):
        resp = client.post("/api/generate", json={"permissions": ["bluetooth"]})
        assert resp.status_code == 400
        assert "error" in resp.get_json()


class TestBundleRoute:
    def test_bundle(self, client: FlaskClient):
        resp = client.post("/api/bundle", json={
            "config": {"name": "Trackr", "url": "https://trackr.app"},
            "documents": {"PRIVACY.md": "# Privacy"},
        })
        assert resp.status_code == 200
        assert resp.mimetype == "application/zip"
        assert "Trackr-app-bundle.zip" in resp.headers["Content-Disposition"]
        with zipfile.ZipFile(io.BytesIO(resp.data)) as zf:
            assert "PRIVACY.md" in zf.namelist()

    def test_bundle_requires_name(self, client: FlaskClient):
        resp = client.post("/api/bundle", json={"config": {}})
        assert resp.status_code == 400

    def test_bundle_collision(self, client: FlaskClient):
        resp = client.post("/api/bundle", json={
            "config": {"name": "X"},
            "documents": {"main.js": "//"},
        })
        assert resp.status_code == 400
        assert "main.js" in resp.get_json()["error"]

    @pytest.mark.parametrize("body", [[1, 2], "text", 42])
    def test_bundle_body_not_object(self, client: FlaskClient, body):
        resp = client.post("/api/bundle", json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_bundle_config_not_object(self, client: FlaskClient):
        resp = client.post("/api/bundle", json={"config": ["Trackr"]})
        assert resp.status_code == 400
        assert "config" in resp.get_json()["error"]

    def test_bundle_not_json(self, client: FlaskClient):
        resp = client.post("/api/bundle", data="nope", content_type="text/plain")
        assert resp.status_code == 400

    def test_bundle_document_path_rejected(self, client: FlaskClient):
        resp = client.post("/api/bundle", json={
            "config": {"name": "X"},
            "documents": {"../x.md": "# escape"},
        })
        assert resp.status_code == 400
        assert "bare filename" in resp.get_json()["error"]

    def test_bundle_name_with_path(self, client: FlaskClient):
        resp = client.post("/api/bundle", json={"config": {"name": "../evil"}})
        assert resp.status_code == 200
        assert "evil-app-bundle.zip" in resp.headers["Content-Disposition"]
        assert "/" not in resp.headers["Content-Disposition"]
