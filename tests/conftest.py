"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from appify.core.models.config import AppConfig, Permission


@pytest.fixture
def empty_config() -> AppConfig:
    """Configuration as the editor starts: nothing filled in."""
    return AppConfig()


@pytest.fixture
def trackr_config() -> AppConfig:
    """Named app with geolocation only."""
    return AppConfig(
        name="Trackr",
        url="https://trackr.app",
        color="#ff0000",
        permissions={Permission.GEOLOCATION},
    )


@pytest.fixture
def full_config() -> AppConfig:
    """Every field set, every permission on."""
    return AppConfig(
        name="My Dashboard",
        url="https://dash.example.com",
        description="Team metrics at a glance.",
        color="#112233",
        icon_url="data:image/png;base64,iVBORw0KGgo=",
        splash_url="data:image/png;base64,iVBORw0KGgo=",
        permissions=set(Permission),
    )


@pytest.fixture
def app_yml(tmp_path: Path) -> Path:
    """A valid appify.yml in a temp directory."""
    path = tmp_path / "appify.yml"
    path.write_text(textwrap.dedent("""\
        name: Trackr
        url: https://trackr.app
        description: Track your runs.
        color: "#ff0000"
        permissions:
          camera: false
          geolocation: true
    """))
    return path
