"""
Tests for descriptor generation as a whole — the properties that hold
across every target: determinism, totality, permission propagation and
field isolation.
"""

import json
import plistlib
import xml.etree.ElementTree as ET

import pytest

from appify.core.models.artifact import Target
from appify.core.models.config import AppConfig, Permission
from appify.core.services.descriptor_ops import (
    ARTIFACT_NAMES,
    TARGETS,
    generate_files,
    generate_target,
    get_file,
)

# Artifacts produced by the permission-bearing targets
DESKTOP_FILES = {"package.json", "main.js"}
MOBILE_PERMISSION_FILES = {"AndroidManifest.xml", "Info.plist"}


def _contents(config: AppConfig) -> dict[str, str]:
    return {f.name: f.content for f in generate_files(config)}


def _changed(a: AppConfig, b: AppConfig) -> set[str]:
    before, after = _contents(a), _contents(b)
    return {name for name in before if before[name] != after[name]}


class TestTotality:
    def test_empty_config(self, empty_config: AppConfig):
        """Nothing filled in still gives every artifact, all non-empty."""
        files = generate_files(empty_config)
        assert [f.name for f in files] == list(ARTIFACT_NAMES)
        assert all(f.content.strip() for f in files)

    def test_blank_name_no_url(self):
        files = generate_files(AppConfig(name="", url="", color=""))
        assert len(files) == len(ARTIFACT_NAMES)
        for f in files:
            if f.format == "json":
                json.loads(f.content)

    def test_every_target_emitted(self, empty_config: AppConfig):
        targets = {f.target for f in generate_files(empty_config)}
        assert targets == set(Target)
        assert len(TARGETS) == 5

    def test_names_unique_and_stable(self, empty_config, trackr_config, full_config):
        for config in (empty_config, trackr_config, full_config):
            names = [f.name for f in generate_files(config)]
            assert len(names) == len(set(names))
            assert tuple(names) == ARTIFACT_NAMES

    @pytest.mark.parametrize("name", ["Tab\x0bApp", "Bell\x07", "Nul\x00l", "Esc\x1b[0m"])
    def test_control_characters(self, name: str):
        """Every artifact still parses when text fields carry control characters."""
        config = AppConfig(
            name=name,
            description=f"About {name}",
            color=f"#123456{name}",
            permissions=set(Permission),
        )
        files = {f.name: f for f in generate_files(config)}

        ET.fromstring(files["AndroidManifest.xml"].content.encode("utf-8"))
        plist = plistlib.loads(files["Info.plist"].content.encode("utf-8"))
        assert plist["CFBundleDisplayName"].isprintable()
        for f in files.values():
            if f.format == "json":
                json.loads(f.content)


class TestDeterminism:
    def test_repeated_calls_identical(self, full_config: AppConfig):
        first = generate_files(full_config)
        second = generate_files(full_config)
        assert [f.model_dump() for f in first] == [f.model_dump() for f in second]

    def test_equal_configs_identical(self):
        a = AppConfig(name="X", permissions=["camera", "microphone"])
        b = AppConfig(name="X", permissions={"microphone": True, "camera": True})
        assert _contents(a) == _contents(b)


class TestPermissionPropagation:
    @pytest.mark.parametrize("perm", [
        Permission.CAMERA,
        Permission.MICROPHONE,
        Permission.GEOLOCATION,
        Permission.NOTIFICATIONS,
    ])
    def test_mobile_permission_touches_only_mobile_targets(self, trackr_config, perm):
        base = trackr_config.with_permission(perm, False)
        toggled = base.with_permission(perm, True)
        assert _changed(base, toggled) == MOBILE_PERMISSION_FILES

    def test_fullscreen_touches_only_desktop(self, trackr_config):
        toggled = trackr_config.with_permission(Permission.FULLSCREEN)
        changed = _changed(trackr_config, toggled)
        assert changed
        assert changed <= DESKTOP_FILES
        assert "main.js" in changed


class TestFieldIsolation:
    def test_color_change(self, trackr_config: AppConfig):
        recolored = trackr_config.model_copy(update={"color": "#00ff00"})
        changed = _changed(trackr_config, recolored)

        assert "manifest.json" in changed
        assert "Info.plist" in changed
        assert not changed & DESKTOP_FILES
        assert "AndroidManifest.xml" not in changed

    def test_color_leaves_wrapper_identity(self, trackr_config: AppConfig):
        recolored = trackr_config.model_copy(update={"color": "#00ff00"})
        before = json.loads(get_file(generate_files(trackr_config), "capacitor.config.json").content)
        after = json.loads(get_file(generate_files(recolored), "capacitor.config.json").content)
        assert before["appId"] == after["appId"]
        assert before["appName"] == after["appName"]

    def test_identifier_shared(self, full_config: AppConfig):
        """The same derived identifier lands in every descriptor that needs one."""
        files = generate_files(full_config)
        package = json.loads(get_file(files, "package.json").content)
        capacitor = json.loads(get_file(files, "capacitor.config.json").content)

        assert package["name"] == "my-dashboard"
        bundle_id = package["build"]["appId"]
        assert capacitor["appId"] == bundle_id
        assert f'package="{bundle_id}"' in get_file(files, "AndroidManifest.xml").content
        assert f"<string>{bundle_id}</string>" in get_file(files, "Info.plist").content


class TestTrackrScenario:
    def test_scenario(self, trackr_config: AppConfig):
        files = generate_files(trackr_config)

        android = get_file(files, "AndroidManifest.xml").content
        assert "ACCESS_FINE_LOCATION" in android
        assert "android.permission.CAMERA" not in android
        assert "RECORD_AUDIO" not in android
        assert "POST_NOTIFICATIONS" not in android

        manifest = get_file(files, "manifest.json").content
        assert "#ff0000" in manifest
        assert "Trackr" in manifest

        package = json.loads(get_file(files, "package.json").content)
        assert package["name"] == "trackr"
        assert package["name"] == package["name"].lower()
        assert not any(c.isspace() for c in package["name"])


class TestGenerateTarget:
    def test_single(self, trackr_config: AppConfig):
        files = generate_target(trackr_config, Target.WEB)
        assert [f.name for f in files] == ["manifest.json"]

    def test_desktop_pair(self, trackr_config: AppConfig):
        files = generate_target(trackr_config, "desktop")
        assert [f.name for f in files] == ["package.json", "main.js"]

    def test_unknown_target(self, trackr_config: AppConfig):
        with pytest.raises(ValueError):
            generate_target(trackr_config, "watchos")


class TestGetFile:
    def test_missing(self, trackr_config: AppConfig):
        assert get_file(generate_files(trackr_config), "README.md") is None
