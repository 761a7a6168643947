"""
Tests for the permission mapping table.
"""

import pytest

from appify.core.models.config import Permission
from appify.core.services.generators.permissions import (
    PERMISSION_TABLE,
    AndroidDeclaration,
    Platform,
    PlistDeclaration,
    android_declarations,
    declarations_for,
    ios_declarations,
    lookup,
    permission_table,
)


class TestTableTotality:
    def test_every_permission_has_every_platform(self):
        for perm in Permission:
            assert perm in PERMISSION_TABLE, f"Missing: {perm}"
            for platform in Platform:
                assert platform in PERMISSION_TABLE[perm], f"Missing: {perm}/{platform}"

    def test_declaration_types_match_platform(self):
        for perm in Permission:
            android = lookup(perm, Platform.ANDROID)
            ios = lookup(perm, Platform.IOS)
            assert android is None or isinstance(android, AndroidDeclaration)
            assert ios is None or isinstance(ios, PlistDeclaration)


class TestLookup:
    def test_camera(self):
        android = lookup(Permission.CAMERA, Platform.ANDROID)
        assert "android.permission.CAMERA" in android.permissions
        assert lookup(Permission.CAMERA, Platform.IOS).key == "NSCameraUsageDescription"

    def test_geolocation(self):
        android = lookup("geolocation", "android")
        assert "android.permission.ACCESS_FINE_LOCATION" in android.permissions
        assert "android.permission.ACCESS_COARSE_LOCATION" in android.permissions

    def test_notifications_ios_background_mode(self):
        decl = lookup(Permission.NOTIFICATIONS, Platform.IOS)
        assert decl.key == "UIBackgroundModes"
        assert decl.render("X") == ["remote-notification"]

    def test_fullscreen_has_no_mobile_declaration(self):
        """Fullscreen is a desktop window option, not a mobile permission."""
        assert lookup(Permission.FULLSCREEN, Platform.ANDROID) is None
        assert lookup(Permission.FULLSCREEN, Platform.IOS) is None

    def test_unknown_permission_is_fatal(self):
        with pytest.raises(ValueError):
            lookup("bluetooth", Platform.ANDROID)

    def test_unknown_platform_is_fatal(self):
        with pytest.raises(ValueError):
            lookup(Permission.CAMERA, "windows")


class TestRender:
    def test_usage_string_uses_name(self):
        decl = lookup(Permission.MICROPHONE, Platform.IOS)
        assert "Trackr" in decl.render("Trackr")

    def test_name_with_braces(self):
        """Names are substituted, never interpreted as templates."""
        decl = lookup(Permission.CAMERA, Platform.IOS)
        assert "{x}" in decl.render("{x}")


class TestDeclarationsFor:
    def test_skips_none(self):
        decls = declarations_for([Permission.FULLSCREEN, Permission.CAMERA], Platform.ANDROID)
        assert len(decls) == 1

    def test_preserves_order(self):
        decls = declarations_for(
            [Permission.CAMERA, Permission.MICROPHONE], Platform.IOS,
        )
        assert [d.key for d in decls] == [
            "NSCameraUsageDescription",
            "NSMicrophoneUsageDescription",
        ]

    def test_empty(self):
        assert declarations_for([], Platform.IOS) == []

    def test_android_helper(self):
        decls = android_declarations([Permission.FULLSCREEN, Permission.GEOLOCATION])
        assert len(decls) == 1
        assert isinstance(decls[0], AndroidDeclaration)
        assert decls[0].features == ("android.hardware.location.gps",)

    def test_ios_helper(self):
        decls = ios_declarations(list(Permission))
        assert all(isinstance(d, PlistDeclaration) for d in decls)
        assert len(decls) == 4


class TestSerializableTable:
    def test_rows(self):
        rows = permission_table()
        assert [r["permission"] for r in rows] == [p.value for p in Permission]
        fullscreen = rows[-1]
        assert fullscreen["android"] is None
        assert fullscreen["ios"] is None
        camera = rows[0]
        assert camera["android"]["features"] == ["android.hardware.camera"]
        assert camera["ios"]["key"] == "NSCameraUsageDescription"
