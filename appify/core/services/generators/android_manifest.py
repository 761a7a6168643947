"""
AndroidManifest.xml generator — permission declarations plus app metadata.
"""

from __future__ import annotations

from xml.sax.saxutils import quoteattr

from appify.core.models.artifact import GeneratedFile, Target
from appify.core.models.config import AppConfig
from appify.core.services.generators.permissions import (
    ANDROID_BASE_PERMISSIONS,
    android_declarations,
)
from appify.core.services.generators.projection import ProjectedFields


def _permission_lines(config: AppConfig) -> tuple[list[str], list[str]]:
    perms: list[str] = list(ANDROID_BASE_PERMISSIONS)
    features: list[str] = []
    for decl in android_declarations(config.enabled_permissions()):
        perms.extend(p for p in decl.permissions if p not in perms)
        features.extend(f for f in decl.features if f not in features)

    perm_lines = [f'    <uses-permission android:name="{p}" />' for p in perms]
    feature_lines = [
        f'    <uses-feature android:name="{f}" android:required="false" />'
        for f in features
    ]
    return perm_lines, feature_lines


def generate_android_manifest(config: AppConfig, fields: ProjectedFields) -> GeneratedFile:
    """Generate AndroidManifest.xml.

    INTERNET is always declared; the rest follow the enabled permissions
    in declaration order. Hardware features are marked optional so the
    app stays installable on devices without them.
    """
    perm_lines, feature_lines = _permission_lines(config)

    declarations = "\n".join(perm_lines)
    if feature_lines:
        declarations += "\n\n" + "\n".join(feature_lines)

    content = f"""\
<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
    package={quoteattr(fields.bundle_id)}>

{declarations}

    <application
        android:allowBackup="true"
        android:icon="@mipmap/ic_launcher"
        android:label={quoteattr(fields.display_name)}
        android:supportsRtl="true"
        android:theme="@style/AppTheme">

        <activity
            android:name=".MainActivity"
            android:exported="true"
            android:configChanges="orientation|keyboardHidden|keyboard|screenSize|locale|smallestScreenSize|screenLayout|uiMode"
            android:launchMode="singleTask">
            <intent-filter>
                <action android:name="android.intent.action.MAIN" />
                <category android:name="android.intent.category.LAUNCHER" />
            </intent-filter>
        </activity>
    </application>
</manifest>
"""

    return GeneratedFile(
        name="AndroidManifest.xml",
        content=content,
        format="xml",
        target=Target.MOBILE,
        description="Android Permissions Definition",
    )
