"""
Info.plist generator — iOS app metadata and permission usage strings.
"""

from __future__ import annotations

import plistlib
import re

from appify.core.models.artifact import GeneratedFile, Target
from appify.core.models.config import AppConfig
from appify.core.services.generators.permissions import ios_declarations
from appify.core.services.generators.projection import APP_VERSION, ProjectedFields


_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

STATUS_BAR_DEFAULT = "UIStatusBarStyleDefault"
STATUS_BAR_LIGHT = "UIStatusBarStyleLightContent"
STATUS_BAR_DARK = "UIStatusBarStyleDarkContent"


def status_bar_style(color: str) -> str:
    """Pick a readable status bar style for a background color.

    Dark backgrounds get light content and vice versa. Anything that is
    not a 3 or 6 digit hex color gets the system default.
    """
    match = _HEX_COLOR.match(color.strip())
    if not match:
        return STATUS_BAR_DEFAULT

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))

    # ITU-R BT.601 luma
    luma = 0.299 * r + 0.587 * g + 0.114 * b
    return STATUS_BAR_LIGHT if luma < 128 else STATUS_BAR_DARK


def generate_info_plist(config: AppConfig, fields: ProjectedFields) -> GeneratedFile:
    """Generate Info.plist.

    Key order is fixed: bundle keys, theme keys, launch screen, then one
    entry per enabled permission in declaration order.
    """
    launch_screen: dict = {"UIColorName": "LaunchBackground"}
    if fields.splash_file:
        launch_screen["UIImageName"] = fields.splash_file.rsplit(".", 1)[0]

    plist: dict = {
        "CFBundleDevelopmentRegion": "en",
        "CFBundleDisplayName": fields.display_name,
        "CFBundleName": fields.short_name,
        "CFBundleIdentifier": fields.bundle_id,
        "CFBundleExecutable": "$(EXECUTABLE_NAME)",
        "CFBundlePackageType": "APPL",
        "CFBundleShortVersionString": APP_VERSION,
        "CFBundleVersion": "1",
        "LSRequiresIPhoneOS": True,
        "ThemeColor": fields.theme_color,
        "UIStatusBarStyle": status_bar_style(fields.theme_color),
        "UILaunchScreen": launch_screen,
        "UISupportedInterfaceOrientations": [
            "UIInterfaceOrientationPortrait",
            "UIInterfaceOrientationLandscapeLeft",
            "UIInterfaceOrientationLandscapeRight",
        ],
    }

    for decl in ios_declarations(config.enabled_permissions()):
        plist[decl.key] = decl.render(fields.display_name)

    content = plistlib.dumps(plist, sort_keys=False).decode("utf-8")

    return GeneratedFile(
        name="Info.plist",
        content=content,
        format="xml",
        target=Target.NATIVE,
        description="iOS Permissions & Config",
    )
