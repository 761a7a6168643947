"""
Electron generator — package.json and the main-process bootstrap script.

The desktop shell is the only target where ``fullscreen`` matters: it is
applied as a boot-time ``BrowserWindow`` option, not as a permission.
"""

from __future__ import annotations

import json

from appify.core.models.artifact import GeneratedFile, Target
from appify.core.models.config import AppConfig, Permission
from appify.core.services.generators.projection import APP_VERSION, ProjectedFields


# Fixed window defaults
WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800
WINDOW_MIN_WIDTH = 400
WINDOW_MIN_HEIGHT = 300

ELECTRON_VERSION = "^28.0.0"
ELECTRON_BUILDER_VERSION = "^24.9.1"


def _js(value: str) -> str:
    """Render a Python string as a JS string literal."""
    return json.dumps(value, ensure_ascii=False)


def generate_package_json(config: AppConfig, fields: ProjectedFields) -> GeneratedFile:
    """Generate the Electron package.json."""
    build: dict = {
        "appId": fields.bundle_id,
        "productName": fields.display_name,
        "files": ["main.js", "package.json"],
    }
    if fields.icon_file:
        build["files"].append(fields.icon_file)
        build["icon"] = fields.icon_file

    package = {
        "name": fields.identifier,
        "productName": fields.display_name,
        "version": APP_VERSION,
        "description": config.description,
        "main": "main.js",
        "scripts": {
            "start": "electron .",
            "dist": "electron-builder",
        },
        "build": build,
        "devDependencies": {
            "electron": ELECTRON_VERSION,
            "electron-builder": ELECTRON_BUILDER_VERSION,
        },
    }

    return GeneratedFile(
        name="package.json",
        content=json.dumps(package, indent=2, ensure_ascii=False) + "\n",
        format="json",
        target=Target.DESKTOP,
        description="Dependency Config for Electron",
    )


def generate_main_js(config: AppConfig, fields: ProjectedFields) -> GeneratedFile:
    """Generate main.js — opens one window on the entry URL."""
    fullscreen = "true" if config.has(Permission.FULLSCREEN) else "false"
    icon_line = (
        f"    icon: path.join(__dirname, {_js(fields.icon_file)}),\n"
        if fields.icon_file
        else ""
    )

    content = f"""\
const {{ app, BrowserWindow, shell }} = require('electron');
const path = require('path');

const START_URL = {_js(fields.start_url)};

function createWindow() {{
  const win = new BrowserWindow({{
    width: {WINDOW_WIDTH},
    height: {WINDOW_HEIGHT},
    minWidth: {WINDOW_MIN_WIDTH},
    minHeight: {WINDOW_MIN_HEIGHT},
    title: {_js(fields.display_name)},
    fullscreen: {fullscreen},
{icon_line}    autoHideMenuBar: true,
    webPreferences: {{
      nodeIntegration: false,
      contextIsolation: true,
      sandbox: true,
    }},
  }});

  // Open links that leave the app in the system browser
  win.webContents.setWindowOpenHandler(({{ url }}) => {{
    shell.openExternal(url);
    return {{ action: 'deny' }};
  }});

  win.loadURL(START_URL);
}}

app.whenReady().then(() => {{
  createWindow();

  app.on('activate', () => {{
    if (BrowserWindow.getAllWindows().length === 0) createWindow();
  }});
}});

app.on('window-all-closed', () => {{
  if (process.platform !== 'darwin') app.quit();
}});
"""

    return GeneratedFile(
        name="main.js",
        content=content,
        format="javascript",
        target=Target.DESKTOP,
        description="Main Process for Electron",
    )


def generate_electron(config: AppConfig, fields: ProjectedFields) -> list[GeneratedFile]:
    """Both desktop-shell artifacts, descriptor first."""
    return [
        generate_package_json(config, fields),
        generate_main_js(config, fields),
    ]
