"""
External documents — README, privacy policy and generated app images.

These documents are not generated here. A text producer (an async
callable, typically backed by a generative text service) writes them;
this module builds the requests, absorbs producer failures into fallback
text, and merges the results into the artifact list under the same
filename-uniqueness rule the generator follows.

Icon and splash images come from an image producer in the same way, but
image failures are not absorbed: the caller decides what to show.

The descriptor generator never calls into this module.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from appify.core.models.artifact import GeneratedFile
from appify.core.models.config import AppConfig

logger = logging.getLogger(__name__)


README_FILENAME = "README.md"
PRIVACY_FILENAME = "PRIVACY.md"

# Name used in prompts when the configuration has none yet
PROMPT_APP_NAME = "MyApp"

README_FALLBACK = "# Readme\n\nFailed to generate content."
PRIVACY_FALLBACK = "# Privacy Policy\n\nCould not generate policy."

DESCRIPTION_WORD_LIMIT = 40

ICON_ASPECT_RATIO = "1:1"
SPLASH_ASPECT_RATIO = "9:16"
IMAGE_DATA_PREFIX = "data:image/png;base64,"


TextProducer = Callable[[str], Awaitable[str]]

# (prompt, aspect ratio) -> "data:image/png;base64,..." reference
ImageProducer = Callable[[str, str], Awaitable[str]]


class ArtifactCollisionError(Exception):
    """Raised when an external document would replace a generated artifact."""


class AssetRequestError(Exception):
    """Raised when an icon or splash image cannot be requested or was not returned."""


# ═══════════════════════════════════════════════════════════════════
#  Prompts
# ═══════════════════════════════════════════════════════════════════


def _permission_list(config: AppConfig) -> str:
    names = [p.value for p in config.enabled_permissions()]
    return ", ".join(names) if names else "none"


def readme_prompt(config: AppConfig) -> str:
    """Request for developer setup instructions."""
    name = config.name or PROMPT_APP_NAME
    return f"""\
Write a Markdown README.md for a developer converting the web app "{name}" to a standalone app.

Sections required:
1. Desktop (Electron): how to install dependencies and run it (npm start), and how to package it (npm run dist).
2. Mobile (Capacitor):
   - Install the toolchain with 'npm install @capacitor/core @capacitor/cli @capacitor/android @capacitor/ios'.
   - Generate the Android project with 'npx cap add android'.
   - Build the APK with 'npx cap open android' (Android Studio) or 'npx cap run android'.
   - For iOS, use 'npx cap add ios' and 'npx cap open ios'.
3. Assets: mention the generated icon and splash screen.
4. Privacy: mention the generated privacy policy.

The app requires these permissions: {_permission_list(config)}.
Keep it clear and developer-friendly."""


def privacy_prompt(config: AppConfig) -> str:
    """Request for a privacy policy covering the enabled permissions."""
    name = config.name or PROMPT_APP_NAME
    return f"""\
Write a standard Privacy Policy for a mobile application named "{name}".
The app uses the following permissions: {_permission_list(config)}.
Include sections for: Information Collection, Use of Information, and Security.
Format: Markdown.
Keep it generic but professional."""


def description_prompt(config: AppConfig) -> str:
    """Request to rewrite the description for a store listing."""
    draft = config.description or "A useful web application."
    return f"""\
Rewrite the following app description to be professional, concise, and marketing-ready for an App Store listing.
App Name: {config.name}.
Current Draft: {draft}.
Keep it under {DESCRIPTION_WORD_LIMIT} words."""


def icon_prompt(config: AppConfig) -> str:
    """Request for a square app icon."""
    return f"""\
Design a modern, minimalist, high-quality app icon for an application named "{config.name}".
Description of app: {config.description}.
Style: Vector art, vibrant colors, rounded square shape, professional UI design suitable for iOS and MacOS.
Do not include text inside the icon."""


def splash_prompt(config: AppConfig) -> str:
    """Request for a portrait launch screen."""
    return f"""\
Design a professional mobile app launch screen (splash screen) for "{config.name}".
Description: {config.description}.
Style: Minimalist, clean background, modern vector logo centered, vertical orientation.
Resolution: High quality."""


# ═══════════════════════════════════════════════════════════════════
#  Requests
# ═══════════════════════════════════════════════════════════════════


async def _ask(producer: TextProducer, prompt: str, what: str) -> str | None:
    try:
        text = await producer(prompt)
    except Exception as e:
        logger.error("%s generation failed: %s", what, e)
        return None
    text = (text or "").strip()
    return text or None


async def request_readme(producer: TextProducer, config: AppConfig) -> GeneratedFile:
    """Ask the producer for README.md; fallback text on failure."""
    text = await _ask(producer, readme_prompt(config), "Readme")
    return GeneratedFile(
        name=README_FILENAME,
        content=text or README_FALLBACK,
        format="markdown",
        description="Setup Instructions",
    )


async def request_privacy_policy(producer: TextProducer, config: AppConfig) -> GeneratedFile:
    """Ask the producer for PRIVACY.md; fallback text on failure."""
    text = await _ask(producer, privacy_prompt(config), "Privacy policy")
    return GeneratedFile(
        name=PRIVACY_FILENAME,
        content=text or PRIVACY_FALLBACK,
        format="markdown",
        description="Privacy Policy",
    )


async def enhance_description(producer: TextProducer, config: AppConfig) -> AppConfig:
    """Return a configuration with a rewritten description.

    The configuration is returned unchanged when it has no name yet or
    the producer fails.
    """
    if not config.name:
        return config
    text = await _ask(producer, description_prompt(config), "Description")
    if text is None:
        return config
    return config.model_copy(update={"description": text})


async def _ask_image(
    producer: ImageProducer,
    config: AppConfig,
    prompt: str,
    aspect_ratio: str,
    what: str,
) -> str:
    if not config.name.strip():
        raise AssetRequestError(f"App name is required to generate the {what}")

    try:
        ref = await producer(prompt, aspect_ratio)
    except Exception as e:
        logger.error("%s generation failed: %s", what.capitalize(), e)
        raise

    ref = (ref or "").strip()
    if not ref.startswith(IMAGE_DATA_PREFIX) or ref == IMAGE_DATA_PREFIX:
        raise AssetRequestError(f"No image data received for the {what}")
    return ref


async def request_icon(producer: ImageProducer, config: AppConfig) -> AppConfig:
    """Return a configuration whose icon is a freshly generated image.

    Raises:
        AssetRequestError: If the configuration has no name or the producer
            returned no image.
        Exception: Whatever the producer raises, unchanged.
    """
    ref = await _ask_image(producer, config, icon_prompt(config), ICON_ASPECT_RATIO, "icon")
    return config.model_copy(update={"icon_url": ref})


async def request_splash(producer: ImageProducer, config: AppConfig) -> AppConfig:
    """Return a configuration whose splash screen is a freshly generated image."""
    ref = await _ask_image(
        producer, config, splash_prompt(config), SPLASH_ASPECT_RATIO, "splash screen",
    )
    return config.model_copy(update={"splash_url": ref})


# ═══════════════════════════════════════════════════════════════════
#  Merge
# ═══════════════════════════════════════════════════════════════════


def as_document(name: str, content: str) -> GeneratedFile:
    """Wrap externally supplied Markdown text as a document."""
    return GeneratedFile(name=name, content=content, format="markdown")


def merge_documents(
    artifacts: list[GeneratedFile],
    documents: list[GeneratedFile],
) -> list[GeneratedFile]:
    """Append documents after the generated artifacts.

    Documents with empty content are skipped.

    Raises:
        ArtifactCollisionError: If a document name is already taken.
    """
    merged = list(artifacts)
    taken = {f.name for f in merged}

    for doc in documents:
        if not doc.content:
            continue
        if doc.name in taken:
            raise ArtifactCollisionError(f"Duplicate artifact name: {doc.name}")
        merged.append(doc)
        taken.add(doc.name)

    return merged
