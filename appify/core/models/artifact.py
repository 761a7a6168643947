"""
Generated file model — the artifact produced by every formatter.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Target(StrEnum):
    """Platforms the generator emits descriptors for."""

    WEB = "web"
    DESKTOP = "desktop"
    WRAPPER = "wrapper"
    MOBILE = "mobile"
    NATIVE = "native"


class GeneratedFile(BaseModel):
    """One named, fully rendered output file.

    Attributes:
        name:        Canonical filename, unique within one generation.
        content:     Full file content in the target's native syntax.
        format:      Syntax family (json, javascript, xml, markdown).
                     Descriptive only, used for highlighting.
        target:      Target that produced it. None for documents supplied
                     by an external producer.
        description: One-line caption for the preview pane.
    """

    name: str
    content: str
    format: str
    target: Target | None = None
    description: str = ""
