"""
Bundle assembly — one zip with every artifact, documents and assets.

Only inline (``data:``) asset references are embedded. Remote references
are not fetched here and are reported as skipped.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
import zipfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from appify.core.models.artifact import GeneratedFile
from appify.core.models.config import AppConfig
from appify.core.services.descriptor_ops import generate_files
from appify.core.services.documents import ArtifactCollisionError, merge_documents
from appify.core.services.generators.projection import (
    DEFAULT_IDENTIFIER,
    ICON_FILENAME,
    SPLASH_FILENAME,
)

logger = logging.getLogger(__name__)


# Fixed entry timestamp so identical input gives identical archives
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

_DATA_URL = re.compile(r"^data:[^,;]*(?:;[^,;]*)*;base64,(?P<data>.*)$", re.S)
# Runs outside [\w.-] become a single "-" in archive names
_UNSAFE_FILENAME = re.compile(r"[^\w.-]+")


class BundleError(Exception):
    """Raised when a bundle cannot be assembled."""


@dataclass
class BundleResult:
    """An assembled archive."""

    filename: str
    data: bytes
    entries: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "size": len(self.data),
            "entries": self.entries,
            "skipped": self.skipped,
        }


def bundle_filename(config: AppConfig) -> str:
    """Archive name: the app name with whitespace runs replaced by ``-``.

    Path separators and other characters unsafe in a filename are replaced
    too, and leading or trailing dots are dropped, so the result is always
    a bare filename.
    """
    slug = _UNSAFE_FILENAME.sub("-", config.name.strip()).strip(".-")
    return f"{slug or DEFAULT_IDENTIFIER}-app-bundle.zip"


def _check_document_name(name: str) -> None:
    if name in ("", ".", "..") or "\\" in name or PurePosixPath(name).name != name:
        raise BundleError(f"Document name must be a bare filename: {name!r}")


def decode_data_url(ref: str) -> bytes | None:
    """Decode a base64 ``data:`` URL. Anything else gives None."""
    match = _DATA_URL.match(ref.strip())
    if not match:
        return None
    try:
        return base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        return None


def _add(zf: zipfile.ZipFile, name: str, data: bytes) -> None:
    info = zipfile.ZipInfo(name, date_time=_ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    zf.writestr(info, data)


def build_bundle(
    config: AppConfig,
    documents: list[GeneratedFile] | None = None,
) -> BundleResult:
    """Assemble the download archive for a configuration.

    Args:
        config: App configuration. Must have a name.
        documents: Optional externally produced documents (README, PRIVACY).

    Returns:
        BundleResult with the zip bytes.

    Raises:
        BundleError: If the configuration has no name, a document name is
            not a bare filename, or it collides with a generated artifact.
    """
    if not config.name.strip():
        raise BundleError("App name is required to build a bundle")

    for doc in documents or []:
        _check_document_name(doc.name)

    try:
        files = merge_documents(generate_files(config), documents or [])
    except ArtifactCollisionError as e:
        raise BundleError(str(e)) from e

    result = BundleResult(filename=bundle_filename(config), data=b"")
    buf = io.BytesIO()

    with zipfile.ZipFile(buf, "w") as zf:
        for f in files:
            _add(zf, f.name, f.content.encode("utf-8"))
            result.entries.append(f.name)

        for ref, filename in ((config.icon_url, ICON_FILENAME), (config.splash_url, SPLASH_FILENAME)):
            if not ref:
                continue
            payload = decode_data_url(ref)
            if payload is None:
                logger.warning("Skipping %s: not an inline image reference", filename)
                result.skipped.append(filename)
                continue
            _add(zf, filename, payload)
            result.entries.append(filename)

    result.data = buf.getvalue()
    logger.info(
        "Built bundle %s (%d entries, %d bytes)",
        result.filename, len(result.entries), len(result.data),
    )
    return result


def write_bundle(result: BundleResult, out_dir: Path) -> Path:
    """Write an assembled archive into a directory.

    Raises:
        BundleError: If the archive name would land outside ``out_dir``.
    """
    target = out_dir / result.filename
    if target.resolve().parent != out_dir.resolve():
        raise BundleError(f"Archive name escapes the output directory: {result.filename}")

    out_dir.mkdir(parents=True, exist_ok=True)
    target.write_bytes(result.data)
    logger.info("Wrote bundle: %s", target)
    return target
