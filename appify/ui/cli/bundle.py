"""
CLI command for bundle assembly.

Thin wrapper over ``appify.core.services.bundle``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from appify.ui.cli.generate import load_app_config


@click.command()
@click.option(
    "--out", "-o", "out_dir",
    type=click.Path(file_okay=False),
    default=".",
    help="Directory to write the archive into.",
)
@click.option(
    "--readme",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="README.md to include.",
)
@click.option(
    "--privacy",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Privacy policy to include as PRIVACY.md.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bundle(
    ctx: click.Context,
    out_dir: str,
    readme: str | None,
    privacy: str | None,
    as_json: bool,
) -> None:
    """Build the downloadable app bundle (zip)."""
    from appify.core.services.bundle import BundleError, build_bundle, write_bundle
    from appify.core.services.documents import PRIVACY_FILENAME, README_FILENAME, as_document

    config = load_app_config(ctx)

    documents = []
    if readme:
        documents.append(as_document(README_FILENAME, Path(readme).read_text(encoding="utf-8")))
    if privacy:
        documents.append(as_document(PRIVACY_FILENAME, Path(privacy).read_text(encoding="utf-8")))

    try:
        result = build_bundle(config, documents)
        path = write_bundle(result, Path(out_dir))
    except BundleError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({**result.to_dict(), "path": str(path)}, indent=2))
        return

    click.secho(f"📦 Bundle: {path}", fg="green", bold=True)
    for name in result.entries:
        click.echo(f"   • {name}")
    for name in result.skipped:
        click.secho(f"   ⊘ {name} (remote reference, not embedded)", fg="yellow")
