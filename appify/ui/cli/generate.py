"""
CLI commands for descriptor generation.

Thin wrappers over ``appify.core.services.descriptor_ops``.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from appify.core.models.config import AppConfig

logger = logging.getLogger(__name__)


def load_app_config(ctx: click.Context) -> AppConfig:
    """Load the configuration for a command, exiting on error."""
    from appify.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@click.group()
def generate() -> None:
    """Generate platform descriptors from appify.yml."""


@generate.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def gen_list(ctx: click.Context, as_json: bool) -> None:
    """List the artifacts that will be generated."""
    from appify.core.services.descriptor_ops import generate_files

    files = generate_files(load_app_config(ctx))

    if as_json:
        click.echo(json.dumps(
            [{"name": f.name, "target": f.target, "format": f.format} for f in files],
            indent=2,
        ))
        return

    click.secho(f"📦 Artifacts ({len(files)}):", fg="cyan", bold=True)
    for f in files:
        click.echo(f"   {f.name:<24} [{f.target}] {f.description}")


@generate.command("preview")
@click.argument("name", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def gen_preview(ctx: click.Context, name: str | None, as_json: bool) -> None:
    """Print one artifact (by filename) or all of them."""
    from appify.core.services.descriptor_ops import generate_files, get_file

    files = generate_files(load_app_config(ctx))

    if name:
        found = get_file(files, name)
        if found is None:
            click.secho(f"❌ Unknown artifact: {name}", fg="red")
            click.echo(f"   Available: {', '.join(f.name for f in files)}")
            sys.exit(1)
        files = [found]

    if as_json:
        click.echo(json.dumps([f.model_dump(mode="json") for f in files], indent=2))
        return

    for f in files:
        click.secho(f"📄 {f.name}", fg="cyan", bold=True, nl=False)
        click.echo(f"  — {f.description}")
        click.echo("─" * 60)
        click.echo(f.content, nl=False)
        click.echo("─" * 60)


@generate.command("write")
@click.argument("out_dir", type=click.Path(file_okay=False))
@click.option("--force", is_flag=True, help="Overwrite existing files.")
@click.pass_context
def gen_write(ctx: click.Context, out_dir: str, force: bool) -> None:
    """Write every artifact into OUT_DIR."""
    from appify.core.services.descriptor_ops import generate_files

    files = generate_files(load_app_config(ctx))
    target_dir = Path(out_dir)

    existing = [f.name for f in files if (target_dir / f.name).exists()]
    if existing and not force:
        click.secho("❌ Files already exist (use --force to replace):", fg="red")
        for name in existing:
            click.echo(f"   • {name}")
        sys.exit(1)

    target_dir.mkdir(parents=True, exist_ok=True)
    for f in files:
        path = target_dir / f.name
        path.write_text(f.content, encoding="utf-8")
        logger.info("Wrote generated file: %s", path)
        click.secho(f"✅ Written: {path}", fg="green")
