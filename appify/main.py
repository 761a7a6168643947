"""
Appify — CLI entrypoint.

Usage:
    appify --help
    appify config check
    appify generate preview manifest.json
    appify bundle --out dist/
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from appify import __version__
from appify.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="appify")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to appify.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Appify — turn a web app into standalone app descriptors."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        quiet_third_party=not debug,
    )


@cli.group()
def config() -> None:
    """App configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate appify.yml configuration."""
    from appify.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid and result.config is not None:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   App:         {result.config.name or '(unnamed)'}")
        click.echo(f"   URL:         {result.config.url}")
        perms = ", ".join(p.value for p in result.config.enabled_permissions()) or "none"
        click.echo(f"   Permissions: {perms}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def permissions(as_json: bool) -> None:
    """Show how each permission is declared per platform."""
    from appify.core.services.generators.permissions import permission_table

    rows = permission_table()

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    click.secho("\n🔐 Permission mapping", fg="cyan", bold=True)
    for row in rows:
        click.secho(f"\n   {row['permission']}", fg="white", bold=True)

        android = row["android"]
        if android is None:
            click.echo("     android: (none)")
        else:
            for name in android["permissions"]:
                click.echo(f"     android: {name}")
            for name in android["features"]:
                click.echo(f"     android: feature {name} (optional)")

        ios = row["ios"]
        click.echo(f"     ios:     {ios['key'] if ios else '(none)'}")

    click.echo()


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", "-p", default=8000, type=int, help="Port number.")
@click.pass_context
def web(ctx: click.Context, host: str, port: int) -> None:
    "Start the live preview API."
    from appify.ui.web.server import create_app, run_server

    app = create_app(config_path=ctx.obj.get("config_path"))
    debug = ctx.obj.get("debug", False)

    click.echo()
    click.secho("⚡ Appify — Preview API", bold=True)
    click.echo(f"   Endpoint: http://{host}:{port}/api/generate")
    if debug:
        click.secho("   Logging: DEBUG (all output)", fg="yellow")
    click.echo()

    run_server(app, host=host, port=port, debug=debug)


# ── Register sub-command groups from appify/ui/cli/ ──────────────

from appify.ui.cli.bundle import bundle
from appify.ui.cli.generate import generate

cli.add_command(generate)
cli.add_command(bundle)


if __name__ == "__main__":
    cli()
