"""
cosi — CLI entrypoint.

Usage:
    cosi --help
    cosi serve --port 8080
    cosi host os-release
    cosi packages apply --install curl --uninstall nano
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from cosi import __version__
from cosi.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="cosi")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to cosi.yml (default: ./cosi.yml, then /etc/cosi/cosi.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """cosi — inspect and administer this host over HTTP."""
    from cosi.adapters.shell.command import CommandRunner
    from cosi.core.config.loader import ConfigError, load_settings

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet, env=os.environ),
        log_file=os.environ.get("COSI_LOG_FILE"),
        log_file_level=os.environ.get("COSI_LOG_FILE_LEVEL"),
    )

    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    ctx.obj["settings"] = settings
    # Tests inject a MockRunner through obj
    ctx.obj.setdefault("runner", CommandRunner(timeout=settings.command_timeout))


@cli.command()
@click.option("--host", default=None, help="Bind address (default: from settings).")
@click.option("--port", "-p", default=None, type=int, help="Port number (default: from settings).")
@click.option("--mock", is_flag=True, help="Simulate every command (no host changes).")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, mock: bool) -> None:
    """Run the HTTP service."""
    from cosi.ui.web.server import create_app, run_server

    settings = ctx.obj["settings"]
    host = host or settings.host
    port = port or settings.port

    app = create_app(settings=settings, mock_mode=mock)

    click.echo()
    click.secho("⚡ cosi — host API", bold=True)
    click.echo(f"   Listening: http://{host}:{port}")
    click.echo(f"   OS file:   {settings.os_release_path}")
    if mock:
        click.secho("   Mode: mock (no real execution)", fg="yellow")
    click.echo()

    run_server(app, host=host, port=port, debug=ctx.obj.get("debug", False))


# ── Register sub-command groups from cosi/ui/cli/ ─────────────────

from cosi.ui.cli.host import host
from cosi.ui.cli.k8s import k8s
from cosi.ui.cli.packages import packages
from cosi.ui.cli.services import services

cli.add_command(host)
cli.add_command(services)
cli.add_command(packages)
cli.add_command(k8s)


if __name__ == "__main__":
    cli()
