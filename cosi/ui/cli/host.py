"""
CLI commands for host identification.

Thin wrappers over ``cosi.core.services`` (os_release, uname_ops,
binaries).
"""

from __future__ import annotations

import json
import os
import sys

import click


@click.group()
def host() -> None:
    """Host — OS identity, kernel info, executables on PATH."""


@host.command("os-release")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def os_release(ctx: click.Context, as_json: bool) -> None:
    """Show the parsed os-release file."""
    from cosi.core.services.os_release import read_os_release

    path = ctx.obj["settings"].os_release_path
    try:
        identity = read_os_release(path)
    except OSError as e:
        click.secho(f"❌ Unable to read {path}: {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(identity, indent=2))
        return

    for key, value in identity.items():
        click.echo(f"{key:<20} {value}")


@host.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def uname(ctx: click.Context, as_json: bool) -> None:
    """Show labeled kernel information."""
    from cosi.core.models.command import CommandError
    from cosi.core.services.uname_ops import uname_info

    try:
        info = uname_info(ctx.obj["runner"])
    except CommandError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(info, indent=2))
        return

    for label, value in info.items():
        click.echo(f"{label:<16} {value}")


@host.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def binaries(ctx: click.Context, as_json: bool) -> None:
    """Count executables across the search path."""
    from cosi.core.services.binaries import count_binaries

    settings = ctx.obj["settings"]
    path = settings.search_path if settings.search_path is not None else os.environ.get("PATH", "")
    try:
        result = count_binaries(path)
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.secho(
        f"🔧 {result['binary_count']} executables in {result['directories']} directories",
        fg="cyan",
    )
