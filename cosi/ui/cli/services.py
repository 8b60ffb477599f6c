"""
CLI commands for the service manager.

Thin wrappers over ``cosi.core.services.systemctl_ops``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def services() -> None:
    """Services — systemd unit status."""


@services.command()
@click.option("--failed", is_flag=True, help="Only list failed units.")
@click.pass_context
def status(ctx: click.Context, failed: bool) -> None:
    """Print systemctl's unit listing as JSON."""
    from cosi.core.models.command import CommandError
    from cosi.core.services.systemctl_ops import StatusParseError, service_status

    try:
        units = service_status(ctx.obj["runner"], failed=failed)
    except (CommandError, StatusParseError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(json.dumps(units, indent=2))
