"""
CLI commands for system packages.

Thin wrappers over ``cosi.core.services.package_ops``.
"""

from __future__ import annotations

import json
import sys

import click


def _identity(ctx: click.Context) -> dict[str, str]:
    """Read the OS identity or exit with an error."""
    from cosi.core.services.os_release import read_os_release

    try:
        return read_os_release(ctx.obj["settings"].os_release_path)
    except OSError as e:
        click.secho(f"❌ Unable to determine the operating system: {e}", fg="red", err=True)
        sys.exit(1)


@click.group()
def packages() -> None:
    """Packages — list, install and remove system packages."""


# ── Observe ─────────────────────────────────────────────────────


@packages.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_packages(ctx: click.Context, as_json: bool) -> None:
    """List installed package names."""
    from cosi.core.services.package_ops import UnsupportedOSError, list_installed

    try:
        result = list_installed(_identity(ctx), ctx.obj["runner"])
    except UnsupportedOSError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        if not result["ok"]:
            sys.exit(1)
        return

    if not result["ok"]:
        click.secho(f"❌ {result['error']}", fg="red", err=True)
        click.echo(result.get("output", ""), err=True)
        sys.exit(1)

    names = result["installed_packages"]
    click.secho(f"📦 Installed ({len(names)}, {result['manager']}):", fg="cyan", bold=True)
    for name in names:
        click.echo(f"   {name}")


# ── Act ─────────────────────────────────────────────────────────


@packages.command()
@click.option("--install", "-i", "to_install", multiple=True, help="Package to install (repeatable).")
@click.option("--uninstall", "-u", "to_uninstall", multiple=True, help="Package to remove (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def apply(
    ctx: click.Context,
    to_install: tuple[str, ...],
    to_uninstall: tuple[str, ...],
    as_json: bool,
) -> None:
    """Install, then remove, system packages.

    Examples:

        cosi packages apply -i curl -i jq -u nano
    """
    from pydantic import ValidationError

    from cosi.core.models.packages import PackageLists
    from cosi.core.services.package_ops import UnsupportedOSError, apply_packages

    try:
        lists = PackageLists(installed=list(to_install), uninstalled=list(to_uninstall))
    except ValidationError as e:
        click.secho(f"❌ Invalid package list: {e}", fg="red", err=True)
        sys.exit(1)

    if lists.empty:
        click.secho("⚠️  Nothing to do (use --install / --uninstall)", fg="yellow")
        return

    try:
        result = apply_packages(_identity(ctx), lists, ctx.obj["runner"])
    except UnsupportedOSError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result, indent=2))
    else:
        for step in ("install", "uninstall"):
            if result.get(f"{step}_output"):
                click.secho(f"── {step} ──", fg="cyan")
                click.echo(result[f"{step}_output"])

    if not result["ok"]:
        if not as_json:
            click.secho(f"❌ {result['error']}", fg="red", err=True)
        sys.exit(1)

    if not as_json:
        click.secho("✅ Packages applied", fg="green", bold=True)
