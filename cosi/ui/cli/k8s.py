"""
CLI commands for Kubernetes.

Thin wrappers over ``cosi.core.services.k8s_ops``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group("k8s")
def k8s() -> None:
    """Kubernetes — tool presence and single-node bootstrap."""


@k8s.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Check that kubeadm, kubectl and kubelet are on PATH."""
    from cosi.core.services.k8s_ops import kubernetes_status

    result = kubernetes_status(ctx.obj["runner"], search_path=ctx.obj["settings"].search_path)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    for name, path in result["tools"].items():
        icon = "✅" if path else "❌"
        click.echo(f"   {icon} {name:<8} {path or 'not found'}")
    if result["installed"]:
        click.secho("☸️  Kubernetes tools installed", fg="green", bold=True)
    else:
        click.secho("⚠️  Kubernetes tools missing", fg="yellow")


@k8s.command()
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bootstrap(ctx: click.Context, yes: bool, as_json: bool) -> None:
    """Install Kubernetes and initialise a single-node cluster."""
    from cosi.core.services.k8s_ops import bootstrap_kubernetes, ensure_bootstrap_supported
    from cosi.core.services.os_release import read_os_release
    from cosi.core.services.package_ops import UnsupportedOSError

    try:
        ensure_bootstrap_supported(read_os_release(ctx.obj["settings"].os_release_path))
    except (OSError, UnsupportedOSError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if not yes:
        click.confirm("This runs kubeadm init on this host. Continue?", abort=True)

    report = bootstrap_kubernetes(ctx.obj["runner"])

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for record in report.steps:
            icon = "✅" if record.ok else "❌"
            click.echo(f"   {icon} {record.name}")

    if not report.ok:
        if not as_json:
            click.secho(f"❌ Bootstrap failed at step {report.failed_step}", fg="red", err=True)
            click.echo(report.steps[-1].output, err=True)
        sys.exit(1)

    if not as_json:
        click.secho("☸️  Kubernetes bootstrapped", fg="green", bold=True)
