"""
System package management — distribution-aware install/remove/list.

Maps the os-release ``ID`` to a package manager family and builds the
matching commands. Unknown distributions are rejected up front; we
never guess a package manager.
"""

from __future__ import annotations

import logging

from cosi.adapters.shell.command import CommandRunner
from cosi.core.models.packages import PackageLists

logger = logging.getLogger(__name__)


# ── Package manager families ────────────────────────────────────


_PACKAGE_FAMILIES: dict[str, dict] = {
    "apt": {
        "name": "apt",
        "distros": ["ubuntu", "debian"],
        "install": ["apt-get", "install", "-y"],
        "uninstall": ["apt-get", "remove", "-y"],
        "list": ["dpkg-query", "-W", "-f=${binary:Package}\n"],
    },
    "dnf": {
        "name": "dnf",
        "distros": ["fedora", "centos", "rhel"],
        "install": ["dnf", "install", "-y"],
        "uninstall": ["dnf", "remove", "-y"],
        "list": ["rpm", "-qa", "--queryformat", "%{NAME}\n"],
    },
}

_DISTRO_FAMILY: dict[str, str] = {
    distro: family_id
    for family_id, family in _PACKAGE_FAMILIES.items()
    for distro in family["distros"]
}


class UnsupportedOSError(ValueError):
    """The host's distribution has no known package manager family."""


def resolve_family(identity: dict[str, str]) -> dict:
    """Pick the package manager family for an OS identity.

    Raises:
        UnsupportedOSError: If ``ID`` is missing or not a known distro.
    """
    distro = identity.get("ID", "")
    family_id = _DISTRO_FAMILY.get(distro)
    if family_id is None:
        raise UnsupportedOSError(
            f"Unsupported operating system: {distro or 'unknown'}"
        )
    return _PACKAGE_FAMILIES[family_id]


def plan_package_commands(
    identity: dict[str, str],
    packages: PackageLists,
) -> list[tuple[str, list[str]]]:
    """Build the ordered ``(step, argv)`` list for a package request.

    One ``install`` step if anything is to be installed, then one
    ``uninstall`` step if anything is to be removed.

    Raises:
        UnsupportedOSError: See ``resolve_family``.
    """
    family = resolve_family(identity)
    plan: list[tuple[str, list[str]]] = []
    if packages.installed:
        plan.append(("install", [*family["install"], *packages.installed]))
    if packages.uninstalled:
        plan.append(("uninstall", [*family["uninstall"], *packages.uninstalled]))
    return plan


def apply_packages(
    identity: dict[str, str],
    packages: PackageLists,
    runner: CommandRunner,
) -> dict:
    """Install, then uninstall, the requested packages.

    Stops at the first failing step; later steps are not attempted.

    Returns::

        {"ok": True, "install_output": "...", "uninstall_output": "..."}

    or on failure::

        {"ok": False, "step": "install", "error": "...", "output": "...",
         "install_output": "...", "uninstall_output": ""}

    Raises:
        UnsupportedOSError: Before anything runs, for unknown distros.
    """
    plan = plan_package_commands(identity, packages)
    outputs = {"install": "", "uninstall": ""}

    for step, argv in plan:
        logger.info("Package %s: %s", step, " ".join(argv))
        result = runner.run(argv)
        outputs[step] = result.output
        if not result.ok:
            return {
                "ok": False,
                "step": step,
                "error": f"Failed to {step} packages: {result.error}",
                "output": result.output,
                "install_output": outputs["install"],
                "uninstall_output": outputs["uninstall"],
            }

    return {
        "ok": True,
        "install_output": outputs["install"],
        "uninstall_output": outputs["uninstall"],
    }


def list_installed(identity: dict[str, str], runner: CommandRunner) -> dict:
    """List installed package names.

    Returns ``{"ok": True, "installed_packages": [...]}`` or a failure
    dict carrying the captured output.

    Raises:
        UnsupportedOSError: For unknown distros.
    """
    family = resolve_family(identity)
    result = runner.run(family["list"], merge_stderr=False)
    if not result.ok:
        return {
            "ok": False,
            "error": "Failed to get installed packages",
            "output": result.output or (result.error or ""),
        }

    names = [line.strip() for line in result.stdout.splitlines() if line.strip()]
    return {"ok": True, "manager": family["name"], "installed_packages": names}
