"""
Kubernetes operations — presence check and single-node bootstrap.

The bootstrap is a fixed, ordered list of named shell steps for
apt-based hosts: add the upstream package repository, install
kubeadm/kubelet/kubectl, initialise the control plane with kubeadm,
set up a kubeconfig and apply a pod network. It runs to completion or
stops at the first failing step. There is no rollback.
"""

from __future__ import annotations

import logging

from cosi.adapters.shell.command import CommandRunner
from cosi.core.models.bootstrap import BootstrapReport, BootstrapStep, StepRecord
from cosi.core.services.package_ops import UnsupportedOSError, resolve_family

logger = logging.getLogger(__name__)


KUBERNETES_TOOLS = ("kubeadm", "kubectl", "kubelet")

# Minor release channel of the pkgs.k8s.io apt repository
KUBERNETES_CHANNEL = "v1.30"

_KEYRING = "/etc/apt/keyrings/kubernetes-apt-keyring.gpg"
_REPO_URL = f"https://pkgs.k8s.io/core:/stable:/{KUBERNETES_CHANNEL}/deb/"
_FLANNEL_MANIFEST = (
    "https://github.com/flannel-io/flannel/releases/latest/download/kube-flannel.yml"
)

BOOTSTRAP_STEPS: tuple[BootstrapStep, ...] = (
    BootstrapStep(name="apt-update", command="sudo apt-get update"),
    BootstrapStep(
        name="install-prerequisites",
        command="sudo apt-get install -y apt-transport-https ca-certificates curl gpg",
    ),
    BootstrapStep(
        name="add-signing-key",
        command=(
            "sudo mkdir -p -m 755 /etc/apt/keyrings && "
            f"curl -fsSL {_REPO_URL}Release.key | sudo gpg --dearmor --yes -o {_KEYRING}"
        ),
    ),
    BootstrapStep(
        name="add-repository",
        command=(
            f"echo 'deb [signed-by={_KEYRING}] {_REPO_URL} /' | "
            "sudo tee /etc/apt/sources.list.d/kubernetes.list"
        ),
    ),
    BootstrapStep(name="apt-update-kubernetes", command="sudo apt-get update"),
    BootstrapStep(
        name="install-kubernetes",
        command="sudo apt-get install -y kubelet kubeadm kubectl",
    ),
    BootstrapStep(name="disable-swap", command="sudo swapoff -a"),
    BootstrapStep(name="kubeadm-init", command="sudo kubeadm init"),
    BootstrapStep(name="kubeconfig-dir", command="mkdir -p $HOME/.kube"),
    BootstrapStep(
        name="kubeconfig-copy",
        command="sudo cp -f /etc/kubernetes/admin.conf $HOME/.kube/config",
    ),
    BootstrapStep(
        name="kubeconfig-owner",
        command="sudo chown $(id -u):$(id -g) $HOME/.kube/config",
    ),
    BootstrapStep(
        name="pod-network",
        command=f"kubectl apply -f {_FLANNEL_MANIFEST}",
    ),
)


def kubernetes_status(runner: CommandRunner, search_path: str | None = None) -> dict:
    """Check whether kubeadm, kubectl and kubelet are all on the search path.

    Returns::

        {"installed": False,
         "tools": {"kubeadm": "/usr/bin/kubeadm", "kubectl": None, "kubelet": None}}
    """
    tools = {name: runner.which(name, path=search_path) for name in KUBERNETES_TOOLS}
    return {
        "installed": all(tools.values()),
        "tools": tools,
    }


def ensure_bootstrap_supported(identity: dict[str, str]) -> None:
    """Reject hosts outside the apt family; every step uses apt.

    Raises:
        UnsupportedOSError: For unknown or non-apt distributions.
    """
    family = resolve_family(identity)
    if family["name"] != "apt":
        raise UnsupportedOSError(
            "Kubernetes bootstrap supports only apt-based distributions, "
            f"not {identity.get('ID')}"
        )


def bootstrap_kubernetes(
    runner: CommandRunner,
    steps: tuple[BootstrapStep, ...] | list[BootstrapStep] = BOOTSTRAP_STEPS,
) -> BootstrapReport:
    """Run the bootstrap steps in order, stopping at the first failure."""
    report = BootstrapReport()

    for step in steps:
        logger.info("Bootstrap step %s: %s", step.name, step.command)
        result = runner.run_shell(step.command)
        report.steps.append(StepRecord(
            name=step.name,
            command=step.command,
            ok=result.ok,
            output=result.output,
            error=result.error,
        ))
        if not result.ok:
            logger.warning("Bootstrap aborted at step %s: %s", step.name, result.error)
            report.failed_step = step.name
            break

    return report
