"""
Tests for host inspection services — uname, systemctl, binaries, k8s.

Commands go through MockRunner; the binary scan works on tmp_path.
"""

import os
from pathlib import Path

import pytest

from cosi.adapters.mock import MockRunner
from cosi.core.models.bootstrap import BootstrapStep
from cosi.core.models.command import CommandError
from cosi.core.services.binaries import count_binaries
from cosi.core.services.k8s_ops import (
    BOOTSTRAP_STEPS,
    KUBERNETES_TOOLS,
    bootstrap_kubernetes,
    ensure_bootstrap_supported,
    kubernetes_status,
)
from cosi.core.services.package_ops import UnsupportedOSError
from cosi.core.services.systemctl_ops import (
    StatusParseError,
    service_status,
    status_command,
)
from cosi.core.services.uname_ops import UNAME_FIELDS, uname_info


# ═══════════════════════════════════════════════════════════════════
#  uname
# ═══════════════════════════════════════════════════════════════════


class TestUname:
    def test_labels_and_flags(self):
        mock = MockRunner()
        mock.set_response(["uname"], stdout="Linux\n")
        mock.set_response(["uname", "-n"], stdout="web-01\n")
        mock.set_response(["uname", "-m"], stdout="x86_64\n")

        info = uname_info(mock)

        assert list(info) == [label for label, _ in UNAME_FIELDS]
        assert info["kernel_name"] == "Linux"
        assert info["nodename"] == "web-01"
        assert info["machine"] == "x86_64"
        assert mock.call_log[0] == ["uname"]
        assert ["uname", "-o"] in mock.call_log

    def test_stops_at_first_failure(self):
        mock = MockRunner()
        mock.set_failure(["uname", "-r"], error="boom")
        with pytest.raises(CommandError):
            uname_info(mock)
        assert mock.call_log == [["uname"], ["uname", "-n"], ["uname", "-r"]]


# ═══════════════════════════════════════════════════════════════════
#  systemctl
# ═══════════════════════════════════════════════════════════════════


class TestServiceStatus:
    def test_failed_selector_included(self):
        assert "--failed" in status_command(failed=True)

    def test_failed_selector_absent(self):
        assert "--failed" not in status_command(failed=False)

    def test_json_passthrough(self):
        units = [{"unit": "ssh.service", "load": "loaded", "active": "active", "sub": "running"}]
        mock = MockRunner()
        mock.set_response(["systemctl"], stdout='[{"unit":"ssh.service","load":"loaded",'
                                                '"active":"active","sub":"running"}]')
        assert service_status(mock) == units

    def test_stderr_not_mixed_into_json(self):
        mock = MockRunner()
        mock.set_response(["systemctl"], stdout="[]", stderr="warning: something\n")
        assert service_status(mock, failed=True) == []
        assert mock.call_log[0][-1] == "--failed"

    def test_command_failure(self):
        mock = MockRunner()
        mock.set_failure(["systemctl"], error="Executable not found: systemctl", returncode=None)
        with pytest.raises(CommandError):
            service_status(mock)

    def test_non_json_output(self):
        mock = MockRunner()
        mock.set_response(["systemctl"], stdout="● ssh.service - OpenBSD Secure Shell server\n")
        with pytest.raises(StatusParseError) as exc:
            service_status(mock)
        assert "ssh.service" in exc.value.output


# ═══════════════════════════════════════════════════════════════════
#  binaries
# ═══════════════════════════════════════════════════════════════════


def _touch(path: Path, mode: int) -> None:
    path.write_text("#!/bin/sh\n")
    path.chmod(mode)


class TestCountBinaries:
    def test_counts_only_executable_files(self, tmp_path: Path):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        _touch(bin_dir / "tool", 0o755)
        _touch(bin_dir / "group-only", 0o610)
        _touch(bin_dir / "data", 0o644)
        (bin_dir / "subdir").mkdir()

        result = count_binaries(str(bin_dir))
        assert result == {"binary_count": 2, "directories": 1}

    def test_multiple_dirs_and_missing_dir(self, tmp_path: Path):
        a, b = tmp_path / "a", tmp_path / "b"
        a.mkdir()
        b.mkdir()
        _touch(a / "x", 0o755)
        _touch(b / "y", 0o755)
        search = os.pathsep.join([str(a), str(tmp_path / "missing"), str(b)])

        result = count_binaries(search)
        assert result["binary_count"] == 2
        assert result["directories"] == 2

    def test_symlink_follows_target(self, tmp_path: Path):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        _touch(tmp_path / "real", 0o755)
        (bin_dir / "link").symlink_to(tmp_path / "real")
        (bin_dir / "dangling").symlink_to(tmp_path / "gone")
        assert count_binaries(str(bin_dir))["binary_count"] == 1

    def test_symlink_to_directory_counts(self, tmp_path: Path):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        target = tmp_path / "target"
        target.mkdir()
        target.chmod(0o755)
        (bin_dir / "dirlink").symlink_to(target)
        assert count_binaries(str(bin_dir))["binary_count"] == 1

    def test_empty_search_path(self):
        with pytest.raises(ValueError, match="PATH"):
            count_binaries("")


# ═══════════════════════════════════════════════════════════════════
#  Kubernetes
# ═══════════════════════════════════════════════════════════════════


class TestKubernetesStatus:
    def test_all_tools_present(self):
        mock = MockRunner(available=KUBERNETES_TOOLS)
        result = kubernetes_status(mock)
        assert result["installed"] is True
        assert set(result["tools"]) == {"kubeadm", "kubectl", "kubelet"}

    def test_one_missing(self):
        mock = MockRunner(available=["kubeadm", "kubectl"])
        result = kubernetes_status(mock)
        assert result["installed"] is False
        assert result["tools"]["kubelet"] is None

    def test_no_process_spawned(self):
        mock = MockRunner()
        kubernetes_status(mock)
        assert mock.call_count == 0


class TestBootstrap:
    def test_runs_every_step_in_order(self):
        mock = MockRunner(default_output="ok\n")
        report = bootstrap_kubernetes(mock)

        assert report.ok
        assert [r.name for r in report.steps] == [s.name for s in BOOTSTRAP_STEPS]
        assert mock.call_log == [["bash", "-c", s.command] for s in BOOTSTRAP_STEPS]
        assert report.output == "ok\n" * len(BOOTSTRAP_STEPS)

    def test_first_failure_aborts(self):
        steps = [
            BootstrapStep(name="one", command="echo one"),
            BootstrapStep(name="two", command="exit 1"),
            BootstrapStep(name="three", command="echo three"),
        ]
        mock = MockRunner()
        mock.set_response(["bash", "-c", "echo one"], stdout="one\n")
        mock.set_failure(["bash", "-c", "exit 1"], output="nope\n")

        report = bootstrap_kubernetes(mock, steps)

        assert not report.ok
        assert report.failed_step == "two"
        assert [r.name for r in report.steps] == ["one", "two"]
        assert report.output == "one\nnope\n"
        assert mock.call_count == 2

    def test_report_dict(self):
        mock = MockRunner()
        mock.set_failure(["bash", "-c", BOOTSTRAP_STEPS[0].command])
        data = bootstrap_kubernetes(mock).to_dict()
        assert data["ok"] is False
        assert data["failed_step"] == BOOTSTRAP_STEPS[0].name
        assert data["steps"][0]["ok"] is False

    def test_step_names_unique(self):
        names = [s.name for s in BOOTSTRAP_STEPS]
        assert len(names) == len(set(names))

    def test_kubeadm_init_before_pod_network(self):
        names = [s.name for s in BOOTSTRAP_STEPS]
        assert names.index("kubeadm-init") < names.index("pod-network")

    def test_supported_only_on_apt_family(self):
        ensure_bootstrap_supported({"ID": "ubuntu"})
        with pytest.raises(UnsupportedOSError):
            ensure_bootstrap_supported({"ID": "fedora"})
        with pytest.raises(UnsupportedOSError):
            ensure_bootstrap_supported({"ID": "arch"})
