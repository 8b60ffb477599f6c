"""
Kubernetes routes — presence check and cluster bootstrap.

Blueprint: k8s_bp (optional)

Endpoints:
    GET  /kubernetes  — are kubeadm, kubectl and kubelet installed?
    POST /kubernetes  — install and bootstrap a single-node cluster
"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify

from cosi.core.services import k8s_ops
from cosi.core.services.package_ops import UnsupportedOSError
from cosi.ui.web.helpers import read_identity, runner, search_path

logger = logging.getLogger(__name__)

k8s_bp = Blueprint("k8s", __name__)


@k8s_bp.route("/kubernetes", methods=["GET"])
def kubernetes_status():  # type: ignore[no-untyped-def]
    return jsonify(k8s_ops.kubernetes_status(runner(), search_path=search_path()))


@k8s_bp.route("/kubernetes", methods=["POST"])
def kubernetes_bootstrap():  # type: ignore[no-untyped-def]
    """Run the fixed bootstrap sequence; stops at the first failing step."""
    try:
        k8s_ops.ensure_bootstrap_supported(read_identity())
    except OSError as e:
        logger.warning("Cannot read os-release: %s", e)
        return jsonify({"error": "Unable to determine the operating system"}), 500
    except UnsupportedOSError as e:
        return jsonify({"error": str(e)}), 400

    report = k8s_ops.bootstrap_kubernetes(runner())
    result = report.to_dict()

    if not report.ok:
        failed = report.steps[-1]
        return jsonify({
            "error": "Failed to install and bootstrap Kubernetes",
            "details": f"failed to execute: {failed.command}",
            **result,
        }), 500

    return jsonify({
        "message": "Kubernetes successfully installed and bootstrapped",
        **result,
    })
