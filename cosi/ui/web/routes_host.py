"""
Host identification routes.

Blueprint: host_bp

Endpoints:
    GET /os-release  — parsed os-release mapping
    GET /os          — same, legacy path
    GET /uname       — labeled kernel information
"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify

from cosi.core.models.command import CommandError
from cosi.core.services import uname_ops
from cosi.ui.web.helpers import read_identity, runner

logger = logging.getLogger(__name__)

host_bp = Blueprint("host", __name__)


@host_bp.route("/os-release")
@host_bp.route("/os")
def os_release():  # type: ignore[no-untyped-def]
    """OS identity as a flat ``{KEY: value}`` mapping."""
    try:
        identity = read_identity()
    except OSError as e:
        logger.warning("Cannot read os-release: %s", e)
        return jsonify({"error": "Unable to read /etc/os-release file"}), 500
    return jsonify(identity)


@host_bp.route("/uname")
def uname():  # type: ignore[no-untyped-def]
    """Kernel name, release, version, machine and friends."""
    try:
        info = uname_ops.uname_info(runner())
    except CommandError as e:
        return jsonify({
            "error": "Unable to get uname output",
            "details": str(e),
            "output": e.result.output,
        }), 500
    return jsonify(info)
