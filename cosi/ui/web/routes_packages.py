"""
System package routes — install, remove and list OS packages.

Blueprints: packages_bp, package_list_bp (optional)

Thin HTTP wrappers over ``cosi.core.services.package_ops``.

Endpoints:
    POST /packages  — {"packages": {"installed": [...], "uninstalled": [...]}}
                      as JSON, or the same document as YAML
    GET  /packages  — installed package names
"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify
from pydantic import ValidationError

from cosi.core.models.packages import PackageRequest
from cosi.core.services import package_ops
from cosi.ui.web.helpers import BadRequestBody, read_identity, request_object, runner

logger = logging.getLogger(__name__)

packages_bp = Blueprint("packages", __name__)
package_list_bp = Blueprint("package_list", __name__)


# ── Act ─────────────────────────────────────────────────────────────


@packages_bp.route("/packages", methods=["POST"])
def packages_apply():  # type: ignore[no-untyped-def]
    """Install, then uninstall, the requested packages."""
    try:
        body = PackageRequest.model_validate(request_object(allow_yaml=True))
    except BadRequestBody as e:
        return jsonify({"error": str(e)}), 400
    except ValidationError as e:
        return jsonify({
            "error": "Invalid package request",
            "details": e.errors(
                include_url=False, include_context=False, include_input=False,
            ),
        }), 400

    try:
        identity = read_identity()
    except OSError as e:
        logger.warning("Cannot read os-release: %s", e)
        return jsonify({"error": "Unable to determine the operating system"}), 500

    try:
        result = package_ops.apply_packages(identity, body.packages, runner())
    except package_ops.UnsupportedOSError as e:
        return jsonify({"error": str(e)}), 400

    if not result["ok"]:
        return jsonify(result), 500
    return jsonify(result)


# ── Observe ─────────────────────────────────────────────────────────


@package_list_bp.route("/packages", methods=["GET"])
def packages_list():  # type: ignore[no-untyped-def]
    """Names of every installed package."""
    try:
        identity = read_identity()
    except OSError as e:
        logger.warning("Cannot read os-release: %s", e)
        return jsonify({"error": "Unable to determine the operating system"}), 500

    try:
        result = package_ops.list_installed(identity, runner())
    except package_ops.UnsupportedOSError as e:
        return jsonify({"error": str(e)}), 400

    if not result["ok"]:
        return jsonify(result), 500
    return jsonify(result)
