"""
Service manager routes.

Blueprint: systemctl_bp

Endpoints:
    POST /systemctl/status  — {"failed": bool} → systemctl JSON, verbatim
"""

from __future__ import annotations

from flask import Blueprint, jsonify
from pydantic import ValidationError

from cosi.core.models.command import CommandError
from cosi.core.models.packages import ServiceStatusQuery
from cosi.core.services import systemctl_ops
from cosi.ui.web.helpers import BadRequestBody, request_object, runner

systemctl_bp = Blueprint("systemctl", __name__)


@systemctl_bp.route("/systemctl/status", methods=["POST"])
def systemctl_status():  # type: ignore[no-untyped-def]
    """Unit status, optionally failed units only."""
    try:
        query = ServiceStatusQuery.model_validate(request_object())
    except (BadRequestBody, ValidationError):
        return jsonify({"error": "Invalid request format"}), 400

    try:
        units = systemctl_ops.service_status(runner(), failed=query.failed)
    except CommandError as e:
        return jsonify({
            "error": "Failed to execute systemctl command",
            "details": str(e),
            "output": e.result.output,
        }), 500
    except systemctl_ops.StatusParseError as e:
        return jsonify({"error": str(e), "output": e.output}), 500

    return jsonify(units)
