"""
Executable inventory route.

Blueprint: binaries_bp (optional)

Endpoints:
    GET /binaries  — count of executables across the search path
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from cosi.core.services.binaries import count_binaries
from cosi.ui.web.helpers import search_path

binaries_bp = Blueprint("binaries", __name__)


@binaries_bp.route("/binaries")
def binaries():  # type: ignore[no-untyped-def]
    try:
        return jsonify(count_binaries(search_path()))
    except ValueError as e:
        return jsonify({"error": str(e)}), 500
