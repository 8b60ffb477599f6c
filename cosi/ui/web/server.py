"""
HTTP server — Flask app factory.

Creates the Flask application that exposes host inspection and
administration endpoints. Optional endpoint groups are registered
only when enabled in the settings.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify

from cosi.adapters.mock import MockRunner
from cosi.adapters.shell.command import CommandRunner
from cosi.core.models.settings import Settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    runner: CommandRunner | MockRunner | None = None,
    mock_mode: bool = False,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Service settings (default: all defaults).
        runner: Command runner. Defaults to a ``CommandRunner`` using
            the configured timeout, or a ``MockRunner`` in mock mode.
        mock_mode: Never touch the host; every command is simulated.

    Returns:
        Configured Flask application.
    """
    settings = settings or Settings()
    if runner is None:
        runner = MockRunner() if mock_mode else CommandRunner(timeout=settings.command_timeout)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["RUNNER"] = runner
    app.config["MOCK_MODE"] = mock_mode
    app.json.sort_keys = False

    from cosi.ui.web.routes_host import host_bp
    from cosi.ui.web.routes_packages import packages_bp
    from cosi.ui.web.routes_systemctl import systemctl_bp

    app.register_blueprint(host_bp)
    app.register_blueprint(systemctl_bp)
    app.register_blueprint(packages_bp)

    endpoints = settings.endpoints
    if endpoints.package_list:
        from cosi.ui.web.routes_packages import package_list_bp

        app.register_blueprint(package_list_bp)
    if endpoints.binaries:
        from cosi.ui.web.routes_binaries import binaries_bp

        app.register_blueprint(binaries_bp)
    if endpoints.kubernetes:
        from cosi.ui.web.routes_k8s import k8s_bp

        app.register_blueprint(k8s_bp)

    @app.errorhandler(404)
    def _not_found(error):  # type: ignore[no-untyped-def]
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def _method_not_allowed(error):  # type: ignore[no-untyped-def]
        return jsonify({"error": "Method not allowed"}), 405

    logger.info(
        "App created (runner=%s, optional endpoints=%s)",
        getattr(runner, "name", type(runner).__name__),
        endpoints.model_dump(),
    )
    return app


def run_server(
    app: Flask,
    host: str = "0.0.0.0",
    port: int = 80,
    debug: bool = False,
) -> None:
    """Serve the app with werkzeug, one thread per request."""
    logger.info("Starting cosi on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False, threaded=True)
