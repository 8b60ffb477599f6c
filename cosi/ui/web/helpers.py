"""
Route helpers shared by every blueprint.

Everything a handler needs lives on ``current_app.config``: the
Settings model under ``SETTINGS`` and the command runner under
``RUNNER``. Nothing else is shared between requests.
"""

from __future__ import annotations

import os

import yaml
from flask import current_app, request

from cosi.adapters.shell.command import CommandRunner
from cosi.core.models.settings import Settings
from cosi.core.services.os_release import read_os_release

# Content types accepted as a YAML request body
YAML_MIMETYPES = frozenset({
    "application/yaml",
    "application/x-yaml",
    "text/yaml",
    "text/x-yaml",
})


class BadRequestBody(ValueError):
    """The request body is missing or not a JSON/YAML object."""


def settings() -> Settings:
    return current_app.config["SETTINGS"]


def runner() -> CommandRunner:
    return current_app.config["RUNNER"]


def search_path() -> str:
    """Configured search path, else the server process's PATH."""
    configured = settings().search_path
    if configured is not None:
        return configured
    return os.environ.get("PATH", "")


def read_identity() -> dict[str, str]:
    """Parse the host's os-release file (fresh on every call).

    Raises:
        OSError: If the file cannot be read.
    """
    return read_os_release(settings().os_release_path)


def request_object(allow_yaml: bool = False) -> dict:
    """Decode the request body as a JSON object.

    With ``allow_yaml`` a YAML content type is decoded as YAML instead.

    Raises:
        BadRequestBody: On a missing, malformed or non-object body.
    """
    if allow_yaml and request.mimetype in YAML_MIMETYPES:
        try:
            data = yaml.safe_load(request.get_data(as_text=True))
        except yaml.YAMLError as e:
            raise BadRequestBody(f"Invalid YAML format: {e}") from e
    else:
        data = request.get_json(force=True, silent=True)

    if not isinstance(data, dict):
        raise BadRequestBody("Invalid request format")
    return data
