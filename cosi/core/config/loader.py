"""
Configuration loader — reads cosi.yml into a Settings model.

Lookup order for the file: explicit path, ``./cosi.yml``, then
``/etc/cosi/cosi.yml``. No file at all is fine; defaults apply.
Environment variables override whatever the file says.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from cosi.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "cosi.yml"
SYSTEM_CONFIG_DIR = Path("/etc/cosi")

# Environment variable → settings field
_ENV_OVERRIDES = {
    "COSI_HOST": "host",
    "COSI_PORT": "port",
    "COSI_OS_RELEASE": "os_release_path",
    "COSI_SEARCH_PATH": "search_path",
    "COSI_COMMAND_TIMEOUT": "command_timeout",
}


class ConfigError(Exception):
    """Raised when the configuration file or overrides are invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the first existing config file, or None.

    Args:
        start_dir: Directory checked before the system location
            (default: cwd).
    """
    for candidate in (
        (start_dir or Path.cwd()) / CONFIG_FILE,
        SYSTEM_CONFIG_DIR / CONFIG_FILE,
    ):
        if candidate.is_file():
            return candidate
    return None


def load_settings(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit config file. If None, ``find_config_file()``.
        env: Environment to read overrides from (default: os.environ).

    Raises:
        ConfigError: If the file is unreadable, not a YAML mapping,
            or fails validation.
    """
    env = os.environ if env is None else env

    if path is None:
        path = find_config_file()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    data: dict = {}
    if path is not None:
        logger.debug("Loading settings from %s", path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Expected a YAML mapping in {path}, got {type(loaded).__name__}"
            )
        data = loaded

    # PORT is what the deploy scripts have always set
    if "COSI_PORT" not in env and env.get("PORT"):
        data["port"] = env["PORT"]

    for var, field in _ENV_OVERRIDES.items():
        if env.get(var):
            data[field] = env[var]

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info("Settings loaded (listen=%s:%d)", settings.host, settings.port)
    return settings
