"""
Logging configuration — one setup call for the CLI and the server.

Every module does ``logger = logging.getLogger(__name__)`` and
inherits what is configured here.

Levels are resolved in precedence order:
    --debug  >  --verbose  >  --quiet  >  COSI_LOG_LEVEL  >  WARNING

COSI_LOG_FILE adds a file sink; COSI_LOG_FILE_LEVEL gives it its own
level. werkzeug's per-request lines are kept at WARNING unless the
console is at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

# Console formats, by level
_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_MINIMAL = "%(levelname)s: %(message)s"

# File output, always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_NOISY_LOGGERS = ("werkzeug", "urllib3")


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return (env or {}).get("COSI_LOG_LEVEL", "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Safe to call more than once; previous handlers are replaced.
    """
    console_level = _parse_level(level)
    fmt, datefmt = _FORMATS.get(console_level, (_FMT_MINIMAL, None))
    if console_level < logging.DEBUG:
        fmt, datefmt = _FORMATS[logging.DEBUG]

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.NOTSET if console_level <= logging.DEBUG else logging.WARNING
        )

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
