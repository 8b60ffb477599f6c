"""
OS identification — parse the distribution's os-release file.

The file is a list of ``KEY=VALUE`` lines. Values may be wrapped in
double quotes; no other shell unescaping is done. Comment lines,
blank lines and lines without ``=`` contribute nothing.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = "/etc/os-release"


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release text into a ``{KEY: value}`` mapping."""
    result: dict[str, str] = {}
    for line in text.splitlines():
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            logger.debug("Skipping malformed os-release line: %r", line)
            continue
        result[key.strip()] = value.strip().strip('"')
    return result


def read_os_release(path: str | Path = OS_RELEASE_PATH) -> dict[str, str]:
    """Read and parse an os-release file.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    logger.debug("Reading OS identity from %s", path)
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_os_release(text)
