"""
Executable inventory — count binaries across a search path.
"""

from __future__ import annotations

import logging
import os
import stat

logger = logging.getLogger(__name__)


def _is_executable(path: str) -> bool:
    """Any of the user/group/other execute bits set (symlinks followed)."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def count_binaries(search_path: str) -> dict:
    """Count executable non-directory entries in every search path dir.

    Unreadable or missing directories are skipped. A directory listed
    twice is counted twice.

    Raises:
        ValueError: If ``search_path`` is empty.
    """
    if not search_path:
        raise ValueError("$PATH environment variable is empty")

    dirs = search_path.split(os.pathsep)
    count = 0
    scanned = 0
    for directory in dirs:
        try:
            entries = list(os.scandir(directory))
        except OSError:
            logger.debug("Skipping unreadable directory: %r", directory)
            continue
        scanned += 1
        for entry in entries:
            try:
                # Only real directories; a link to one is judged by its target's mode
                if entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            if _is_executable(entry.path):
                count += 1

    return {"binary_count": count, "directories": scanned}
