"""
Service manager status — systemd unit listing as JSON passthrough.

The unit list is whatever systemctl emits with ``--output=json``;
it is parsed only to validate it and handed back verbatim.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from cosi.adapters.shell.command import CommandRunner

logger = logging.getLogger(__name__)


class StatusParseError(ValueError):
    """systemctl produced output that is not valid JSON."""

    def __init__(self, message: str, output: str):
        super().__init__(message)
        self.output = output


def status_command(failed: bool = False) -> list[str]:
    """Build the systemctl query, limited to failed units if asked."""
    argv = ["systemctl", "list-units", "--no-pager", "--output=json"]
    if failed:
        argv.append("--failed")
    return argv


def service_status(runner: CommandRunner, failed: bool = False) -> Any:
    """Query unit status and return systemctl's parsed JSON.

    Raises:
        CommandError: If systemctl could not run or exited non-zero.
        StatusParseError: If its output is not JSON.
    """
    result = runner.run(status_command(failed), merge_stderr=False).check()
    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        logger.warning("systemctl returned non-JSON output: %s", e)
        raise StatusParseError(
            f"Failed to parse JSON output from systemctl: {e}",
            output=result.stdout,
        ) from e
