"""
Shell command runner — execute external programs and capture output.

This is the single place where ``subprocess.run`` is called. Every
service goes through a runner so tests (and ``cosi serve --mock``)
can swap in ``MockRunner`` without touching the host.

Runners NEVER raise for a failing child. Missing binaries, non-zero
exits and timeouts all come back as a failed ``CommandResult``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from collections.abc import Sequence

from cosi.core.models.command import CommandResult

logger = logging.getLogger(__name__)


class CommandRunner:
    """Run commands on the local host.

    Args:
        timeout: Seconds before a child is killed. None (the default)
            waits forever.
    """

    name = "shell"

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    def run(
        self,
        argv: Sequence[str],
        *,
        merge_stderr: bool = True,
    ) -> CommandResult:
        """Execute ``argv`` directly (no shell).

        With ``merge_stderr`` the child's stderr is interleaved into
        ``stdout``; otherwise it is captured separately.
        """
        command = list(argv)
        logger.debug("Executing: %s", " ".join(command))
        start = time.monotonic()

        try:
            proc = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError:
            result = CommandResult.failure(
                command, error=f"Executable not found: {command[0]}",
            )
        except subprocess.TimeoutExpired:
            result = CommandResult.failure(
                command, error=f"Command timed out after {self.timeout}s",
            )
        except OSError as e:
            result = CommandResult.failure(
                command, error=f"Command execution error: {e}",
            )
        else:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            result = CommandResult(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout or "",
                stderr=proc.stderr or "",
                duration_ms=elapsed_ms,
                error=(
                    None if proc.returncode == 0
                    else f"Command exited with code {proc.returncode}"
                ),
            )

        if not result.ok:
            logger.warning("Command failed: %s (%s)", result.command_line, result.error)
        return result

    def run_shell(self, script: str) -> CommandResult:
        """Execute ``script`` through ``bash -c`` with merged output."""
        return self.run(["bash", "-c", script])

    def which(self, name: str, path: str | None = None) -> str | None:
        """Resolve ``name`` on ``path`` (default: the process PATH)."""
        return shutil.which(name, path=path)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} timeout={self.timeout!r}>"
