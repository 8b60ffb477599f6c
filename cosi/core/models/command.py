"""
Command result model — the runner's output contract.

The runner never raises for a failed child process. It hands back a
``CommandResult`` and callers decide whether a failure is fatal by
calling ``check()``.
"""

from __future__ import annotations

import shlex
from typing import Any

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of a single external process invocation.

    ``returncode`` is None when the process never started (binary
    missing, permission denied, timeout). When stderr was merged into
    stdout, ``stderr`` stays empty.
    """

    command: list[str] = Field(default_factory=list)
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the process started and exited with status 0."""
        return self.error is None and self.returncode == 0

    @property
    def output(self) -> str:
        """Everything the process wrote, stdout first."""
        if self.stderr:
            return self.stdout + self.stderr
        return self.stdout

    @property
    def command_line(self) -> str:
        """The argv rendered as a shell-quoted string, for logs."""
        return shlex.join(self.command)

    @classmethod
    def success(
        cls,
        command: list[str],
        stdout: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a result for a process that exited cleanly."""
        return cls(command=command, returncode=0, stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        command: list[str],
        error: str,
        **kwargs: Any,
    ) -> CommandResult:
        """Create a failed result."""
        return cls(command=command, error=error, **kwargs)

    def check(self) -> CommandResult:
        """Return self, or raise ``CommandError`` if the command failed."""
        if not self.ok:
            raise CommandError(self)
        return self


class CommandError(RuntimeError):
    """An external command failed; carries the result for diagnostics."""

    def __init__(self, result: CommandResult):
        self.result = result
        reason = result.error or f"exit status {result.returncode}"
        super().__init__(f"{result.command_line}: {reason}")
