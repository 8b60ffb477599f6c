"""
Mock runner — test double for every command invocation.

Used by the test suite and by ``cosi serve --mock`` to exercise the
API without touching the host. Returns success for everything unless
told otherwise, and records every argv it was asked to run.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from cosi.core.models.command import CommandResult


class MockRunner:
    """Drop-in replacement for ``CommandRunner``.

    Responses are keyed by argv prefix; the longest matching prefix
    wins, so ``("uname",)`` can be overridden for ``("uname", "-n")``
    alone.
    """

    name = "mock"

    def __init__(
        self,
        default_output: str = "[mock] executed\n",
        available: Iterable[str] = (),
    ):
        self._default_output = default_output
        self._available = set(available)
        self._responses: dict[tuple[str, ...], CommandResult] = {}
        self._call_log: list[list[str]] = []

    @property
    def call_log(self) -> list[list[str]]:
        """Every argv this mock has been asked to run, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_response(
        self,
        prefix: Sequence[str],
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Answer commands starting with ``prefix`` with a success."""
        self._responses[tuple(prefix)] = CommandResult.success(
            list(prefix), stdout=stdout, stderr=stderr,
        )

    def set_failure(
        self,
        prefix: Sequence[str],
        error: str = "Mock failure",
        output: str = "",
        returncode: int | None = 1,
    ) -> None:
        """Make commands starting with ``prefix`` fail."""
        self._responses[tuple(prefix)] = CommandResult.failure(
            list(prefix), error=error, stdout=output, returncode=returncode,
        )

    def set_available(self, *names: str) -> None:
        """Make ``which()`` resolve the given program names."""
        self._available.update(names)

    def run(
        self,
        argv: Sequence[str],
        *,
        merge_stderr: bool = True,
    ) -> CommandResult:
        command = list(argv)
        self._call_log.append(command)

        match: tuple[str, ...] | None = None
        for prefix in self._responses:
            if tuple(command[: len(prefix)]) == prefix:
                if match is None or len(prefix) > len(match):
                    match = prefix

        if match is None:
            return CommandResult.success(command, stdout=self._default_output)

        canned = self._responses[match]
        stdout, stderr = canned.stdout, canned.stderr
        if merge_stderr and stderr:
            stdout, stderr = stdout + stderr, ""
        return canned.model_copy(
            update={"command": command, "stdout": stdout, "stderr": stderr},
        )

    def run_shell(self, script: str) -> CommandResult:
        return self.run(["bash", "-c", script])

    def which(self, name: str, path: str | None = None) -> str | None:
        if name in self._available:
            return f"/usr/bin/{name}"
        return None

    def reset(self) -> None:
        """Clear call log and canned responses."""
        self._call_log.clear()
        self._responses.clear()
