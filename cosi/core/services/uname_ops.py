"""
Kernel information — a fixed sequence of single-flag ``uname`` queries.
"""

from __future__ import annotations

from cosi.adapters.shell.command import CommandRunner

# Label → uname flag. Bare ``uname`` prints the kernel name.
UNAME_FIELDS: tuple[tuple[str, str | None], ...] = (
    ("kernel_name", None),
    ("nodename", "-n"),
    ("kernel_release", "-r"),
    ("kernel_version", "-v"),
    ("machine", "-m"),
    ("processor", "-p"),
    ("hardware", "-i"),
    ("os", "-o"),
)


def uname_info(runner: CommandRunner) -> dict[str, str]:
    """Run every uname query and return the labeled, trimmed outputs.

    Stops at the first query that fails.

    Raises:
        CommandError: If any query fails.
    """
    info: dict[str, str] = {}
    for label, flag in UNAME_FIELDS:
        argv = ["uname"] if flag is None else ["uname", flag]
        result = runner.run(argv, merge_stderr=False).check()
        info[label] = result.stdout.strip()
    return info
