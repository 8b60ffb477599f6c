"""Adapters — bindings to the host's external programs.

Public re-exports for convenient access.
"""

from cosi.adapters.mock import MockRunner
from cosi.adapters.shell.command import CommandRunner

__all__ = [
    "CommandRunner",
    "MockRunner",
]
