"""Adapters — bindings to the commands and files a setup run touches.

Public re-exports for convenient access.
"""

from devsetup.adapters.base import CommandResult, CommandRunner
from devsetup.adapters.mock import MockRunner
from devsetup.adapters.shell.command import SubprocessRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "MockRunner",
    "SubprocessRunner",
]
