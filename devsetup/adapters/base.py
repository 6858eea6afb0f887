"""
Adapter base — the contract between the engine and external commands.

Everything the setup tool learns from or does to the machine goes
through a ``CommandRunner``. The real runner shells out; the mock
runner replays scripted responses so the whole engine can be exercised
without touching the host.
"""

from __future__ import annotations

import shlex
import shutil
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of one command. Runners never raise; failures live here."""

    argv: list[str] = Field(default_factory=list)
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def display(self) -> str:
        return shlex.join(self.argv)

    @classmethod
    def synthetic(cls, argv: Sequence[str]) -> CommandResult:
        """A success that was reported but never executed (dry run)."""
        return cls(argv=list(argv), returncode=0, dry_run=True)

    @classmethod
    def failure(cls, argv: Sequence[str], error: str, returncode: int = 1) -> CommandResult:
        return cls(argv=list(argv), returncode=returncode, stderr=error)


class CommandRunner(ABC):
    """Abstract command-execution capability.

    Implementations MUST NOT raise for a failing or missing command;
    they return a non-zero ``CommandResult`` instead.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Runner identifier (e.g. 'subprocess', 'mock')."""

    @abstractmethod
    def run(
        self,
        argv: Sequence[str],
        *,
        input: str | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        """Run ``argv`` and return its result.

        Args:
            argv: Command and arguments. Never passed through a shell.
            input: Optional text piped to stdin.
            env: Extra environment variables layered over the process env.
            capture: Capture stdout/stderr. When False, output streams to
                the terminal and the result carries only the exit status.
        """

    def which(self, binary: str) -> str | None:
        """Locate ``binary`` on the executable search path."""
        return shutil.which(binary)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
