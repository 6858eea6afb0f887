"""
Git config store — global ``git config`` reads and writes.

Uses the git CLI. Reads are direct probes; writes go through the
executor so dry runs leave ``~/.gitconfig`` untouched.
"""

from __future__ import annotations

import logging

from devsetup.adapters.base import CommandResult, CommandRunner
from devsetup.core.engine.executor import CommandExecutor

logger = logging.getLogger(__name__)


class GitConfigStore:
    """Version-control configuration store backed by ``git config --global``."""

    def __init__(self, runner: CommandRunner, executor: CommandExecutor, git: str = "git"):
        self._runner = runner
        self._executor = executor
        self._git = git

    def get_global(self, key: str) -> str | None:
        """Current global value of ``key``, or None if unset."""
        result = self._runner.run([self._git, "config", "--global", "--get", key])
        if not result.ok:
            return None
        value = result.stdout.strip()
        return value or None

    def set_global(self, key: str, value: str) -> CommandResult:
        result = self._executor.execute(
            [self._git, "config", "--global", key, value],
            capture=True,
        )
        if not result.ok:
            logger.warning("git config %s failed: %s", key, result.stderr)
        return result
