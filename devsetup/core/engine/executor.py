"""
Execution wrapper — the sole mutation boundary.

Every side effect of a setup run (package installs, ``git config``
writes, file creation, ``chmod``) passes through ``CommandExecutor``.
In dry-run mode the wrapper reports what would happen and returns a
synthetic success; in live mode it performs the action and returns the
real status. Read-only probes bypass it and talk to the runner directly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from devsetup.adapters.base import CommandResult, CommandRunner
from devsetup.core.config.settings import RunConfig
from devsetup.core.services.reporter import Reporter

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Dry-run aware wrapper around a ``CommandRunner``."""

    def __init__(self, config: RunConfig, runner: CommandRunner, reporter: Reporter):
        self._config = config
        self._runner = runner
        self._reporter = reporter
        self.planned: list[str] = []   # every mutation requested, in order

    @property
    def dry_run(self) -> bool:
        return self._config.dry_run

    def execute(
        self,
        argv: Sequence[str],
        *,
        input: str | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run a mutating command, or report it in dry-run mode."""
        cmd = list(argv)
        result = CommandResult.synthetic(cmd)
        self.planned.append(result.display)

        if self.dry_run:
            self._reporter.dry_run(result.display)
            return result

        result = self._runner.run(cmd, input=input, env=env, capture=capture)
        if not result.ok:
            logger.info("Command failed (exit %d): %s", result.returncode, result.display)
        return result

    def apply(self, description: str, action: Callable[[], object]) -> CommandResult:
        """Perform an in-process mutation, or report it in dry-run mode.

        ``OSError`` from the action is converted into a failed result.
        """
        self.planned.append(description)

        if self.dry_run:
            self._reporter.dry_run(description)
            return CommandResult(argv=[], dry_run=True)

        try:
            action()
        except OSError as e:
            logger.warning("%s failed: %s", description, e)
            return CommandResult.failure([], f"{description}: {e}")
        logger.debug("Applied: %s", description)
        return CommandResult(argv=[])
