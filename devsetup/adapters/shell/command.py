"""
Subprocess runner — the only place ``subprocess.run`` is called.

No timeouts: package installs and interactive installers (sudo prompts,
``gh auth login``) can legitimately take as long as they take.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Mapping, Sequence

from devsetup.adapters.base import CommandResult, CommandRunner

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Run commands on the host and capture their output."""

    @property
    def name(self) -> str:
        return "subprocess"

    def run(
        self,
        argv: Sequence[str],
        *,
        input: str | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        cmd = list(argv)
        full_env = None
        if env:
            full_env = os.environ.copy()
            full_env.update(env)

        logger.debug("Executing: %s (capture=%s)", cmd, capture)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                capture_output=capture,
                text=True,
                input=input,
                env=full_env,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult.failure(cmd, f"command not found: {cmd[0]}", returncode=127)
        except OSError as e:
            logger.warning("Cannot execute %s: %s", cmd[0], e)
            return CommandResult.failure(cmd, f"Command execution error: {e}", returncode=126)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Exit %d after %dms: %s", result.returncode, elapsed_ms, cmd[0])

        return CommandResult(
            argv=cmd,
            returncode=result.returncode,
            stdout=(result.stdout or "").strip() if capture else "",
            stderr=(result.stderr or "").strip() if capture else "",
        )
