"""
Homebrew backend — registry checks and installs for formulae and casks.

``brew list <name>`` is the registry probe: exit 0 means Homebrew
manages the package. Installs go through the executor.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from devsetup.adapters.base import CommandResult, CommandRunner
from devsetup.core.engine.executor import CommandExecutor

logger = logging.getLogger(__name__)

# Where the Homebrew installer puts brew (Apple silicon, then Intel)
BREW_LOCATIONS = (Path("/opt/homebrew/bin/brew"), Path("/usr/local/bin/brew"))


class HomebrewBackend:
    """Package-management backend for macOS."""

    def __init__(self, runner: CommandRunner, executor: CommandExecutor, brew: str = "brew"):
        self._runner = runner
        self._executor = executor
        self.brew = brew

    @property
    def prefix(self) -> Path:
        """Homebrew prefix (``/opt/homebrew`` unless brew lives elsewhere)."""
        brew_path = Path(self.brew)
        if brew_path.is_absolute():
            return brew_path.parent.parent
        return BREW_LOCATIONS[0].parent.parent

    # ── Registry probes (read-only) ─────────────────────────────

    def is_installed(self, name: str) -> bool:
        return self._runner.run([self.brew, "list", name]).ok

    def is_cask_installed(self, name: str) -> bool:
        return self._runner.run([self.brew, "list", "--cask", name]).ok

    # ── Commands ────────────────────────────────────────────────

    def install_command(self, name: str, *, cask: bool = False, adopt: bool = False) -> list[str]:
        cmd = [self.brew, "install"]
        if cask:
            cmd.append("--cask")
            if adopt:
                cmd.append("--adopt")
        cmd.append(name)
        return cmd

    def install(self, name: str) -> CommandResult:
        return self._executor.execute(self.install_command(name))

    def install_cask(self, name: str, adopt: bool = False) -> CommandResult:
        return self._executor.execute(self.install_command(name, cask=True, adopt=adopt))

    def update(self) -> CommandResult:
        return self._executor.execute([self.brew, "update"])

    def activate(self, locations: tuple[Path, ...] | None = None) -> Path | None:
        """Put a freshly installed brew on PATH for the rest of this process.

        Mirrors ``eval "$(brew shellenv)"`` for the current session only.
        """
        for candidate in locations or BREW_LOCATIONS:
            if candidate.is_file():
                bin_dir = str(candidate.parent)
                path_entries = os.environ.get("PATH", "").split(os.pathsep)
                if bin_dir not in path_entries:
                    os.environ["PATH"] = os.pathsep.join([bin_dir, *path_entries])
                    logger.info("Added %s to PATH", bin_dir)
                self.brew = str(candidate)
                return candidate
        return None
