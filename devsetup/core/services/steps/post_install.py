"""
Post-install: fzf key bindings, latest Node LTS, latest CPython.

nvm is a shell function, not a binary, so it is driven through bash
after sourcing ``nvm.sh``.
"""

from __future__ import annotations

import logging
import re

from devsetup.core.context import SetupContext

logger = logging.getLogger(__name__)

_STABLE_PYTHON = re.compile(r"^\s*(3\.\d+\.\d+)\s*$")


def post_install(ctx: SetupContext) -> None:
    prefix = ctx.brew.prefix
    reporter = ctx.reporter

    fzf_install = prefix / "opt" / "fzf" / "install"
    if ctx.fs.exists(fzf_install):
        reporter.step("Installing fzf keybindings...")
        ctx.executor.execute([str(fzf_install), "--all", "--no-bash", "--no-fish"])

    nvm_sh = prefix / "opt" / "nvm" / "nvm.sh"
    if ctx.runner.which("nvm") is not None or ctx.fs.exists(nvm_sh):
        reporter.step("Installing latest Node.js LTS...")
        script = (
            f'export NVM_DIR="{ctx.config.home / ".nvm"}"; '
            f'. "{nvm_sh}" && nvm install --lts && nvm use --lts && nvm alias default "lts/*"'
        )
        if not ctx.executor.execute(["bash", "-c", script]).ok:
            reporter.warning("Node.js LTS installation failed")

    if ctx.runner.which("pyenv") is not None:
        reporter.step("Installing latest Python...")
        version = latest_python(ctx)
        if version is None:
            reporter.warning("Could not determine the latest Python release")
        elif ctx.executor.execute(["pyenv", "install", "-s", version]).ok:
            ctx.executor.execute(["pyenv", "global", version], capture=True)
        else:
            reporter.warning(f"Python {version} installation failed")

    reporter.success("Post-installation complete")


def latest_python(ctx: SetupContext) -> str | None:
    """Newest stable CPython from ``pyenv install --list`` (read-only)."""
    listing = ctx.runner.run(["pyenv", "install", "--list"])
    if not listing.ok:
        logger.info("pyenv install --list failed: %s", listing.stderr)
        return None
    versions = [m.group(1) for line in listing.stdout.splitlines() if (m := _STABLE_PYTHON.match(line))]
    if not versions:
        return None
    return max(versions, key=lambda v: tuple(int(p) for p in v.split(".")))
