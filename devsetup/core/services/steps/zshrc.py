"""Shell profile block, appended once and guarded by a marker line."""

from __future__ import annotations

from devsetup.core.context import SetupContext

MARKER = "# === MAC-SETUP-SCRIPT ==="


def configure_zshrc(ctx: SetupContext) -> None:
    zshrc = ctx.config.home / ".zshrc"

    if ctx.fs.contains(zshrc, MARKER):
        ctx.reporter.success("Shell configuration already added to .zshrc")
        return

    ctx.reporter.step("Adding configuration to .zshrc...")
    if not ctx.fs.append_block(zshrc, ctx.data.template("zshrc_block.zsh")):
        ctx.reporter.error(f"Could not update {zshrc}")
        return

    ctx.reporter.success("Shell configuration added")
    ctx.reporter.warning("Update the 'plugins' line in .zshrc to include the new plugins")
