"""Global gitignore."""

from __future__ import annotations

from devsetup.core.context import SetupContext

GITIGNORE_NAME = ".gitignore_global"


def configure_global_gitignore(ctx: SetupContext) -> None:
    ctx.reporter.step("Setting up global gitignore...")
    path = ctx.config.home / GITIGNORE_NAME

    if ctx.fs.exists(path):
        ctx.reporter.success("Global gitignore already exists")
        return

    if not ctx.fs.write_if_absent(path, ctx.data.template("gitignore_global")):
        ctx.reporter.error(f"Could not write {path}")
        return

    if ctx.git.set_global("core.excludesfile", str(path)).ok:
        ctx.reporter.success("Global gitignore configured")
    else:
        ctx.reporter.warning(f"Wrote {path} but could not set core.excludesfile")
