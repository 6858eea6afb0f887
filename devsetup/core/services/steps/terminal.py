"""
iTerm2 and its dark profile.

The profile is a Dynamic Profile JSON file: iTerm2 picks it up on
launch, so writing it once is enough. The ``defaults write`` calls are
re-applied only when the profile is first created.
"""

from __future__ import annotations

from devsetup.core.context import SetupContext


def install_iterm2(ctx: SetupContext) -> None:
    for cask in ctx.data.section("terminal").casks:
        ctx.ensure_cask(cask)
    configure_iterm2_dark_theme(ctx)


def configure_iterm2_dark_theme(ctx: SetupContext) -> None:
    iterm = ctx.data.iterm
    profile_path = ctx.config.home / iterm["profile_path"]

    if ctx.fs.exists(profile_path):
        ctx.reporter.success("iTerm2 dark theme already configured")
        return

    ctx.reporter.step("Configuring iTerm2 dark theme...")

    if not ctx.fs.write_if_absent(profile_path, ctx.data.template("iterm_dark_profile.json")):
        ctx.reporter.error("Could not write iTerm2 profile")
        return

    failures = 0
    for pref in iterm["defaults"]:
        result = ctx.executor.execute(
            ["defaults", "write", iterm["domain"], pref["key"], f"-{pref['type']}", pref["value"]],
            capture=True,
        )
        if not result.ok:
            failures += 1

    if failures:
        ctx.reporter.warning(f"iTerm2 profile written, {failures} preference(s) could not be set")
    else:
        ctx.reporter.success("iTerm2 dark theme configured")
    ctx.reporter.warning("Open iTerm2 and select 'Dark Developer' profile in Preferences > Profiles")
