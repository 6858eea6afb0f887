"""
Git configuration — identity, defaults, aliases, then SSH.

Identity precedence for each of ``user.name`` / ``user.email``:
explicit override (flag or profile) → existing value (interactive runs
may replace it) → prompt. The whole step is skipped in dry run because
its branches depend on answers that a dry run cannot give.
"""

from __future__ import annotations

from devsetup.core.context import SetupContext
from devsetup.core.services.steps.ssh import setup_git_ssh

_IDENTITY = (
    # key, flag attribute, first-time prompt, keep question, replacement prompt, placeholder
    ("user.name", "git_name", "Enter your full name for Git commits",
     "Keep this name?", "Enter new name", "Your Name"),
    ("user.email", "git_email", "Enter your email for Git commits",
     "Keep this email?", "Enter new email", "you@example.com"),
)


def configure_git(ctx: SetupContext) -> None:
    if ctx.config.dry_run:
        ctx.reporter.dry_run("Would configure git")
        return

    ctx.reporter.step("Configuring Git identity...")
    for key, attr, ask, keep, replace, placeholder in _IDENTITY:
        configure_identity(ctx, key, getattr(ctx.config, attr), ask, keep, replace, placeholder)

    ctx.reporter.step("Configuring Git defaults...")
    _apply(ctx, ctx.data.git_defaults.items(), "Git defaults configured")

    ctx.reporter.step("Setting up Git aliases...")
    aliases = ((f"alias.{name}", command) for name, command in ctx.data.git_aliases.items())
    _apply(ctx, aliases, "Git aliases configured")

    setup_git_ssh(ctx)


def configure_identity(
    ctx: SetupContext,
    key: str,
    override: str,
    ask: str,
    keep: str,
    replace: str,
    placeholder: str,
) -> None:
    git = ctx.git
    reporter = ctx.reporter

    if override:
        if git.set_global(key, override).ok:
            reporter.success(f"Git {key} set to: {override}")
        else:
            reporter.error(f"Could not set git {key}")
        return

    current = git.get_global(key)
    if not current:
        value = ctx.prompter.prompt_value(ask, "")
        if value and git.set_global(key, value).ok:
            reporter.success(f"Git {key} set to: {value}")
        else:
            reporter.warning(
                f'Git {key} not set - configure later with: git config --global {key} "{placeholder}"'
            )
        return

    reporter.success(f"Git {key}: {current}")
    if ctx.prompter.interactive and not ctx.prompter.confirm(keep, True):
        value = ctx.prompter.prompt_value(replace, "")
        if value and git.set_global(key, value).ok:
            reporter.success(f"Git {key} updated to: {value}")
        else:
            reporter.warning(f"Git {key} left as: {current}")


def _apply(ctx: SetupContext, pairs, done_message: str) -> None:
    failed = [key for key, value in pairs if not ctx.git.set_global(key, value).ok]
    if failed:
        ctx.reporter.error(f"Could not set: {', '.join(failed)}")
    else:
        ctx.reporter.success(done_message)
