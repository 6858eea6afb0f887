"""
SSH key for Git hosting: generate, configure the agent, register on GitHub.

Every step is guarded: an existing key is never regenerated, an
existing ``~/.ssh/config`` is never overwritten, and a key GitHub
already knows is not uploaded again.
"""

from __future__ import annotations

import logging
import re
import socket
from datetime import date
from pathlib import Path

from devsetup.core.context import SetupContext

logger = logging.getLogger(__name__)

KEY_NAME = "id_ed25519"

_AGENT_VAR = re.compile(r"(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;]+);")


def setup_git_ssh(ctx: SetupContext) -> None:
    reporter = ctx.reporter
    ssh_dir = ctx.config.ssh_dir
    key = ssh_dir / KEY_NAME
    pub = ssh_dir / f"{KEY_NAME}.pub"

    reporter.step("Checking SSH key for Git...")

    if ctx.fs.is_file(key):
        reporter.success(f"SSH key already exists: {pub}")
    elif not _generate_key(ctx, key, pub):
        return

    if not ctx.fs.is_file(key):
        return

    reporter.step("Configuring SSH agent...")
    config_path = ssh_dir / "config"
    if ctx.fs.exists(config_path):
        reporter.success("SSH config already exists")
    elif ctx.fs.write_if_absent(config_path, ctx.data.template("ssh_config"), mode=0o600):
        reporter.success("SSH config created")
    else:
        reporter.error(f"Could not write {config_path}")

    if _add_to_agent(ctx, key):
        reporter.success("SSH key added to agent")
    else:
        reporter.warning("Could not add SSH key to agent")

    if ctx.prompter.interactive:
        public_key = ctx.fs.read_text(pub)
        if public_key:
            reporter.info()
            reporter.info("Your SSH public key:")
            reporter.info("─" * 40)
            reporter.info(public_key.strip())
            reporter.info("─" * 40)
            reporter.info()

    register_with_github(ctx, pub)


def _generate_key(ctx: SetupContext, key: Path, pub: Path) -> bool:
    reporter = ctx.reporter
    if not ctx.prompter.confirm("Generate a new SSH key for GitHub/GitLab?", True):
        reporter.warning("Skipping SSH key generation")
        return False

    email = ctx.git.get_global("user.email") or ctx.prompter.prompt_value("Enter email for SSH key", "")
    if not email:
        reporter.warning("Skipping SSH key generation (no email provided)")
        return False

    reporter.step("Generating SSH key...")
    ctx.fs.ensure_dir(key.parent, mode=0o700)
    result = ctx.executor.execute(
        ["ssh-keygen", "-t", "ed25519", "-C", email, "-f", str(key), "-N", ""],
        capture=True,
    )
    if not result.ok:
        reporter.error(f"SSH key generation failed: {result.stderr or result.returncode}")
        return False

    reporter.success(f"SSH key generated: {pub}")
    return True


def _add_to_agent(ctx: SetupContext, key: Path) -> bool:
    agent = ctx.executor.execute(["ssh-agent", "-s"], capture=True)
    env = dict(_AGENT_VAR.findall(agent.stdout))

    result = ctx.executor.execute(["ssh-add", "--apple-use-keychain", str(key)], env=env, capture=True)
    if not result.ok:
        result = ctx.executor.execute(["ssh-add", str(key)], env=env, capture=True)
    return result.ok


def register_with_github(ctx: SetupContext, pub: Path) -> None:
    """Upload the public key with ``gh`` unless GitHub already has it."""
    reporter = ctx.reporter
    interactive = ctx.prompter.interactive

    if ctx.runner.which("gh") is None:
        if interactive:
            reporter.warning("Install 'gh' CLI and run 'gh auth login' to auto-add SSH key to GitHub")
            reporter.info("Or manually add the key above to: https://github.com/settings/keys")
        return

    if _gh_authenticated(ctx):
        if _key_on_github(ctx, pub):
            reporter.success("SSH key already added to GitHub")
        elif ctx.prompter.confirm("Add this SSH key to your GitHub account?", True):
            _upload_key(ctx, pub)
    elif interactive:
        if ctx.prompter.confirm("Login to GitHub CLI to add SSH key automatically?", True):
            ctx.executor.execute(["gh", "auth", "login"])
            if _gh_authenticated(ctx):
                _upload_key(ctx, pub)
    else:
        reporter.warning("Run 'gh auth login' to authenticate with GitHub")


def _gh_authenticated(ctx: SetupContext) -> bool:
    return ctx.runner.run(["gh", "auth", "status"]).ok


def _key_on_github(ctx: SetupContext, pub: Path) -> bool:
    listed = ctx.runner.run(["gh", "ssh-key", "list"])
    if not listed.ok:
        return False

    markers = []
    fingerprint = ctx.runner.run(["ssh-keygen", "-lf", str(pub)])
    if fingerprint.ok and len(fingerprint.stdout.split()) > 1:
        markers.append(fingerprint.stdout.split()[1])
    public_key = ctx.fs.read_text(pub) or ""
    if len(public_key.split()) > 1:
        markers.append(public_key.split()[1])

    return any(m in listed.stdout for m in markers)


def _upload_key(ctx: SetupContext, pub: Path) -> None:
    title = f"{socket.gethostname()} - {date.today():%Y-%m-%d}"
    result = ctx.executor.execute(["gh", "ssh-key", "add", str(pub), "--title", title], capture=True)
    if result.ok:
        ctx.reporter.success("SSH key added to GitHub")
    else:
        logger.info("gh ssh-key add failed: %s", result.stderr)
        ctx.reporter.warning("Could not add key to GitHub (may already exist)")
