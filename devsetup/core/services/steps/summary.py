"""Closing summary and next steps."""

from __future__ import annotations

from devsetup.core.context import SetupContext
from devsetup.core.models.state import Outcome


def print_summary(ctx: SetupContext) -> None:
    config = ctx.config
    out = ctx.reporter.info

    out()
    out("Installed components:")
    out("  - Xcode Command Line Tools")
    out("  - Homebrew")
    out("  - Oh My Zsh + plugins")
    if config.install_apps:
        out("  - iTerm2 (with dark theme)")
    out("  - Editors: VS Code, Zed, Neovim" if config.install_apps else "  - Editors: Neovim")
    out("  - Languages: Node.js (nvm), Python (pyenv), Go, Rust")
    if config.install_mobile:
        out("  - Mobile: React Native, Android Studio, CocoaPods")
    if config.install_infra:
        out("  - Infra: Docker, Kubernetes, Terraform, Cloud CLIs")
    out("  - CLI tools: fzf, ripgrep, bat, eza, lazygit, etc.")

    counts = {o: sum(1 for r in ctx.resolutions if r.outcome is o) for o in Outcome}
    out()
    out(
        f"This run: {counts[Outcome.INSTALLED]} installed, {counts[Outcome.ADOPTED]} adopted, "
        f"{counts[Outcome.SKIPPED]} already present, {counts[Outcome.FAILED]} failed"
    )
    for failed in (r for r in ctx.resolutions if r.outcome is Outcome.FAILED):
        ctx.reporter.error(failed.message)

    out()
    out("Next steps:")
    out("  1. Restart your terminal or run: source ~/.zshrc")
    out("  2. Open iTerm2 and select 'Dark Developer' profile in Preferences > Profiles")
    out("  3. Install Xcode from the App Store (for iOS development)")
    out("  4. Open Docker Desktop and complete setup")
    out("  5. Open Android Studio and install SDKs")
    out("  6. Configure git credentials:")
    out('     git config --global user.name "Your Name"')
    out('     git config --global user.email "you@example.com"')
    out()
    out("Happy building!")
