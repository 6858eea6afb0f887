"""
Setup steps in run order.

Each step is a plain function taking the ``SetupContext``. The order
below is the contract: later steps rely on what earlier ones installed.
Package-section headers come from the catalog's section titles.
"""

from __future__ import annotations

from devsetup.core.config.settings import RunConfig
from devsetup.core.data import DataRegistry
from devsetup.core.engine.pipeline import Step
from devsetup.core.services.steps import (
    git_config,
    gitignore,
    homebrew,
    packages,
    post_install,
    shell_framework,
    summary,
    terminal,
    xcode,
    zshrc,
)


def build_steps(config: RunConfig, data: DataRegistry) -> list[Step]:
    def title(key: str) -> str:
        return data.section(key).title

    return [
        Step("xcode", "Xcode Command Line Tools", xcode.install_xcode_cli),
        Step("homebrew", "Homebrew", homebrew.install_homebrew),
        Step("oh-my-zsh", "Oh My Zsh", shell_framework.install_ohmyzsh),
        Step("terminal", title("terminal"), terminal.install_iterm2, enabled=config.install_apps),
        Step("editors", title("editors"), packages.install_editors),
        Step("languages", title("languages"), packages.install_languages),
        Step("mobile", title("mobile"), packages.install_mobile, enabled=config.install_mobile),
        Step("infrastructure", title("infrastructure"), packages.install_infrastructure,
             enabled=config.install_infra),
        Step("cli-tools", title("cli"), packages.install_cli_tools),
        Step("git", "Git Configuration", git_config.configure_git),
        Step("gitignore", "", gitignore.configure_global_gitignore),
        Step("zshrc", "Shell Configuration", zshrc.configure_zshrc),
        Step("post-install", "Post-Installation Steps", post_install.post_install),
        Step("summary", "Setup Complete!", summary.print_summary),
    ]
