"""Oh My Zsh and its plugins."""

from __future__ import annotations

from devsetup.core.context import SetupContext
from devsetup.core.services.desired_states import path_state


def install_ohmyzsh(ctx: SetupContext) -> None:
    ctx.ensure(path_state(
        "oh-my-zsh",
        ctx.config.home / ".oh-my-zsh",
        ctx.data.installers["oh-my-zsh"],
        label="Oh My Zsh",
    ))

    plugins_dir = ctx.config.zsh_custom_dir / "plugins"
    for name, url in ctx.data.zsh_plugins.items():
        target = plugins_dir / name
        ctx.ensure(path_state(name, target, ["git", "clone", url, str(target)]))
