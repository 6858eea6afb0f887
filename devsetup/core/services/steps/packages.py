"""
Catalog-driven package sections.

Casks are GUI apps and are only installed when apps are enabled;
formulae always are. Items are installed in catalog order.
"""

from __future__ import annotations

import logging

from devsetup.core.context import SetupContext
from devsetup.core.services.desired_states import binary_state

logger = logging.getLogger(__name__)


def install_section(ctx: SetupContext, key: str) -> None:
    section = ctx.data.section(key)
    for item in section.items:
        if item.is_cask:
            if not ctx.config.install_apps:
                logger.debug("Skipping cask %s (apps disabled)", item.name)
                continue
            ctx.ensure_cask(item.name)
        else:
            ctx.ensure_formula(item.name)
    for note in section.notes:
        ctx.reporter.warning(note)


def install_editors(ctx: SetupContext) -> None:
    install_section(ctx, "editors")


def install_languages(ctx: SetupContext) -> None:
    install_section(ctx, "languages")
    ctx.fs.ensure_dir(ctx.config.home / ".nvm")
    ctx.ensure(binary_state("rust", "rustc", ctx.data.installers["rust"], label="Rust"))


def install_mobile(ctx: SetupContext) -> None:
    install_section(ctx, "mobile")


def install_infrastructure(ctx: SetupContext) -> None:
    install_section(ctx, "infrastructure")


def install_cli_tools(ctx: SetupContext) -> None:
    install_section(ctx, "cli")

    for formula in ctx.config.extra_formulae:
        ctx.ensure_formula(formula)
    if ctx.config.install_apps:
        for cask in ctx.config.extra_casks:
            ctx.ensure_cask(cask)
