"""Homebrew bootstrap."""

from __future__ import annotations

import logging

from devsetup.core.context import SetupContext
from devsetup.core.models.state import Outcome
from devsetup.core.services.desired_states import binary_state

logger = logging.getLogger(__name__)


def install_homebrew(ctx: SetupContext) -> None:
    state = binary_state("homebrew", "brew", ctx.data.installers["homebrew"], label="Homebrew")
    resolution = ctx.ensure(state)

    if resolution.outcome is Outcome.SKIPPED:
        ctx.reporter.step("Updating Homebrew...")
        result = ctx.brew.update()
        if not result.ok:
            ctx.reporter.warning("brew update failed, continuing with the current formulae")

    if ctx.brew.activate() is None:
        logger.info("brew not found at a standard prefix; relying on PATH")
