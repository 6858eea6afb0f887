"""Xcode Command Line Tools — the one prerequisite that halts the run."""

from __future__ import annotations

from devsetup.core.context import SetupContext
from devsetup.core.errors import PrerequisiteMissing
from devsetup.core.models.state import DesiredState, Detector, Outcome

XCODE_INSTRUCTIONS = "Please complete the Xcode CLI installation and re-run this script."


def xcode_state() -> DesiredState:
    return DesiredState(
        name="xcode-cli-tools",
        label="Xcode CLI tools",
        detectors=[Detector.probe(["xcode-select", "-p"])],
        install=["xcode-select", "--install"],
    )


def install_xcode_cli(ctx: SetupContext) -> None:
    # The installer is a GUI dialog: triggering it is all we can do.
    resolution = ctx.resolver.resolve(xcode_state())
    if resolution.outcome is Outcome.SKIPPED:
        ctx.record(resolution)
        return
    raise PrerequisiteMissing("xcode-cli-tools", XCODE_INSTRUCTIONS)
