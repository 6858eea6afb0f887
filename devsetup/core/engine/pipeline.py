"""
Setup pipeline — run the steps in their fixed, declared order.

Later steps assume earlier ones completed (the shell profile expects
Homebrew, git configuration expects git), so the order never changes
and nothing runs concurrently.

Flow:
    for step in steps → header → step.run(context) → collect resolutions

A ``PrerequisiteMissing`` raised by a step stops the run after printing
its instructions. Any other ``SetupError`` is reported and the run
moves on to the next step.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from devsetup.core.context import SetupContext
from devsetup.core.errors import PrerequisiteMissing, SetupError
from devsetup.core.models.state import Outcome, Resolution

logger = logging.getLogger(__name__)


@dataclass
class Step:
    """One unit of the setup run."""

    name: str
    title: str
    run: Callable[[SetupContext], None]
    enabled: bool = True


@dataclass
class RunReport:
    """Result of running the pipeline."""

    resolutions: list[Resolution] = field(default_factory=list)
    steps_run: list[str] = field(default_factory=list)
    steps_skipped: list[str] = field(default_factory=list)
    step_errors: dict[str, str] = field(default_factory=dict)
    halted_by: str | None = None
    halt_reason: str = ""

    @property
    def halted(self) -> bool:
        return self.halted_by is not None

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.resolutions if r.outcome is outcome)

    @property
    def failed(self) -> list[Resolution]:
        return [r for r in self.resolutions if r.outcome is Outcome.FAILED]

    @property
    def status(self) -> str:
        if self.halted:
            return "halted"
        if self.failed or self.step_errors:
            return "partial"
        return "ok"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "halted_by": self.halted_by,
            "halt_reason": self.halt_reason,
            "steps_run": self.steps_run,
            "steps_skipped": self.steps_skipped,
            "step_errors": self.step_errors,
            "counts": {o.value: self.count(o) for o in Outcome},
            "resolutions": [r.model_dump(mode="json") for r in self.resolutions],
        }


class SetupPipeline:
    def __init__(self, context: SetupContext, steps: list[Step]):
        self._context = context
        self._steps = steps

    def run(self) -> RunReport:
        ctx = self._context
        report = RunReport(resolutions=ctx.resolutions)

        for step in self._steps:
            if not step.enabled:
                logger.info("Step %s disabled, skipping", step.name)
                report.steps_skipped.append(step.name)
                continue

            if step.title:
                ctx.reporter.header(step.title)

            logger.debug("Running step %s", step.name)
            try:
                step.run(ctx)
            except PrerequisiteMissing as e:
                ctx.reporter.info(e.instructions)
                report.halted_by = step.name
                report.halt_reason = e.instructions
                logger.warning("Run halted by %s: %s", step.name, e.instructions)
                break
            except SetupError as e:
                ctx.reporter.error(f"{step.name}: {e}")
                report.step_errors[step.name] = str(e)
                logger.error("Step %s failed: %s", step.name, e)
            report.steps_run.append(step.name)

        return report
