"""
Idempotent action resolver — decide skip, adopt, or install.

For every desired state the resolver re-derives the truth from the
machine: it runs the detectors in their declared order and stops at the
first one that succeeds. Only when every detector has failed does it
perform the install action.

Detector order is significant: registry membership is authoritative and
cheap, so it comes first. An adoptable bundle is a weaker signal: when
it is the detector that fires, the resolver asks the package manager to
adopt the existing install instead of reporting a plain skip. A failed
adoption degrades to Skipped, never to a reinstall. Homebrew gives no
way to tell "already adopted" from "adoption genuinely failed", so both
are reported the same way.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devsetup.adapters.base import CommandRunner
from devsetup.adapters.packages.homebrew import HomebrewBackend
from devsetup.adapters.shell.filesystem import Filesystem
from devsetup.core.config.settings import RunConfig
from devsetup.core.engine.executor import CommandExecutor
from devsetup.core.models.state import DesiredState, Detector, DetectorKind, Resolution
from devsetup.core.services.reporter import Reporter

logger = logging.getLogger(__name__)


class ActionResolver:
    """Resolve desired states against the live environment."""

    def __init__(
        self,
        config: RunConfig,
        runner: CommandRunner,
        executor: CommandExecutor,
        backend: HomebrewBackend,
        fs: Filesystem,
        reporter: Reporter,
    ):
        self._config = config
        self._runner = runner
        self._executor = executor
        self._backend = backend
        self._fs = fs
        self._reporter = reporter

    # ── Detection (read-only) ───────────────────────────────────

    def detect(self, state: DesiredState) -> Detector | None:
        """First detector that reports the state satisfied, or None."""
        for detector in state.detectors:
            if self._check(detector):
                logger.debug("%s detected by %s (%s)", state.name, detector.kind, detector.target)
                return detector
        return None

    def _check(self, detector: Detector) -> bool:
        target = detector.target
        if detector.kind is DetectorKind.REGISTRY:
            if detector.cask:
                return self._backend.is_cask_installed(str(target))
            return self._backend.is_installed(str(target))
        if detector.kind is DetectorKind.BINARY:
            return self._runner.which(str(target)) is not None
        if detector.kind is DetectorKind.PATH:
            return self._fs.exists(Path(str(target)))
        if detector.kind is DetectorKind.PROBE:
            argv = target if isinstance(target, list) else [target]
            return self._runner.run(argv).ok
        raise ValueError(f"Unknown detector kind: {detector.kind}")

    # ── Resolution ──────────────────────────────────────────────

    def resolve(self, state: DesiredState) -> Resolution:
        """Bring ``state`` into existence if no detector is satisfied.

        Never raises for a failed command; the outcome is in the result.
        """
        name = state.display_name
        dry_run = self._config.dry_run
        detector = self.detect(state)

        if detector is not None:
            if detector.kind is DetectorKind.PATH and detector.adoptable and state.adopt:
                return self._adopt(state, detector, state.adopt)
            return Resolution.skipped(
                state.name,
                _already_message(name, detector),
                detected_by=detector.kind,
                dry_run=dry_run,
            )

        if not state.install:
            return Resolution.failed(
                state.name,
                f"{name} is missing and has no install action",
                error="no install action",
                dry_run=dry_run,
            )

        self._reporter.step(f"Installing {name}...")
        result = self._executor.execute(state.install)

        if result.ok:
            message = f"{name} would be installed" if dry_run else f"{name} installed"
            return Resolution.installed(state.name, message, dry_run=dry_run)

        logger.error("Install of %s failed (exit %d): %s", state.name, result.returncode, result.stderr)
        return Resolution.failed(
            state.name,
            f"{name} failed to install (exit {result.returncode})",
            error=result.stderr or f"exit {result.returncode}",
            dry_run=dry_run,
        )

    def _adopt(self, state: DesiredState, detector: Detector, adopt: list[str]) -> Resolution:
        name = state.display_name
        bundle = Path(str(detector.target)).name
        self._reporter.step(f"Adopting existing {bundle} into Homebrew...")

        result = self._executor.execute(adopt, capture=True)

        if result.ok:
            return Resolution.adopted(
                state.name,
                f"{name} adopted into Homebrew",
                detected_by=detector.kind,
                dry_run=self._config.dry_run,
            )

        logger.info("Adoption of %s failed, treating as installed: %s", state.name, result.stderr)
        return Resolution.skipped(
            state.name,
            f"{name} already installed ({detector.target})",
            detected_by=detector.kind,
            error=result.stderr or None,
            dry_run=self._config.dry_run,
        )


def _already_message(name: str, detector: Detector) -> str:
    if detector.label:
        return f"{name} already installed ({detector.label})"
    if detector.kind is DetectorKind.REGISTRY:
        return f"{name} already installed (via brew)"
    if detector.kind is DetectorKind.BINARY:
        return f"{name} already available ({detector.target} in PATH)"
    if detector.kind is DetectorKind.PATH:
        return f"{name} already installed ({detector.target})"
    return f"{name} already installed"
