"""
Setup context — every collaborator a step needs, wired once.

The context replaces process-wide flags: the ``RunConfig`` is built
once at startup and handed, together with the adapters built from it,
to every step. Tests build one with a ``MockRunner`` and a temporary
home directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from devsetup.adapters.base import CommandRunner
from devsetup.adapters.packages.homebrew import HomebrewBackend
from devsetup.adapters.shell.filesystem import Filesystem
from devsetup.adapters.vcs.git import GitConfigStore
from devsetup.core.config.settings import RunConfig
from devsetup.core.data import DataRegistry
from devsetup.core.engine.executor import CommandExecutor
from devsetup.core.engine.resolver import ActionResolver
from devsetup.core.models.state import DesiredState, Resolution
from devsetup.core.services import desired_states
from devsetup.core.services.prompts import Prompter
from devsetup.core.services.reporter import Reporter


@dataclass
class SetupContext:
    config: RunConfig
    data: DataRegistry
    runner: CommandRunner
    reporter: Reporter
    executor: CommandExecutor
    fs: Filesystem
    brew: HomebrewBackend
    git: GitConfigStore
    prompter: Prompter
    resolver: ActionResolver
    resolutions: list[Resolution] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        config: RunConfig,
        runner: CommandRunner,
        data: DataRegistry | None = None,
        reporter: Reporter | None = None,
    ) -> SetupContext:
        data = data or DataRegistry()
        reporter = reporter or Reporter()
        executor = CommandExecutor(config, runner, reporter)
        fs = Filesystem(executor)
        brew = HomebrewBackend(runner, executor)
        return cls(
            config=config,
            data=data,
            runner=runner,
            reporter=reporter,
            executor=executor,
            fs=fs,
            brew=brew,
            git=GitConfigStore(runner, executor),
            prompter=Prompter(config),
            resolver=ActionResolver(config, runner, executor, brew, fs, reporter),
        )

    def ensure(self, state: DesiredState) -> Resolution:
        """Resolve ``state``, print its status line and record it."""
        resolution = self.resolver.resolve(state)
        self.record(resolution)
        return resolution

    def record(self, resolution: Resolution) -> None:
        self.reporter.outcome(resolution)
        self.resolutions.append(resolution)

    def ensure_formula(self, name: str) -> Resolution:
        return self.ensure(desired_states.formula_state(name, self.data, self.brew))

    def ensure_cask(self, name: str) -> Resolution:
        return self.ensure(desired_states.cask_state(name, self.data, self.brew, self.config))
