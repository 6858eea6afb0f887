"""
Shared test fixtures and configuration.

``FakeMachine`` wraps a ``MockRunner`` with just enough state to behave
like a Mac with Homebrew: ``brew list`` answers from its registry,
``brew install`` adds to it, ``git config --global`` reads and writes a
dict. Everything else succeeds silently.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from devsetup.adapters.base import CommandResult
from devsetup.adapters.mock import MockRunner
from devsetup.core.config.settings import RunConfig
from devsetup.core.context import SetupContext
from devsetup.core.services.reporter import Reporter


class FakeMachine:
    def __init__(self) -> None:
        self.runner = MockRunner()
        self.formulae: set[str] = set()
        self.casks: set[str] = set()
        self.install_failures: set[str] = set()
        self.adopt_failures: set[str] = set()
        self.git_config: dict[str, str] = {}
        self.binaries_for: dict[str, str] = {}  # formula -> binary it provides
        self.runner.set_handler(["brew", "list"], self._brew_list)
        self.runner.set_handler(["brew", "install"], self._brew_install)
        self.runner.set_handler(["git", "config", "--global"], self._git_config)

    def add_binary(self, name: str) -> None:
        self.runner.add_binary(name)

    @property
    def installs(self) -> list[list[str]]:
        return self.runner.calls_matching(["brew", "install"])

    def _brew_list(self, argv: list[str]) -> CommandResult:
        name = argv[-1]
        registry = self.casks if "--cask" in argv else self.formulae
        return CommandResult(argv=argv, returncode=0 if name in registry else 1)

    def _brew_install(self, argv: list[str]) -> CommandResult:
        name = argv[-1]
        if "--adopt" in argv and name in self.adopt_failures:
            return CommandResult(argv=argv, returncode=1, stderr="adoption failed")
        if name in self.install_failures:
            return CommandResult(argv=argv, returncode=1, stderr=f"Error: {name} download failed")
        if "--cask" in argv:
            self.casks.add(name)
        else:
            self.formulae.add(name)
            self.runner.add_binary(self.binaries_for.get(name, name))
        return CommandResult(argv=argv)

    def _git_config(self, argv: list[str]) -> CommandResult:
        if argv[3] == "--get":
            value = self.git_config.get(argv[4])
            if value is None:
                return CommandResult(argv=argv, returncode=1)
            return CommandResult(argv=argv, stdout=value + "\n")
        self.git_config[argv[3]] = argv[4]
        return CommandResult(argv=argv)


@pytest.fixture(autouse=True)
def _no_host_brew(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a real Homebrew on the test host out of the picture."""
    monkeypatch.setattr(
        "devsetup.adapters.packages.homebrew.BREW_LOCATIONS",
        (tmp_path / "no-brew" / "bin" / "brew",),
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """``setup_logging`` replaces the root handlers; put pytest's back."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A throwaway home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def apps_dir(tmp_path: Path) -> Path:
    """A throwaway /Applications."""
    path = tmp_path / "Applications"
    path.mkdir()
    return path


@pytest.fixture
def make_config(home: Path, apps_dir: Path):
    """Factory for a non-interactive RunConfig rooted in tmp dirs."""

    def _make(**overrides) -> RunConfig:
        values = {"home": home, "applications_dir": apps_dir, "interactive": False}
        values.update(overrides)
        return RunConfig(**values)

    return _make


@pytest.fixture
def machine() -> FakeMachine:
    return FakeMachine()


@pytest.fixture
def make_context(make_config, machine: FakeMachine):
    """Factory for a SetupContext wired to the fake machine."""

    def _make(**overrides) -> SetupContext:
        return SetupContext.create(
            make_config(**overrides),
            machine.runner,
            reporter=Reporter(echo=False),
        )

    return _make
