"""
Tests for the runner protocol, the mock and subprocess runners, and the
filesystem, git and Homebrew adapters.
"""

import os
import sys
from pathlib import Path

from devsetup.adapters.base import CommandResult
from devsetup.adapters.mock import MockRunner
from devsetup.adapters.packages.homebrew import HomebrewBackend
from devsetup.adapters.shell.command import SubprocessRunner
from devsetup.adapters.shell.filesystem import Filesystem
from devsetup.adapters.vcs.git import GitConfigStore
from devsetup.core.config.settings import ExecutionMode
from devsetup.core.engine.executor import CommandExecutor
from devsetup.core.services.reporter import Reporter

# ── CommandResult ───────────────────────────────────────────────────


class TestCommandResult:
    def test_ok(self):
        assert CommandResult(argv=["true"]).ok
        assert not CommandResult(argv=["false"], returncode=1).ok

    def test_display_quotes_arguments(self):
        result = CommandResult(argv=["git", "config", "--global", "user.name", "Jane Doe"])
        assert result.display == "git config --global user.name 'Jane Doe'"

    def test_synthetic(self):
        result = CommandResult.synthetic(["brew", "install", "jq"])
        assert result.ok
        assert result.dry_run


# ── Mock Runner ─────────────────────────────────────────────────────


class TestMockRunner:
    def test_default_success(self):
        mock = MockRunner()
        result = mock.run(["anything"])
        assert result.ok
        assert mock.call_count == 1

    def test_longest_prefix_wins(self):
        mock = MockRunner()
        mock.set_failure(["brew", "list"])
        mock.set_response(["brew", "list", "jq"], stdout="jq 1.7")
        assert not mock.run(["brew", "list", "fd"]).ok
        assert mock.run(["brew", "list", "jq"]).stdout == "jq 1.7"

    def test_handler(self):
        mock = MockRunner()
        mock.set_handler(["echo"], lambda argv: CommandResult(argv=argv, stdout=" ".join(argv[1:])))
        assert mock.run(["echo", "a", "b"]).stdout == "a b"

    def test_call_log_and_matching(self):
        mock = MockRunner()
        mock.run(["git", "status"])
        mock.run(["brew", "update"])
        mock.run(["git", "log"])
        assert mock.call_log[0] == ["git", "status"]
        assert mock.calls_matching(["git"]) == [["git", "status"], ["git", "log"]]

    def test_binaries(self):
        mock = MockRunner(binaries=["rg"])
        assert mock.which("rg") == "/usr/local/bin/rg"
        assert mock.which("fd") is None
        mock.add_binary("fd", "/opt/homebrew/bin/fd")
        assert mock.which("fd") == "/opt/homebrew/bin/fd"
        mock.remove_binary("rg")
        assert mock.which("rg") is None

    def test_reset(self):
        mock = MockRunner()
        mock.set_failure(["x"])
        mock.run(["x"])
        mock.reset()
        assert mock.call_count == 0
        assert mock.run(["x"]).ok

    def test_default_returncode(self):
        assert not MockRunner(default_returncode=1).run(["x"]).ok


# ── Subprocess Runner ───────────────────────────────────────────────


class TestSubprocessRunner:
    def test_name(self):
        assert SubprocessRunner().name == "subprocess"

    def test_captures_stdout(self):
        result = SubprocessRunner().run([sys.executable, "-c", "print('hello world')"])
        assert result.ok
        assert result.stdout == "hello world"

    def test_failure_exit_code(self):
        result = SubprocessRunner().run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert result.returncode == 3

    def test_captures_stderr(self):
        result = SubprocessRunner().run(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(1)"]
        )
        assert not result.ok
        assert "boom" in result.stderr

    def test_missing_binary(self):
        result = SubprocessRunner().run(["definitely-not-a-real-binary-xyz"])
        assert result.returncode == 127
        assert "command not found" in result.stderr

    def test_env_and_input(self):
        result = SubprocessRunner().run(
            [sys.executable, "-c", "import os, sys; print(os.environ['DEVSETUP_T'] + sys.stdin.read())"],
            env={"DEVSETUP_T": "x"},
            input="y",
        )
        assert result.stdout == "xy"


# ── Filesystem ──────────────────────────────────────────────────────


class TestFilesystem:
    def _fs(self, make_config, mode=ExecutionMode.LIVE):
        executor = CommandExecutor(make_config(mode=mode), MockRunner(), Reporter(echo=False))
        return Filesystem(executor), executor

    def test_write_if_absent_creates(self, make_config, tmp_path: Path):
        fs, _ = self._fs(make_config)
        target = tmp_path / "a" / "b.txt"
        assert fs.write_if_absent(target, "hello", mode=0o600)
        assert target.read_text() == "hello"
        assert target.stat().st_mode & 0o777 == 0o600

    def test_write_if_absent_keeps_existing(self, make_config, tmp_path: Path):
        fs, _ = self._fs(make_config)
        target = tmp_path / "b.txt"
        target.write_text("mine")
        assert not fs.write_if_absent(target, "theirs")
        assert target.read_text() == "mine"

    def test_dry_run_writes_nothing(self, make_config, tmp_path: Path):
        fs, executor = self._fs(make_config, ExecutionMode.DRY_RUN)
        target = tmp_path / "c.txt"
        assert fs.write_if_absent(target, "x")
        assert fs.append_block(tmp_path / "d.txt", "x")
        assert fs.ensure_dir(tmp_path / "e")
        assert not target.exists()
        assert not (tmp_path / "d.txt").exists()
        assert not (tmp_path / "e").exists()
        assert len(executor.planned) == 3

    def test_contains(self, make_config, tmp_path: Path):
        fs, _ = self._fs(make_config)
        target = tmp_path / ".zshrc"
        assert not fs.contains(target, "marker")
        target.write_text("# marker\n")
        assert fs.contains(target, "marker")

    def test_append_block(self, make_config, tmp_path: Path):
        fs, _ = self._fs(make_config)
        target = tmp_path / ".zshrc"
        target.write_text("existing\n")
        fs.append_block(target, "added\n")
        assert target.read_text() == "existing\nadded\n"

    def test_ensure_dir_with_mode(self, make_config, tmp_path: Path):
        fs, _ = self._fs(make_config)
        target = tmp_path / ".ssh"
        assert fs.ensure_dir(target, mode=0o700)
        assert target.is_dir()
        assert target.stat().st_mode & 0o777 == 0o700

    def test_write_failure_reported(self, make_config, tmp_path: Path):
        fs, _ = self._fs(make_config)
        blocker = tmp_path / "file"
        blocker.write_text("")
        assert not fs.write_if_absent(blocker / "child.txt", "x")


# ── Git config store ────────────────────────────────────────────────


class TestGitConfigStore:
    def test_get_unset(self, make_config):
        runner = MockRunner()
        runner.set_failure(["git", "config"])
        store = GitConfigStore(runner, CommandExecutor(make_config(), runner, Reporter(echo=False)))
        assert store.get_global("user.name") is None

    def test_get_value(self, make_config):
        runner = MockRunner()
        runner.set_response(["git", "config", "--global", "--get", "user.name"], stdout="Jane\n")
        store = GitConfigStore(runner, CommandExecutor(make_config(), runner, Reporter(echo=False)))
        assert store.get_global("user.name") == "Jane"

    def test_set_goes_through_executor(self, make_config):
        runner = MockRunner()
        executor = CommandExecutor(make_config(mode=ExecutionMode.DRY_RUN), runner, Reporter(echo=False))
        store = GitConfigStore(runner, executor)
        assert store.set_global("init.defaultBranch", "main").ok
        assert runner.call_count == 0
        assert executor.planned == ["git config --global init.defaultBranch main"]


# ── Homebrew backend ────────────────────────────────────────────────


class TestHomebrewBackend:
    def _brew(self, make_config, runner):
        return HomebrewBackend(runner, CommandExecutor(make_config(), runner, Reporter(echo=False)))

    def test_install_commands(self, make_config):
        brew = self._brew(make_config, MockRunner())
        assert brew.install_command("jq") == ["brew", "install", "jq"]
        assert brew.install_command("zed", cask=True) == ["brew", "install", "--cask", "zed"]
        assert brew.install_command("zed", cask=True, adopt=True) == [
            "brew", "install", "--cask", "--adopt", "zed",
        ]

    def test_registry_probes(self, make_config):
        runner = MockRunner()
        runner.set_failure(["brew", "list"])
        runner.set_response(["brew", "list", "jq"])
        runner.set_response(["brew", "list", "--cask", "zed"])
        brew = self._brew(make_config, runner)
        assert brew.is_installed("jq")
        assert not brew.is_installed("fd")
        assert brew.is_cask_installed("zed")
        assert not brew.is_cask_installed("docker")

    def test_install_and_update(self, make_config):
        runner = MockRunner()
        brew = self._brew(make_config, runner)
        assert brew.install("jq").ok
        assert brew.install_cask("zed", adopt=True).ok
        assert brew.update().ok
        assert runner.call_log == [
            ["brew", "install", "jq"],
            ["brew", "install", "--cask", "--adopt", "zed"],
            ["brew", "update"],
        ]

    def test_activate(self, make_config, tmp_path: Path, monkeypatch):
        brew_bin = tmp_path / "homebrew" / "bin" / "brew"
        brew_bin.parent.mkdir(parents=True)
        brew_bin.write_text("")
        monkeypatch.setenv("PATH", "/usr/bin")
        brew = self._brew(make_config, MockRunner())

        assert brew.activate((tmp_path / "missing", brew_bin)) == brew_bin
        assert brew.brew == str(brew_bin)
        assert brew.prefix == tmp_path / "homebrew"
        assert str(brew_bin.parent) in os.environ["PATH"]

    def test_activate_not_found(self, make_config, tmp_path: Path):
        brew = self._brew(make_config, MockRunner())
        assert brew.activate((tmp_path / "nope",)) is None
        assert brew.brew == "brew"
