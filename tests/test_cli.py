"""
Tests for the mac-setup command — flags, exit codes, and end-to-end
runs against a fake machine.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from devsetup.core.services.steps.xcode import XCODE_INSTRUCTIONS
from devsetup.main import cli


@pytest.fixture
def invoke(home: Path, machine, monkeypatch):
    """Run the CLI with HOME pointed at a temp dir and the fake machine as runner."""
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("ZSH_CUSTOM", raising=False)
    monkeypatch.delenv("DEVSETUP_LOG_FILE", raising=False)
    monkeypatch.delenv("DEVSETUP_LOG_LEVEL", raising=False)

    def _invoke(args, input=None):
        with patch("devsetup.main.SubprocessRunner", return_value=machine.runner):
            return CliRunner().invoke(cli, args, input=input)

    return _invoke


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Mac Development Environment Setup" in result.output
        assert "--skip-mobile" in result.output

    def test_short_help(self):
        assert CliRunner().invoke(cli, ["-h"]).exit_code == 0

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_unknown_flag_exits_1(self):
        result = CliRunner().invoke(cli, ["--bogus"])
        assert result.exit_code == 1
        assert "No such option" in result.output


class TestDryRun:
    def test_non_interactive_dry_run(self, invoke, machine, home: Path):
        result = invoke(["--dry-run", "--non-interactive"])

        assert result.exit_code == 0, result.output
        assert "Mode: DRY RUN" in result.output
        assert "No changes will be made in dry-run mode" in result.output
        assert "[DRY RUN] brew install neovim" in result.output
        assert "Happy building!" in result.output
        assert machine.installs == []
        assert list(home.iterdir()) == []

    def test_minimal_banner(self, invoke):
        result = invoke(["--dry-run", "--non-interactive", "--minimal"])

        assert result.exit_code == 0
        assert "Apps: Skip" in result.output
        assert "Mobile: Skip" in result.output
        assert "Infra: Skip" in result.output
        assert "Mobile Development" not in result.output

    def test_all_overrides_minimal(self, invoke):
        result = invoke(["--dry-run", "--non-interactive", "--minimal", "--all", "--skip-infra"])

        assert "Apps: Yes" in result.output
        assert "Mobile: Yes" in result.output
        assert "Infra: Skip" in result.output

    def test_run_report_written_to_debug_log(self, invoke, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "logs" / "mac-setup.log"
        monkeypatch.setenv("DEVSETUP_LOG_FILE", str(log_file))
        monkeypatch.setenv("DEVSETUP_LOG_FILE_LEVEL", "DEBUG")

        result = invoke(["--dry-run", "--non-interactive"])

        assert result.exit_code == 0, result.output
        log = log_file.read_text()
        assert "Run report:" in log
        assert '"status": ' in log
        assert '"steps_run": [' in log

    def test_dry_run_never_prompts(self, invoke, machine):
        # Interactive dry run: no confirmation question, nothing read from stdin
        result = invoke(["--dry-run"], input="")

        assert result.exit_code == 0
        assert "Proceed with installation?" not in result.output
        assert "Would configure git" in result.output


class TestLiveRun:
    def test_prerequisite_halt_exits_0(self, invoke, machine):
        machine.runner.set_failure(["xcode-select", "-p"])

        result = invoke(["--non-interactive"])

        assert result.exit_code == 0
        assert XCODE_INSTRUCTIONS in result.output
        assert "Homebrew" not in result.output.split(XCODE_INSTRUCTIONS)[-1]

    def test_interactive_decline(self, invoke, machine):
        result = invoke([], input="n\n")

        assert result.exit_code == 0
        assert "Setup cancelled." in result.output
        assert machine.runner.call_count == 0

    def test_non_interactive_full_run(self, invoke, machine, home: Path):
        result = invoke(["--non-interactive", "--git-name", "Jane Doe", "--git-email", "jane@example.com"])

        assert result.exit_code == 0, result.output
        assert "Mode: NON-INTERACTIVE" in result.output
        assert machine.git_config["user.name"] == "Jane Doe"
        assert (home / ".zshrc").is_file()
        assert (home / ".gitignore_global").is_file()


class TestConfigErrors:
    def test_missing_config_file(self, invoke, tmp_path: Path):
        result = invoke(["--config", str(tmp_path / "nope.yml")])
        assert result.exit_code == 1
        assert "Profile file not found" in result.output

    def test_invalid_profile(self, invoke, home: Path):
        (home / ".mac-setup.yml").write_text("apps: maybe-later\n")
        result = invoke(["--dry-run"])
        assert result.exit_code == 1
        assert "Invalid profile" in result.output

    def test_profile_applies(self, invoke, home: Path):
        (home / ".mac-setup.yml").write_text("apps: false\n")
        result = invoke(["--dry-run", "--non-interactive"])
        assert result.exit_code == 0
        assert "Apps: Skip" in result.output
