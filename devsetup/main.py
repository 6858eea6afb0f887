"""
Mac Development Environment Setup — CLI entrypoint.

Usage:
    mac-setup --help
    mac-setup --dry-run
    python -m devsetup.main --minimal --non-interactive
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from devsetup import __version__
from devsetup.adapters.shell.command import SubprocessRunner
from devsetup.core.config.settings import RunConfig, build_run_config
from devsetup.core.context import SetupContext
from devsetup.core.data import DataRegistry
from devsetup.core.engine.pipeline import SetupPipeline
from devsetup.core.errors import CatalogError, ConfigError
from devsetup.core.observability.logging_config import resolve_level, setup_logging
from devsetup.core.services.steps import build_steps

logger = logging.getLogger(__name__)


class _SetupCommand(click.Command):
    """Exit 1 (not click's 2) on unknown or malformed flags."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(
    cls=_SetupCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="mac-setup")
@click.option("--all", "all_sections", is_flag=True, help="Install everything (default).")
@click.option("--minimal", is_flag=True, help="Install only core tools (editors, git, languages).")
@click.option("--skip-apps", is_flag=True, help="Skip GUI applications (VS Code, Docker, etc.).")
@click.option("--skip-mobile", is_flag=True, help="Skip mobile development tools.")
@click.option("--skip-infra", is_flag=True, help="Skip infrastructure tools.")
@click.option("--dry-run", is_flag=True, help="Show what would be installed without installing.")
@click.option("--non-interactive", is_flag=True, help="Skip all prompts, use defaults.")
@click.option("--git-name", default=None, metavar="NAME", help="Set git user name.")
@click.option("--git-email", default=None, metavar="EMAIL", help="Set git user email.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to a profile file (default: ~/.mac-setup.yml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    all_sections: bool,
    minimal: bool,
    skip_apps: bool,
    skip_mobile: bool,
    skip_infra: bool,
    dry_run: bool,
    non_interactive: bool,
    git_name: str | None,
    git_email: str | None,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Mac Development Environment Setup.

    A reusable, idempotent setup for a new Mac: Homebrew, Oh My Zsh,
    editors, language toolchains, mobile and infrastructure tooling,
    CLI utilities, git and SSH configuration. Safe to run multiple
    times; components that are already installed are skipped.

    \b
    Examples:
      mac-setup                                  # Full interactive setup
      mac-setup --dry-run                        # Preview what will be installed
      mac-setup --minimal --non-interactive      # Quick minimal setup
      mac-setup --git-name "John" --git-email "john@example.com"
    """
    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ.get("DEVSETUP_LOG_LEVEL")),
        log_file=os.environ.get("DEVSETUP_LOG_FILE"),
        log_file_level=os.environ.get("DEVSETUP_LOG_FILE_LEVEL"),
    )

    try:
        config = build_run_config(
            profile_path=Path(config_path) if config_path else None,
            dry_run=dry_run,
            non_interactive=non_interactive,
            all_sections=all_sections,
            minimal=minimal,
            skip_apps=skip_apps,
            skip_mobile=skip_mobile,
            skip_infra=skip_infra,
            git_name=git_name,
            git_email=git_email,
        )
        data = DataRegistry()
        data.validate()
    except (ConfigError, CatalogError) as e:
        click.secho(f"✗ {e}", fg="red", err=True)
        sys.exit(1)

    _print_banner(config)

    context = SetupContext.create(config, SubprocessRunner(), data=data)

    if config.interactive and not config.dry_run:
        if not context.prompter.confirm("Proceed with installation?", True):
            click.echo("Setup cancelled.")
            return
        click.echo()

    report = SetupPipeline(context, build_steps(config, data)).run()
    logger.info(
        "Setup finished: %s (%d resolutions, %d failed)",
        report.status, len(report.resolutions), len(report.failed),
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Run report: %s", json.dumps(report.to_dict(), indent=2))


def _print_banner(config: RunConfig) -> None:
    mode_color = {"DRY RUN": "yellow", "NON-INTERACTIVE": "cyan"}.get(config.mode_label, "green")

    click.echo()
    click.secho("╔══════════════════════════════════════════════════════════╗", fg="blue")
    click.secho("║         Mac Development Environment Setup                ║", fg="blue")
    click.secho("╚══════════════════════════════════════════════════════════╝", fg="blue")
    click.echo()

    click.echo("Mode: ", nl=False)
    click.secho(config.mode_label, fg=mode_color)
    for label, enabled in (
        ("Apps", config.install_apps),
        ("Mobile", config.install_mobile),
        ("Infra", config.install_infra),
    ):
        click.echo(f"{label}: ", nl=False)
        click.secho("Yes" if enabled else "Skip", fg="green" if enabled else "yellow")
    click.echo()

    if config.dry_run:
        click.secho("No changes will be made in dry-run mode", fg="yellow")
        click.echo()


if __name__ == "__main__":
    cli()
