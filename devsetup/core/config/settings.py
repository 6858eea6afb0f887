"""
Run configuration — the single parse point for process-wide settings.

``RunConfig`` is built once at startup from CLI flags (layered over the
optional profile file) and then handed to every component constructor.
It is frozen: nothing may change the execution mode or the interactive
flag mid-run.
"""

from __future__ import annotations

import logging
import os
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from devsetup.core.config.loader import find_profile_file, load_profile

logger = logging.getLogger(__name__)


class ExecutionMode(StrEnum):
    LIVE = "live"
    DRY_RUN = "dry_run"


class RunConfig(BaseModel):
    """Immutable settings for one setup run."""

    model_config = ConfigDict(frozen=True)

    mode: ExecutionMode = ExecutionMode.LIVE
    interactive: bool = True

    install_apps: bool = True
    install_mobile: bool = True
    install_infra: bool = True

    git_name: str = ""
    git_email: str = ""

    home: Path = Field(default_factory=Path.home)
    applications_dir: Path = Path("/Applications")
    zsh_custom: Path | None = None

    extra_formulae: tuple[str, ...] = ()
    extra_casks: tuple[str, ...] = ()

    @property
    def dry_run(self) -> bool:
        return self.mode is ExecutionMode.DRY_RUN

    @property
    def zsh_custom_dir(self) -> Path:
        """Oh My Zsh custom directory ($ZSH_CUSTOM or the default)."""
        return self.zsh_custom or self.home / ".oh-my-zsh" / "custom"

    @property
    def ssh_dir(self) -> Path:
        return self.home / ".ssh"

    @property
    def mode_label(self) -> str:
        if self.dry_run:
            return "DRY RUN"
        if not self.interactive:
            return "NON-INTERACTIVE"
        return "INTERACTIVE"


def build_run_config(
    *,
    profile_path: Path | None = None,
    dry_run: bool = False,
    non_interactive: bool = False,
    all_sections: bool = False,
    minimal: bool = False,
    skip_apps: bool = False,
    skip_mobile: bool = False,
    skip_infra: bool = False,
    git_name: str | None = None,
    git_email: str | None = None,
    home: Path | None = None,
) -> RunConfig:
    """Build the run configuration from flags and the profile file.

    Precedence for the section toggles, lowest to highest:
    built-in default (everything on) → profile file → ``--minimal``
    → ``--all`` → ``--skip-*``.

    Raises:
        ConfigError: If the profile file is invalid.
    """
    home = home or Path.home()
    profile = load_profile(profile_path or find_profile_file(home))

    apps = profile.apps if profile.apps is not None else True
    mobile = profile.mobile if profile.mobile is not None else True
    infra = profile.infra if profile.infra is not None else True

    if minimal:
        apps = mobile = infra = False
    if all_sections:
        apps = mobile = infra = True
    if skip_apps:
        apps = False
    if skip_mobile:
        mobile = False
    if skip_infra:
        infra = False

    zsh_custom = os.environ.get("ZSH_CUSTOM")

    config = RunConfig(
        mode=ExecutionMode.DRY_RUN if dry_run else ExecutionMode.LIVE,
        interactive=not non_interactive,
        install_apps=apps,
        install_mobile=mobile,
        install_infra=infra,
        git_name=git_name or profile.git.name,
        git_email=git_email or profile.git.email,
        home=home,
        zsh_custom=Path(zsh_custom) if zsh_custom else None,
        extra_formulae=tuple(profile.extra.formulae),
        extra_casks=tuple(profile.extra.casks),
    )
    logger.debug("Run config: %s", config.model_dump(mode="json"))
    return config
