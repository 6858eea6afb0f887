"""
Profile loader — reads the optional ``~/.mac-setup.yml`` overrides.

The profile lets a user pin their defaults (skip GUI apps, preset the
git identity, add a few extra formulae) without retyping flags. CLI
flags always win over the file.

Example::

    apps: false
    infra: true
    git:
      name: Jane Doe
      email: jane@example.com
    extra:
      formulae: [mise, just]
      casks: [raycast]
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from devsetup.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Default profile filename, looked up in the user's home directory
PROFILE_FILE = ".mac-setup.yml"


class GitIdentity(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    email: str = ""


class ExtraPackages(BaseModel):
    model_config = ConfigDict(extra="forbid")

    formulae: list[str] = Field(default_factory=list)
    casks: list[str] = Field(default_factory=list)


class SetupProfile(BaseModel):
    """User overrides loaded from the profile file.

    ``None`` for a section toggle means "not set in the file" so the
    built-in default applies.
    """

    model_config = ConfigDict(extra="forbid")

    apps: bool | None = None
    mobile: bool | None = None
    infra: bool | None = None
    git: GitIdentity = Field(default_factory=GitIdentity)
    extra: ExtraPackages = Field(default_factory=ExtraPackages)


def find_profile_file(home: Path) -> Path | None:
    """Return the default profile path if it exists."""
    candidate = home / PROFILE_FILE
    return candidate if candidate.is_file() else None


def load_profile(path: Path | None) -> SetupProfile:
    """Load and validate a profile file.

    Args:
        path: Explicit path to the profile. ``None`` yields an empty profile.

    Returns:
        Validated SetupProfile.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    if path is None:
        return SetupProfile()

    if not path.is_file():
        raise ConfigError(f"Profile file not found: {path}")

    logger.debug("Loading profile from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SetupProfile()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        profile = SetupProfile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid profile {path}: {e}") from e

    logger.info("Loaded profile %s", path)
    return profile
