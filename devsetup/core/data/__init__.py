"""
Central data registry for the package catalog and dotfile templates.

Loads catalogs from ``devsetup/core/data/catalogs/`` once at first
access and caches them for the process lifetime. Everything that is
payload rather than mechanism (package names, the binary-name and
app-bundle maps, git defaults, literal config text) lives here.

Usage::

    from devsetup.core.data import DataRegistry

    data = DataRegistry()
    data.validate()                       # raises CatalogError
    data.binary_name_for("ripgrep")       # "rg"
    data.bundle_for("iterm2")             # "iTerm.app"
    data.template("gitignore_global")     # str
"""

from __future__ import annotations

import fnmatch
import json
import logging
from functools import cached_property
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from devsetup.core.errors import CatalogError
from devsetup.core.models.catalog import PackageSection

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

# Sections every run expects to find, in install order
REQUIRED_SECTIONS = ("terminal", "editors", "languages", "mobile", "infrastructure", "cli")

_BINARY_GLOB_CHARS = frozenset("*?[")


def _load_json(relative_path: str) -> Any:
    """Load a JSON file relative to the data directory."""
    path = _DATA_DIR / relative_path
    if not path.exists():
        raise CatalogError([f"Data file not found: {path}"])
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class DataRegistry:
    """Registry for the static catalogs.

    Each property lazily loads its JSON file on first access and caches
    the result for the lifetime of the instance.
    """

    def __init__(self) -> None:
        self._templates: dict[str, str] = {}

    # ── Packages ────────────────────────────────────────────────

    @cached_property
    def packages(self) -> dict[str, Any]:
        data = _load_json("catalogs/packages.json")
        logger.debug("Loaded package catalog with %d sections", len(data.get("sections", {})))
        return data

    @cached_property
    def sections(self) -> dict[str, PackageSection]:
        """Package sections keyed by id, in declared order."""
        return {
            key: PackageSection.model_validate(raw)
            for key, raw in self.packages.get("sections", {}).items()
        }

    @cached_property
    def binary_names(self) -> dict[str, str]:
        """Package name (or glob pattern) → binary name on PATH."""
        return dict(self.packages.get("binary_names", {}))

    @cached_property
    def bundles(self) -> dict[str, str | None]:
        """Cask name → app bundle (``None`` when the cask has no bundle)."""
        return dict(self.packages.get("bundles", {}))

    @cached_property
    def cask_probes(self) -> dict[str, dict[str, Any]]:
        return dict(self.packages.get("cask_probes", {}))

    @cached_property
    def installers(self) -> dict[str, list[str]]:
        return dict(self.packages.get("installers", {}))

    @cached_property
    def zsh_plugins(self) -> dict[str, str]:
        return dict(self.packages.get("zsh_plugins", {}))

    def section(self, key: str) -> PackageSection:
        try:
            return self.sections[key]
        except KeyError:
            raise CatalogError([f"Unknown package section: {key}"]) from None

    def binary_name_for(self, package: str) -> str:
        """Binary to look for on PATH when ``package`` is not in the registry.

        Exact entries win over patterns (``python@*`` → ``python3``);
        anything unmapped is assumed to ship a binary of the same name.
        """
        names = self.binary_names
        if package in names:
            return names[package]
        for pattern, binary in names.items():
            if _BINARY_GLOB_CHARS & set(pattern) and fnmatch.fnmatchcase(package, pattern):
                return binary
        return package

    def bundle_for(self, cask: str) -> str | None:
        return self.bundles.get(cask)

    # ── Git ─────────────────────────────────────────────────────

    @cached_property
    def git(self) -> dict[str, Any]:
        return _load_json("catalogs/git.json")

    @cached_property
    def git_defaults(self) -> dict[str, str]:
        return dict(self.git.get("defaults", {}))

    @cached_property
    def git_aliases(self) -> dict[str, str]:
        return dict(self.git.get("aliases", {}))

    # ── iTerm2 ──────────────────────────────────────────────────

    @cached_property
    def iterm(self) -> dict[str, Any]:
        return _load_json("catalogs/iterm.json")

    # ── Templates ───────────────────────────────────────────────

    def template(self, name: str) -> str:
        """Literal file content from ``templates/<name>``."""
        if name not in self._templates:
            path = _DATA_DIR / "templates" / name
            try:
                self._templates[name] = path.read_text(encoding="utf-8")
            except OSError as e:
                raise CatalogError([f"Template not readable: {path} ({e})"]) from e
        return self._templates[name]

    # ── Validation ──────────────────────────────────────────────

    def validate(self) -> None:
        """Check the catalog for completeness. Called once at startup.

        Raises:
            CatalogError: Listing every problem found.
        """
        problems: list[str] = []

        raw_sections = self.packages.get("sections", {})
        for key in REQUIRED_SECTIONS:
            if key not in raw_sections:
                problems.append(f"missing section '{key}'")

        casks: list[str] = []
        for key, raw in raw_sections.items():
            try:
                section = PackageSection.model_validate(raw)
            except ValidationError as e:
                problems.append(f"section '{key}': {e.errors()[0]['msg']}")
                continue
            casks.extend(section.casks)

        for cask in casks:
            if cask not in self.bundles:
                problems.append(f"cask '{cask}' has no bundle entry (use null for none)")

        for pattern, binary in self.binary_names.items():
            if not isinstance(binary, str) or not binary.strip():
                problems.append(f"binary name for '{pattern}' is empty")
            elif "/" in binary:
                problems.append(f"binary name for '{pattern}' must not be a path: {binary}")

        for cask, probe in self.cask_probes.items():
            if cask not in self.bundles:
                problems.append(f"probe for unknown cask '{cask}'")
            if not isinstance(probe.get("argv"), list) or not probe["argv"]:
                problems.append(f"probe for '{cask}' needs a non-empty argv list")

        for name in ("homebrew", "oh-my-zsh", "rust"):
            if not self.installers.get(name):
                problems.append(f"missing installer command for '{name}'")

        if problems:
            raise CatalogError(problems)
        logger.debug("Catalog validated: %d casks, %d binary mappings", len(casks), len(self.binary_names))
