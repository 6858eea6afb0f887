"""
Desired-state builders — turn catalog entries into ``DesiredState``.

Formula: registry → binary on PATH.
Cask:    registry → app bundle (adoptable) → optional probe.
"""

from __future__ import annotations

from pathlib import Path

from devsetup.adapters.packages.homebrew import HomebrewBackend
from devsetup.core.config.settings import RunConfig
from devsetup.core.data import DataRegistry
from devsetup.core.models.state import DesiredState, Detector


def formula_state(name: str, data: DataRegistry, brew: HomebrewBackend) -> DesiredState:
    return DesiredState(
        name=name,
        detectors=[
            Detector.registry(name),
            Detector.binary(data.binary_name_for(name)),
        ],
        install=brew.install_command(name),
    )


def cask_state(
    name: str,
    data: DataRegistry,
    brew: HomebrewBackend,
    config: RunConfig,
) -> DesiredState:
    detectors = [Detector.registry(name, cask=True)]
    adopt = None

    bundle = data.bundle_for(name)
    if bundle:
        detectors.append(Detector.path(str(bundle_path(bundle, config)), adoptable=True))
        adopt = brew.install_command(name, cask=True, adopt=True)

    probe = data.cask_probes.get(name)
    if probe:
        detectors.append(Detector.probe(probe["argv"], label=probe.get("label", "")))

    return DesiredState(
        name=name,
        detectors=detectors,
        install=brew.install_command(name, cask=True),
        adopt=adopt,
    )


def bundle_path(bundle: str, config: RunConfig) -> Path:
    """Resolve a bundle entry: ``~/x`` is under home, anything else under Applications."""
    if bundle.startswith("~/"):
        return config.home / bundle[2:]
    return config.applications_dir / bundle


def path_state(name: str, path: Path, install: list[str], label: str = "") -> DesiredState:
    """A state satisfied by the presence of a file or directory."""
    return DesiredState(
        name=name,
        label=label,
        detectors=[Detector.path(str(path))],
        install=install,
    )


def binary_state(name: str, binary: str, install: list[str], label: str = "") -> DesiredState:
    """A state satisfied by an executable on PATH."""
    return DesiredState(
        name=name,
        label=label,
        detectors=[Detector.binary(binary)],
        install=install,
    )
