"""
Desired-state models — what a tool should look like and how to tell.

A ``DesiredState`` pairs a tool with an ordered list of read-only
``Detector`` checks and the commands that bring it into existence.
The resolver returns a ``Resolution`` describing what happened.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class DetectorKind(StrEnum):
    REGISTRY = "registry"   # known to the package manager
    BINARY = "binary"       # executable on PATH
    PATH = "path"           # file, directory, or app bundle exists
    PROBE = "probe"         # command exits 0


class Outcome(StrEnum):
    SKIPPED = "skipped"
    ADOPTED = "adopted"
    INSTALLED = "installed"
    FAILED = "failed"


class Detector(BaseModel):
    """A read-only check reporting whether a desired state is satisfied.

    ``target`` is a package name (registry), a binary name (binary),
    an absolute path (path) or an argv list (probe).
    """

    kind: DetectorKind
    target: str | list[str]
    cask: bool = False        # registry: look in the cask registry
    adoptable: bool = False   # path: an unmanaged install that can be adopted
    label: str = ""           # wording for the "already satisfied" message

    @model_validator(mode="after")
    def _target_matches_kind(self) -> Detector:
        if self.kind is not DetectorKind.PROBE and not isinstance(self.target, str):
            raise ValueError(f"{self.kind} detector needs a single name, not an argv list")
        return self

    @classmethod
    def registry(cls, name: str, *, cask: bool = False) -> Detector:
        return cls(kind=DetectorKind.REGISTRY, target=name, cask=cask)

    @classmethod
    def binary(cls, name: str) -> Detector:
        return cls(kind=DetectorKind.BINARY, target=name)

    @classmethod
    def path(cls, path: str, *, adoptable: bool = False) -> Detector:
        return cls(kind=DetectorKind.PATH, target=path, adoptable=adoptable)

    @classmethod
    def probe(cls, argv: list[str], *, label: str = "") -> Detector:
        return cls(kind=DetectorKind.PROBE, target=list(argv), label=label)


class DesiredState(BaseModel):
    """One target tool: how to detect it, how to install it."""

    name: str
    label: str = ""
    detectors: list[Detector] = Field(default_factory=list)
    install: list[str] = Field(default_factory=list)
    adopt: list[str] | None = None

    @property
    def display_name(self) -> str:
        return self.label or self.name


class Resolution(BaseModel):
    """Result of resolving one desired state."""

    name: str
    outcome: Outcome
    message: str = ""
    detected_by: DetectorKind | None = None
    error: str | None = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAILED

    @classmethod
    def skipped(cls, name: str, message: str, **kwargs: Any) -> Resolution:
        return cls(name=name, outcome=Outcome.SKIPPED, message=message, **kwargs)

    @classmethod
    def adopted(cls, name: str, message: str, **kwargs: Any) -> Resolution:
        return cls(name=name, outcome=Outcome.ADOPTED, message=message, **kwargs)

    @classmethod
    def installed(cls, name: str, message: str, **kwargs: Any) -> Resolution:
        return cls(name=name, outcome=Outcome.INSTALLED, message=message, **kwargs)

    @classmethod
    def failed(cls, name: str, message: str, error: str, **kwargs: Any) -> Resolution:
        return cls(name=name, outcome=Outcome.FAILED, message=message, error=error, **kwargs)
