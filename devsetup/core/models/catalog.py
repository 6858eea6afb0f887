"""
Catalog models — the package list as data.

A section is an ordered list of Homebrew formulae and casks installed
under one header ("Code Editors", "CLI Utilities", ...). Order inside a
section is preserved exactly as declared.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class PackageItem(BaseModel):
    """Exactly one of ``formula`` or ``cask``."""

    formula: str | None = None
    cask: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> PackageItem:
        if (self.formula is None) == (self.cask is None):
            raise ValueError("package item needs exactly one of 'formula' or 'cask'")
        return self

    @property
    def name(self) -> str:
        return self.formula or self.cask or ""

    @property
    def is_cask(self) -> bool:
        return self.cask is not None


class PackageSection(BaseModel):
    title: str
    items: list[PackageItem] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)  # printed as warnings after the section

    @property
    def casks(self) -> list[str]:
        return [i.cask for i in self.items if i.cask]
