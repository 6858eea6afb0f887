"""
Error taxonomy for a setup run.

Only two of these ever leave the component that raises them:
``PrerequisiteMissing`` (halts the pipeline) and the startup errors
(``ConfigError``, ``CatalogError``) that the CLI turns into exit 1.
Install failures and adoption failures are never raised; they are
recorded as ``Resolution`` outcomes and the run continues.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for every error the setup tool raises."""


class ConfigError(SetupError):
    """Raised when the run configuration or profile file is invalid."""


class CatalogError(SetupError):
    """Raised when the static package catalog is incomplete or malformed."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Invalid package catalog:\n  " + "\n  ".join(problems))


class PrerequisiteMissing(SetupError):
    """A foundational tool is absent and cannot be installed unattended.

    The installer has been triggered (or would have been, in dry run);
    the operator must finish it by hand and re-run the setup.
    """

    def __init__(self, name: str, instructions: str):
        self.name = name
        self.instructions = instructions
        super().__init__(f"{name}: {instructions}")
