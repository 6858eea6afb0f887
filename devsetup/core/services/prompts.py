"""
Interactive prompt resolver.

In non-interactive mode every question short-circuits to its default
without reading or writing anything.
"""

from __future__ import annotations

import click

from devsetup.core.config.settings import RunConfig


class Prompter:
    def __init__(self, config: RunConfig):
        self._interactive = config.interactive

    @property
    def interactive(self) -> bool:
        return self._interactive

    def confirm(self, question: str, default: bool = True) -> bool:
        if not self._interactive:
            return default
        return click.confirm(question, default=default)

    def prompt_value(self, question: str, default: str = "") -> str:
        """Ask for a string; an empty answer yields ``default``."""
        if not self._interactive:
            return default
        answer = click.prompt(question, default=default, show_default=bool(default))
        return answer.strip() if isinstance(answer, str) else default
