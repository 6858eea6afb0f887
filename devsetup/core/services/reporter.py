"""
Status reporter — one line per outcome, prefixed by a status glyph.

All user-facing progress goes through here (``click.secho``); the
``logging`` tree is for diagnostics only. Every line is also kept in
``lines`` so callers and tests can inspect what was shown.
"""

from __future__ import annotations

import click

from devsetup.core.models.state import Outcome, Resolution

_RULE = "━" * 60


class Reporter:
    """Writes coloured status lines to the terminal."""

    def __init__(self, echo: bool = True):
        self._echo = echo
        self.lines: list[tuple[str, str]] = []   # (kind, message)

    def header(self, title: str) -> None:
        self._emit("header", title, "")
        if self._echo:
            click.echo()
            click.secho(_RULE, fg="blue")
            click.secho(f"  {title}", fg="blue")
            click.secho(_RULE, fg="blue")

    def step(self, message: str) -> None:
        self._emit("step", message, "▸", fg="green")

    def success(self, message: str) -> None:
        self._emit("success", message, "✓", fg="green")

    def warning(self, message: str) -> None:
        self._emit("warning", message, "⚠", fg="yellow")

    def error(self, message: str) -> None:
        self._emit("error", message, "✗", fg="red")

    def dry_run(self, message: str) -> None:
        self._emit("dry_run", message, "[DRY RUN]", fg="yellow")

    def info(self, message: str = "") -> None:
        self._emit("info", message, "")

    def outcome(self, resolution: Resolution) -> None:
        """Print the single status line for a resolved desired state."""
        if resolution.outcome is Outcome.FAILED:
            self.error(resolution.message)
        else:
            self.success(resolution.message)

    def messages(self, kind: str) -> list[str]:
        return [m for k, m in self.lines if k == kind]

    def _emit(self, kind: str, message: str, glyph: str, fg: str | None = None) -> None:
        self.lines.append((kind, message))
        if not self._echo or kind == "header":
            return
        if glyph:
            click.secho(glyph, fg=fg, nl=False)
            click.echo(f" {message}")
        else:
            click.echo(message)
