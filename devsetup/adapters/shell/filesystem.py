"""
Filesystem adapter — marker checks and create-if-absent writes.

Reads (``exists``, ``contains``) go straight to disk. Writes go through
the ``CommandExecutor`` so that dry runs never touch the filesystem.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devsetup.core.engine.executor import CommandExecutor

logger = logging.getLogger(__name__)


class Filesystem:
    """File and directory operations with dry-run support."""

    def __init__(self, executor: CommandExecutor):
        self._executor = executor

    # ── Read-only ───────────────────────────────────────────────

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def contains(self, path: Path, text: str) -> bool:
        """Whether ``path`` is a readable file that contains ``text``."""
        try:
            return text in path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return False

    def read_text(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except OSError:
            return None

    # ── Mutations ───────────────────────────────────────────────

    def ensure_dir(self, path: Path, mode: int | None = None) -> bool:
        """Create ``path`` (and parents). Returns False on failure."""
        if path.is_dir() and mode is None:
            return True

        def _mkdir() -> None:
            path.mkdir(parents=True, exist_ok=True)
            if mode is not None:
                path.chmod(mode)

        label = f"mkdir -p {path}" + (f" && chmod {mode:o} {path}" if mode is not None else "")
        return self._executor.apply(label, _mkdir).ok

    def write_if_absent(self, path: Path, content: str, mode: int | None = None) -> bool:
        """Create ``path`` with ``content`` unless it already exists.

        Returns:
            True if the file was (or in dry run, would be) written,
            False if it already existed or the write failed.
        """
        if path.exists():
            logger.debug("Not overwriting existing %s", path)
            return False

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            if mode is not None:
                path.chmod(mode)

        return self._executor.apply(f"write {path}", _write).ok

    def append_block(self, path: Path, block: str) -> bool:
        """Append ``block`` to ``path``, creating the file if needed."""

        def _append() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8") as f:
                f.write(block)

        return self._executor.apply(f"append to {path}", _append).ok
