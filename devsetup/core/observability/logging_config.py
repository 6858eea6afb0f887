"""
Logging configuration — set up once by the ``mac-setup`` entrypoint.

The log is for diagnosing a run; the status lines a user reads are
printed with click by the ``Reporter`` and never go through logging.
Modules just do ``logger = logging.getLogger(__name__)``.

Console level, highest precedence first:
    --debug  >  --verbose  >  --quiet  >  DEVSETUP_LOG_LEVEL  >  WARNING

A long install that dies halfway is easier to read back from a file:
DEVSETUP_LOG_FILE turns one on (``~`` is expanded, parent directories
are created) and DEVSETUP_LOG_FILE_LEVEL sets its level separately.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ── Formats ─────────────────────────────────────────────────────

_FULL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"

# (upper bound level, format, datefmt), checked in order
_CONSOLE_FORMATS = (
    (logging.DEBUG, _FULL, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = ("%(message)s", None)

_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console (and optional file) handler on the root logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to WARNING.
        log_file: Optional log file path.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(Path(log_file).expanduser(), file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    logging.raiseExceptions = False


def resolve_level(debug: bool, verbose: bool, quiet: bool, env_level: str | None) -> str:
    """Pick the console level from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_DEFAULT
    for bound, bound_fmt, bound_datefmt in _CONSOLE_FORMATS:
        if level <= bound:
            fmt, datefmt = bound_fmt, bound_datefmt
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: Path, level: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FULL, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
