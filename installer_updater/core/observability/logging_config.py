"""
Logging configuration — one-time setup for the CLI entrypoint.

Modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  IU_LOG_LEVEL  >  WARNING

IU_LOG_FILE adds a file handler; IU_LOG_FILE_LEVEL sets its own level.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LOG_LEVEL = "IU_LOG_LEVEL"
ENV_LOG_FILE = "IU_LOG_FILE"
ENV_LOG_FILE_LEVEL = "IU_LOG_FILE_LEVEL"

# (format, datefmt) per console verbosity
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: (
        "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d — %(message)s",
        "%H:%M:%S",
    ),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(levelname)s: %(message)s", None),
}

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LOG_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (and optional file handler) on the root logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file, opened in append mode.
        log_file_level: Level for the file handler; defaults to ``level``.
    """
    console_level = parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)

    root.setLevel(root_level)

    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value, WARNING when unknown."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def _console_formatter(level: int) -> logging.Formatter:
    for threshold in (logging.DEBUG, logging.INFO):
        if level <= threshold:
            fmt, datefmt = _CONSOLE_FORMATS[threshold]
            return logging.Formatter(fmt, datefmt=datefmt)
    fmt, datefmt = _CONSOLE_FORMATS[logging.WARNING]
    return logging.Formatter(fmt, datefmt=datefmt)
