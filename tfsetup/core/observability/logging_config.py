"""
Logging configuration for the tfsetup command.

``main.py`` calls ``configure_from_cli`` once, before anything logs.
Modules just do ``logger = logging.getLogger(__name__)``.

Console level, first match wins:
    --debug  >  --verbose  >  --quiet  >  $TFSETUP_LOG_LEVEL  >  WARNING

$TFSETUP_LOG_FILE adds a file handler; $TFSETUP_LOG_FILE_LEVEL sets its
level (defaults to the console level).
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV_VAR = "TFSETUP_LOG_LEVEL"
FILE_ENV_VAR = "TFSETUP_LOG_FILE"
FILE_LEVEL_ENV_VAR = "TFSETUP_LOG_FILE_LEVEL"

# (format, datefmt) per console tier
_CONSOLE_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(levelname)s: %(message)s", None),
}

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LEVEL_ENV_VAR, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a stderr handler.

    Args:
        level: Console level name.
        log_file: Also write records to this file.
        log_file_level: Level for ``log_file``; defaults to ``level``.
    """
    console_level = _parse_level(level)
    tier = max(t for t in _CONSOLE_FORMATS if t <= max(console_level, logging.DEBUG))
    fmt, datefmt = _CONSOLE_FORMATS[tier]

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(file_handler)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def configure_from_cli(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """Set up logging from CLI flags and the ``TFSETUP_LOG_*`` variables."""
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV_VAR) or None,
        log_file_level=os.environ.get(FILE_LEVEL_ENV_VAR) or None,
    )


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
