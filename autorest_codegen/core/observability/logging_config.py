"""
Logging configuration — central setup for the CLI.

Called once at startup by the CLI group callback. Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    --debug / --verbose / --quiet  >  CODEGEN_LOG_LEVEL  >  WARNING

Optional file output via CODEGEN_LOG_FILE / CODEGEN_LOG_FILE_LEVEL.
Generator subprocesses write straight to the inherited terminal and
never go through logging.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV_VAR = "CODEGEN_LOG_LEVEL"
FILE_ENV_VAR = "CODEGEN_LOG_FILE"
FILE_LEVEL_ENV_VAR = "CODEGEN_LOG_FILE_LEVEL"

# ── Console formats, by the most verbose level they apply to ────
_CONSOLE_FORMATS: list[tuple[int, str, str | None]] = [
    # DEBUG: full diagnostic with file:line
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    # INFO: timestamped progress ("Generating ...", "Command: ...")
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
]
_FMT_MINIMAL = "%(message)s"

# File output, always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Library loggers kept at WARNING unless debugging
_NOISY_LOGGERS = ("asyncio",)


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
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
    quiet_third_party: bool = True,
) -> None:
    """Configure Python logging for the whole process.

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file. Falls back to CODEGEN_LOG_FILE.
        log_file_level: Optional separate level for the log file. Falls
            back to CODEGEN_LOG_FILE_LEVEL, then ``level``.
        quiet_third_party: Keep library loggers at WARNING unless at DEBUG.
    """
    numeric_level = _parse_level(level)
    log_file = log_file or os.environ.get(FILE_ENV_VAR)
    log_file_level = log_file_level or os.environ.get(FILE_LEVEL_ENV_VAR)

    fmt, datefmt = _FMT_MINIMAL, None
    for threshold, candidate_fmt, candidate_datefmt in _CONSOLE_FORMATS:
        if numeric_level <= threshold:
            fmt, datefmt = candidate_fmt, candidate_datefmt
            break

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Root level = the more verbose of console and file
    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    if quiet_third_party and numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
