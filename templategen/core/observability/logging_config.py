"""
Logging configuration — one call from the CLI entrypoint sets up the process.

Modules only ever do ``logger = logging.getLogger(__name__)``; handlers,
formats and levels all live here.

Console level, highest precedence first:
    --debug  >  --verbose  >  --quiet  >  TEMPLATEGEN_LOG_LEVEL  >  WARNING

A second, file-backed handler is added when TEMPLATEGEN_LOG_FILE is set.
Its level comes from TEMPLATEGEN_LOG_FILE_LEVEL and falls back to the
console level.
"""

from __future__ import annotations

import logging
import sys

LOG_LEVEL_ENV = "TEMPLATEGEN_LOG_LEVEL"
LOG_FILE_ENV = "TEMPLATEGEN_LOG_FILE"
LOG_FILE_LEVEL_ENV = "TEMPLATEGEN_LOG_FILE_LEVEL"

# (upper level bound, format, datefmt); first matching row wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Template engine internals; silenced unless debugging
_NOISY_LOGGERS = ("jinja2", "markupsafe")


def resolve_level(debug: bool, verbose: bool, quiet: bool, env_level: str | None) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install console (and optional file) handlers on the root logger.

    Replaces any handlers already on the root logger, so calling it twice
    is safe.

    Args:
        level: Console level name.
        log_file: Path of an extra log file, or None.
        log_file_level: Level name for the file; defaults to ``level``.
        quiet_third_party: Pin template-engine loggers to WARNING unless
            the console is at DEBUG.
    """
    console_level = _parse_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _console_handler(level: int) -> logging.Handler:
    _, fmt, datefmt = _CONSOLE_FORMATS[-1]
    for bound, row_fmt, row_datefmt in _CONSOLE_FORMATS:
        if level <= bound:
            fmt, datefmt = row_fmt, row_datefmt
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown or empty names mean WARNING."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
