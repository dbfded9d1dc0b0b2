"""
Logging configuration — central setup for the fixture process.

Called once by the pytest plugin (or whatever harness drives the
fixture). Every module that does ``logger = logging.getLogger(__name__)``
inherits this config; the process runner's "Exec process" lines show
up at INFO.

Levels are resolved in precedence order:
    explicit argument  >  CFX_LOG_LEVEL env var  >  WARNING (default)

Optional file output via CFX_LOG_FILE / CFX_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "CFX_LOG_LEVEL"
ENV_FILE = "CFX_LOG_FILE"
ENV_FILE_LEVEL = "CFX_LOG_FILE_LEVEL"

_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_PACKAGE_LOGGER = "compile_fixture"

# Loggers that chatter at INFO/DEBUG inside a test session
_NOISY_LOGGERS = ("asyncio", "filelock", "urllib3")


def parse_level(level: str | None, default: int = logging.WARNING) -> int:
    """Convert a level name to its numeric constant, falling back to ``default``."""
    if not level:
        return default
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return default
    return numeric


def _console_format(level: int) -> tuple[str, str | None]:
    if level <= logging.DEBUG:
        return _FMT_DEBUG, _DATEFMT_CONSOLE
    if level <= logging.INFO:
        return _FMT_VERBOSE, _DATEFMT_CONSOLE
    return _FMT_MINIMAL, None


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> logging.Logger:
    """Configure the ``compile_fixture`` logger hierarchy.

    Handlers are attached to the package logger, not the root, so a
    test runner's own log capture keeps working.

    Args:
        level: Console level name. Defaults to ``CFX_LOG_LEVEL``.
        log_file: Optional log file. Defaults to ``CFX_LOG_FILE``.
        log_file_level: File level. Defaults to ``CFX_LOG_FILE_LEVEL``,
            then to the console level.
        quiet_third_party: Keep noisy third-party loggers at WARNING
            unless the fixture itself logs at DEBUG.

    Returns:
        The configured package logger.
    """
    console_level = parse_level(level or os.environ.get(ENV_LEVEL))
    log_file = log_file or os.environ.get(ENV_FILE)
    file_level_name = log_file_level or os.environ.get(ENV_FILE_LEVEL)

    pkg = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
        handler.close()

    fmt, datefmt = _console_format(console_level)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    pkg.addHandler(console)

    effective = console_level
    if log_file:
        file_level = parse_level(file_level_name, default=console_level)
        effective = min(effective, file_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        pkg.addHandler(fh)

    pkg.setLevel(effective)

    if quiet_third_party and effective > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return pkg
