"""Logging for changelog-release.

Every module logs through ``get_logger(__name__)``, which places it under the
``changelog_release`` logger. ``setup_logging`` is called once by the CLI and
attaches a stderr handler plus, when ``CHANGELOG_RELEASE_LOG_FILE`` is set, a
daily file under ``<config dir>/logs/``.

The level comes from ``--debug`` or ``CHANGELOG_RELEASE_LOG_LEVEL`` and
defaults to WARNING, so release notes printed on stdout stay clean.
"""

import logging
import os
import sys
from datetime import date
from pathlib import Path

from changelog_release.paths import get_config_dir

LOGGER_NAMESPACE = "changelog_release"
LOG_LEVEL_ENV = "CHANGELOG_RELEASE_LOG_LEVEL"
LOG_FILE_ENV = "CHANGELOG_RELEASE_LOG_FILE"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_dir() -> Path:
    return Path(get_config_dir()) / "logs"


def get_log_level(debug: bool = False) -> int:
    """DEBUG when *debug* is set, else the level named in the environment."""
    if debug:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, "").upper()
    if name in ("DEBUG", "INFO", "WARNING", "ERROR"):
        return logging.getLevelName(name)
    return logging.WARNING


def is_file_logging_enabled() -> bool:
    return os.environ.get(LOG_FILE_ENV, "").lower() in ("true", "1")


def _log_file_path() -> Path:
    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"changelog_release_{date.today():%Y%m%d}.log"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Attach handlers to the package logger, replacing any from a previous call.

    Args:
        debug: Log at DEBUG with line numbers, whatever the environment says.

    Returns:
        The package logger.
    """
    level = get_log_level(debug)
    formatter = logging.Formatter(
        LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT, DATE_FORMAT
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if is_file_logging_enabled():
        handlers.append(logging.FileHandler(_log_file_path(), encoding="utf-8"))

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.handlers.clear()
    package_logger.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    # Output goes only to our own handlers
    package_logger.propagate = False
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return *name*'s logger inside the ``changelog_release`` namespace."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)
