"""
Logging for mouseviz.

Modules log through ``get_logger(__name__)``. Only the ``mouseviz`` command
(app.main) attaches a stderr handler, via ``configure_logging``. Records are
never written to files. The level comes from ``--log-level``, else the
MOUSEVIZ_LOG_LEVEL environment variable, else INFO.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "mouseviz"
LOG_LEVEL_ENV = "MOUSEVIZ_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Optional[Union[str, int]] = None) -> int:
    """Numeric level for level, falling back to MOUSEVIZ_LOG_LEVEL and then INFO.

    Unknown level names resolve to INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or "INFO"
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(str(level).strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def _stderr_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
            return h
    return None


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """Send mouseviz records to stderr. The root logger is left alone.

    Calling it again reuses the existing stderr handler, updating its level
    and format. With force=True every handler on the mouseviz logger is
    closed and replaced.

    Returns:
        The configured package logger.
    """
    numeric = resolve_level(level)
    logger = get_logger()
    logger.setLevel(numeric)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)

    handler = _stderr_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        logger.addHandler(handler)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger called name, or the package logger when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
